#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discord Services

Services:
- EventDispatcher: Queue-backed intake of inbound messages
- MessageHandlerService: Command routing and award handling per message
- reply_formatter: Reply text for outcomes and commands
"""

__all__ = [
    'EventDispatcher',
    'InboundMessage',
    'MessageHandlerService',
]

from .event_dispatcher import EventDispatcher, InboundMessage
from .message_handler_service import MessageHandlerService
