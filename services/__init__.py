# -*- coding: utf-8 -*-
"""
Services Package - Service layer for BashPointsBot

This package contains the business logic services organized by domain:
- config: Unified configuration service
- rewards: Reward classification, idempotency guard, ledger writer and balance updates
- storage: Supabase datastore adapter
- discord: Message intake, command handling and reply formatting
"""
