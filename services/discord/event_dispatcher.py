#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Event Dispatcher

Decouples Discord's per-message callbacks from reward handling. The listener
puts each message on a queue; a pump task starts one independent task per
message, so a stalled datastore call delays only the message that made it.
Every task is a failure boundary: exceptions are logged and never reach the
event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Set

from services.exceptions import EventDispatchError, get_exception_info
from utils.logging_utils import get_module_logger

logger = get_module_logger('event_dispatcher')

ReplyCallable = Callable[[str], Awaitable[Any]]
MessageHandler = Callable[["InboundMessage"], Awaitable[None]]


@dataclass(frozen=True)
class InboundMessage:
    """Platform-neutral view of a chat message."""

    author_handle: str
    content: str
    received_at: datetime
    reply: ReplyCallable
    is_bot: bool = False
    message_id: Optional[int] = None

    @classmethod
    def from_discord(cls, message: Any) -> "InboundMessage":
        return cls(
            author_handle=message.author.name,
            content=message.content or "",
            received_at=message.created_at,
            reply=message.reply,
            is_bot=bool(getattr(message.author, "bot", False)),
            message_id=getattr(message, "id", None),
        )


class EventDispatcher:
    """Queue of inbound messages consumed by independently scheduled tasks."""

    def __init__(self, handler: MessageHandler, *, max_queue_size: int = 0):
        self._handler = handler
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue_size)
        self._pump_task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._pump_task is not None and not self._pump_task.done()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def start(self) -> None:
        if self.running:
            logger.debug("Event dispatcher already running")
            return
        self._pump_task = asyncio.get_running_loop().create_task(self._pump(), name="bpb-event-pump")
        logger.info("Event dispatcher started")

    def submit(self, message: InboundMessage) -> None:
        """Queue a message for handling without waiting for it."""
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull as e:
            raise EventDispatchError(
                "Inbound message queue is full",
                details={"message_id": message.message_id, "queued": self._queue.qsize()},
            ) from e

    async def join(self) -> None:
        """Wait until every queued message has been handled."""
        await self._queue.join()

    async def stop(self) -> None:
        """Stop the pump and wait for in-flight handlers to finish."""
        if self._pump_task is not None:
            self._pump_task.cancel()
            await asyncio.gather(self._pump_task, return_exceptions=True)
            self._pump_task = None
        if self._tasks:
            logger.info(f"Waiting for {len(self._tasks)} in-flight message handler(s)")
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        logger.info("Event dispatcher stopped")

    async def _pump(self) -> None:
        while True:
            message = await self._queue.get()
            task = asyncio.create_task(self._run(message))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _run(self, message: InboundMessage) -> None:
        try:
            await self._handler(message)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"Unhandled error while handling message {message.message_id} "
                f"from {message.author_handle}: {get_exception_info(e)}",
                exc_info=True,
            )
        finally:
            self._queue.task_done()
