from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Awaitable, TypeVar

T = TypeVar("T")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime | None = None) -> int:
    moment = moment or now_utc()
    return int(moment.timestamp() * 1000)


async def with_deadline(awaitable: Awaitable[T], seconds: float) -> T:
    return await asyncio.wait_for(awaitable, timeout=seconds)
