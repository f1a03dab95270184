import asyncio
from collections.abc import AsyncGenerator

from core.config import settings
from .store import CatalogStore

# One catalog per process
store = CatalogStore()


async def get_store() -> AsyncGenerator[CatalogStore, None]:
    if settings.simulated_latency_ms > 0:
        await asyncio.sleep(settings.simulated_latency_ms / 1000)
    yield store
