"""
Process-wide cache for the bank registry.

The registry is loaded lazily on first use. Concurrent first callers share a
single load and all observe the same snapshot, whether they run on one event
loop, on several threads each with their own loop, or without a loop at all.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Optional, Tuple

import structlog

from nuban.banks.models import Bank
from nuban.banks.providers import BankRegistryProvider, get_bank_provider
from nuban.core.config import get_settings

logger = structlog.get_logger()


class CachedBankRegistry:
    """Loads the registry from a provider at most once per snapshot."""

    def __init__(self, provider: BankRegistryProvider):
        """
        Initialize the cache.

        Args:
            provider: Source the registry is loaded from
        """
        self.provider = provider
        self._banks: Optional[Tuple[Bank, ...]] = None
        # An asyncio.Lock is bound to one event loop; callers may each run their own.
        self._lock = threading.Lock()
        self.load_count = 0

    @property
    def is_loaded(self) -> bool:
        return self._banks is not None

    async def get_banks(self) -> Tuple[Bank, ...]:
        """
        Return the cached registry, loading it on first access.

        The load runs on a worker thread so waiting on the lock never blocks
        the caller's event loop.

        Returns:
            Immutable snapshot of the registry

        Raises:
            BankDataError: If the provider fails; failures are not cached
        """
        banks = self._banks
        if banks is not None:
            return banks
        return await asyncio.to_thread(self.get_banks_sync)

    def get_banks_sync(self) -> Tuple[Bank, ...]:
        """
        Blocking variant of ``get_banks`` for callers without an event loop.

        Must not be called from a thread that is running an event loop.
        """
        banks = self._banks
        if banks is not None:
            return banks

        with self._lock:
            if self._banks is None:
                loaded = asyncio.run(self.provider.load_banks())
                self.load_count += 1
                self._banks = tuple(loaded)
                logger.info(
                    "banks.registry_loaded",
                    source=self.provider.get_source_name(),
                    count=len(self._banks),
                )
            return self._banks

    def invalidate(self) -> None:
        """Drop the snapshot so the next access reloads from the provider."""
        with self._lock:
            self._banks = None


_default_registry: Optional[CachedBankRegistry] = None
_default_registry_lock = threading.Lock()


def get_bank_registry() -> CachedBankRegistry:
    """Return the process-wide registry cache configured from settings."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = CachedBankRegistry(get_bank_provider(get_settings()))
    return _default_registry
