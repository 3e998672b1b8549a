"""
Bank registry providers.

Defines the contract every registry source implements and the concrete
sources shipped with the package: the packaged JSON file, a JSON file on
disk, a JSON document over HTTP, and a caller-supplied list.
"""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, List, Optional

import httpx
import structlog
from pydantic import ValidationError

from nuban.banks.models import Bank
from nuban.core.config import Settings

logger = structlog.get_logger()

PACKAGED_BANKS_RESOURCE = "banks.json"


class BankDataError(Exception):
    """Base exception for registry loading errors."""

    pass


class BankDataNotFoundError(BankDataError):
    """Raised when the registry source is missing or unreachable."""

    pass


class BankDataFormatError(BankDataError):
    """Raised when the registry source does not hold a list of bank records."""

    pass


def parse_banks(payload: Any, source: str = "unknown") -> List[Bank]:
    """
    Convert a decoded JSON payload into bank records.

    Accepts a bare list of objects or an envelope with the list under
    ``data`` (the shape returned by Paystack's ``/bank`` endpoint).

    Args:
        payload: Decoded JSON document
        source: Source name used in log and error messages

    Returns:
        Bank records in source order

    Raises:
        BankDataFormatError: If the payload is not a list of bank objects
    """
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        payload = payload["data"]

    if not isinstance(payload, list):
        raise BankDataFormatError(
            f"Expected a JSON array of banks from {source}, got {type(payload).__name__}"
        )

    banks: List[Bank] = []
    for index, item in enumerate(payload):
        try:
            banks.append(Bank.model_validate(item))
        except ValidationError as e:
            raise BankDataFormatError(
                f"Invalid bank record at index {index} from {source}: {e}"
            ) from e

    seen: set[Bank] = set()
    duplicates: list[str] = []
    for bank in banks:
        if bank in seen:
            duplicates.append(bank.code)
        seen.add(bank)
    if duplicates:
        logger.warning("banks.duplicate_codes", source=source, codes=duplicates)

    return banks


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise BankDataFormatError(f"Failed to deserialize banks from {source}: {e}") from e


class BankRegistryProvider(ABC):
    """
    Abstract base class for bank registry sources.

    Implementations only fetch and parse; caching belongs to
    ``CachedBankRegistry``.
    """

    @abstractmethod
    async def load_banks(self) -> List[Bank]:
        """
        Load the full registry.

        Returns:
            Bank records in registry order

        Raises:
            BankDataNotFoundError: If the source is missing or unreachable
            BankDataFormatError: If the source content is malformed
        """
        pass

    @abstractmethod
    def get_source_name(self) -> str:
        """
        Get the name of this registry source.

        Returns:
            Source identifier (e.g., 'packaged', 'file', 'http', 'static')
        """
        pass


class PackagedBankProvider(BankRegistryProvider):
    """Reads the registry shipped inside the package."""

    async def load_banks(self) -> List[Bank]:
        resource = resources.files("nuban.banks").joinpath("data").joinpath(PACKAGED_BANKS_RESOURCE)
        try:
            text = await asyncio.to_thread(resource.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise BankDataNotFoundError("Packaged banks JSON resource not found.") from e
        banks = parse_banks(_decode(text, self.get_source_name()), self.get_source_name())
        logger.debug("banks.loaded", source=self.get_source_name(), count=len(banks))
        return banks

    def get_source_name(self) -> str:
        return "packaged"


class JsonFileBankProvider(BankRegistryProvider):
    """Reads the registry from a JSON file on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def load_banks(self) -> List[Bank]:
        if not self.path.is_file():
            raise BankDataNotFoundError(f"Banks JSON file not found: {self.path}")
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except OSError as e:
            raise BankDataNotFoundError(f"Cannot read banks JSON file {self.path}: {e}") from e
        banks = parse_banks(_decode(text, str(self.path)), str(self.path))
        logger.debug("banks.loaded", source=self.get_source_name(), path=str(self.path), count=len(banks))
        return banks

    def get_source_name(self) -> str:
        return "file"


class HttpBankProvider(BankRegistryProvider):
    """Fetches the registry as a JSON document over HTTP."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def load_banks(self) -> List[Bank]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BankDataNotFoundError(
                f"Banks endpoint {self.url} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise BankDataNotFoundError(f"Cannot reach banks endpoint {self.url}: {e}") from e

        banks = parse_banks(_decode(response.text, self.url), self.url)
        logger.info("banks.fetched", url=self.url, count=len(banks))
        return banks

    def get_source_name(self) -> str:
        return "http"


class StaticBankProvider(BankRegistryProvider):
    """Serves a caller-supplied list of banks."""

    def __init__(self, banks: Iterable[Bank | dict[str, Any]]):
        self._banks = parse_banks(
            [b.model_dump() if isinstance(b, Bank) else b for b in banks],
            self.get_source_name(),
        )

    async def load_banks(self) -> List[Bank]:
        return list(self._banks)

    def get_source_name(self) -> str:
        return "static"


def get_bank_provider(settings: Settings) -> BankRegistryProvider:
    """Pick the registry source configured in settings."""
    if settings.BANKS_URL:
        return HttpBankProvider(settings.BANKS_URL, timeout=settings.BANKS_HTTP_TIMEOUT)
    if settings.BANKS_FILE:
        return JsonFileBankProvider(settings.BANKS_FILE)
    return PackagedBankProvider()
