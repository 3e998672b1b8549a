"""Bank registry: records, sources, cache and search helpers."""

from nuban.banks.models import Bank
from nuban.banks.providers import (
    BankDataError,
    BankDataFormatError,
    BankDataNotFoundError,
    BankRegistryProvider,
    HttpBankProvider,
    JsonFileBankProvider,
    PackagedBankProvider,
    StaticBankProvider,
    get_bank_provider,
    parse_banks,
)
from nuban.banks.registry import CachedBankRegistry, get_bank_registry
from nuban.banks.search import find_bank_by_code, find_bank_by_name, resolve_bank, search_banks

__all__ = [
    # Models
    "Bank",
    # Providers
    "BankRegistryProvider",
    "PackagedBankProvider",
    "JsonFileBankProvider",
    "HttpBankProvider",
    "StaticBankProvider",
    "get_bank_provider",
    "parse_banks",
    # Errors
    "BankDataError",
    "BankDataNotFoundError",
    "BankDataFormatError",
    # Cache
    "CachedBankRegistry",
    "get_bank_registry",
    # Search
    "search_banks",
    "find_bank_by_code",
    "find_bank_by_name",
    "resolve_bank",
]
