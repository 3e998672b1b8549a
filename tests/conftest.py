import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import nuban` works when running pytest from root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nuban.banks.models import Bank  # noqa: E402
from nuban.banks.providers import StaticBankProvider  # noqa: E402
from nuban.banks.registry import CachedBankRegistry  # noqa: E402
from nuban.prediction.selector import BankSuggestionService  # noqa: E402
from tests.bank_fixtures import SAMPLE_BANKS  # noqa: E402


@pytest.fixture
def sample_banks() -> list[Bank]:
    """Small registry in registry order."""
    return [Bank.model_validate(b) for b in SAMPLE_BANKS]


@pytest.fixture
def sample_service() -> BankSuggestionService:
    """Suggestion service backed by the sample registry."""
    return BankSuggestionService(CachedBankRegistry(StaticBankProvider(SAMPLE_BANKS)))
