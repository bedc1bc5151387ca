"""Root conftest for tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

if os.getenv("APP_ENV", "").strip().lower() == "prod":
    raise RuntimeError("Refusing to run tests with APP_ENV=prod")

os.environ["APP_ENV"] = "test"
os.environ["AML_DEFAULT_AUTHORITY"] = "aml-authority"
os.environ.pop("AML_DEFAULT_ACCEPTED_RISK_SCORE", None)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def registrar():
    """Registrar seeded with {All: 5} for the aml-authority account."""
    from aml_registrar.aml.registrar import AccountId, AmlRegistrar

    return AmlRegistrar(AccountId("aml-authority"), 5)


@pytest.fixture
def make_session():
    """Build an AsyncMock session whose execute returns a mock result."""

    def _make(fetchone_row=None):
        mock_result = MagicMock()
        mock_result.fetchone.return_value = fetchone_row

        session = AsyncMock()
        session.execute = AsyncMock(return_value=mock_result)
        return session

    return _make
