import uuid
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import (
    get_conversion_service,
    get_current_user,
    get_history_ledger,
    get_rate_resolver,
    get_user_service,
)
from api.main import app
from application.services import ConversionService, HistoryLedger, RateResolver, UserService
from domain.models.currency import User


@pytest.fixture
def current_user():
    return User(
        id=uuid.UUID('7c9e6679-7425-40de-944b-e07fc1f90ae7'),
        username='alice',
        created_at=datetime(2025, 9, 30, 10, 0, 0),
    )


@pytest.fixture
def mock_rate_resolver():
    resolver = AsyncMock(spec=RateResolver)
    resolver.resolve_user_rates.return_value = {
        'CNY': Decimal('7.14'),
        'EUR': Decimal('0.85'),
        'RUB': Decimal('73.5'),
        'USD': Decimal('1.0'),
    }
    return resolver


@pytest.fixture
def mock_conversion_service():
    return AsyncMock(spec=ConversionService)


@pytest.fixture
def mock_history_ledger():
    return AsyncMock(spec=HistoryLedger)


@pytest.fixture
def mock_user_service():
    return AsyncMock(spec=UserService)


@pytest.fixture
def client(
    current_user,
    mock_rate_resolver,
    mock_conversion_service,
    mock_history_ledger,
    mock_user_service,
):
    # Override the real dependencies with mocks
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_rate_resolver] = lambda: mock_rate_resolver
    app.dependency_overrides[get_conversion_service] = lambda: mock_conversion_service
    app.dependency_overrides[get_history_ledger] = lambda: mock_history_ledger
    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
