from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with the users repository"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_username = AsyncMock()
    uow.users.get_by_reset_token = AsyncMock()
    uow.users.set_reset_token = AsyncMock()
    uow.users.redeem_reset_token = AsyncMock()
    return uow


@pytest.fixture
def mock_logger():
    return MagicMock()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
