"""Service test fixtures — shared fakes for UserService tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_repo():
    """UserRepository double with all six operations as AsyncMocks."""
    repo = MagicMock()
    repo.get_all = AsyncMock(return_value=[])
    repo.get_by_username = AsyncMock()
    repo.get_by_id = AsyncMock()
    repo.create = AsyncMock()
    repo.update = AsyncMock()
    repo.delete = AsyncMock(return_value=None)
    return repo
