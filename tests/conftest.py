"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from roster_match.config import Settings
from roster_match.identity.schemas import KnownRecord
from roster_match.main import app
from roster_match.services.import_service import ImportService


@pytest.fixture
def known_records() -> list[KnownRecord]:
    """Enrolled people for matching tests."""
    return [
        KnownRecord(id="u1", name="Robert Jones", email="bob@x.com"),
        KnownRecord(id="u2", name="Matthew James Young", email="mjy@school.edu"),
        KnownRecord(id="u3", name="Alice Smith", email="alice@x.com"),
        KnownRecord(id="u4", name="Jonathan Smith", email="jsmith@school.edu"),
    ]


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Create async test client for FastAPI app."""
    app.state.import_service = ImportService(settings=Settings())

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    del app.state.import_service
