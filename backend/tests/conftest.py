"""
Test fixtures shared across the test suite.

Architecture:
- Layout tests run against MonoMeasurer (every character 1mm wide) so
  wrap points and line counts can be asserted exactly. A few tests use
  the real ReportLab font metrics to check the same layout rules hold.
- API tests drive the real FastAPI app in-process through httpx's
  ASGITransport. Nothing is persisted, so no setup or teardown needed.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.layout import PageMetrics
from app.main import app

from factories import make_layout, make_paginator, make_report, make_report_payload


@pytest_asyncio.fixture
async def client():
    """Async HTTP test client over the real app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def a4():
    return PageMetrics.a4()


@pytest.fixture
def card_layout():
    return make_layout()


@pytest.fixture
def paginator():
    return make_paginator()


@pytest.fixture
def report():
    return make_report()


@pytest.fixture
def report_payload():
    return make_report_payload()
