"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import date

import pytest

from src.config.settings import reset_settings
from src.core.entities import Client, Invoice, Region, SubItem, TopLevelItem


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Drop the cached settings so environment patches apply per test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_items() -> list[TopLevelItem]:
    """Stage item with a two-line breakdown plus a plain item.

    Amounts: 100 + (20 + 10) + 200 = 330 net, 16.50 VAT, 346.50 total.
    """
    return [
        TopLevelItem(
            description="Stage build",
            size="12m x 8m",
            quantity=1,
            rate=100,
            sub_items=[
                SubItem(description="Carpet", quantity=2, rate=10),
                SubItem(description="Skirting", quantity=1, rate=10),
            ],
        ),
        TopLevelItem(description="Lighting rig", quantity=2, rate=100),
    ]


@pytest.fixture
def sample_client() -> Client:
    return Client(id=1, name="Gulf Events LLC", region=Region.UAE, trn="100200300400003")


@pytest.fixture
def sample_invoice(sample_items: list[TopLevelItem]) -> Invoice:
    return Invoice(
        id=1,
        invoice_number="UAE-INV-0001",
        client_id=1,
        region=Region.UAE,
        invoice_date=date(2024, 3, 1),
        items=sample_items,
    )
