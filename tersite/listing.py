"""Project pages into ordered listing items.

Listings follow a three-tier policy, highest precedence first:

1. pinned pages before everything else;
2. hub (index) pages before regular pages;
3. newest first among dated pages.

Undated pages are neither oldest nor newest: inside their tier they keep the
exact slot they held in the input, and only the dated pages around them are
reordered.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from .content.models import IndexItem, Page

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

TierKey = tuple[bool, bool]


def readable_date(value: datetime | None) -> str | None:
    """Format a date as ``Jan 01, 2023`` regardless of the process locale."""
    if value is None:
        return None
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day:02d}, {value.year:04d}"


def to_index_item(page: Page, *, pinned_key: str = "pinned") -> IndexItem:
    return IndexItem(
        url=page.url,
        title=page.title,
        description=page.description,
        is_index_page=page.is_index,
        pinned=page.is_pinned(pinned_key),
        date=page.date,
        readable_date=readable_date(page.date),
    )


def tier_key(item: IndexItem) -> TierKey:
    # False sorts first, so pinned and hub items lead.
    return (not item.pinned, not item.is_index_page)


def order_items(items: Iterable[IndexItem]) -> list[IndexItem]:
    """Apply the pin/hub/recency policy to already projected items."""
    tiers: dict[TierKey, list[IndexItem]] = {}
    for item in items:
        tiers.setdefault(tier_key(item), []).append(item)

    ordered: list[IndexItem] = []
    for key in sorted(tiers):
        ordered.extend(_order_by_date(tiers[key]))
    return ordered


def index_items(pages: Sequence[Page], *, pinned_key: str = "pinned") -> list[IndexItem]:
    """Convert pages into listing items ordered by pin, hub and recency."""
    return order_items(to_index_item(page, pinned_key=pinned_key) for page in pages)


def _order_by_date(items: list[IndexItem]) -> list[IndexItem]:
    slots = [position for position, item in enumerate(items) if item.date is not None]
    # sorted() is stable, so equal dates keep their input order.
    dated = sorted((items[position] for position in slots), key=_date_key, reverse=True)
    result = list(items)
    for position, item in zip(slots, dated):
        result[position] = item
    return result


def _date_key(item: IndexItem) -> datetime:
    assert item.date is not None
    return item.date
