"""Statistics service - Price history summaries for the stats and product pages."""

from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional


def filter_and_sort_entries(
    entries: Iterable,
    *,
    product: Optional[str] = None,
    store: Optional[str] = None
) -> list:
    """
    Filter entries for the stats table and order them by product.

    Filters are case-insensitive substring matches on product name and
    store; blank filters match everything. Entries are ordered by product
    name, then by date with the newest first.

    Example:
        >>> rows = filter_and_sort_entries(entries, product='heine', store='fant')
        >>> [row.product_name for row in rows]
        ['Heineken', 'Heineken']
    """
    product_query = (product or '').strip().casefold()
    store_query = (store or '').strip().casefold()

    matched = [
        entry for entry in entries
        if product_query in entry.product_name.casefold()
        and store_query in (entry.store or '').casefold()
    ]

    # Two stable sorts: date is the tie-breaker for equal names
    matched.sort(key=lambda entry: entry.date, reverse=True)
    matched.sort(key=lambda entry: entry.product_name.strip().casefold())
    return matched


def product_price_summary(entries: List) -> Optional[dict]:
    """
    Summarize the prices of one product.

    Args:
        entries: Entries of a single product

    Returns:
        None for no entries, otherwise a dictionary with:
        - min_price: Decimal - Lowest price
        - max_price: Decimal - Highest price
        - avg_price: Decimal - Mean price (rounded to 2 decimals)
        - entry_count: int - Number of entries
        - latest: entry - Most recent entry by date
    """
    if not entries:
        return None

    prices = [entry.price for entry in entries]
    avg_price = (sum(prices, Decimal('0')) / len(prices)).quantize(
        Decimal('0.01'), rounding=ROUND_HALF_UP
    )

    return {
        'min_price': min(prices),
        'max_price': max(prices),
        'avg_price': avg_price,
        'entry_count': len(entries),
        'latest': sorted(entries, key=lambda entry: entry.date, reverse=True)[0],
    }


def product_display_name(entries: Iterable, product_key: str) -> str:
    """
    Name to show for a product page.

    The most common spelling among the entries wins, earliest first on
    ties. Without entries the key itself is shown, capitalized.
    """
    counts = Counter(entry.product_name for entry in entries)
    if not counts:
        return product_key[:1].upper() + product_key[1:]

    name, _count = counts.most_common(1)[0]
    return name or product_key


def price_chart_points(entries: Iterable) -> List[dict]:
    """Return ``{'date', 'price'}`` points in the order of ``entries``."""
    return [{'date': entry.date, 'price': entry.price} for entry in entries]
