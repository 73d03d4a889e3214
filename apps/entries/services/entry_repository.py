"""
Entry repository.

Every price entry is stored twice: in its owner's collection
(``UserEntry``) and in the global collection (``GlobalEntry``). The two
copies point at each other through ``global_entry_id`` and
``user_entry_id``.
"""

import logging
from datetime import date as date_type
from decimal import Decimal
from typing import Iterable, List, Optional, TypeVar
from uuid import UUID

from django.db import DatabaseError, transaction

from apps.entries.models import UserEntry, GlobalEntry, normalize_product_key

logger = logging.getLogger(__name__)

EntryT = TypeVar('EntryT', UserEntry, GlobalEntry)


def sort_newest_first(entries: Iterable[EntryT]) -> List[EntryT]:
    """Return entries ordered by date, newest first."""
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


@transaction.atomic
def add_price_entry(
    *,
    owner_id: UUID,
    category: str,
    product_name: str,
    price: Decimal,
    date: date_type,
    package_size: str = '',
    store: str = '',
    note: str = '',
) -> UUID:
    """
    Record a price entry for ``owner_id``.

    Steps:
    1. Write the entry to the owner's collection
    2. Write the global copy, linked back to the owner's entry
    3. Link the owner's entry to the global copy

    The product key is derived from ``product_name`` on save.

    Args:
        owner_id: ID of the user recording the price
        category: One of ``Category`` values
        product_name: Product name as entered
        price: Price, already validated to be positive
        date: Date the price was observed
        package_size: Free-form package size ("0.5 l", "1 kg")
        store: Store name
        note: Optional note

    Returns:
        ID of the entry in the owner's collection
    """
    fields = {
        'category': category,
        'product_name': product_name,
        'package_size': package_size,
        'store': store,
        'price': price,
        'date': date,
        'note': note,
    }

    user_entry = UserEntry.objects.create(user_id=owner_id, **fields)

    global_entry = GlobalEntry.objects.create(
        user_id=owner_id,
        user_entry_id=user_entry.id,
        **fields
    )

    user_entry.global_entry_id = global_entry.id
    user_entry.save(update_fields=['global_entry_id'])

    logger.info(
        "User %s added entry %s (global %s) for %r",
        owner_id, user_entry.id, global_entry.id, user_entry.product_key
    )
    return user_entry.id


def delete_price_entry(*, owner_id: UUID, entry_id: UUID) -> None:
    """
    Delete one of the owner's entries and, best effort, its global copy.

    Deleting an entry that does not exist is not an error. A failure to
    delete the global copy is logged and swallowed; the owner's entry is
    gone either way.
    """
    owned = UserEntry.objects.filter(id=entry_id, user_id=owner_id)
    global_entry_id = owned.values_list('global_entry_id', flat=True).first()

    owned.delete()

    if global_entry_id is None:
        return

    try:
        with transaction.atomic():
            GlobalEntry.objects.filter(id=global_entry_id, user_id=owner_id).delete()
    except DatabaseError:
        logger.exception(
            "Could not delete global entry %s of user entry %s",
            global_entry_id, entry_id
        )


def get_user_entry(*, owner_id: UUID, entry_id: UUID) -> Optional[UserEntry]:
    """Return one of the owner's entries, or None."""
    return UserEntry.objects.filter(id=entry_id, user_id=owner_id).first()


def list_user_entries(*, user_id: UUID, category: Optional[str] = None) -> List[UserEntry]:
    """
    Return a user's entries, newest first.

    With a category the lookup is a plain equality filter without
    database ordering; the result is sorted here in both cases.
    """
    queryset = UserEntry.objects.filter(user_id=user_id)
    if category is not None:
        queryset = queryset.filter(category=category)
    else:
        queryset = queryset.order_by('-date')
    return sort_newest_first(queryset)


def list_all_entries(*, category: Optional[str] = None) -> List[GlobalEntry]:
    """Return entries from the global collection, newest first."""
    queryset = GlobalEntry.objects.all()
    if category is not None:
        queryset = queryset.filter(category=category)
    else:
        queryset = queryset.order_by('-date')
    return sort_newest_first(queryset)


def list_entries_by_product_key(*, product_key: str) -> List[GlobalEntry]:
    """Return every global entry for a product, oldest first."""
    queryset = GlobalEntry.objects.filter(product_key=normalize_product_key(product_key))
    return sorted(queryset, key=lambda entry: entry.date)
