"""
Entry form service.

Builds the initial state of the "add price" form and submits validated
form data to the entry repository.
"""

import logging
from datetime import date as date_type
from typing import Optional, Tuple
from uuid import UUID

from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.entries.models import Category
from apps.entries.preferences import EntryFormPreferences

from .entry_repository import add_price_entry

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = Category.BEER

TEMPLATE_FIELDS = ('category', 'product_name', 'package_size', 'date')


def initial_form_state(
    preferences: EntryFormPreferences,
    *,
    today: Optional[date_type] = None
) -> dict:
    """
    Return the values a fresh entry form starts with.

    Category and store come from the remembered preferences; the date
    defaults to today.
    """
    return {
        'category': preferences.last_category or DEFAULT_CATEGORY,
        'product_name': '',
        'package_size': '',
        'store': preferences.last_store,
        'price': '',
        'date': today or timezone.localdate(),
        'note': '',
    }


def submit_price_entry(
    *,
    owner_id: UUID,
    data: dict,
    preferences: EntryFormPreferences
) -> Tuple[UUID, dict]:
    """
    Save a validated entry and remember the form choices.

    Remembering is best effort: once the entry is saved, a failure to
    store the preferences is logged and the entry id is still returned.

    Args:
        owner_id: User saving the entry
        data: Validated form data (see ``PriceEntryInputSerializer``)
        preferences: Where the last category and store are remembered

    Returns:
        Tuple of (entry id, template). The template holds category,
        product name, package size and date so another price for the
        same product can be entered quickly.
    """
    entry_id = add_price_entry(
        owner_id=owner_id,
        category=data['category'],
        product_name=data['product_name'],
        package_size=data.get('package_size', ''),
        store=data.get('store', ''),
        price=data['price'],
        date=data['date'],
        note=data.get('note', ''),
    )

    try:
        with transaction.atomic():
            preferences.remember(category=data['category'], store=data.get('store', ''))
    except DatabaseError:
        logger.exception("Could not save form preferences of user %s", owner_id)

    template = {field: data.get(field, '') for field in TEMPLATE_FIELDS}
    return entry_id, template
