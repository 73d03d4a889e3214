"""
Entries app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    EntriesServiceError,
    InvalidScopeError,
)

from .entry_repository import (
    add_price_entry,
    delete_price_entry,
    get_user_entry,
    list_user_entries,
    list_all_entries,
    list_entries_by_product_key,
)

from .aggregation import (
    resolve_entries,
    resolve_scope_user_ids,
)

from .statistics import (
    filter_and_sort_entries,
    product_price_summary,
    product_display_name,
    price_chart_points,
)

from .entry_form import (
    initial_form_state,
    submit_price_entry,
)


__all__ = [
    # Exceptions
    'EntriesServiceError',
    'InvalidScopeError',

    # Entry Repository
    'add_price_entry',
    'delete_price_entry',
    'get_user_entry',
    'list_user_entries',
    'list_all_entries',
    'list_entries_by_product_key',

    # Aggregation
    'resolve_entries',
    'resolve_scope_user_ids',

    # Statistics
    'filter_and_sort_entries',
    'product_price_summary',
    'product_display_name',
    'price_chart_points',

    # Entry Form
    'initial_form_state',
    'submit_price_entry',
]
