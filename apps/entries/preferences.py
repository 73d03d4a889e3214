"""
Entry form preferences.

The entry form remembers the last category and store a user picked so
the next form starts from them. Preferences are read and written through
a small get/set interface over any mutable mapping; in production the
mapping is the user's ``preferences`` JSON field.
"""

from typing import Any, Callable, MutableMapping, Optional

from .models import Category


class EntryFormPreferences:
    LAST_CATEGORY_KEY = 'last_category'
    LAST_STORE_KEY = 'last_store'

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        on_change: Optional[Callable[[], None]] = None
    ):
        self._storage = storage
        self._on_change = on_change

    @classmethod
    def for_user(cls, user) -> 'EntryFormPreferences':
        """Preferences stored on ``user.preferences``, saved on every change."""
        if user.preferences is None:
            user.preferences = {}
        return cls(
            user.preferences,
            on_change=lambda: user.save(update_fields=['preferences'])
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self._storage.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._storage[key] = value
        if self._on_change is not None:
            self._on_change()

    @property
    def last_category(self) -> Optional[str]:
        """Last used category, ignoring values that are no longer valid."""
        value = self.get(self.LAST_CATEGORY_KEY)
        return value if value in Category.values else None

    @property
    def last_store(self) -> str:
        return self.get(self.LAST_STORE_KEY) or ''

    def remember(self, *, category: str, store: str = '') -> None:
        """Remember the category and, when given, the store of a saved entry."""
        self.set(self.LAST_CATEGORY_KEY, category)
        if store:
            self.set(self.LAST_STORE_KEY, store)
