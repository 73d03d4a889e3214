from django.contrib import admin
from .models import UserEntry, GlobalEntry


class PriceEntryAdminMixin:
    """Columns and filters shared by both entry tables."""

    list_display = [
        'product_name',
        'category',
        'store',
        'price',
        'date',
        'user',
    ]

    list_filter = [
        'category',
        'date',
    ]

    search_fields = [
        'product_name',
        'product_key',
        'store',
        'user__email',
    ]

    ordering = ['-date']
    date_hierarchy = 'date'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user')


@admin.register(UserEntry)
class UserEntryAdmin(PriceEntryAdminMixin, admin.ModelAdmin):
    """Admin interface for entries in the owners' collections."""

    readonly_fields = ['product_key', 'global_entry_id', 'created_at', 'updated_at']
    raw_id_fields = ['user']


@admin.register(GlobalEntry)
class GlobalEntryAdmin(PriceEntryAdminMixin, admin.ModelAdmin):
    """Admin interface for the global entry collection."""

    readonly_fields = ['product_key', 'user_entry_id', 'created_at', 'updated_at']
    raw_id_fields = ['user']
