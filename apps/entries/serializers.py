from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from .models import Category, Scope

MAX_PRICE = Decimal('100000000')
ALL_CATEGORIES = 'all'


# =============================================================================
# Input Serializers
# =============================================================================

class PriceEntryInputSerializer(serializers.Serializer):
    """
    Validate the "add price" form.

    Price accepts a comma as the decimal separator and must stay above
    zero after rounding to cents. Text fields are trimmed; the product
    name must not be blank after trimming.
    """

    category = serializers.ChoiceField(choices=Category.choices)
    product_name = serializers.CharField(
        max_length=200,
        error_messages={'blank': _('Please enter a product name.')}
    )
    package_size = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    store = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    price = serializers.CharField(
        max_length=32,
        error_messages={'blank': _('Please enter a valid price.')}
    )
    date = serializers.DateField(input_formats=['%Y-%m-%d'])
    note = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_price(self, value):
        """Parse "2,50" or "2.50" into Decimal('2.50')."""
        invalid = serializers.ValidationError(_('Please enter a valid price.'))

        try:
            price = Decimal(value.strip().replace(',', '.', 1))
        except InvalidOperation:
            raise invalid

        if not price.is_finite() or price <= 0 or price >= MAX_PRICE:
            raise invalid

        price = price.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        if price <= 0:
            raise invalid

        return price


class EntryListQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the entry list.

    Query Parameters:
        scope (str): mine, family or all (default mine)
        category (str): Category value or "all" (default all)
        product (str): Substring of the product name
        store (str): Substring of the store name
    """

    scope = serializers.ChoiceField(choices=Scope.choices, default=Scope.MINE)
    category = serializers.ChoiceField(
        choices=[(ALL_CATEGORIES, 'All categories')] + Category.choices,
        default=ALL_CATEGORIES
    )
    product = serializers.CharField(required=False, allow_blank=True, default='')
    store = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_category(self, value):
        return None if value == ALL_CATEGORIES else value


class ProductHistoryQuerySerializer(serializers.Serializer):
    """Validate query parameters for a product page."""

    scope = serializers.ChoiceField(choices=Scope.choices, default=Scope.MINE)


# =============================================================================
# Output Serializers
# =============================================================================

class PriceEntrySerializer(serializers.Serializer):
    """Read-only representation of a user or global entry."""

    id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True)
    category = serializers.CharField(read_only=True)
    product_name = serializers.CharField(read_only=True)
    product_key = serializers.CharField(read_only=True)
    package_size = serializers.CharField(read_only=True)
    store = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    date = serializers.DateField(read_only=True)
    note = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class EntryTemplateSerializer(serializers.Serializer):
    """Values that pre-fill the next entry for the same product."""

    category = serializers.CharField()
    product_name = serializers.CharField()
    package_size = serializers.CharField(allow_blank=True)
    date = serializers.DateField()


class EntryCreatedSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    message = serializers.CharField()
    entry = PriceEntrySerializer()
    template = EntryTemplateSerializer()


class FormDefaultsSerializer(serializers.Serializer):
    """Initial values of the "add price" form."""

    category = serializers.CharField()
    product_name = serializers.CharField(allow_blank=True)
    package_size = serializers.CharField(allow_blank=True)
    store = serializers.CharField(allow_blank=True)
    price = serializers.CharField(allow_blank=True)
    date = serializers.DateField()
    note = serializers.CharField(allow_blank=True)


class PriceSummarySerializer(serializers.Serializer):
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    avg_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    entry_count = serializers.IntegerField()
    latest = PriceEntrySerializer()


class ChartPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class ProductHistorySerializer(serializers.Serializer):
    """Product page: history, summary and chart points for one product key."""

    product_key = serializers.CharField()
    display_name = serializers.CharField()
    scope = serializers.CharField()
    entries = PriceEntrySerializer(many=True)
    summary = PriceSummarySerializer(allow_null=True)
    chart = ChartPointSerializer(many=True)
