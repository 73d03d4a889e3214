import logging
from uuid import UUID

from django.conf import settings
from django.db import DatabaseError
from django.utils.translation import gettext_lazy as _
from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .preferences import EntryFormPreferences
from .serializers import (
    PriceEntryInputSerializer,
    PriceEntrySerializer,
    EntryListQuerySerializer,
    ProductHistoryQuerySerializer,
    EntryCreatedSerializer,
    FormDefaultsSerializer,
    ProductHistorySerializer,
    PriceSummarySerializer,
    ChartPointSerializer,
    EntryTemplateSerializer,
)
from apps.entries.models import normalize_product_key
from apps.entries.services import (
    delete_price_entry,
    get_user_entry,
    list_entries_by_product_key,
    resolve_entries,
    resolve_scope_user_ids,
    filter_and_sort_entries,
    product_price_summary,
    product_display_name,
    price_chart_points,
    initial_form_state,
    submit_price_entry,
)

logger = logging.getLogger(__name__)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class EntryPagination(PageNumberPagination):
    """Pagination for entry listings."""
    page_size = settings.ENTRIES_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = 500


class PriceEntryViewSet(viewsets.GenericViewSet):
    """
    ViewSet for price entries.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Entries visible in a scope, filtered and sorted for the stats table
    create: Record a price
    destroy: Delete one of the caller's entries
    form_defaults: Initial values of the "add price" form
    product_history: History, summary and chart of one product
    """

    serializer_class = PriceEntrySerializer
    permission_classes = [IsAuthenticated]
    pagination_class = EntryPagination

    @extend_schema(
        parameters=[EntryListQuerySerializer],
        responses={200: PriceEntrySerializer(many=True), 503: ErrorResponseSerializer},
        description="List entries in the mine, family or all scope.",
        tags=['entries'],
    )
    def list(self, request):
        """List entries for the stats table."""
        query = EntryListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        try:
            entries = resolve_entries(
                user_id=request.user.id,
                scope=params['scope'],
                category=params['category'],
            )
        except DatabaseError:
            logger.exception("Loading %s entries failed for user %s", params['scope'], request.user.id)
            return Response(
                {'error': _('Could not load entries. Please try again.')},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        entries = filter_and_sort_entries(entries, product=params['product'], store=params['store'])

        page = self.paginate_queryset(entries)
        serializer = PriceEntrySerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(
        request=PriceEntryInputSerializer,
        responses={201: EntryCreatedSerializer, 400: None, 503: ErrorResponseSerializer},
        description="Record a price. A comma is accepted as the decimal separator.",
        tags=['entries'],
    )
    def create(self, request):
        """Record a price for the current user."""
        serializer = PriceEntryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            entry_id, template = submit_price_entry(
                owner_id=request.user.id,
                data=data,
                preferences=EntryFormPreferences.for_user(request.user),
            )
        except DatabaseError:
            logger.exception("Saving an entry failed for user %s", request.user.id)
            return Response(
                {'error': _('Error while saving. Please try again.')},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        entry = get_user_entry(owner_id=request.user.id, entry_id=entry_id)
        message = _('Saved: %(product)s - %(price)s (%(store)s)') % {
            'product': data['product_name'],
            'price': data['price'],
            'store': data['store'] or _('no store'),
        }

        return Response({
            'id': entry_id,
            'message': message,
            'entry': PriceEntrySerializer(entry).data,
            'template': EntryTemplateSerializer(template).data,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={204: None, 503: ErrorResponseSerializer},
        description="Delete one of your entries and its global copy.",
        tags=['entries'],
    )
    def destroy(self, request, pk=None):
        """Delete an entry. Deleting a missing entry is not an error."""
        try:
            entry_id = UUID(str(pk))
        except ValueError:
            return Response(status=status.HTTP_404_NOT_FOUND)

        try:
            delete_price_entry(owner_id=request.user.id, entry_id=entry_id)
        except DatabaseError:
            logger.exception("Deleting entry %s failed for user %s", entry_id, request.user.id)
            return Response(
                {'error': _('Could not delete the entry. Please try again.')},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        responses={200: FormDefaultsSerializer},
        description="Initial values of the add-price form, using remembered category and store.",
        tags=['entries'],
    )
    @action(detail=False, methods=['get'], url_path='form-defaults')
    def form_defaults(self, request):
        """Get the initial state of the add-price form."""
        state = initial_form_state(EntryFormPreferences.for_user(request.user))
        return Response(FormDefaultsSerializer(state).data)

    @extend_schema(
        parameters=[ProductHistoryQuerySerializer],
        responses={200: ProductHistorySerializer, 503: ErrorResponseSerializer},
        description="Price history of one product, oldest first, with summary and chart points.",
        tags=['entries'],
    )
    @action(detail=False, methods=['get'], url_path=r'products/(?P<product_key>.+)')
    def product_history(self, request, product_key=None):
        """Get the product page for ``product_key``."""
        query = ProductHistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        scope = query.validated_data['scope']
        product_key = normalize_product_key(product_key)

        try:
            all_entries = list_entries_by_product_key(product_key=product_key)
            user_ids = resolve_scope_user_ids(user_id=request.user.id, scope=scope)
        except DatabaseError:
            logger.exception("Loading product %r failed for user %s", product_key, request.user.id)
            return Response(
                {'error': _('Could not load the product history. Please try again.')},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        if user_ids is None:
            entries = all_entries
        else:
            entries = [entry for entry in all_entries if entry.user_id in user_ids]

        summary = product_price_summary(entries)

        return Response({
            'product_key': product_key,
            'display_name': product_display_name(all_entries, product_key),
            'scope': scope,
            'entries': PriceEntrySerializer(entries, many=True).data,
            'summary': PriceSummarySerializer(summary).data if summary else None,
            'chart': ChartPointSerializer(price_chart_points(entries), many=True).data,
        })
