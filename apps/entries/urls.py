from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'entries'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.PriceEntryViewSet, basename='entry')

urlpatterns = [
    # GET    /api/entries/                          - Entries in a scope (stats table)
    # POST   /api/entries/                          - Record a price
    # DELETE /api/entries/{id}/                     - Delete own entry
    # GET    /api/entries/form-defaults/            - Initial add-price form
    # GET    /api/entries/products/{product_key}/   - Product page
    path('', include(router.urls)),
]
