from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


def normalize_product_key(product_name):
    """Grouping key for a product: trimmed, lower-cased name."""
    return (product_name or '').strip().lower()


class Category(models.TextChoices):
    BEER = 'beer', 'Beer'
    WATER = 'water', 'Water'
    MEAT = 'meat', 'Meat'
    BREAD = 'bread', 'Bread'
    DAIRY = 'dairy', 'Dairy'
    FRUITS_VEG = 'fruits_veg', 'Fruits & vegetables'
    OTHER = 'other', 'Other'


class Scope(models.TextChoices):
    MINE = 'mine', 'Only me'
    FAMILY = 'family', 'My family'
    ALL = 'all', 'Everyone'


class PriceEntryFields(models.Model):
    """Fields shared by both copies of a price entry."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    
    category = models.CharField(max_length=20, choices=Category.choices)
    product_name = models.CharField(max_length=200)
    product_key = models.CharField(max_length=200, db_index=True, editable=False)
    package_size = models.CharField(max_length=100, blank=True)
    store = models.CharField(max_length=200, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    date = models.DateField()
    note = models.TextField(blank=True)
    
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        abstract = True
    
    def save(self, *args, **kwargs):
        self.product_key = normalize_product_key(self.product_name)
        super().save(*args, **kwargs)


class UserEntry(PriceEntryFields):
    """
    Price entry in its owner's collection.

    ``global_entry_id`` links to the copy in the global collection once
    that copy has been written.
    """
    
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='entries'
    )
    global_entry_id = models.UUIDField(null=True, blank=True)
    
    class Meta:
        db_table = 'user_entries'
        verbose_name_plural = 'user entries'
        indexes = [
            models.Index(fields=['user', 'date'], name='user_entries_user_date_idx'),
            models.Index(fields=['user', 'category'], name='user_entries_user_cat_idx'),
        ]
    
    def __str__(self):
        return f"{self.product_name} @ {self.store or '-'}: {self.price} ({self.date})"


class GlobalEntry(PriceEntryFields):
    """Copy of a price entry visible to every user."""
    
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='global_entries'
    )
    user_entry_id = models.UUIDField()
    
    class Meta:
        db_table = 'global_entries'
        verbose_name_plural = 'global entries'
        indexes = [
            models.Index(fields=['date'], name='global_entries_date_idx'),
            models.Index(fields=['category'], name='global_entries_cat_idx'),
        ]
    
    def __str__(self):
        return f"{self.product_name} @ {self.store or '-'}: {self.price} ({self.date})"
