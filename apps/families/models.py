from django.db import models
from django.utils import timezone
import uuid


class Family(models.Model):
    """Group of users whose price entries can be browsed together."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, blank=True)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='owned_families')
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'families'
        verbose_name_plural = 'families'
        ordering = ['-created_at']
    
    def __str__(self):
        return self.name or f"Family {self.id}"


class FamilyMembership(models.Model):
    """
    Membership of a user in a family.

    The family reference carries no database constraint: a membership
    may point at a family id that was never created.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    family = models.ForeignKey(
        Family,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='memberships'
    )
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='family_memberships')
    joined_at = models.DateTimeField(default=timezone.now)
    
    class Meta:
        db_table = 'family_memberships'
        unique_together = [['family', 'user']]
        ordering = ['joined_at']
    
    def __str__(self):
        return f"{self.user.get_display_name()} in {self.family_id}"
