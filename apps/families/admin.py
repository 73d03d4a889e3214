from django.contrib import admin
from apps.families.models import Family, FamilyMembership


class FamilyMembershipInline(admin.TabularInline):
    """Inline admin for family memberships."""
    model = FamilyMembership
    extra = 0
    fields = ['user', 'joined_at']


@admin.register(Family)
class FamilyAdmin(admin.ModelAdmin):
    """Admin interface for Families."""
    
    list_display = [
        'id',
        'name',
        'owner',
        'member_count',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['id', 'name', 'owner__email']
    readonly_fields = ['created_at']
    inlines = [FamilyMembershipInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    
    def member_count(self, obj):
        """Show number of members."""
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(FamilyMembership)
class FamilyMembershipAdmin(admin.ModelAdmin):
    """Memberships, including ones pointing at unknown families."""
    
    list_display = ['family_id', 'user', 'joined_at']
    search_fields = ['family_id', 'user__email']
    ordering = ['-joined_at']
