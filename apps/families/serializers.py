from rest_framework import serializers
from .models import FamilyMembership
from apps.accounts.models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""
    
    display_name = serializers.SerializerMethodField()
    
    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields
    
    def get_display_name(self, obj):
        return obj.get_display_name()


class FamilyMemberSerializer(serializers.ModelSerializer):
    """Member of a family with join time."""
    
    user = UserMinimalSerializer(read_only=True)
    
    class Meta:
        model = FamilyMembership
        fields = ['user', 'joined_at']
        read_only_fields = fields


class FamilyCreateSerializer(serializers.Serializer):
    """Input for creating a family."""
    
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class JoinFamilySerializer(serializers.Serializer):
    """Input for joining a family from an invite link."""
    
    family_id = serializers.UUIDField(required=True)


class FamilyResponseSerializer(serializers.Serializer):
    """Caller's family with members and invite link."""
    
    family_id = serializers.UUIDField(allow_null=True)
    invite_url = serializers.CharField(allow_null=True)
    members = FamilyMemberSerializer(many=True)
