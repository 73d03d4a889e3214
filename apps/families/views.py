import logging

from django.db import DatabaseError
from django.utils.translation import gettext_lazy as _
from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    FamilyCreateSerializer,
    FamilyMemberSerializer,
    FamilyResponseSerializer,
    JoinFamilySerializer,
)
from apps.families.services import (
    create_family,
    join_family,
    get_family_members,
    get_family_id_for_user,
    NoFamilyError,
)

logger = logging.getLogger(__name__)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def build_invite_url(request, family_id):
    """Absolute link a family member can share to invite others."""
    return request.build_absolute_uri(f'/family/join?familyId={family_id}')


@extend_schema(
    request=FamilyCreateSerializer,
    responses={201: FamilyResponseSerializer, 503: ErrorResponseSerializer},
    description="Create a family owned by the current user and join it.",
    tags=['families'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create(request):
    """Create a family for the current user."""
    serializer = FamilyCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        family_id = create_family(
            owner=request.user,
            name=serializer.validated_data['name'],
        )
    except DatabaseError:
        logger.exception("Creating a family failed for user %s", request.user.id)
        return Response(
            {'error': _('Could not create the family group. Please try again.')},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    return Response({
        'family_id': family_id,
        'invite_url': build_invite_url(request, family_id),
        'members': FamilyMemberSerializer(get_family_members(family_id=family_id), many=True).data,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=JoinFamilySerializer,
    responses={200: FamilyResponseSerializer, 400: ErrorResponseSerializer, 503: ErrorResponseSerializer},
    description="Join the family named in an invite link.",
    tags=['families'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def join(request):
    """Join a family using the id from an invite link."""
    serializer = JoinFamilySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    family_id = serializer.validated_data['family_id']

    try:
        join_family(user=request.user, family_id=family_id)
    except DatabaseError:
        logger.exception("Joining family %s failed for user %s", family_id, request.user.id)
        return Response(
            {'error': _('Could not join the family group. Please try again.')},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    return Response({
        'family_id': family_id,
        'invite_url': build_invite_url(request, family_id),
        'members': FamilyMemberSerializer(get_family_members(family_id=family_id), many=True).data,
    })


@extend_schema(
    responses={200: FamilyResponseSerializer},
    description="Get the current user's family, its members and the invite link.",
    tags=['families'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_family(request):
    """Get the current user's family (empty when there is none)."""
    try:
        family_id = get_family_id_for_user(user_id=request.user.id)
    except NoFamilyError:
        return Response({
            'family_id': None,
            'invite_url': None,
            'members': [],
        })

    return Response({
        'family_id': family_id,
        'invite_url': build_invite_url(request, family_id),
        'members': FamilyMemberSerializer(get_family_members(family_id=family_id), many=True).data,
    })
