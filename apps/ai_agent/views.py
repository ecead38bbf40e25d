"""
AI assistant views.

Configuration is global and managed by administrators. Conversations are
private to their author. Usage reports and limits follow the role of the
caller.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin, IsCompanyOwner, IsOwnerOrAdmin
from apps.common.utils import UUID_PATTERN
from apps.companies.tenancy import get_effective_company_id
from apps.modules.models import AI_AGENT
from apps.modules.permissions import HasModulePermission, module_permission

from .serializers import (
    AIConfigurationSerializer,
    AIConfigurationWriteSerializer,
    AIConversationDetailSerializer,
    AIConversationSerializer,
    AIMessageSerializer,
    CompanyUsageRowSerializer,
    CompanyUsageSerializer,
    MyLimitsSerializer,
    MyUsageSerializer,
    SendMessageSerializer,
    TokenLimitSerializer,
    TokenLimitWriteSerializer,
    UsageQuerySerializer,
)
from . import services


# =============================================================================
# Configuration
# =============================================================================

class AIConfigPermission(IsAuthenticated):
    """Reading needs the module, writing the ADMIN role."""

    message = 'Brak uprawnień do konfiguracji AI.'

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        if request.method == 'GET':
            return module_permission(AI_AGENT, 'read')().has_permission(request, view)
        return IsAdmin().has_permission(request, view)


@extend_schema(methods=['GET'], responses={200: AIConfigurationSerializer}, tags=['ai-agent'])
@extend_schema(
    methods=['POST', 'PATCH'],
    request=AIConfigurationWriteSerializer,
    responses={200: AIConfigurationSerializer, 201: AIConfigurationSerializer},
    tags=['ai-agent'],
)
@api_view(['GET', 'POST', 'PATCH'])
@permission_classes([AIConfigPermission])
def ai_configuration(request):
    """Global assistant configuration (null when not configured yet)."""
    if request.method == 'GET':
        config = services.get_configuration()
        return Response(AIConfigurationSerializer(config).data if config else None)

    if request.method == 'POST':
        serializer = AIConfigurationWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        config = services.create_configuration(user=request.user, data=serializer.validated_data)
        return Response(AIConfigurationSerializer(config).data, status=status.HTTP_201_CREATED)

    serializer = AIConfigurationWriteSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    config = services.update_configuration(user=request.user, data=serializer.validated_data)
    return Response(AIConfigurationSerializer(config).data)


# =============================================================================
# Conversations
# =============================================================================

@extend_schema(tags=['ai-agent'])
class ConversationViewSet(viewsets.GenericViewSet):
    """
    Conversations of the current user.

    list: Newest first
    create: New conversation ("Nowa rozmowa" without a title)
    retrieve: Conversation with messages, oldest first
    destroy: Delete conversation
    messages: Send a message and get the assistant's answer
    """

    serializer_class = AIConversationSerializer
    permission_classes = [IsAuthenticated, HasModulePermission]
    lookup_value_regex = UUID_PATTERN
    module_slug = AI_AGENT
    module_permissions = {'destroy': 'write'}

    def _scope(self):
        return {'user': self.request.user, 'company_id': get_effective_company_id(self.request.user)}

    def list(self, request):
        qs = services.list_conversations(**self._scope())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(AIConversationSerializer(page, many=True).data)
        return Response(AIConversationSerializer(qs, many=True).data)

    @extend_schema(responses={200: AIConversationDetailSerializer})
    def retrieve(self, request, pk=None):
        conversation = services.get_conversation(conversation_id=pk, **self._scope())
        return Response(AIConversationDetailSerializer(conversation).data)

    @extend_schema(request=AIConversationSerializer, responses={201: AIConversationSerializer})
    def create(self, request):
        serializer = AIConversationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        conversation = services.create_conversation(
            title=serializer.validated_data.get('title', ''), **self._scope()
        )
        return Response(AIConversationSerializer(conversation).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        services.delete_conversation(conversation_id=pk, **self._scope())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SendMessageSerializer, responses={201: AIMessageSerializer})
    @action(detail=True, methods=['post'])
    def messages(self, request, pk=None):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reply = services.send_message(conversation_id=pk, **serializer.validated_data, **self._scope())
        return Response(AIMessageSerializer(reply).data, status=status.HTTP_201_CREATED)


# =============================================================================
# Usage
# =============================================================================

@extend_schema(parameters=[UsageQuerySerializer], responses={200: MyUsageSerializer}, tags=['ai-agent'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(AI_AGENT, 'read')])
def my_usage(request):
    query = UsageQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    usage = services.get_my_usage(
        user=request.user,
        company_id=get_effective_company_id(request.user),
        days=query.validated_data['days'],
    )
    return Response(MyUsageSerializer(usage).data)


@extend_schema(responses={200: CompanyUsageSerializer}, tags=['ai-agent'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsOwnerOrAdmin])
def company_usage(request):
    usage = services.get_company_usage(company_id=get_effective_company_id(request.user))
    return Response(CompanyUsageSerializer(usage).data)


@extend_schema(responses={200: CompanyUsageRowSerializer(many=True)}, tags=['ai-agent'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def all_usage(request):
    return Response(CompanyUsageRowSerializer(services.get_all_usage(), many=True).data)


# =============================================================================
# Limits
# =============================================================================

@extend_schema(request=TokenLimitWriteSerializer, responses={200: TokenLimitSerializer}, tags=['ai-agent'])
@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdmin])
def company_limit(request, company_id):
    serializer = TokenLimitWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    limit = services.set_company_limit(admin=request.user, company_id=company_id, data=serializer.validated_data)
    return Response(TokenLimitSerializer(limit).data)


@extend_schema(request=TokenLimitWriteSerializer, responses={200: TokenLimitSerializer}, tags=['ai-agent'])
@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsCompanyOwner])
def user_limit(request, user_id):
    serializer = TokenLimitWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    limit = services.set_user_limit(owner=request.user, user_id=user_id, data=serializer.validated_data)
    return Response(TokenLimitSerializer(limit).data)


@extend_schema(responses={200: MyLimitsSerializer}, tags=['ai-agent'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(AI_AGENT, 'read')])
def my_limits(request):
    limits = services.get_my_limits(user=request.user, company_id=get_effective_company_id(request.user))
    return Response(MyLimitsSerializer(limits).data)
