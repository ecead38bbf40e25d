from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.common.utils import UUID_PATTERN
from apps.companies.tenancy import get_effective_company_id

from .serializers import (
    CountSerializer,
    NotificationIdsSerializer,
    NotificationQuerySerializer,
    NotificationSerializer,
)
from . import services


@extend_schema(tags=['notifications'])
class NotificationViewSet(viewsets.GenericViewSet):
    """
    Notifications of the current user.

    list: Non-archived notifications (filters: type, module_slug, is_read)
    retrieve: Notification details
    destroy: Delete notification
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def _scope(self):
        return {'user': self.request.user, 'company_id': get_effective_company_id(self.request.user)}

    def _paginated(self, qs):
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(NotificationSerializer(page, many=True).data)
        return Response(NotificationSerializer(qs, many=True).data)

    @extend_schema(parameters=[NotificationQuerySerializer])
    def list(self, request):
        query = NotificationQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return self._paginated(services.list_notifications(filters=query.validated_data, **self._scope()))

    @action(detail=False, methods=['get'])
    def archived(self, request):
        return self._paginated(services.list_archived(**self._scope()))

    @extend_schema(responses={200: CountSerializer})
    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        return Response({'count': services.unread_count(**self._scope())})

    @extend_schema(request=None, responses={200: CountSerializer})
    @action(detail=False, methods=['post'], url_path='mark-all-read')
    def mark_all_read(self, request):
        return Response({'count': services.mark_all_read(**self._scope())})

    @extend_schema(request=NotificationIdsSerializer, responses={200: CountSerializer})
    @action(detail=False, methods=['patch'], url_path='archive-multiple')
    def archive_multiple(self, request):
        serializer = NotificationIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        count = services.archive_many(notification_ids=serializer.validated_data['ids'], **self._scope())
        return Response({'count': count})

    def retrieve(self, request, pk=None):
        notification = services.get_notification(notification_id=pk, **self._scope())
        return Response(NotificationSerializer(notification).data)

    def destroy(self, request, pk=None):
        services.delete_notification(notification_id=pk, **self._scope())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None)
    @action(detail=True, methods=['patch'])
    def read(self, request, pk=None):
        notification = services.mark_read(notification_id=pk, **self._scope())
        return Response(NotificationSerializer(notification).data)

    @extend_schema(request=None)
    @action(detail=True, methods=['patch'])
    def unread(self, request, pk=None):
        notification = services.mark_unread(notification_id=pk, **self._scope())
        return Response(NotificationSerializer(notification).data)

    @extend_schema(request=None)
    @action(detail=True, methods=['patch'])
    def archive(self, request, pk=None):
        notification = services.archive(notification_id=pk, **self._scope())
        return Response(NotificationSerializer(notification).data)

    @extend_schema(request=None)
    @action(detail=True, methods=['patch'])
    def restore(self, request, pk=None):
        notification = services.restore(notification_id=pk, **self._scope())
        return Response(NotificationSerializer(notification).data)
