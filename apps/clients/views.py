"""
Client views.

Every endpoint requires the ``clients`` module. Hard delete is reserved for
company owners and admins; employees go through delete requests instead.
"""

from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsOwnerOrAdmin
from apps.common.utils import UUID_PATTERN, csv_response
from apps.companies.tenancy import get_effective_company_id
from apps.modules.models import CLIENTS
from apps.modules.permissions import HasModulePermission

from .models import DeleteRequestStatus

from .serializers import (
    AssignIconSerializer,
    BulkResultSerializer,
    ClientBriefSerializer,
    ClientBulkEditSerializer,
    ClientBulkSerializer,
    ClientChangeLogSerializer,
    ClientDeleteRequestSerializer,
    ClientEmployeeQuerySerializer,
    ClientEmployeeSerializer,
    ClientIconSerializer,
    ClientQuerySerializer,
    ClientSerializer,
    CsvImportSerializer,
    DeleteRequestApprovedSerializer,
    DeleteRequestCreateSerializer,
    DeleteRequestQuerySerializer,
    DeleteRequestRejectSerializer,
    DuplicateCheckSerializer,
    DuplicateResultSerializer,
    ImportResultSerializer,
    SetIconsSerializer,
)
from . import services


@extend_schema(tags=['clients'])
class ClientViewSet(viewsets.GenericViewSet):
    """
    Clients of the caller's company.

    list: Filtered, paginated clients (active by default)
    create: Create client
    retrieve: Client details
    partial_update / update: Update client
    destroy: Soft delete (is_active=false)
    """

    serializer_class = ClientSerializer
    permission_classes = [IsAuthenticated, HasModulePermission]
    lookup_value_regex = UUID_PATTERN
    module_slug = CLIENTS
    module_permissions = {
        'bulk_delete': 'delete',
        'bulk_restore': 'write',
        'check_duplicates': 'read',
        'delete_request': 'write',
        'import_csv': 'write',
        'remove_icon': 'write',
    }

    def get_permissions(self):
        if self.action == 'hard':
            return [IsAuthenticated(), IsOwnerOrAdmin(), HasModulePermission()]
        return super().get_permissions()

    def _company_id(self):
        return get_effective_company_id(self.request.user)

    def _with_icons(self, qs):
        return qs.prefetch_related('icon_assignments__icon')

    @extend_schema(parameters=[ClientQuerySerializer], responses={200: ClientSerializer(many=True)})
    def list(self, request):
        query = ClientQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        qs = self._with_icons(
            services.filter_clients(company_id=self._company_id(), filters=query.validated_data)
        )
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(ClientSerializer(page, many=True).data)
        return Response(ClientSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        client = services.get_client(company_id=self._company_id(), client_id=pk)
        return Response(ClientSerializer(client).data)

    def create(self, request):
        serializer = ClientSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        client = services.create_client(
            user=request.user,
            company_id=self._company_id(),
            data=serializer.validated_data,
        )
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    def _update(self, request, pk, partial):
        serializer = ClientSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        client = services.update_client(
            user=request.user,
            company_id=self._company_id(),
            client_id=pk,
            data=serializer.validated_data,
        )
        return Response(ClientSerializer(client).data)

    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        services.soft_delete_client(user=request.user, company_id=self._company_id(), client_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['delete'])
    def hard(self, request, pk=None):
        """Permanently delete the client with its changelog and icon assignments."""
        services.hard_delete_client(user=request.user, company_id=self._company_id(), client_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def restore(self, request, pk=None):
        client = services.restore_client(user=request.user, company_id=self._company_id(), client_id=pk)
        return Response(ClientSerializer(client).data)

    @extend_schema(request=DeleteRequestCreateSerializer, responses={201: ClientDeleteRequestSerializer})
    @action(detail=True, methods=['post'], url_path='delete-request', url_name='delete-request')
    def delete_request(self, request, pk=None):
        """Ask an owner to delete the client."""
        serializer = DeleteRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delete_request = services.create_request(
            user=request.user,
            company_id=self._company_id(),
            client_id=pk,
            reason=serializer.validated_data['reason'],
        )
        return Response(ClientDeleteRequestSerializer(delete_request).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ClientChangeLogSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def changelog(self, request, pk=None):
        entries = services.get_changelog(company_id=self._company_id(), client_id=pk)
        return Response(ClientChangeLogSerializer(entries, many=True).data)

    # Bulk operations

    @extend_schema(request=ClientBulkSerializer, responses={200: BulkResultSerializer})
    @action(detail=False, methods=['patch'], url_path='bulk/delete')
    def bulk_delete(self, request):
        serializer = ClientBulkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.bulk_set_active(
            user=request.user,
            company_id=self._company_id(),
            client_ids=serializer.validated_data['client_ids'],
            is_active=False,
        )
        return Response(result)

    @extend_schema(request=ClientBulkSerializer, responses={200: BulkResultSerializer})
    @action(detail=False, methods=['patch'], url_path='bulk/restore')
    def bulk_restore(self, request):
        serializer = ClientBulkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.bulk_set_active(
            user=request.user,
            company_id=self._company_id(),
            client_ids=serializer.validated_data['client_ids'],
            is_active=True,
        )
        return Response(result)

    @extend_schema(request=ClientBulkEditSerializer, responses={200: BulkResultSerializer})
    @action(detail=False, methods=['patch'], url_path='bulk/edit')
    def bulk_edit(self, request):
        serializer = ClientBulkEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.bulk_edit(
            user=request.user,
            company_id=self._company_id(),
            client_ids=serializer.validated_data['client_ids'],
            changes=serializer.validated_data['changes'],
        )
        return Response(result)

    @extend_schema(request=DuplicateCheckSerializer, responses={200: DuplicateResultSerializer})
    @action(detail=False, methods=['post'], url_path='check-duplicates')
    def check_duplicates(self, request):
        serializer = DuplicateCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.check_duplicates(company_id=self._company_id(), **serializer.validated_data)
        return Response(DuplicateResultSerializer(result).data)

    @action(detail=False, methods=['get'])
    def statistics(self, request):
        return Response(services.get_statistics(company_id=self._company_id()))

    # CSV

    @extend_schema(parameters=[ClientQuerySerializer], responses={(200, 'text/csv'): str})
    @action(detail=False, methods=['get'])
    def export(self, request):
        query = ClientQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        clients = services.filter_clients(company_id=self._company_id(), filters=query.validated_data)
        filename = f'klienci-{timezone.localdate().isoformat()}.csv'
        return csv_response(services.export_clients(clients), filename)

    @extend_schema(responses={(200, 'text/csv'): str})
    @action(detail=False, methods=['get'], url_path='import/template')
    def import_template(self, request):
        return csv_response(services.import_template(), 'szablon-importu-klientow.csv')

    @extend_schema(request=CsvImportSerializer, responses={200: ImportResultSerializer})
    @action(
        detail=False,
        methods=['post'],
        url_path='import',
        url_name='import',
        parser_classes=[MultiPartParser, FormParser, JSONParser],
    )
    def import_csv(self, request):
        serializer = CsvImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        upload = serializer.validated_data.get('file')
        if upload is not None:
            content = upload.read().decode('utf-8-sig', errors='replace')
        else:
            content = serializer.validated_data['content']

        result = services.import_clients(user=request.user, company_id=self._company_id(), content=content)
        return Response(result)

    # Icons

    @extend_schema(request=AssignIconSerializer, responses={200: ClientIconSerializer(many=True)})
    @action(detail=True, methods=['get', 'post', 'put'])
    def icons(self, request, pk=None):
        """
        GET: Icons of the client
        POST: Assign one icon ({icon_id})
        PUT: Replace the icon set ({icon_ids})
        """
        company_id = self._company_id()

        if request.method == 'POST':
            serializer = AssignIconSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            services.assign_icon(
                company_id=company_id,
                client_id=pk,
                icon_id=serializer.validated_data['icon_id'],
            )
            icons = services.get_client_icons(company_id=company_id, client_id=pk)
            return Response(ClientIconSerializer(icons, many=True).data, status=status.HTTP_201_CREATED)

        if request.method == 'PUT':
            serializer = SetIconsSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            icons = services.set_client_icons(
                company_id=company_id,
                client_id=pk,
                icon_ids=serializer.validated_data['icon_ids'],
            )
            return Response(ClientIconSerializer(icons, many=True).data)

        icons = services.get_client_icons(company_id=company_id, client_id=pk)
        return Response(ClientIconSerializer(icons, many=True).data)

    @action(detail=True, methods=['delete'], url_path=rf'icons/(?P<icon_id>{UUID_PATTERN})')
    def remove_icon(self, request, pk=None, icon_id=None):
        services.unassign_icon(company_id=self._company_id(), client_id=pk, icon_id=icon_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=['clients'])
class ClientIconViewSet(viewsets.ViewSet):
    """
    Icon catalogue of the company.

    Deleting an icon deactivates it; assignments stay but inactive icons
    are hidden from clients.
    """

    permission_classes = [IsAuthenticated, HasModulePermission]
    lookup_value_regex = UUID_PATTERN
    module_slug = CLIENTS

    def list(self, request):
        icons = services.list_icons(company_id=get_effective_company_id(request.user))
        return Response(ClientIconSerializer(icons, many=True).data)

    def retrieve(self, request, pk=None):
        icon = services.get_icon(company_id=get_effective_company_id(request.user), icon_id=pk)
        return Response(ClientIconSerializer(icon).data)

    @extend_schema(request=ClientIconSerializer, responses={201: ClientIconSerializer})
    def create(self, request):
        serializer = ClientIconSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        icon = services.create_icon(
            user=request.user,
            company_id=get_effective_company_id(request.user),
            data=serializer.validated_data,
        )
        return Response(ClientIconSerializer(icon).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ClientIconSerializer, responses={200: ClientIconSerializer})
    def partial_update(self, request, pk=None):
        serializer = ClientIconSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        icon = services.update_icon(
            company_id=get_effective_company_id(request.user),
            icon_id=pk,
            data=serializer.validated_data,
        )
        return Response(ClientIconSerializer(icon).data)

    def destroy(self, request, pk=None):
        services.deactivate_icon(company_id=get_effective_company_id(request.user), icon_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=['clients'])
class ClientEmployeeViewSet(viewsets.GenericViewSet):
    """
    Employees of one client (``/{client_id}/employees/``).

    list: Paginated, filtered by search / contract_type / is_active
    destroy: Deactivate (is_active=false)
    restore: Reactivate a deactivated employee
    """

    serializer_class = ClientEmployeeSerializer
    permission_classes = [IsAuthenticated, HasModulePermission]
    lookup_value_regex = UUID_PATTERN
    module_slug = CLIENTS
    module_permissions = {'restore': 'write'}

    def _scope(self):
        return {
            'company_id': get_effective_company_id(self.request.user),
            'client_id': self.kwargs['client_pk'],
        }

    @extend_schema(parameters=[ClientEmployeeQuerySerializer], responses={200: ClientEmployeeSerializer(many=True)})
    def list(self, request, client_pk=None):
        query = ClientEmployeeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        qs = services.list_employees(**self._scope(), filters=query.validated_data)
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(ClientEmployeeSerializer(page, many=True).data)
        return Response(ClientEmployeeSerializer(qs, many=True).data)

    def retrieve(self, request, client_pk=None, pk=None):
        employee = services.get_employee(**self._scope(), employee_id=pk)
        return Response(ClientEmployeeSerializer(employee).data)

    def create(self, request, client_pk=None):
        serializer = ClientEmployeeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = services.create_employee(user=request.user, **self._scope(), data=serializer.validated_data)
        return Response(ClientEmployeeSerializer(employee).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, client_pk=None, pk=None):
        current = services.get_employee(**self._scope(), employee_id=pk)
        serializer = ClientEmployeeSerializer(current, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        employee = services.update_employee(
            user=request.user,
            **self._scope(),
            employee_id=pk,
            data=serializer.validated_data,
        )
        return Response(ClientEmployeeSerializer(employee).data)

    def destroy(self, request, client_pk=None, pk=None):
        services.deactivate_employee(user=request.user, **self._scope(), employee_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def restore(self, request, client_pk=None, pk=None):
        employee = services.restore_employee(user=request.user, **self._scope(), employee_id=pk)
        return Response(ClientEmployeeSerializer(employee).data)


@extend_schema(tags=['clients'])
class ClientDeleteRequestViewSet(viewsets.ViewSet):
    """
    Delete requests of the company.

    Anyone with the clients module can list them. Approving and rejecting is
    limited to owners and admins; employees may cancel their own requests.
    """

    permission_classes = [IsAuthenticated, HasModulePermission]
    lookup_value_regex = UUID_PATTERN
    module_slug = CLIENTS
    module_permissions = {
        'approve': 'read',
        'reject': 'read',
        'cancel': 'write',
    }

    def _company_id(self):
        return get_effective_company_id(self.request.user)

    @extend_schema(parameters=[DeleteRequestQuerySerializer], responses={200: ClientDeleteRequestSerializer(many=True)})
    def list(self, request):
        query = DeleteRequestQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        requests = services.list_requests(company_id=self._company_id(), status=query.validated_data.get('status'))
        return Response(ClientDeleteRequestSerializer(requests, many=True).data)

    @extend_schema(responses={200: ClientDeleteRequestSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def pending(self, request):
        requests = services.list_requests(company_id=self._company_id(), status=DeleteRequestStatus.PENDING)
        return Response(ClientDeleteRequestSerializer(requests, many=True).data)

    @extend_schema(responses={200: ClientDeleteRequestSerializer(many=True)})
    @action(detail=False, methods=['get'], url_path='my-requests', url_name='my-requests')
    def my_requests(self, request):
        requests = services.list_my_requests(user=request.user, company_id=self._company_id())
        return Response(ClientDeleteRequestSerializer(requests, many=True).data)

    def retrieve(self, request, pk=None):
        delete_request = services.get_request(company_id=self._company_id(), request_id=pk)
        return Response(ClientDeleteRequestSerializer(delete_request).data)

    @extend_schema(request=None, responses={200: DeleteRequestApprovedSerializer})
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        delete_request = services.approve_request(user=request.user, company_id=self._company_id(), request_id=pk)
        return Response({
            'message': 'Żądanie zatwierdzone, klient został usunięty',
            'deleted_client': ClientBriefSerializer(delete_request.client).data,
            'request': ClientDeleteRequestSerializer(delete_request).data,
        })

    @extend_schema(request=DeleteRequestRejectSerializer, responses={200: ClientDeleteRequestSerializer})
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        serializer = DeleteRequestRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delete_request = services.reject_request(
            user=request.user,
            company_id=self._company_id(),
            request_id=pk,
            rejection_reason=serializer.validated_data['rejection_reason'],
        )
        return Response(ClientDeleteRequestSerializer(delete_request).data)

    @action(detail=True, methods=['delete'])
    def cancel(self, request, pk=None):
        services.cancel_request(user=request.user, company_id=self._company_id(), request_id=pk)
        return Response({'message': 'Żądanie usunięcia zostało anulowane'})
