from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.models import UserRole
from apps.accounts.permissions import IsAdmin, IsCompanyOwner
from apps.accounts.serializers import UserDetailSerializer
from apps.common.throttling import ActionThrottleMixin
from apps.common.utils import UUID_PATTERN
from apps.companies.tenancy import get_effective_company_id

from .serializers import (
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
    CompanyCreateSerializer,
    CompanySerializer,
    CompanyUpdateSerializer,
    EmployeeCreateSerializer,
    EmployeeUpdateSerializer,
    SetActiveSerializer,
)
from . import services


@extend_schema(tags=['admin'])
class AdminUserViewSet(ActionThrottleMixin, viewsets.ViewSet):
    """
    User administration (ADMIN only).

    list: All users, newest first
    create: Create user of any role
    retrieve: User details
    partial_update: Update user
    destroy: Deactivate user
    activate: Set is_active
    """

    lookup_value_regex = UUID_PATTERN
    permission_classes = [IsAuthenticated, IsAdmin]
    throttle_scopes = {'create': 'admin_user_create', 'destroy': 'admin_user_delete'}

    def list(self, request):
        return Response(UserDetailSerializer(services.list_users(), many=True).data)

    def retrieve(self, request, pk=None):
        return Response(UserDetailSerializer(services.get_user(user_id=pk)).data)

    @extend_schema(request=AdminUserCreateSerializer, responses={201: UserDetailSerializer})
    def create(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.create_user(**serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=AdminUserUpdateSerializer, responses={200: UserDetailSerializer})
    def partial_update(self, request, pk=None):
        serializer = AdminUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.update_user(user_id=pk, **serializer.validated_data)
        return Response(UserDetailSerializer(user).data)

    def destroy(self, request, pk=None):
        services.set_user_active(user_id=pk, is_active=False)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SetActiveSerializer, responses={200: UserDetailSerializer})
    @action(detail=True, methods=['patch'])
    def activate(self, request, pk=None):
        serializer = SetActiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.set_user_active(user_id=pk, **serializer.validated_data)
        return Response(UserDetailSerializer(user).data)


@extend_schema(tags=['admin'])
class AdminCompanyViewSet(ActionThrottleMixin, viewsets.ViewSet):
    """
    Company administration (ADMIN only).

    Deleting a company deactivates it. The system company is never listed.
    """

    lookup_value_regex = UUID_PATTERN
    permission_classes = [IsAuthenticated, IsAdmin]
    throttle_scopes = {'create': 'admin_company_create'}

    def list(self, request):
        return Response(CompanySerializer(services.list_companies(), many=True).data)

    def retrieve(self, request, pk=None):
        return Response(CompanySerializer(services.get_company(company_id=pk)).data)

    @extend_schema(request=CompanyCreateSerializer, responses={201: CompanySerializer})
    def create(self, request):
        serializer = CompanyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        company = services.create_company(**serializer.validated_data)
        return Response(CompanySerializer(company).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CompanyUpdateSerializer, responses={200: CompanySerializer})
    def partial_update(self, request, pk=None):
        serializer = CompanyUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        company = services.update_company(company_id=pk, **serializer.validated_data)
        return Response(CompanySerializer(company).data)

    def destroy(self, request, pk=None):
        services.deactivate_company(company_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: UserDetailSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def employees(self, request, pk=None):
        employees = services.list_company_employees(company_id=pk)
        return Response(UserDetailSerializer(employees, many=True).data)


@extend_schema(
    responses={200: UserDetailSerializer(many=True)},
    description="Active COMPANY_OWNER users that can be assigned to a company.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def available_owners(request):
    """List owners for the company form."""
    return Response(UserDetailSerializer(services.list_available_owners(), many=True).data)


@extend_schema(tags=['company'])
class EmployeeViewSet(viewsets.ViewSet):
    """
    Employees of the owner's company.

    Listing is available to every member of the company, changes to the owner only.
    """

    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsCompanyOwner()]

    def list(self, request):
        company_id = get_effective_company_id(request.user)
        employees = services.list_employees(company_id=company_id)
        if request.user.role == UserRole.EMPLOYEE:
            employees = employees.filter(is_active=True)
        return Response(UserDetailSerializer(employees, many=True).data)

    def retrieve(self, request, pk=None):
        company_id = get_effective_company_id(request.user)
        employee = services.get_employee(company_id=company_id, employee_id=pk)
        return Response(UserDetailSerializer(employee).data)

    @extend_schema(request=EmployeeCreateSerializer, responses={201: UserDetailSerializer})
    def create(self, request):
        serializer = EmployeeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = services.create_employee(owner=request.user, **serializer.validated_data)
        return Response(UserDetailSerializer(employee).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=EmployeeUpdateSerializer, responses={200: UserDetailSerializer})
    def partial_update(self, request, pk=None):
        serializer = EmployeeUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = services.update_employee(
            company_id=request.user.company_id, employee_id=pk, **serializer.validated_data
        )
        return Response(UserDetailSerializer(employee).data)

    def destroy(self, request, pk=None):
        services.deactivate_employee(company_id=request.user.company_id, employee_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
