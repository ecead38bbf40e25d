from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.models import UserRole
from apps.accounts.permissions import IsAdmin, IsCompanyOwner

from .serializers import (
    CompanyModuleAccessSerializer,
    EmployeePermissionSerializer,
    GrantCompanyModuleSerializer,
    ModuleSerializer,
    ModuleUpdateSerializer,
    UserModulePermissionSerializer,
)
from . import services


@extend_schema(
    request=ModuleSerializer,
    responses={200: ModuleSerializer(many=True), 201: ModuleSerializer},
    description="GET: modules available to the current user. POST: create module (admin).",
    tags=['modules'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def module_list(request):
    """List available modules or create one."""
    if request.method == 'GET':
        modules = services.get_available_modules(request.user)
        return Response(ModuleSerializer(modules, many=True).data)

    if request.user.role != UserRole.ADMIN:
        return Response({'error': IsAdmin.message}, status=status.HTTP_403_FORBIDDEN)

    serializer = ModuleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    module = services.create_module(
        slug=serializer.validated_data['slug'],
        name=serializer.validated_data['name'],
        description=serializer.validated_data.get('description', ''),
    )
    return Response(ModuleSerializer(module).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=ModuleUpdateSerializer,
    responses={200: ModuleSerializer},
    description="Get module details, update or deactivate it (admin).",
    tags=['modules'],
)
@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def module_detail(request, slug):
    """Module details."""
    if request.method == 'GET':
        module = services.get_module(slug=slug, user=request.user)
        return Response(ModuleSerializer(module).data)

    if request.user.role != UserRole.ADMIN:
        return Response({'error': IsAdmin.message}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'DELETE':
        services.deactivate_module(slug=slug)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = ModuleUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    module = services.update_module(slug=slug, **serializer.validated_data)
    return Response(ModuleSerializer(module).data)


@extend_schema(
    request=GrantCompanyModuleSerializer,
    responses={200: CompanyModuleAccessSerializer(many=True), 201: CompanyModuleAccessSerializer},
    description="List or grant modules of a company (admin).",
    tags=['modules'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def company_modules(request, company_id):
    """Modules enabled for a company."""
    if request.method == 'GET':
        access = services.list_company_modules(company_id=company_id)
        return Response(CompanyModuleAccessSerializer(access, many=True).data)

    serializer = GrantCompanyModuleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    access = services.grant_company_module(
        company_id=company_id, slug=serializer.validated_data['module_slug']
    )
    return Response(CompanyModuleAccessSerializer(access).data, status=status.HTTP_201_CREATED)


@extend_schema(responses={204: None}, description="Disable a module for a company (admin).", tags=['modules'])
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdmin])
def revoke_company_module(request, company_id, slug):
    services.revoke_company_module(company_id=company_id, slug=slug)
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=EmployeePermissionSerializer,
    responses={200: UserModulePermissionSerializer(many=True), 201: UserModulePermissionSerializer},
    description="List, grant or update module permissions of an employee (owner).",
    tags=['modules'],
)
@api_view(['GET', 'POST', 'PATCH'])
@permission_classes([IsAuthenticated, IsCompanyOwner])
def employee_permissions(request, employee_id):
    """Employee module permissions."""
    if request.method == 'GET':
        grants = services.list_employee_permissions(owner=request.user, employee_id=employee_id)
        return Response(UserModulePermissionSerializer(grants, many=True).data)

    serializer = EmployeePermissionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if request.method == 'POST':
        grant = services.grant_employee_permissions(
            owner=request.user,
            employee_id=employee_id,
            slug=data['module_slug'],
            permissions=data['permissions'],
        )
        return Response(UserModulePermissionSerializer(grant).data, status=status.HTTP_201_CREATED)

    grant = services.update_employee_permissions(
        owner=request.user,
        employee_id=employee_id,
        slug=data['module_slug'],
        permissions=data['permissions'],
    )
    return Response(UserModulePermissionSerializer(grant).data)


@extend_schema(responses={204: None}, description="Revoke an employee's module permissions (owner).", tags=['modules'])
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsCompanyOwner])
def revoke_employee_permissions(request, employee_id, slug):
    services.revoke_employee_permissions(owner=request.user, employee_id=employee_id, slug=slug)
    return Response(status=status.HTTP_204_NO_CONTENT)
