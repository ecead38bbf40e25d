import pytest
from django.conf import settings
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.backends import TokenBackend
from rest_framework_simplejwt.exceptions import TokenBackendError
from rest_framework_simplejwt.tokens import RefreshToken as DefaultRefreshToken

from apps.accounts.models import User, UserRole
from apps.accounts.tokens import AccessToken, RefreshToken


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client, company):
        """Successfully register an employee of an existing company."""
        url = reverse('auth:register')
        data = {
            'email': 'NewUser@Example.com',
            'password': 'SecurePass123!',
            'first_name': 'Nowy',
            'last_name': 'Pracownik',
            'company_id': str(company.id),
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access_token' in response.data
        assert 'refresh_token' in response.data
        assert response.data['user']['email'] == 'newuser@example.com'
        assert response.data['user']['role'] == UserRole.EMPLOYEE
        assert response.data['user']['company_id'] == str(company.id)

        user = User.objects.get(email='newuser@example.com')
        assert user.check_password('SecurePass123!')

    def test_register_duplicate_email_case_insensitive(self, api_client, user, company):
        """Email already taken in another letter case returns 409."""
        url = reverse('auth:register')
        data = {
            'email': user.email.upper(),
            'password': 'SecurePass123!',
            'first_name': 'A',
            'last_name': 'B',
            'company_id': str(company.id),
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Użytkownik o tym adresie email już istnieje'

    def test_register_requires_company(self, api_client):
        """Owners and employees must join a company."""
        url = reverse('auth:register')
        data = {
            'email': 'nocompany@example.com',
            'password': 'SecurePass123!',
            'first_name': 'A',
            'last_name': 'B',
            'role': UserRole.COMPANY_OWNER,
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_unknown_company(self, api_client):
        url = reverse('auth:register')
        data = {
            'email': 'ghost@example.com',
            'password': 'SecurePass123!',
            'first_name': 'A',
            'last_name': 'B',
            'company_id': '00000000-0000-0000-0000-000000000000',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Firma nie została znaleziona'

    def test_register_admin_role_rejected(self, api_client, company):
        """ADMIN accounts cannot be self-registered."""
        url = reverse('auth:register')
        data = {
            'email': 'sneaky@example.com',
            'password': 'SecurePass123!',
            'first_name': 'A',
            'last_name': 'B',
            'role': UserRole.ADMIN,
            'company_id': str(company.id),
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not User.objects.filter(email='sneaky@example.com').exists()

    def test_register_weak_password(self, api_client, company):
        url = reverse('auth:register')
        data = {
            'email': 'weak@example.com',
            'password': '123',
            'first_name': 'A',
            'last_name': 'B',
            'company_id': str(company.id),
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        url = reverse('auth:login')
        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['id'] == str(user.id)
        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_email_case_insensitive(self, api_client, user):
        url = reverse('auth:login')
        response = api_client.post(url, {'email': 'TestUser@Example.com', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, user):
        """Login with a wrong password returns 401."""
        url = reverse('auth:login')
        response = api_client.post(url, {'email': user.email, 'password': 'WrongPassword123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Nieprawidłowe dane logowania'

    def test_login_nonexistent_user(self, api_client, db):
        url = reverse('auth:login')
        response = api_client.post(url, {'email': 'nobody@example.com', 'password': 'SomePass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        url = reverse('auth:login')
        response = api_client.post(url, {'email': user_inactive.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Konto użytkownika jest nieaktywne'

    def test_login_throttled_after_five_attempts(self, api_client, user):
        url = reverse('auth:login')
        payload = {'email': user.email, 'password': 'WrongPassword123!'}
        for _ in range(5):
            assert api_client.post(url, payload).status_code == status.HTTP_401_UNAUTHORIZED

        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.data['code'] == 'throttled'


# =============================================================================
# Token Tests
# =============================================================================

@pytest.mark.django_db
class TestTokens:
    """Tests for token signing and POST /api/auth/refresh/"""

    def test_tokens_carry_role_claims(self, user):
        refresh = RefreshToken.for_user(user)
        access = refresh.access_token

        assert access['email'] == user.email
        assert access['role'] == UserRole.EMPLOYEE
        assert access['company_id'] == str(user.company_id)

    def test_access_and_refresh_use_different_secrets(self, user):
        """An access token cannot be decoded as a refresh token and vice versa."""
        refresh = RefreshToken.for_user(user)

        access_backend = TokenBackend('HS256', signing_key=settings.JWT_SECRET)
        assert access_backend.decode(str(refresh.access_token))['user_id'] == str(user.id)
        with pytest.raises(TokenBackendError):
            access_backend.decode(str(refresh))

    def test_refresh_success(self, api_client, user):
        url = reverse('auth:refresh')
        refresh = RefreshToken.for_user(user)

        response = api_client.post(url, {'refresh_token': str(refresh)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == user.email
        # New access token is valid for API calls
        AccessToken(response.data['access_token'])

    def test_refresh_signed_with_wrong_secret(self, api_client, user):
        """A refresh token signed with the access secret is rejected."""
        url = reverse('auth:refresh')
        forged = DefaultRefreshToken.for_user(user)

        response = api_client.post(url, {'refresh_token': str(forged)})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Nieprawidłowy lub wygasły token odświeżania'

    def test_refresh_with_access_token_rejected(self, api_client, user):
        url = reverse('auth:refresh')
        access = RefreshToken.for_user(user).access_token

        response = api_client.post(url, {'refresh_token': str(access)})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_for_inactive_user(self, api_client, user):
        url = reverse('auth:refresh')
        refresh = RefreshToken.for_user(user)
        user.is_active = False
        user.save()

        response = api_client.post(url, {'refresh_token': str(refresh)})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_token_not_accepted_as_bearer(self, api_client, user):
        refresh = RefreshToken.for_user(user)
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh}')

        response = api_client.get(reverse('auth:me'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/me/ and PATCH /api/auth/change-password/"""

    def test_me(self, authenticated_client, user):
        response = authenticated_client.get(reverse('auth:me'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['role'] == UserRole.EMPLOYEE

    def test_me_unauthenticated(self, api_client, db):
        response = api_client.get(reverse('auth:me'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_change_password(self, authenticated_client, user):
        url = reverse('auth:change-password')
        response = authenticated_client.patch(url, {
            'current_password': 'TestPass123!',
            'new_password': 'NewSecurePass456!',
        })

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.check_password('NewSecurePass456!')

    def test_change_password_wrong_current(self, authenticated_client, user):
        url = reverse('auth:change-password')
        response = authenticated_client.patch(url, {
            'current_password': 'Wrong123!',
            'new_password': 'NewSecurePass456!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Obecne hasło jest nieprawidłowe'

    def test_logout(self, authenticated_client):
        response = authenticated_client.post(reverse('auth:logout'))

        assert response.status_code == status.HTTP_200_OK
