"""Domain exceptions for the AI assistant."""
from rest_framework.exceptions import APIException


class AIConfigNotFoundError(APIException):
    status_code = 404
    default_detail = 'Konfiguracja AI nie została znaleziona'
    default_code = 'ai_config_not_found'


class AIConfigExistsError(APIException):
    status_code = 409
    default_detail = 'Konfiguracja AI już istnieje'
    default_code = 'ai_config_exists'


class AINotConfiguredError(APIException):
    status_code = 400
    default_detail = 'AI nie jest skonfigurowane'
    default_code = 'ai_not_configured'


class AIProviderError(APIException):
    status_code = 502
    default_detail = 'Błąd dostawcy AI'
    default_code = 'ai_provider_error'


class AIProviderRateLimitError(AIProviderError):
    status_code = 429
    default_detail = 'Przekroczono limit zapytań do dostawcy AI. Spróbuj ponownie za chwilę.'
    default_code = 'ai_provider_rate_limited'


class ConversationNotFoundError(APIException):
    status_code = 404
    default_detail = 'Rozmowa nie została znaleziona'
    default_code = 'conversation_not_found'


class ConversationAccessDeniedError(APIException):
    status_code = 403
    default_detail = 'Brak dostępu do rozmowy'
    default_code = 'conversation_access_denied'


class TokenLimitExceededError(APIException):
    status_code = 400
    default_detail = 'Przekroczono miesięczny limit tokenów'
    default_code = 'token_limit_exceeded'


class LimitTargetError(APIException):
    status_code = 403
    default_detail = 'Użytkownik nie należy do Twojej firmy'
    default_code = 'limit_target_forbidden'
