"""Services for the AI assistant."""

from .exceptions import (
    AIConfigNotFoundError,
    AIConfigExistsError,
    AINotConfiguredError,
    AIProviderError,
    AIProviderRateLimitError,
    ConversationNotFoundError,
    ConversationAccessDeniedError,
    TokenLimitExceededError,
    LimitTargetError,
)
from .providers import ChatProvider, ChatResult, get_provider
from .configuration import (
    get_configuration,
    require_configuration,
    create_configuration,
    update_configuration,
)
from .conversations import (
    list_conversations,
    get_conversation,
    get_messages,
    create_conversation,
    delete_conversation,
    send_message,
)
from .usage import (
    track_usage,
    monthly_usage,
    get_my_usage,
    get_company_usage,
    get_all_usage,
    get_my_limits,
    check_limit,
    set_company_limit,
    set_user_limit,
)

__all__ = [
    # Exceptions
    'AIConfigNotFoundError',
    'AIConfigExistsError',
    'AINotConfiguredError',
    'AIProviderError',
    'AIProviderRateLimitError',
    'ConversationNotFoundError',
    'ConversationAccessDeniedError',
    'TokenLimitExceededError',
    'LimitTargetError',
    # Provider
    'ChatProvider',
    'ChatResult',
    'get_provider',
    # Configuration
    'get_configuration',
    'require_configuration',
    'create_configuration',
    'update_configuration',
    # Conversations
    'list_conversations',
    'get_conversation',
    'get_messages',
    'create_conversation',
    'delete_conversation',
    'send_message',
    # Usage and limits
    'track_usage',
    'monthly_usage',
    'get_my_usage',
    'get_company_usage',
    'get_all_usage',
    'get_my_limits',
    'check_limit',
    'set_company_limit',
    'set_user_limit',
]
