"""
Assistant conversations.

A conversation belongs to the user who created it, inside their effective
company. Sending a message checks token limits, calls the configured
provider and records token usage.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import F, QuerySet

from apps.accounts.models import User
from apps.ai_agent.models import AIConversation, AIMessage, MessageRole

from . import providers
from .configuration import get_api_key, require_configuration
from .exceptions import ConversationAccessDeniedError, ConversationNotFoundError
from .usage import check_limit, monthly_usage, notify_thresholds, track_usage

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Nowa rozmowa'


def list_conversations(*, user: User, company_id: UUID) -> QuerySet:
    return AIConversation.objects.filter(company_id=company_id, created_by=user).order_by('-created_at')


def get_conversation(*, user: User, company_id: UUID, conversation_id: UUID) -> AIConversation:
    """
    Raises:
        ConversationNotFoundError: Unknown or in another company
        ConversationAccessDeniedError: Someone else's conversation
    """
    try:
        conversation = AIConversation.objects.get(id=conversation_id, company_id=company_id)
    except AIConversation.DoesNotExist:
        raise ConversationNotFoundError()
    if conversation.created_by_id != user.id:
        raise ConversationAccessDeniedError()
    return conversation


def get_messages(conversation: AIConversation) -> QuerySet:
    return conversation.messages.order_by('created_at')


@transaction.atomic
def create_conversation(*, user: User, company_id: UUID, title: str = '') -> AIConversation:
    conversation = AIConversation.objects.create(
        company_id=company_id,
        created_by=user,
        title=title or DEFAULT_TITLE,
    )
    track_usage(user=user, company_id=company_id, conversations=1)
    return conversation


@transaction.atomic
def delete_conversation(*, user: User, company_id: UUID, conversation_id: UUID) -> None:
    conversation = get_conversation(user=user, company_id=company_id, conversation_id=conversation_id)
    conversation.delete()


def build_prompt(system_prompt: str, history, content: str) -> list:
    messages = []
    if system_prompt:
        messages.append({'role': MessageRole.SYSTEM.value, 'content': system_prompt})
    messages.extend(
        {'role': message.role, 'content': message.content}
        for message in history
        if message.role != MessageRole.SYSTEM
    )
    messages.append({'role': MessageRole.USER.value, 'content': content})
    return messages


def send_message(*, user: User, company_id: UUID, conversation_id: UUID, content: str) -> AIMessage:
    """
    Send a user message and store the assistant's answer.

    The user message is stored before the provider is called, so it stays in
    the history when the provider fails.

    Raises:
        TokenLimitExceededError: Monthly limit reached
        AINotConfiguredError: No configuration or API key
        AIProviderError: Provider failure
    """
    conversation = get_conversation(user=user, company_id=company_id, conversation_id=conversation_id)
    check_limit(user=user, company_id=company_id)

    config = require_configuration()
    api_key = get_api_key(config)

    messages = build_prompt(config.system_prompt, get_messages(conversation), content)
    AIMessage.objects.create(conversation=conversation, role=MessageRole.USER, content=content, user=user)

    provider = providers.get_provider(config.provider, api_key, config.model)
    result = provider.complete(messages, temperature=config.temperature, max_tokens=config.max_tokens)

    used_before = monthly_usage(company_id=company_id, user=user)
    with transaction.atomic():
        reply = AIMessage.objects.create(
            conversation=conversation,
            role=MessageRole.ASSISTANT,
            content=result.content,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            total_tokens=result.total_tokens,
        )
        AIConversation.objects.filter(id=conversation.id).update(
            total_tokens=F('total_tokens') + result.total_tokens,
            message_count=F('message_count') + 2,
        )
        track_usage(
            user=user,
            company_id=company_id,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            messages=2,
        )
        notify_thresholds(
            user=user,
            company_id=company_id,
            before=used_before,
            after=used_before + result.input_tokens + result.output_tokens,
        )

    logger.info(
        'AI reply in conversation %s for user %s (%d tokens)',
        conversation.id, user.id, result.total_tokens,
    )
    return reply
