from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
import uuid


class AIProvider(models.TextChoices):
    OPENAI = 'openai', 'OpenAI'
    OPENROUTER = 'openrouter', 'OpenRouter'


class MessageRole(models.TextChoices):
    USER = 'user', 'Użytkownik'
    ASSISTANT = 'assistant', 'Asystent'
    SYSTEM = 'system', 'System'


class AIConfiguration(models.Model):
    """Global assistant configuration, kept under the system company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.OneToOneField(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='ai_configuration'
    )
    provider = models.CharField(max_length=20, choices=AIProvider.choices, default=AIProvider.OPENAI)
    model = models.CharField(max_length=100, default='gpt-4o-mini')
    api_key = models.TextField(blank=True)  # Fernet token, see apps.common.encryption
    system_prompt = models.TextField(blank=True)
    temperature = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=0.7,
        validators=[MinValueValidator(0), MaxValueValidator(2)]
    )
    max_tokens = models.PositiveIntegerField(default=4000)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    updated_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ai_configurations'

    def __str__(self):
        return f"{self.provider}:{self.model}"


class AIConversation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='ai_conversations'
    )
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='ai_conversations'
    )
    title = models.CharField(max_length=255, default='Nowa rozmowa')
    total_tokens = models.PositiveIntegerField(default=0)
    message_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ai_conversations'
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['company', 'created_by'], name='ai_conv_owner_idx'),
        ]

    def __str__(self):
        return self.title


class AIMessage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conversation = models.ForeignKey(AIConversation, on_delete=models.CASCADE, related_name='messages')
    role = models.CharField(max_length=10, choices=MessageRole.choices)
    content = models.TextField()
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    input_tokens = models.PositiveIntegerField(default=0)
    output_tokens = models.PositiveIntegerField(default=0)
    total_tokens = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'ai_messages'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.role}: {self.content[:40]}"


class TokenUsage(models.Model):
    """Daily token counters of a user within a company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='token_usage')
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='token_usage')
    date = models.DateField()
    total_input_tokens = models.PositiveIntegerField(default=0)
    total_output_tokens = models.PositiveIntegerField(default=0)
    total_tokens = models.PositiveIntegerField(default=0)
    conversation_count = models.PositiveIntegerField(default=0)
    message_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ai_token_usage'
        ordering = ['-date']
        constraints = [
            models.UniqueConstraint(fields=['user', 'company', 'date'], name='unique_token_usage_per_day'),
        ]

    def __str__(self):
        return f"{self.user_id} {self.date}: {self.total_tokens}"


class TokenLimit(models.Model):
    """Monthly token limit of a whole company (user is null) or of one user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='token_limits')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='token_limits'
    )
    monthly_limit = models.PositiveIntegerField()
    warning_threshold_percentage = models.PositiveSmallIntegerField(
        default=80,
        validators=[MinValueValidator(1), MaxValueValidator(100)]
    )
    notify_on_warning = models.BooleanField(default=True)
    notify_on_exceeded = models.BooleanField(default=True)
    set_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ai_token_limits'
        constraints = [
            models.UniqueConstraint(
                fields=['company'],
                condition=Q(user__isnull=True),
                name='unique_company_token_limit',
            ),
            models.UniqueConstraint(
                fields=['company', 'user'],
                condition=Q(user__isnull=False),
                name='unique_user_token_limit',
            ),
        ]

    def __str__(self):
        return f"{self.company_id}/{self.user_id or '*'}: {self.monthly_limit}"
