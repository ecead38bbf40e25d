from rest_framework import serializers

from .models import EmailConfiguration


class EmailConfigSerializer(serializers.ModelSerializer):
    """Configuration as returned to clients. Passwords are never included."""

    has_smtp_password = serializers.SerializerMethodField()
    has_imap_password = serializers.SerializerMethodField()

    class Meta:
        model = EmailConfiguration
        fields = [
            'id', 'display_name',
            'smtp_host', 'smtp_port', 'smtp_secure', 'smtp_user', 'has_smtp_password',
            'imap_host', 'imap_port', 'imap_tls', 'imap_user', 'has_imap_password',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_has_smtp_password(self, obj):
        return bool(obj.smtp_password)

    def get_has_imap_password(self, obj):
        return bool(obj.imap_password)


class EmailConfigWriteSerializer(serializers.ModelSerializer):
    """Create/update input. On update empty passwords keep the stored ones."""

    smtp_password = serializers.CharField(write_only=True, trim_whitespace=False)
    imap_password = serializers.CharField(write_only=True, trim_whitespace=False)

    class Meta:
        model = EmailConfiguration
        fields = [
            'display_name',
            'smtp_host', 'smtp_port', 'smtp_secure', 'smtp_user', 'smtp_password',
            'imap_host', 'imap_port', 'imap_tls', 'imap_user', 'imap_password',
            'is_active',
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.partial:
            for name in ('smtp_password', 'imap_password'):
                self.fields[name].required = False
                self.fields[name].allow_blank = True


class SendEmailSerializer(serializers.Serializer):
    to = serializers.ListField(child=serializers.EmailField(), allow_empty=False, max_length=50)
    subject = serializers.CharField(max_length=998)
    text = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    html = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)

    def to_internal_value(self, data):
        # A single address is accepted as well
        if isinstance(data.get('to'), str):
            data = {**data, 'to': [data['to']]}
        return super().to_internal_value(data)

    def validate(self, attrs):
        if not attrs.get('text') and not attrs.get('html'):
            raise serializers.ValidationError('Wiadomość musi mieć treść.')
        return attrs


class InboxQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, default=20)


class InboxMessageSerializer(serializers.Serializer):
    uid = serializers.CharField()
    to = serializers.CharField()
    subject = serializers.CharField()
    date = serializers.CharField(allow_null=True)
    text = serializers.CharField()
    html = serializers.CharField(allow_null=True)

    def get_fields(self):
        fields = super().get_fields()
        # 'from' is a Python keyword
        fields['from'] = serializers.CharField()
        return fields


class SmtpTestSerializer(serializers.Serializer):
    smtp_host = serializers.CharField(max_length=255)
    smtp_port = serializers.IntegerField(min_value=1, max_value=65535)
    smtp_secure = serializers.BooleanField(default=True)
    smtp_user = serializers.CharField(max_length=255)
    smtp_password = serializers.CharField(trim_whitespace=False)


class ImapTestSerializer(serializers.Serializer):
    imap_host = serializers.CharField(max_length=255)
    imap_port = serializers.IntegerField(min_value=1, max_value=65535)
    imap_tls = serializers.BooleanField(default=True)
    imap_user = serializers.CharField(max_length=255)
    imap_password = serializers.CharField(trim_whitespace=False)


class ConnectionTestResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
