from rest_framework import serializers

from apps.accounts.models import User

from .models import Notification, NotificationType


class ActorSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name']
        read_only_fields = fields


class NotificationSerializer(serializers.ModelSerializer):
    actor = ActorSerializer(read_only=True)

    class Meta:
        model = Notification
        fields = [
            'id', 'type', 'module_slug', 'title', 'message', 'data', 'actor',
            'is_read', 'read_at', 'is_archived', 'archived_at', 'created_at',
        ]
        read_only_fields = fields


class NotificationQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=NotificationType.choices, required=False)
    module_slug = serializers.CharField(required=False, allow_blank=True)
    is_read = serializers.BooleanField(required=False, allow_null=True)


class NotificationIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class CountSerializer(serializers.Serializer):
    count = serializers.IntegerField()
