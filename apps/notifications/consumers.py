import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .services.dispatcher import company_group, user_group

logger = logging.getLogger(__name__)

# Close code sent when the token is missing or invalid
UNAUTHORIZED_CLOSE_CODE = 4001


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """Pushes new notifications of the connected user."""

    async def connect(self):
        user = self.scope.get('user')
        if user is None or not user.is_authenticated:
            await self.close(code=UNAUTHORIZED_CLOSE_CODE)
            return

        self.groups_joined = [user_group(user.id)]
        if user.company_id:
            self.groups_joined.append(company_group(user.company_id))

        for group in self.groups_joined:
            await self.channel_layer.group_add(group, self.channel_name)
        await self.accept()
        logger.debug('Websocket connected for user %s', user.id)

    async def disconnect(self, code):
        for group in getattr(self, 'groups_joined', []):
            await self.channel_layer.group_discard(group, self.channel_name)

    async def receive_json(self, content, **kwargs):
        if content.get('type') == 'ping':
            await self.send_json({'type': 'pong'})

    async def notification_message(self, event):
        await self.send_json({'type': 'notification', 'notification': event['notification']})
