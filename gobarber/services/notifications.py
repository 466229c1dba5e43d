from gobarber.core import config
from gobarber.models.notification import Notification
from gobarber.repositories import NotificationStore, UserDirectory
from gobarber.services.errors import NotAProviderError, NotFoundError


class NotificationService:
    def __init__(self, users: UserDirectory, notifications: NotificationStore):
        self.users = users
        self.notifications = notifications

    def _require_provider(self, caller_id: int, detail: str) -> None:
        if self.users.find_provider_by_id(caller_id) is None:
            raise NotAProviderError(detail)

    def list_notifications(self, caller_id: int, page: int = 1) -> list[Notification]:
        self._require_provider(caller_id, 'Only providers can load notifications.')

        page_size = config.NOTIFICATIONS_PAGE_SIZE
        return self.notifications.list_for_user(
            user_id=caller_id,
            limit=page_size,
            offset=(page - 1) * page_size,
        )

    def mark_as_read(self, caller_id: int, notification_id: int) -> Notification:
        self._require_provider(caller_id, 'Only providers can alter notifications.')

        notification = self.notifications.mark_read(caller_id, notification_id)
        if notification is None:
            raise NotFoundError('Notification not found.')
        return notification
