from .notification_dispatcher import NotificationDispatcher as NotificationDispatcher
