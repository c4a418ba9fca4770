from .notifier import ConfirmationNotifier as ConfirmationNotifier
