from .models import Notification


def notify(user, title: str, message: str) -> Notification:
    return Notification.objects.create(user=user, title=title, message=message)


def list_for_user(user):
    return Notification.objects.filter(user=user).order_by("-created_at", "-id")


def mark_read(user, notification_id: int):
    """
    Marks one of `user`'s notifications read. Returns None when the id does
    not exist or belongs to somebody else.
    """
    notification = Notification.objects.filter(id=notification_id, user=user).first()
    if not notification:
        return None
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=["is_read"])
    return notification
