from django.urls import path

from .views import NotificationListView, NotificationReadView

app_name = "notifications"

urlpatterns = [
    path("consumer/notifications", NotificationListView.as_view(), name="list"),
    path("consumer/notifications/<int:pk>", NotificationReadView.as_view(), name="read"),
]
