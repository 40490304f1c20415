# notifications/views.py
from rest_framework import generics, permissions
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from .serializers import NotificationSerializer
from .services import list_for_user, mark_read


class NotificationListView(generics.ListAPIView):
    """
    GET /api/v1/consumer/notifications (partners read theirs here too)
    """
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = NotificationSerializer

    def get_queryset(self):
        return list_for_user(self.request.user)


class NotificationReadView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, pk: int, *args, **kwargs):
        notification = mark_read(request.user, pk)
        if notification is None:
            raise NotFound("Notification not found")
        return Response(NotificationSerializer(notification).data)
