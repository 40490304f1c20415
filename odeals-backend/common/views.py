# common/views.py
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .roles import BusinessCategory, UserType


class CategoryListView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response(list(BusinessCategory.values))


class UserTypeListView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response(list(UserType.values))
