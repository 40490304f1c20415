# reviews/views.py
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from common.permissions import IsConsumer, IsPartner, partner_store_for
from stores.models import PartnerStore
from .models import Review
from .serializers import ReviewCreateSerializer, ReviewSerializer
from .services import publish_review, submit_review


class ConsumerReviewCreateView(generics.GenericAPIView):
    """
    POST /api/v1/consumer/reviews
    """
    permission_classes = [IsConsumer]
    serializer_class = ReviewCreateSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        store = get_object_or_404(PartnerStore, pk=data["partner_id"])
        review = submit_review(request.user, store, data["rating"], data.get("comment", ""))
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class PartnerReviewListView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated, IsPartner]
    serializer_class = ReviewSerializer

    def get_queryset(self):
        store = partner_store_for(self.request)
        return Review.objects.filter(store=store).select_related("user").order_by("-created_at", "-id")


class PartnerReviewPublishView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated, IsPartner]

    def post(self, request, pk: int, *args, **kwargs):
        store = partner_store_for(request)
        review = get_object_or_404(Review, pk=pk)
        if review.store_id != store.id:
            raise PermissionDenied("This review is for another store")
        return Response(ReviewSerializer(publish_review(review)).data)
