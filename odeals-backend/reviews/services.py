# reviews/services.py
import logging

from django.db import transaction

from loyalty.services import POINTS_FOR_REVIEW, award
from notifications.services import notify
from .models import Review

logger = logging.getLogger(__name__)


def submit_review(user, store, rating: int, comment: str = "") -> Review:
    """
    New reviews start unpublished; the reviewer is rewarded right away and
    the store owner is told there is something to moderate.
    """
    with transaction.atomic():
        review = Review.objects.create(user=user, store=store, rating=rating, comment=comment or "")
        award(user, POINTS_FOR_REVIEW, "Wrote a review", reference_id=review.id)

    logger.info("Review %s submitted for store %s (%s stars)", review.pk, store.pk, rating)
    notify(store.user, "New review", f"Your store received a {rating}-star review.")
    return review


def publish_review(review: Review) -> Review:
    if not review.is_published:
        review.is_published = True
        review.save(update_fields=["is_published", "updated_at"])
    return review
