# devtools/management/commands/seed_demo.py
import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from common.roles import BusinessCategory, UserType
from deals.models import Deal, DealType
from loyalty.services import award
from reviews.models import Review
from stores.models import PartnerStore

DEMO_STORES = [
    ("Chai Point", BusinessCategory.FOOD, "MG Road"),
    ("Style Studio", BusinessCategory.MENS_SALON, "Indiranagar"),
    ("Little Threads", BusinessCategory.KIDS_WEAR, "Koramangala"),
    ("Gold Leaf Jewellers", BusinessCategory.JEWELLERY, "Jayanagar"),
]

# around central Bengaluru
BASE_LAT = Decimal("12.971599")
BASE_LNG = Decimal("77.594566")


class Command(BaseCommand):
    help = "Seed demo partners, stores, deals, a consumer with points and a few reviews."

    def add_arguments(self, parser):
        parser.add_argument("--consumer-phone", default="9000000001")
        parser.add_argument("--partner-phone-prefix", default="90000001")
        parser.add_argument("--points", type=int, default=2000)
        parser.add_argument("--seed", type=int, default=42)

    @transaction.atomic
    def handle(self, *args, **opts):
        rng = random.Random(opts["seed"])
        User = get_user_model()
        today = timezone.localdate()

        consumer, created = User.objects.get_or_create(
            phone=opts["consumer_phone"],
            defaults={"user_type": UserType.CONSUMER, "first_name": "Demo", "is_verified": True},
        )
        if created:
            consumer.set_unusable_password()
            consumer.save()
            award(consumer, opts["points"], "Welcome bonus")
        self.stdout.write(self.style.SUCCESS(f"Consumer: {consumer.phone} (id={consumer.id})"))

        for idx, (name, category, area) in enumerate(DEMO_STORES):
            phone = f"{opts['partner_phone_prefix']}{idx:02d}"
            partner, _ = User.objects.get_or_create(
                phone=phone,
                defaults={"user_type": UserType.PARTNER, "first_name": name.split()[0], "is_verified": True},
            )
            store, store_created = PartnerStore.objects.get_or_create(
                user=partner,
                defaults={
                    "name": name,
                    "description": f"{name} in {area}",
                    "contact_phone": phone,
                    "location": f"{area}, Bengaluru",
                    "latitude": BASE_LAT + Decimal(rng.randint(-200, 200)) / Decimal(10000),
                    "longitude": BASE_LNG + Decimal(rng.randint(-200, 200)) / Decimal(10000),
                    "categories": [category],
                    "price_rating": rng.randint(1, 4),
                },
            )
            if not store_created:
                self.stdout.write(f"Store exists: {store.name}")
                continue

            pct = rng.choice([10, 15, 20, 25])
            Deal.objects.create(
                store=store,
                name=f"{pct}% off this week",
                deal_type=DealType.DISCOUNT,
                discount_percentage=pct,
                category=category,
                start_date=today,
                end_date=today + timedelta(days=7),
            )
            Deal.objects.create(
                store=store,
                name="Free gift on your first visit",
                deal_type=DealType.FREEBIE,
                category=category,
                start_date=today,
                end_date=today + timedelta(days=30),
            )
            Review.objects.create(
                user=consumer,
                store=store,
                rating=rng.randint(3, 5),
                comment="Great experience",
                is_published=True,
            )
            self.stdout.write(self.style.SUCCESS(f"Store: {store.name} (id={store.id})"))

        self.stdout.write(self.style.SUCCESS("Demo data ready."))
