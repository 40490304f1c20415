import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("stores", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PartnerStat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("store_views", models.PositiveIntegerField(default=0)),
                ("deal_views", models.PositiveIntegerField(default=0)),
                ("scheduled_visits", models.PositiveIntegerField(default=0)),
                ("actual_visits", models.PositiveIntegerField(default=0)),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stats",
                        to="stores.partnerstore",
                    ),
                ),
            ],
            options={
                "ordering": ["date", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("store", "date"), name="unique_partner_stat_per_day"),
                ],
            },
        ),
    ]
