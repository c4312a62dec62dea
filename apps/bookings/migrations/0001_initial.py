import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("items", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start", models.DateTimeField()),
                ("end", models.DateTimeField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("WAITING", "Ожидает решения владельца"),
                            ("APPROVED", "Подтверждено"),
                            ("REJECTED", "Отклонено"),
                            ("CANCELED", "Отменено"),
                        ],
                        default="WAITING",
                        max_length=16,
                    ),
                ),
                (
                    "booker",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="items.item",
                    ),
                ),
            ],
            options={
                "verbose_name": "Бронирование",
                "verbose_name_plural": "Бронирования",
                "ordering": ["-start", "-id"],
                "indexes": [
                    models.Index(fields=["booker", "-start"], name="booking_booker_start_idx"),
                    models.Index(fields=["item", "status"], name="booking_item_status_idx"),
                ],
            },
        ),
    ]
