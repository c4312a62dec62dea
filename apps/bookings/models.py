"""Booking persistence models for ShareIt."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """Бронирование вещи на интервал времени."""

    class Status(models.TextChoices):
        WAITING = "WAITING", _("Ожидает решения владельца")
        APPROVED = "APPROVED", _("Подтверждено")
        REJECTED = "REJECTED", _("Отклонено")
        CANCELED = "CANCELED", _("Отменено")

    start = models.DateTimeField()
    end = models.DateTimeField()
    item = models.ForeignKey(
        "items.Item",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    booker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.WAITING,
    )

    class Meta:
        verbose_name = _("Бронирование")
        verbose_name_plural = _("Бронирования")
        ordering = ["-start", "-id"]
        indexes = [
            models.Index(fields=["booker", "-start"], name="booking_booker_start_idx"),
            models.Index(fields=["item", "status"], name="booking_item_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} of item {self.item_id} ({self.status})"
