"""Models for the request board."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ItemRequest(models.Model):
    """Запрос вещи, которой пока нет в каталоге."""

    description = models.TextField()
    requestor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="item_requests",
    )
    created = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Item request")
        verbose_name_plural = _("Item requests")
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["requestor", "-created"], name="itemrequest_requestor_idx"),
        ]

    def __str__(self) -> str:
        return f"Request #{self.pk} by {self.requestor_id}"
