"""Item catalog models.

Вещь принадлежит владельцу и может быть добавлена в ответ на запрос
(``ItemRequest``). Комментарии оставляют арендаторы после завершённой
аренды; право на комментарий проверяет модуль бронирований.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Item(models.Model):
    """Вещь, которую можно взять в аренду."""

    name = models.CharField(_("Name"), max_length=255)
    description = models.TextField(_("Description"))
    available = models.BooleanField(_("Available"), default=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="items",
    )
    request = models.ForeignKey(
        "item_requests.ItemRequest",
        on_delete=models.SET_NULL,
        related_name="items",
        null=True,
        blank=True,
    )

    class Meta:
        verbose_name = _("Item")
        verbose_name_plural = _("Items")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["owner"], name="item_owner_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} (#{self.pk})"


class Comment(models.Model):
    """Отзыв арендатора о вещи."""

    text = models.TextField()
    item = models.ForeignKey(Item, on_delete=models.CASCADE, related_name="comments")
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    created = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Comment")
        verbose_name_plural = _("Comments")
        ordering = ["created", "id"]

    def __str__(self) -> str:
        return f"Comment #{self.pk} on item {self.item_id}"
