"""Admin registration for item requests."""

from __future__ import annotations

from django.contrib import admin

from .models import ItemRequest


@admin.register(ItemRequest)
class ItemRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "requestor", "created")
    search_fields = ("description", "requestor__email")
    readonly_fields = ("created",)
