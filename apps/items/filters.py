"""FilterSet definitions for item search."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Item


class ItemSearchFilterSet(django_filters.FilterSet):
    """Substring search over name and description, available items only."""

    text = django_filters.CharFilter(method="filter_text")

    class Meta:
        model = Item
        fields = ["text"]

    def filter_text(self, queryset, name, value):  # type: ignore
        value = value.strip()
        if not value:
            return queryset.none()
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
