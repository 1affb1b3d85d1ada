# business_units/models/business_unit.py

import uuid

from django.db import models
from django.db.models import Q


class BusinessUnit(models.Model):
    """
    Represents a tenant (restaurant, outlet, branch) that owns its own books.

    Guarantees:
    - code is optional, but if provided it must be unique
    - every accounting document, series and period hangs off exactly one unit
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)

    # Optional, but if provided must be unique
    code = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Short business unit code (optional). If set, must be unique.",
        db_index=True,
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["code"],
                condition=Q(code__isnull=False) & ~Q(code=""),
                name="uniq_business_unit_code_when_present",
            ),
        ]

    def __str__(self):
        c = (self.code or "").strip()
        if c:
            return f"{self.name} ({c})"
        return self.name
