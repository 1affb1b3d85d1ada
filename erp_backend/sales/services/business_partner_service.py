# sales/services/business_partner_service.py

"""
BUSINESS PARTNER SERVICE

Canonical walk-in customer per business unit.

Rules:
- Create-if-absent, idempotent (get_or_create handles the insert race)
- Code comes from the POS configuration default, falling back to
  settings.POS_WALK_IN_BP_CODE ("WALK-IN-CUSTOMER")
"""

from __future__ import annotations

import logging

from django.conf import settings

from sales.models import BusinessPartner

logger = logging.getLogger(__name__)

WALK_IN_NAME = "Walk-In Customer"


def walk_in_bp_code(bp_code: str | None = None) -> str:
    code = (bp_code or "").strip()
    if code:
        return code
    return getattr(settings, "POS_WALK_IN_BP_CODE", "WALK-IN-CUSTOMER")


def ensure_walk_in_customer(*, business_unit, bp_code: str | None = None) -> BusinessPartner:
    code = walk_in_bp_code(bp_code)

    partner, created = BusinessPartner.objects.get_or_create(
        business_unit=business_unit,
        bp_code=code,
        defaults={
            "name": WALK_IN_NAME,
            "bp_type": BusinessPartner.TYPE_CUSTOMER,
            "is_active": True,
        },
    )

    if created:
        logger.warning(
            "Walk-in customer created",
            extra={"business_unit_id": str(business_unit.id), "bp_code": code},
        )

    return partner
