# pos/api/serializers.py

"""
POS API SERIALIZERS

- Input serializers document request bodies for Swagger
- Output serializers render orders and posting results
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from pos.models import Order


# =====================================================
# INPUT
# =====================================================


class CompleteOrderPaymentInputSerializer(serializers.Serializer):
    auto_post_to_gl = serializers.BooleanField(
        required=False,
        default=getattr(settings, "POS_AUTO_POST_ON_COMPLETION", True),
    )


class OrdersAccountingStatusInputSerializer(serializers.Serializer):
    order_ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=True,
        max_length=500,
    )


# =====================================================
# OUTPUT
# =====================================================


class OrderSerializer(serializers.ModelSerializer):
    business_partner_code = serializers.CharField(
        source="business_partner.bp_code", read_only=True, default=None
    )
    ar_invoice_number = serializers.CharField(
        source="ar_invoice.doc_num", read_only=True, default=None
    )
    journal_entry_number = serializers.CharField(
        source="journal_entry.doc_num", read_only=True, default=None
    )

    class Meta:
        model = Order
        fields = [
            "id",
            "business_unit",
            "status",
            "is_paid",
            "paid_at",
            "subtotal",
            "tax",
            "discount_value",
            "total_amount",
            "amount_paid",
            "business_partner",
            "business_partner_code",
            "ar_invoice",
            "ar_invoice_number",
            "journal_entry",
            "journal_entry_number",
            "created_at",
        ]
        read_only_fields = fields


class PostingResultSerializer(serializers.Serializer):
    ar_invoice_id = serializers.UUIDField(allow_null=True)
    ar_invoice_number = serializers.CharField(allow_null=True)
    journal_entry_id = serializers.UUIDField()
    journal_entry_number = serializers.CharField()
    total_debits = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_credits = serializers.DecimalField(max_digits=14, decimal_places=2)


class PostToGlResponseSerializer(PostingResultSerializer):
    success = serializers.BooleanField()
    message = serializers.CharField()


class ConfigurationValidationSerializer(serializers.Serializer):
    is_valid = serializers.BooleanField()
    issues = serializers.ListField(child=serializers.CharField())
    warnings = serializers.ListField(child=serializers.CharField())
    message = serializers.CharField()
