# pos/api/views.py

"""
POS ACCOUNTING API VIEWS

Purpose:
- Complete an order's payment (optionally auto-posting to the GL)
- Explicit / manual GL posting of a PAID order
- Accounting summary (one order) + accounting status (batch)
- POS configuration validation (for the configuration screen)

Hard rules:
- Every route is scoped by business_unit_id in the URL; orders of another
  business unit are 404.
- Service errors are returned as {"error": {"code", "message"}}; the message
  is the literal service error message.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.exceptions import (
    AccountingServiceError,
    InvalidStateError,
    NotFoundError,
)
from accounting.services.pos_accounting_service import post_order_to_gl
from accounting.services.pos_accounting_status import (
    get_order_accounting_summary,
    get_orders_accounting_status,
)
from accounting.services.pos_configuration_validator import validate_pos_configuration
from business_units.models import BusinessUnit
from pos.api.serializers import (
    CompleteOrderPaymentInputSerializer,
    ConfigurationValidationSerializer,
    OrderSerializer,
    OrdersAccountingStatusInputSerializer,
    PostToGlResponseSerializer,
)
from pos.models import Order, PosConfiguration
from pos.services.order_completion import complete_order_payment

logger = logging.getLogger(__name__)


# =====================================================
# API ERROR NORMALIZATION
# =====================================================


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def service_error_response(exc: AccountingServiceError):
    if isinstance(exc, NotFoundError):
        http_status = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidStateError):
        http_status = status.HTTP_409_CONFLICT
    else:
        http_status = status.HTTP_400_BAD_REQUEST

    return error_response(code=exc.code, message=str(exc), http_status=http_status)


# =====================================================
# HELPERS
# =====================================================


def _get_business_unit(business_unit_id) -> BusinessUnit:
    return get_object_or_404(BusinessUnit, id=business_unit_id, is_active=True)


def _get_order(*, business_unit: BusinessUnit, order_id) -> Order:
    return get_object_or_404(Order, id=order_id, business_unit=business_unit)


def _has_required_documents(*, business_unit: BusinessUnit, result) -> bool:
    if result.journal_entry is None:
        return False

    creates_invoices = PosConfiguration.objects.filter(
        business_unit=business_unit, auto_create_ar_invoice=True
    ).exists()
    return not (creates_invoices and result.ar_invoice is None)


# =====================================================
# VIEWS
# =====================================================


class CompleteOrderPaymentView(APIView):
    """
    Complete payment of an order.

    Calls:
    - pos.services.order_completion.complete_order_payment()

    GL posting failure does NOT fail the request: accounting is null.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=CompleteOrderPaymentInputSerializer,
        responses={200: dict},
        description="Validate payments, mark the order PAID and (optionally) post it to the GL.",
        examples=[
            OpenApiExample(
                "Complete + auto-post",
                value={"auto_post_to_gl": True},
                request_only=True,
            ),
        ],
    )
    def post(self, request, business_unit_id, order_id):
        business_unit = _get_business_unit(business_unit_id)
        order = _get_order(business_unit=business_unit, order_id=order_id)

        serializer = CompleteOrderPaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = complete_order_payment(
                order.id,
                auto_post_to_gl=serializer.validated_data["auto_post_to_gl"],
                author=request.user,
            )
        except AccountingServiceError as exc:
            return service_error_response(exc)

        return Response(
            {
                "order": OrderSerializer(result.order).data,
                "accounting": result.accounting.as_dict() if result.accounting else None,
            },
            status=status.HTTP_200_OK,
        )


class PostOrderToGlView(APIView):
    """
    Explicit GL posting of a PAID order.

    Every posting failure is a 400 carrying the literal error message.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={200: PostToGlResponseSerializer},
        description="Post a paid POS order to the general ledger (AR invoice + journal entry).",
    )
    def post(self, request, business_unit_id, order_id):
        business_unit = _get_business_unit(business_unit_id)
        order = _get_order(business_unit=business_unit, order_id=order_id)

        with transaction.atomic():
            try:
                result = post_order_to_gl(order, author=request.user)
            except AccountingServiceError as exc:
                return error_response(
                    code=exc.code,
                    message=str(exc),
                    http_status=status.HTTP_400_BAD_REQUEST,
                )

            if not _has_required_documents(business_unit=business_unit, result=result):
                transaction.set_rollback(True)
                logger.error(
                    "GL posting returned without documents",
                    extra={"order_id": str(order.id)},
                )
                return error_response(
                    code="POSTING_FAILED",
                    message="Failed to post order to GL.",
                    http_status=status.HTTP_400_BAD_REQUEST,
                )

        return Response(
            {
                "success": True,
                "message": "Order posted to GL successfully.",
                **result.as_dict(),
            },
            status=status.HTTP_200_OK,
        )


class OrderAccountingSummaryView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: dict},
        description="Posting flags, totals and journal lines of one order.",
    )
    def get(self, request, business_unit_id, order_id):
        business_unit = _get_business_unit(business_unit_id)
        order = _get_order(business_unit=business_unit, order_id=order_id)

        try:
            summary = get_order_accounting_summary(order.id)
        except AccountingServiceError as exc:
            return service_error_response(exc)

        return Response(summary, status=status.HTTP_200_OK)


class OrdersAccountingStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=OrdersAccountingStatusInputSerializer,
        responses={200: dict},
        description="Lightweight posting status for many orders (unknown ids omitted).",
    )
    def post(self, request, business_unit_id):
        business_unit = _get_business_unit(business_unit_id)

        serializer = OrdersAccountingStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        scoped_ids = list(
            Order.objects.filter(
                business_unit=business_unit,
                id__in=serializer.validated_data["order_ids"],
            ).values_list("id", flat=True)
        )
        allowed = set(scoped_ids)
        ordered_ids = [i for i in serializer.validated_data["order_ids"] if i in allowed]

        return Response(
            {"results": get_orders_accounting_status(ordered_ids)},
            status=status.HTTP_200_OK,
        )


class ValidateConfigurationView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: ConfigurationValidationSerializer},
        description="Blocking issues vs. non-blocking warnings for POS auto-posting.",
    )
    def get(self, request, business_unit_id):
        business_unit = _get_business_unit(business_unit_id)

        result = validate_pos_configuration(business_unit.id)
        payload = result.as_dict()
        payload["message"] = (
            "POS configuration is valid"
            if result.is_valid
            else f"POS configuration has {len(result.issues)} issue(s)"
        )
        return Response(payload, status=status.HTTP_200_OK)
