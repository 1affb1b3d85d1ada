"""
PATH: pos/urls.py

POS URLS

Mounted under /api/<uuid:business_unit_id>/pos/
"""

from django.urls import path

from pos.api.views import (
    CompleteOrderPaymentView,
    OrderAccountingSummaryView,
    OrdersAccountingStatusView,
    PostOrderToGlView,
    ValidateConfigurationView,
)

app_name = "pos"

urlpatterns = [
    path(
        "orders/<uuid:order_id>/complete-payment/",
        CompleteOrderPaymentView.as_view(),
        name="complete-payment",
    ),
    path(
        "orders/<uuid:order_id>/post-to-gl/",
        PostOrderToGlView.as_view(),
        name="post-to-gl",
    ),
    path(
        "orders/<uuid:order_id>/accounting-summary/",
        OrderAccountingSummaryView.as_view(),
        name="accounting-summary",
    ),
    path(
        "orders/accounting-status/",
        OrdersAccountingStatusView.as_view(),
        name="accounting-status",
    ),
    path(
        "validate-configuration/",
        ValidateConfigurationView.as_view(),
        name="validate-configuration",
    ),
]
