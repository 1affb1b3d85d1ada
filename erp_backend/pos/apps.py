# pos/apps.py

"""
POS APP CONFIG

Point-of-sale domain:
- Menu items (GL mapping + recipe), payment methods, discounts
- Orders, order items, payments
- Order completion (payment gate → walk-in customer → PAID → GL posting)
"""

from django.apps import AppConfig


class PosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pos"
    verbose_name = "Point of Sale"
