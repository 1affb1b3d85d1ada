# accounting/tests/test_concurrency.py

"""
Row-lock behaviour needs a real database with SELECT ... FOR UPDATE;
these tests only run against PostgreSQL.
"""

from __future__ import annotations

import threading
import unittest

from django.db import connection, connections
from django.test import TransactionTestCase

from accounting.models import NumberingSeries
from accounting.services.exceptions import AlreadyPostedError
from accounting.services.numbering_service import allocate_doc_num
from accounting.services.pos_accounting_service import post_order_to_gl
from pos.models import Order
from pos.tests.factories import build_ledger_setup, make_business_unit, make_order, make_series


def _run_threads(target, count):
    results, errors = [], []
    lock = threading.Lock()

    def worker():
        try:
            value = target()
            with lock:
                results.append(value)
        except Exception as exc:
            with lock:
                errors.append(exc)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results, errors


@unittest.skipUnless(connection.vendor == "postgresql", "requires PostgreSQL row locks")
class ConcurrentAllocationTests(TransactionTestCase):
    def test_parallel_allocations_never_duplicate(self):
        bu = make_business_unit()
        series = make_series(bu, document_type=NumberingSeries.DocumentType.JOURNAL_ENTRY, prefix="JE-")

        results, errors = _run_threads(lambda: allocate_doc_num(series.id), 8)

        self.assertEqual(errors, [])
        self.assertEqual(sorted(results), [f"JE-{n:06d}" for n in range(1, 9)])

        series.refresh_from_db()
        self.assertEqual(series.next_number, 9)


@unittest.skipUnless(connection.vendor == "postgresql", "requires PostgreSQL row locks")
class ConcurrentPostingTests(TransactionTestCase):
    def test_same_order_posted_once(self):
        setup = build_ledger_setup()
        order = make_order(
            setup.business_unit,
            items=[(setup.soda, 1, "2.50")],
            payments=[(setup.cash, "2.50")],
            status=Order.STATUS_PAID,
        )

        results, errors = _run_threads(lambda: post_order_to_gl(Order.objects.get(pk=order.pk)), 4)

        self.assertEqual(len(results), 1)
        self.assertEqual(len(errors), 3)
        self.assertTrue(all(isinstance(e, AlreadyPostedError) for e in errors))
