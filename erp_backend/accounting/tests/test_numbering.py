# accounting/tests/test_numbering.py

from __future__ import annotations

import uuid

from django.db import transaction
from django.test import TestCase

from accounting.models import NumberingSeries
from accounting.services.exceptions import NotFoundError
from accounting.services.numbering_service import allocate_doc_num, format_doc_num
from pos.tests.factories import make_business_unit, make_series


class FormatDocNumTests(TestCase):
    def test_pads_to_six_digits(self):
        self.assertEqual(format_doc_num("JE-", 42), "JE-000042")

    def test_blank_prefix(self):
        self.assertEqual(format_doc_num("", 7), "000007")
        self.assertEqual(format_doc_num(None, 7), "000007")

    def test_wider_numbers_are_not_truncated(self):
        self.assertEqual(format_doc_num("AR-", 1234567), "AR-1234567")


class AllocateDocNumTests(TestCase):
    def setUp(self):
        self.bu = make_business_unit()
        self.series = make_series(
            self.bu,
            document_type=NumberingSeries.DocumentType.JOURNAL_ENTRY,
            prefix="JE-2024-",
            next_number=42,
        )

    def test_returns_current_number_and_increments(self):
        self.assertEqual(allocate_doc_num(self.series.id), "JE-2024-000042")

        self.series.refresh_from_db()
        self.assertEqual(self.series.next_number, 43)

    def test_sequential_allocations_are_distinct_and_consecutive(self):
        numbers = [allocate_doc_num(self.series.id) for _ in range(3)]
        self.assertEqual(numbers, ["JE-2024-000042", "JE-2024-000043", "JE-2024-000044"])

    def test_blank_prefix_series(self):
        series = make_series(
            self.bu,
            document_type=NumberingSeries.DocumentType.AR_INVOICE,
            prefix="",
            next_number=1,
        )
        self.assertEqual(allocate_doc_num(series.id), "000001")

    def test_unknown_series_raises_not_found(self):
        missing = 999_999
        with self.assertRaises(NotFoundError) as ctx:
            allocate_doc_num(missing)
        self.assertEqual(str(ctx.exception), f"Numbering series not found: {missing}")

    def test_none_series_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            allocate_doc_num(None)

    def test_garbage_series_id_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            allocate_doc_num(str(uuid.uuid4()))

    def test_increment_rolls_back_with_enclosing_transaction(self):
        class Boom(Exception):
            pass

        with self.assertRaises(Boom):
            with transaction.atomic():
                allocate_doc_num(self.series.id)
                raise Boom()

        self.series.refresh_from_db()
        self.assertEqual(self.series.next_number, 42)
