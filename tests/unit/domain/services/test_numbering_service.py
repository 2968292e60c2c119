"""
Unit tests for NumberingService.
"""

import random
from datetime import date

from consultdesk.domain.models.value_objects import InvoiceNumber
from consultdesk.domain.services.numbering_service import NumberingService


class TestNumberingService:

    def test_number_format(self):
        service = NumberingService(rng=random.Random(7))
        number = str(service.generate_invoice_number(date(2024, 3, 15)))

        assert number.startswith("INV-20240315-")
        assert len(number) == len("INV-20240315-000")
        assert str(InvoiceNumber.parse(number)) == number

    def test_custom_prefix(self):
        service = NumberingService(prefix="CD", rng=random.Random(1))
        assert str(service.generate_invoice_number(date(2024, 1, 2))).startswith("CD-20240102-")

    def test_seeded_generator_is_repeatable(self):
        first = NumberingService(rng=random.Random(42)).generate_invoice_number(date(2024, 3, 15))
        second = NumberingService(rng=random.Random(42)).generate_invoice_number(date(2024, 3, 15))
        assert first == second

    def test_sequence_stays_in_range(self):
        service = NumberingService(rng=random.Random(3))
        sequences = {service.generate_invoice_number(date(2024, 3, 15)).sequence for _ in range(500)}
        assert min(sequences) >= 0
        assert max(sequences) <= 999
