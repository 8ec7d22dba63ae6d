"""Tests for the document sequence entity."""

import pytest
from pydantic import ValidationError

from src.core.entities import DocumentSequence, Region


class TestDocumentSequence:
    def test_format_number_pads(self):
        assert DocumentSequence.format_number("UAE-INV-", 7) == "UAE-INV-0007"

    def test_format_number_custom_padding(self):
        assert DocumentSequence.format_number("KSA-INV-", 42, padding=6) == "KSA-INV-000042"

    def test_format_number_wider_than_padding(self):
        assert DocumentSequence.format_number("UAE-INV-", 12345) == "UAE-INV-12345"

    def test_preview_next(self):
        seq = DocumentSequence(region=Region.SAUDI, prefix="KSA-INV-", current_number=9)
        assert seq.current() == "KSA-INV-0009"
        assert seq.preview_next() == "KSA-INV-0010"
        assert seq.current_number == 9

    def test_negative_counter_rejected(self):
        with pytest.raises(ValidationError):
            DocumentSequence(region=Region.UAE, prefix="UAE-INV-", current_number=-1)
