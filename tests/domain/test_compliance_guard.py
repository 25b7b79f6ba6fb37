"""Unit tests for the FEFO compliance guard.

``select_batch`` corrects, ``admit_to_cart`` rejects; the two are tested
separately on purpose.
"""

import logging
from datetime import date

import pytest

from fieldsales.domain.exceptions import ComplianceViolationError
from fieldsales.domain.model.cart import BatchContribution
from fieldsales.domain.model.order_state import FefoPolicy
from fieldsales.domain.model.value_objects import Money
from fieldsales.domain.service.compliance_guard import ComplianceGuard
from tests.builders import batch, line

B1 = batch("B1", 3, expiry=date(2024, 1, 31))
B2 = batch("B2", 10, expiry=date(2024, 2, 29))

ENFORCED = ComplianceGuard(FefoPolicy(enabled=True))
ADVISORY = ComplianceGuard(FefoPolicy(enabled=False))


class TestSelectBatch:

    def test_non_compliant_choice_replaced_when_enforced(self):
        assert ENFORCED.select_batch(B2, [B1, B2]) == B1

    def test_non_compliant_choice_kept_when_advisory(self):
        assert ADVISORY.select_batch(B2, [B1, B2]) == B2

    def test_compliant_choice_kept(self):
        assert ENFORCED.select_batch(B1, [B1, B2]) == B1

    def test_empty_batches_accepts_candidate(self):
        assert ENFORCED.select_batch(B2, []) == B2

    def test_auto_correction_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="fieldsales"):
            ENFORCED.select_batch(B2, [B1, B2])
        assert "auto-correction" in caplog.text


class TestAdmitToCart:

    def test_compliant_line_admitted(self):
        item = line(batch_id="B1")
        assert ENFORCED.admit_to_cart(item, [B1, B2]) is item

    def test_non_compliant_line_rejected(self, caplog):
        item = line(batch_id="B2")
        with caplog.at_level(logging.WARNING, logger="fieldsales"):
            with pytest.raises(ComplianceViolationError) as exc_info:
                ENFORCED.admit_to_cart(item, [B1, B2])
        assert exc_info.value.batch_id == "B2"
        assert exc_info.value.compliant_batch_id == "B1"
        assert "FEFO policy violation" in caplog.text

    def test_rejection_does_not_correct_the_line(self):
        item = line(batch_id="B2")
        with pytest.raises(ComplianceViolationError):
            ENFORCED.admit_to_cart(item, [B1, B2])
        assert item.batch_id == "B2"

    def test_split_line_admitted_regardless_of_primary(self):
        split = line(
            batch_id="B2",
            quantity=4,
            is_fefo_split=True,
            fefo_batches=(
                BatchContribution("B2", "LOT-B2", date(2024, 2, 29), 2, Money.of("100")),
                BatchContribution("B3", "LOT-B3", date(2024, 3, 31), 2, Money.of("100")),
            ),
        )
        assert ENFORCED.admit_to_cart(split, [B1, B2]) is split

    def test_advisory_policy_admits_anything(self):
        item = line(batch_id="B2")
        assert ADVISORY.admit_to_cart(item, [B1, B2]) is item

    def test_no_batches_admits(self):
        item = line(batch_id="B2")
        assert ENFORCED.admit_to_cart(item, []) is item
