"""Tests for KYC/AML verification adjustments."""

import pytest

from nb_lead_engine.core.config import VerificationConfig
from nb_lead_engine.core.verification import (
    VerificationOutcome,
    apply_verification,
    outcome_from_status,
)


class TestOutcomeFromStatus:

    @pytest.mark.parametrize("status,expected", [
        ("passed", VerificationOutcome.PASSED),
        ("Approved", VerificationOutcome.PASSED),
        (" clear ", VerificationOutcome.PASSED),
        ("failed", VerificationOutcome.FAILED),
        ("REJECTED", VerificationOutcome.FAILED),
        ("pending", VerificationOutcome.REVIEW),
        ("", VerificationOutcome.REVIEW),
        (None, VerificationOutcome.REVIEW),
    ])
    def test_mapping(self, status, expected):
        assert outcome_from_status(status) == expected


class TestApplyVerification:
    """Tests for apply_verification."""

    def test_pass_raises_confidence(self):
        update = apply_verification(6.5, VerificationOutcome.PASSED)
        assert update.confidence == 7.5
        assert update.delta == 1.0

    def test_pass_clears_verification_flags(self):
        flags = ["Mortgage not yet approved", "Low data confidence - needs verification"]
        update = apply_verification(4.0, VerificationOutcome.PASSED, flags)
        assert update.risk_flags == ("Mortgage not yet approved",)

    def test_fail_lowers_confidence_and_flags_first(self):
        update = apply_verification(6.0, VerificationOutcome.FAILED, ["Timeline not specified"], reason="ID mismatch")
        assert update.confidence == 4.5
        assert update.risk_flags == (
            "KYC/AML verification failed: ID mismatch",
            "Timeline not specified",
        )

    def test_fail_flag_added_once(self):
        first = apply_verification(6.0, VerificationOutcome.FAILED)
        second = apply_verification(first.confidence, VerificationOutcome.FAILED, first.risk_flags, reason="again")
        assert second.risk_flags == ("KYC/AML verification failed: unspecified",)
        assert second.confidence == 3.0

    def test_review_changes_nothing(self):
        update = apply_verification(5.3, VerificationOutcome.REVIEW, ["x"])
        assert update.confidence == 5.3
        assert update.risk_flags == ("x",)
        assert update.delta == 0.0

    def test_clamped(self):
        assert apply_verification(9.8, VerificationOutcome.PASSED).confidence == 10.0
        assert apply_verification(0.5, VerificationOutcome.FAILED).confidence == 0.0

    def test_fail_keeps_flag_cap(self):
        flags = ["a", "b", "c", "d", "e"]
        update = apply_verification(5.0, VerificationOutcome.FAILED, flags)
        assert len(update.risk_flags) == 5
        assert update.risk_flags[0].startswith("KYC/AML verification failed")
        assert "e" not in update.risk_flags

    def test_accepts_outcome_value(self):
        assert apply_verification(5.0, "passed").confidence == 6.0

    def test_configurable_deltas(self):
        config = VerificationConfig(pass_delta=2.0, fail_delta=-3.0)
        assert apply_verification(5.0, VerificationOutcome.PASSED, config=config).confidence == 7.0
        assert apply_verification(5.0, VerificationOutcome.FAILED, config=config).confidence == 2.0
