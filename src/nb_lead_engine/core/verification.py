"""Post-hoc confidence adjustment from identity verification (KYC/AML).

Verification results arrive after scoring, usually from a provider webhook.
The confidence calculator itself never changes; callers apply the delta to
the stored score with ``apply_verification``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

from .config import VerificationConfig
from .results import clamp, round_half_up

logger = logging.getLogger(__name__)

FAILED_FLAG_PREFIX = "KYC/AML verification failed"

_PASSED_STATUSES = {"passed", "pass", "clear", "approved", "verified", "complete", "completed"}
_FAILED_STATUSES = {"failed", "fail", "rejected", "declined", "refer_failed"}
_VERIFICATION_FLAG_MARKERS = ("verification", "kyc", "aml")


class VerificationOutcome(Enum):
    PASSED = "passed"
    FAILED = "failed"
    REVIEW = "review"


def outcome_from_status(status: Optional[str]) -> VerificationOutcome:
    """Map a provider status string onto an outcome. Unknown means review."""
    normalised = (status or "").strip().lower()
    if normalised in _PASSED_STATUSES:
        return VerificationOutcome.PASSED
    if normalised in _FAILED_STATUSES:
        return VerificationOutcome.FAILED
    return VerificationOutcome.REVIEW


@dataclass(frozen=True)
class VerificationUpdate:
    confidence: float
    risk_flags: Tuple[str, ...] = field(default_factory=tuple)
    delta: float = 0.0


def apply_verification(
    confidence: float,
    outcome: VerificationOutcome,
    risk_flags: Sequence[str] = (),
    reason: Optional[str] = None,
    config: Optional[VerificationConfig] = None,
) -> VerificationUpdate:
    """Adjust a stored confidence score and its risk flags for a verification result."""
    config = config or VerificationConfig()
    outcome = VerificationOutcome(outcome)
    flags = list(risk_flags)

    if outcome == VerificationOutcome.PASSED:
        delta = config.pass_delta
        flags = [f for f in flags if not any(m in f.lower() for m in _VERIFICATION_FLAG_MARKERS)]
    elif outcome == VerificationOutcome.FAILED:
        delta = config.fail_delta
        if not any(f.startswith(FAILED_FLAG_PREFIX) for f in flags):
            flags.insert(0, f"{FAILED_FLAG_PREFIX}: {reason or 'unspecified'}")
    else:
        delta = 0.0

    updated = round_half_up(clamp(float(confidence) + delta, 0.0, 10.0), 1)
    logger.info(f"Verification {outcome.value}: confidence {confidence} -> {updated}")
    return VerificationUpdate(
        confidence=updated,
        risk_flags=tuple(flags[: config.max_risk_flags]),
        delta=delta,
    )
