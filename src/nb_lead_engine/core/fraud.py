"""Spam / fake-lead detection.

Each heuristic runs independently and contributes at most one flag. A lead
is fake once it raises ``FraudRules.min_flags`` flags (one by default).
Missing data never raises a flag here; gaps show up as risk flags instead.
"""

import logging
from typing import List, Optional

from .config import FraudRules
from .models import LeadRecord, phone_digits
from .results import FakeLeadCheck
from .signals import FAKE_STATUSES, is_disposable_email, is_placeholder_name, is_suspicious_phone_digits

logger = logging.getLogger(__name__)


def _phone_flag(lead: LeadRecord, rules: FraudRules) -> Optional[str]:
    if not lead.phone:
        return None
    digits = phone_digits(lead.phone)
    if not rules.min_phone_digits <= len(digits) <= rules.max_phone_digits:
        return f"Invalid phone number length: {lead.phone}"
    if is_suspicious_phone_digits(digits):
        return f"Suspicious phone pattern: {lead.phone}"
    return None


def detect_fake_lead(lead: LeadRecord, rules: Optional[FraudRules] = None) -> FakeLeadCheck:
    """Run every spam heuristic over a lead."""
    rules = rules or FraudRules()
    flags: List[str] = []
    weight = 0

    def flag(kind: str, message: str):
        nonlocal weight
        flags.append(message)
        weight += rules.weights.get(kind, 0)

    name = lead.name
    if name and is_placeholder_name(name):
        flag("name", f"Suspicious name pattern: {name}")

    if lead.email and is_disposable_email(lead.email):
        flag("email", f"Suspicious email pattern: {lead.email}")

    phone_problem = _phone_flag(lead, rules)
    if phone_problem:
        flag("phone", phone_problem)

    budget = lead.budget_value
    if 0 < budget < rules.min_realistic_budget:
        flag("budget", f"Unrealistically low budget: £{budget:,.0f}")

    if (
        lead.bedrooms is not None
        and lead.bedrooms >= rules.contradiction_min_bedrooms
        and 0 < budget < rules.contradiction_max_budget
    ):
        flag("contradiction", f"{lead.bedrooms} bedrooms on a £{budget:,.0f} budget is contradictory")

    if lead.duplicate_submissions >= rules.duplicate_threshold:
        flag("duplicate", f"Repeated identical submissions ({lead.duplicate_submissions})")

    status = lead.status_text
    if any(s in status for s in FAKE_STATUSES):
        flag("status", f"Status marked as: {lead.status}")

    is_fake = len(flags) >= rules.min_flags
    if is_fake:
        logger.debug(f"Lead {lead.id or '<no id>'} flagged as fake: {flags}")

    return FakeLeadCheck(is_fake=is_fake, flags=tuple(flags), confidence=min(weight, 100) / 100)
