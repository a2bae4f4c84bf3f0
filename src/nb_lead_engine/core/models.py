"""Lead record model and tolerant field parsing."""

import logging
import math
import re
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

BudgetValue = Union[str, int, float, None]

_CURRENCY_RE = re.compile(r"[£$€,\s]")
_NUMBER = r"(\d+(?:\.\d+)?)"
_SUFFIX = r"(million|k|m)?"
_RANGE_RE = re.compile(rf"^{_NUMBER}{_SUFFIX}(?:-|–|—|to)+{_NUMBER}{_SUFFIX}$")
_SINGLE_RE = re.compile(rf"^{_NUMBER}{_SUFFIX}$")
_LEADING_RE = re.compile(rf"{_NUMBER}(?:(million|k|m)(?![a-z]))?")

_MULTIPLIERS = {"k": 1_000, "m": 1_000_000, "million": 1_000_000}
_MAX_BEDROOM_DIGITS = 4

_TRUE_STRINGS = {"true", "yes", "y", "1"}
_CONNECTED_STATUSES = {"yes", "introduced", "true", "connected", "appointed"}
_NOT_CONNECTED_STATUSES = {"no", "unknown", "false", "none"}
_APPROVED_MORTGAGE = {"approved", "aip", "agreement in principle", "agreed in principle"}

# Accepted input keys for each field, in priority order
FIELD_ALIASES: Dict[str, tuple] = {
    "id": ("id", "external_id", "lead_id"),
    "full_name": ("full_name", "fullName", "name"),
    "first_name": ("first_name", "firstName"),
    "last_name": ("last_name", "lastName"),
    "email": ("email",),
    "phone": ("phone",),
    "country": ("country",),
    "budget": ("budget",),
    "budget_range": ("budget_range",),
    "budget_min": ("budget_min",),
    "budget_max": ("budget_max",),
    "bedrooms": ("bedrooms", "preferred_bedrooms"),
    "location": ("location", "preferred_location", "area"),
    "timeline": ("timeline", "timeline_to_purchase"),
    "purpose": ("purpose", "purchase_purpose"),
    "ready_within_28_days": ("ready_within_28_days", "ready_in_28_days", "buying_within_28_days"),
    "payment_method": ("payment_method",),
    "mortgage_status": ("mortgage_status",),
    "proof_of_funds": ("proof_of_funds",),
    "uk_broker": ("uk_broker",),
    "uk_solicitor": ("uk_solicitor",),
    "connect_to_broker": ("connect_to_broker",),
    "source": ("source", "source_platform"),
    "status": ("status",),
    "notes": ("notes",),
    "created_at": ("created_at", "date_added"),
    "last_contact": ("last_contact",),
    "duplicate_submissions": ("duplicate_submissions",),
}

# Sub-objects of the nested API request shape
NESTED_SECTIONS = ("buyer", "requirements", "financial", "context")

_FLAG_FIELDS = {"ready_within_28_days", "proof_of_funds", "connect_to_broker"}
_BUDGET_FIELDS = {"budget", "budget_range", "budget_min", "budget_max"}


def _finite_float(value: Any) -> Optional[float]:
    """float(value) when it is a finite number, else None."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _positive_or_zero(number: Optional[float]) -> float:
    return number if number is not None and number > 0 else 0.0


def _scaled(number: str, suffix: Optional[str]) -> float:
    # Very long digit strings parse to inf rather than raising
    return _positive_or_zero(_finite_float(float(number) * _MULTIPLIERS.get(suffix, 1)))


def parse_budget(value: BudgetValue) -> float:
    """Parse a budget value to a number, returning the lower bound of ranges.

    Accepts numbers and strings such as "£1.5M", "£500k-£750k",
    "£1 - £2 Million" or "2,000,000". Anything unparseable is 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return _positive_or_zero(_finite_float(value))

    cleaned = _CURRENCY_RE.sub("", str(value)).lower()
    if not cleaned:
        return 0.0

    try:
        match = _RANGE_RE.match(cleaned)
        if match:
            low, low_suffix, _high, high_suffix = match.groups()
            suffix = low_suffix or high_suffix
            return _scaled(low, suffix)

        match = _SINGLE_RE.match(cleaned)
        if match:
            number, suffix = match.groups()
            return _scaled(number, suffix)

        match = _LEADING_RE.match(cleaned)
        if match:
            number, suffix = match.groups()
            return _scaled(number, suffix)
    except ValueError:
        logger.debug(f"Unparseable budget value: {value!r}")

    return 0.0


def parse_bedrooms(value: Any) -> Optional[int]:
    """Parse a bedroom preference. "studio" counts as zero bedrooms."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = _finite_float(value)
        if number is None or number < 0:
            logger.debug(f"Unusable bedrooms value: {value!r}")
            return None
        return int(number)

    text = str(value).strip().lower()
    if not text:
        return None
    if "studio" in text:
        return 0

    match = re.search(r"\d+", text)
    if not match:
        logger.debug(f"Unparseable bedrooms value: {value!r}")
        return None
    digits = match.group()
    if len(digits) > _MAX_BEDROOM_DIGITS:
        logger.debug(f"Unrealistic bedrooms value: {value!r}")
        return None
    return int(digits)


def parse_flag(value: Any) -> bool:
    """Interpret a boolean-ish input. Anything unrecognised is False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def parse_count(value: Any) -> int:
    """Parse a non-negative integer count, defaulting to 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Unparseable count value: {value!r}")
        return 0
    return max(0, count)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO date/datetime string. Timezone info is dropped."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if not value:
        return None

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        logger.debug(f"Unparseable date value: {value!r}")
        return None


def phone_digits(phone: Optional[str]) -> str:
    """Strip everything but digits from a phone number."""
    return re.sub(r"\D", "", phone or "")


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else None
    text = str(value).strip()
    return text or None


def _clean_budget(value: Any) -> BudgetValue:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return _clean_text(value)


@dataclass(frozen=True)
class LeadRecord:
    """A buyer lead as submitted by the calling system.

    Every field is optional. The scoring functions treat a missing value as
    the weakest evidence for whatever it would have contributed.
    """

    id: Optional[str] = None

    # Contact
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None

    # Requirements
    budget: BudgetValue = None
    budget_range: BudgetValue = None
    budget_min: BudgetValue = None
    budget_max: BudgetValue = None
    bedrooms: Optional[int] = None
    location: Optional[str] = None
    timeline: Optional[str] = None
    purpose: Optional[str] = None
    ready_within_28_days: bool = False

    # Financial
    payment_method: Optional[str] = None
    mortgage_status: Optional[str] = None
    proof_of_funds: bool = False
    uk_broker: Optional[str] = None
    uk_solicitor: Optional[str] = None
    connect_to_broker: bool = False

    # Context
    source: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    last_contact: Optional[str] = None
    duplicate_submissions: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "LeadRecord":
        """Build a record from a flat or nested mapping. Never raises."""
        if isinstance(data, LeadRecord):
            return data
        if not isinstance(data, Mapping):
            if data is not None:
                logger.debug(f"Ignoring non-mapping lead input of type {type(data).__name__}")
            return cls()

        flat: Dict[str, Any] = {}
        for section in NESTED_SECTIONS:
            nested = data.get(section)
            if isinstance(nested, Mapping):
                flat.update(nested)
        flat.update({k: v for k, v in data.items() if k not in NESTED_SECTIONS})

        values: Dict[str, Any] = {}
        for name, aliases in FIELD_ALIASES.items():
            raw = next(
                (flat[alias] for alias in aliases if flat.get(alias) not in (None, "")),
                None,
            )
            if name in _FLAG_FIELDS:
                values[name] = parse_flag(raw)
            elif name in _BUDGET_FIELDS:
                values[name] = _clean_budget(raw)
            elif name == "bedrooms":
                values[name] = parse_bedrooms(raw)
            elif name == "duplicate_submissions":
                values[name] = parse_count(raw)
            else:
                values[name] = _clean_text(raw)

        return cls(**values)

    @classmethod
    def coerce(cls, lead: Any) -> "LeadRecord":
        """Accept a LeadRecord, a mapping or None."""
        return lead if isinstance(lead, cls) else cls.from_dict(lead)

    def to_dict(self) -> Dict[str, Any]:
        """Return fields that differ from their defaults."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value != f.default:
                result[f.name] = value
        return result

    @property
    def name(self) -> str:
        if self.full_name:
            return self.full_name
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def has_name(self) -> bool:
        return bool(self.full_name or self.first_name)

    @property
    def budget_value(self) -> float:
        """Best available budget figure (lower bound), 0.0 when unknown."""
        for value in (self.budget, self.budget_range, self.budget_min, self.budget_max):
            parsed = parse_budget(value)
            if parsed > 0:
                return parsed
        return 0.0

    @property
    def has_budget(self) -> bool:
        return any(
            v is not None for v in (self.budget, self.budget_range, self.budget_min, self.budget_max)
        )

    @property
    def payment(self) -> str:
        return (self.payment_method or "").strip().lower()

    @property
    def is_cash_buyer(self) -> bool:
        return self.payment == "cash"

    @property
    def is_mortgage_buyer(self) -> bool:
        return self.payment == "mortgage"

    @property
    def mortgage_approved(self) -> bool:
        return (self.mortgage_status or "").strip().lower() in _APPROVED_MORTGAGE

    @property
    def has_broker(self) -> bool:
        return (self.uk_broker or "").strip().lower() in _CONNECTED_STATUSES

    @property
    def wants_broker(self) -> bool:
        """Lead needs a broker introduction and does not already have one."""
        if self.has_broker:
            return False
        broker = (self.uk_broker or "").strip().lower()
        return broker in _NOT_CONNECTED_STATUSES or self.connect_to_broker

    @property
    def has_solicitor(self) -> bool:
        return (self.uk_solicitor or "").strip().lower() in _CONNECTED_STATUSES

    @property
    def status_text(self) -> str:
        return (self.status or "").strip().lower()
