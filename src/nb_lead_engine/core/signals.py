"""Lead signal vocabulary - timelines, purposes, sources and spam patterns."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern, Tuple


class PurchasePurpose(Enum):
    """Why the buyer is purchasing."""

    PRIMARY_RESIDENCE = "primary_residence"
    DEPENDENT_STUDYING = "dependent_studying"
    INVESTMENT = "investment"
    HOLIDAY_HOME = "holiday_home"
    OTHER = "other"  # Stated but unrecognised
    UNKNOWN = "unknown"


class TimelineBucket(Enum):
    """Purchase timeline, most urgent first."""

    IMMEDIATE = "immediate"  # Within a month
    SHORT = "short"  # 1-3 months
    MEDIUM = "medium"  # 3-6 months
    LONG = "long"  # 6-12 months
    EXTENDED = "extended"  # 18+ months / no rush
    BROWSING = "browsing"
    UNSPECIFIED = "unspecified"  # Stated but unrecognised
    NONE = "none"


class SourceType(Enum):
    """Channel the lead arrived through."""

    FORM = "form"
    REFERRAL = "referral"
    WHATSAPP = "whatsapp"
    EMAIL = "email"
    PHONE = "phone"
    OTHER = "other"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class KeywordRule:
    """Maps a regex over free text to an enum value."""

    pattern: Pattern
    value: Enum


def _rule(expr: str, value: Enum) -> KeywordRule:
    return KeywordRule(re.compile(expr, re.IGNORECASE), value)


# Holiday is checked before primary so "holiday home" is not read as a home purchase
PURPOSE_RULES: List[KeywordRule] = [
    _rule(r"holiday|second|vacation", PurchasePurpose.HOLIDAY_HOME),
    _rule(r"dependent|studying|student", PurchasePurpose.DEPENDENT_STUDYING),
    _rule(r"investment|\bbtl\b|buy\s*to\s*let", PurchasePurpose.INVESTMENT),
    _rule(r"primary|residence|home", PurchasePurpose.PRIMARY_RESIDENCE),
]

TIMELINE_RULES: List[KeywordRule] = [
    _rule(r"brows|just\s*looking|window\s*shopping|not\s*sure", TimelineBucket.BROWSING),
    _rule(
        r"immediate|asap|\bnow\b|28\s*days?|\b(1|a|one)\s*month\b|urgent|next\s*week|ready\s*to\s*(buy|purchase)",
        TimelineBucket.IMMEDIATE,
    ),
    _rule(r"\b1\s*-\s*3|\b2\s*-\s*3|\b3\s*months?|soon|short", TimelineBucket.SHORT),
    _rule(r"\b3\s*-\s*6|\b6\s*months?|half\s*a?\s*year|this\s*year", TimelineBucket.MEDIUM),
    _rule(
        r"no\s*rush|flexible|eventually|someday|long\s*term|\b18\s*months?|\b24\s*months?|\b2\s*years?",
        TimelineBucket.EXTENDED,
    ),
    _rule(r"\b6\s*-\s*12|\b6\s*\+|\b12\s*months?|next\s*year|\byear\b", TimelineBucket.LONG),
]

SOURCE_RULES: List[KeywordRule] = [
    _rule(r"form|website|landing", SourceType.FORM),
    _rule(r"referral|referred", SourceType.REFERRAL),
    _rule(r"whatsapp|\bwa\b", SourceType.WHATSAPP),
    _rule(r"e-?mail", SourceType.EMAIL),
    _rule(r"phone|call", SourceType.PHONE),
]

TWENTY_EIGHT_DAY_RE = re.compile(
    r"28\s*days?|immediate|asap|\bnow\b|urgent|ready\s*to\s*(buy|purchase)|next\s*week",
    re.IGNORECASE,
)

ACTIVE_PIPELINE_STATUSES: Tuple[str, ...] = ("viewing booked", "negotiating", "reserved", "exchanged")
LOW_URGENCY_STATUSES: Tuple[str, ...] = ("not proceeding", "cold", "lost")
FAKE_STATUSES: Tuple[str, ...] = ("fake", "spam", "can't verify", "cant verify")

# Placeholder and throwaway values seen in junk submissions
FAKE_NAME_PATTERNS: List[Pattern] = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^test",
        r"^fake",
        r"^asdf",
        r"^qwerty",
        r"^xxx",
        r"^a{3,}$",
        r"^123",
        r"^n/a$",
        r"^none$",
        r"^null$",
        r"^demo",
        r"^sample",
        r"^john\s*doe",
        r"^jane\s*doe",
    )
]

FAKE_EMAIL_PATTERNS: List[Pattern] = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^test@",
        r"^fake@",
        r"@example\.(com|org|net)$",
        r"mailinator",
        r"guerrillamail",
        r"@yopmail",
        r"10minutemail",
        r"throwaway",
        r"trash[-_]?mail",
        r"temp[-_]?mail",
        r"disposable",
        r"noreply",
        r"donotreply",
    )
]

# Matched against the digits of the phone number only
FAKE_PHONE_PATTERNS: List[Pattern] = [
    re.compile(p)
    for p in (
        r"^0{7,}",
        r"^1{7,}",
        r"123456789",
        r"^(\d)\1{6,}",
        r"^000",
        r"^999999",
    )
]

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PLACEHOLDER_NOTES = {"test", "n/a", "na", "none", "asdf", "-", "."}


def _first_match(text: Optional[str], rules: List[KeywordRule]) -> Optional[Enum]:
    for rule in rules:
        if rule.pattern.search(text):
            return rule.value
    return None


def classify_purpose(text: Optional[str]) -> PurchasePurpose:
    """Normalise a free-text purchase purpose."""
    if not text or not text.strip():
        return PurchasePurpose.UNKNOWN
    return _first_match(text, PURPOSE_RULES) or PurchasePurpose.OTHER


def classify_timeline(text: Optional[str]) -> TimelineBucket:
    """Bucket a free-text purchase timeline."""
    if not text or not text.strip():
        return TimelineBucket.NONE
    return _first_match(text, TIMELINE_RULES) or TimelineBucket.UNSPECIFIED


def classify_source(text: Optional[str]) -> SourceType:
    """Normalise a lead source / platform name."""
    if not text or not text.strip():
        return SourceType.UNKNOWN
    return _first_match(text, SOURCE_RULES) or SourceType.OTHER


def is_28_day_timeline(text: Optional[str]) -> bool:
    """True when the timeline text says the buyer can complete within 28 days."""
    return bool(text and TWENTY_EIGHT_DAY_RE.search(text))


def is_placeholder_name(name: Optional[str]) -> bool:
    return bool(name) and any(p.search(name.strip()) for p in FAKE_NAME_PATTERNS)


def is_disposable_email(email: Optional[str]) -> bool:
    return bool(email) and any(p.search(email.strip()) for p in FAKE_EMAIL_PATTERNS)


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and bool(EMAIL_RE.match(email.strip()))


def is_suspicious_phone_digits(digits: str) -> bool:
    return any(p.search(digits) for p in FAKE_PHONE_PATTERNS)
