"""Shared fixtures: sample buyer leads."""

import tempfile
from pathlib import Path

import pytest

from nb_lead_engine.core.models import LeadRecord


HOT_CASH_BUYER = {
    "id": "test-hot-1",
    "full_name": "Sarah Mitchell",
    "first_name": "Sarah",
    "last_name": "Mitchell",
    "email": "sarah.mitchell@protonmail.com",
    "phone": "+447700900123",
    "country": "UK",
    "budget": "£1.5M",
    "budget_range": "£1M-£2M",
    "payment_method": "Cash",
    "bedrooms": 3,
    "location": "London",
    "timeline": "ASAP/28 days",
    "purpose": "Residence",
    "ready_within_28_days": True,
    "source": "Rightmove",
    "status": "Contact Pending",
    "proof_of_funds": True,
    "uk_broker": "no",
    "uk_solicitor": "yes",
}

QUALIFIED_MORTGAGE_BUYER = {
    "id": "test-qualified-1",
    "full_name": "James Thompson",
    "email": "james.thompson@gmail.com",
    "phone": "+447700900456",
    "country": "UK",
    "budget_range": "£500k-£750k",
    "payment_method": "Mortgage",
    "mortgage_status": "aip",
    "bedrooms": 2,
    "location": "Manchester",
    "timeline": "1-3 months",
    "purchase_purpose": "Investment",
    "source": "website",
    "status": "Follow Up",
    "uk_broker": "yes",
    "uk_solicitor": "no",
}

LONG_TIMELINE_BUYER = {
    "id": "test-nurture-1",
    "full_name": "Emily Rogers",
    "email": "emily.rogers@outlook.com",
    "country": "UK",
    "budget_range": "£250k-£500k",
    "payment_method": "Mortgage",
    "timeline": "6-12 months",
    "purchase_purpose": "Investment",
    "source": "email",
    "status": "Contact Pending",
}

HOLIDAY_HOME_BUYER = {
    "id": "test-low-1",
    "full_name": "Michael Davies",
    "email": "michael.d@hotmail.com",
    "timeline": "no rush",
    "purchase_purpose": "holiday home",
    "status": "Contact Pending",
}

FAKE_BUYER = {
    "id": "test-fake-1",
    "full_name": "Test User",
    "email": "test@example.com",
    "phone": "0000000000",
    "budget": "£500",
    "status": "Contact Pending",
}

MISMATCHED_BUYER = {
    "id": "test-disqualified-1",
    "full_name": "Robert Chen",
    "email": "robert.chen@china.com",
    "phone": "+8613800138000",
    "budget": "£3M",
    "bedrooms": 1,
    "payment_method": "Cash",
    "status": "Contact Pending",
}

INTERNATIONAL_BUYER = {
    "id": "test-intl-1",
    "full_name": "Ahmad Al-Rashid",
    "email": "ahmad@dubai-investments.ae",
    "phone": "+971501234567",
    "country": "UAE",
    "budget": "£2M",
    "bedrooms": 4,
    "payment_method": "Cash",
    "location": "Central London",
    "timeline": "1-3 months",
    "purchase_purpose": "Investment",
    "source": "referral",
    "proof_of_funds": True,
    "uk_broker": "introduced",
    "uk_solicitor": "introduced",
    "status": "Follow Up",
}


@pytest.fixture
def temp_data_dir():
    """Create temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_leads():
    """Raw lead dicts keyed by scenario."""
    return {
        "hot": dict(HOT_CASH_BUYER),
        "qualified": dict(QUALIFIED_MORTGAGE_BUYER),
        "long_timeline": dict(LONG_TIMELINE_BUYER),
        "holiday": dict(HOLIDAY_HOME_BUYER),
        "fake": dict(FAKE_BUYER),
        "mismatched": dict(MISMATCHED_BUYER),
        "international": dict(INTERNATIONAL_BUYER),
    }


@pytest.fixture
def hot_buyer():
    return LeadRecord.from_dict(HOT_CASH_BUYER)


@pytest.fixture
def qualified_buyer():
    return LeadRecord.from_dict(QUALIFIED_MORTGAGE_BUYER)


@pytest.fixture
def long_timeline_buyer():
    return LeadRecord.from_dict(LONG_TIMELINE_BUYER)


@pytest.fixture
def holiday_buyer():
    return LeadRecord.from_dict(HOLIDAY_HOME_BUYER)


@pytest.fixture
def fake_buyer():
    return LeadRecord.from_dict(FAKE_BUYER)


@pytest.fixture
def mismatched_buyer():
    return LeadRecord.from_dict(MISMATCHED_BUYER)


@pytest.fixture
def international_buyer():
    return LeadRecord.from_dict(INTERNATIONAL_BUYER)
