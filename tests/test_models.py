"""Tests for lead record parsing."""

from datetime import datetime

import pytest

from nb_lead_engine.core.models import (
    LeadRecord,
    parse_bedrooms,
    parse_budget,
    parse_count,
    parse_date,
    parse_flag,
    phone_digits,
)


class TestParseBudget:
    """Tests for budget parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("£1.5M", 1_500_000),
        ("£500k", 500_000),
        ("2,000,000", 2_000_000),
        ("£2,000,000", 2_000_000),
        ("£500k-£750k", 500_000),
        ("£1M-£2M", 1_000_000),
        ("£1 - £2 Million", 1_000_000),
        ("1 to 2m", 1_000_000),
        ("£2M+", 2_000_000),
        (750000, 750_000),
        ("€300K", 300_000),
    ])
    def test_parses_common_formats(self, value, expected):
        assert parse_budget(value) == expected

    @pytest.mark.parametrize("value", [None, "", "unknown", "TBC", True, -5, "£"])
    def test_unparseable_is_zero(self, value):
        assert parse_budget(value) == 0.0

    @pytest.mark.parametrize("value", [10**400, float("inf"), float("nan"), "9" * 500, "£" + "9" * 5000 + "k"])
    def test_out_of_range_numbers_are_zero(self, value):
        assert parse_budget(value) == 0.0


class TestParseHelpers:
    """Tests for the small parsing helpers."""

    def test_bedrooms(self):
        assert parse_bedrooms(3) == 3
        assert parse_bedrooms("4+") == 4
        assert parse_bedrooms("Studio") == 0
        assert parse_bedrooms("two") is None
        assert parse_bedrooms(None) is None

    @pytest.mark.parametrize("value", [float("inf"), float("nan"), -1, 10**400, "9" * 5000])
    def test_unusable_bedrooms(self, value):
        assert parse_bedrooms(value) is None

    def test_counts(self):
        assert parse_count("3") == 3
        assert parse_count(-2) == 0
        assert parse_count("many") == 0
        assert parse_count(float("inf")) == 0
        assert parse_count(float("nan")) == 0

    def test_flags(self):
        assert parse_flag(True)
        assert parse_flag("yes")
        assert parse_flag("TRUE")
        assert parse_flag(1)
        assert not parse_flag("no")
        assert not parse_flag(None)
        assert not parse_flag({"nested": True})

    def test_dates(self):
        assert parse_date("2026-01-15") == datetime(2026, 1, 15)
        assert parse_date("2026-01-15T10:30:00Z") == datetime(2026, 1, 15, 10, 30)
        assert parse_date("last tuesday") is None
        assert parse_date(None) is None

    def test_phone_digits(self):
        assert phone_digits("+44 (0)7700 900123") == "4407700900123"
        assert phone_digits(None) == ""


class TestLeadRecord:
    """Tests for LeadRecord construction."""

    def test_empty_and_non_mapping_inputs(self):
        assert LeadRecord.from_dict({}) == LeadRecord()
        assert LeadRecord.from_dict(None) == LeadRecord()
        assert LeadRecord.from_dict(["not", "a", "lead"]) == LeadRecord()

    def test_extreme_numbers_fall_back(self):
        lead = LeadRecord.from_dict({
            "bedrooms": "9" * 5000,
            "duplicate_submissions": float("inf"),
            "budget": 10**400,
        })
        assert lead.bedrooms is None
        assert lead.duplicate_submissions == 0
        assert lead.budget_value == 0.0
        assert LeadRecord.from_dict(None) == LeadRecord()
        assert LeadRecord.from_dict(["not", "a", "lead"]) == LeadRecord()

    def test_aliases(self):
        lead = LeadRecord.from_dict({
            "fullName": "Ana Silva",
            "preferred_bedrooms": "2",
            "area": "Leeds",
            "timeline_to_purchase": "3 months",
            "purchase_purpose": "Residence",
            "source_platform": "form",
            "external_id": "abc-1",
        })
        assert lead.full_name == "Ana Silva"
        assert lead.bedrooms == 2
        assert lead.location == "Leeds"
        assert lead.timeline == "3 months"
        assert lead.purpose == "Residence"
        assert lead.source == "form"
        assert lead.id == "abc-1"

    def test_nested_request_shape(self):
        lead = LeadRecord.from_dict({
            "buyer": {"first_name": "Li", "last_name": "Wei", "email": "li@wei.co.uk"},
            "requirements": {"budget": "£600k", "bedrooms": 3},
            "financial": {"payment_method": "mortgage", "uk_broker": "yes"},
            "context": {"source": "referral"},
        })
        assert lead.name == "Li Wei"
        assert lead.budget_value == 600_000
        assert lead.is_mortgage_buyer
        assert lead.has_broker
        assert lead.source == "referral"

    def test_empty_strings_become_none(self):
        lead = LeadRecord.from_dict({"email": "  ", "phone": ""})
        assert lead.email is None
        assert lead.phone is None

    def test_budget_value_prefers_first_parseable(self):
        lead = LeadRecord.from_dict({"budget": "TBC", "budget_range": "£400k-£500k"})
        assert lead.has_budget
        assert lead.budget_value == 400_000

    def test_broker_status(self):
        assert LeadRecord(uk_broker="introduced").has_broker
        assert LeadRecord(uk_broker="no").wants_broker
        assert LeadRecord(connect_to_broker=True).wants_broker
        assert not LeadRecord(uk_broker="yes", connect_to_broker=True).wants_broker
        assert not LeadRecord().wants_broker

    def test_mortgage_approved(self):
        assert LeadRecord(mortgage_status="AIP").mortgage_approved
        assert LeadRecord(mortgage_status="Approved").mortgage_approved
        assert not LeadRecord(mortgage_status="applied").mortgage_approved

    def test_to_dict_keeps_zero_bedrooms(self):
        lead = LeadRecord.from_dict({"bedrooms": "studio", "email": "a@b.com"})
        assert lead.to_dict() == {"bedrooms": 0, "email": "a@b.com"}
        assert LeadRecord.from_dict(lead.to_dict()) == lead
