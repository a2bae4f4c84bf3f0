"""Tests for risk flags and low-urgency detection."""

from datetime import datetime

from nb_lead_engine.core.config import RiskFlagRules
from nb_lead_engine.core.models import LeadRecord
from nb_lead_engine.core.results import ConfidenceScore, FakeLeadCheck, QualityScore
from nb_lead_engine.core.risk import detect_low_urgency, generate_risk_flags, lead_age_days

CLEAN = FakeLeadCheck(is_fake=False)
QUALITY = QualityScore(total=50)
CONFIDENT = ConfidenceScore(total=8.0)


def flags_for(lead, fraud=CLEAN, quality=QUALITY, confidence=CONFIDENT, **kwargs):
    return generate_risk_flags(lead, fraud, quality, confidence, **kwargs)


class TestRiskFlags:
    """Tests for generate_risk_flags."""

    def test_well_formed_lead_has_no_flags(self):
        lead = LeadRecord(email="a@b.co", phone="+447700900123", timeline="3 months", payment_method="cash")
        assert flags_for(lead) == []

    def test_mortgage_flags(self):
        lead = LeadRecord(email="a@b.co", timeline="3 months", payment_method="Mortgage")
        assert flags_for(lead) == ["Mortgage not yet approved", "Mortgage buyer without broker"]

    def test_approved_mortgage_with_broker(self):
        lead = LeadRecord(
            email="a@b.co", timeline="3 months", payment_method="mortgage",
            mortgage_status="AIP", uk_broker="yes",
        )
        assert flags_for(lead) == []

    def test_28_day_buyer_needs_no_timeline(self):
        lead = LeadRecord(email="a@b.co", ready_within_28_days=True)
        assert "Timeline not specified" not in flags_for(lead)

    def test_limited_contact_needs_both_missing(self):
        assert "Limited contact information" not in flags_for(LeadRecord(email="a@b.co", timeline="soon"))
        assert "Limited contact information" not in flags_for(LeadRecord(phone="07700900123", timeline="soon"))
        assert "Limited contact information" in flags_for(LeadRecord(timeline="soon"))

    def test_international(self):
        lead = LeadRecord(email="a@b.co", timeline="soon", country="UAE")
        assert flags_for(lead) == ["International buyer - may need extended timeline"]
        assert flags_for(LeadRecord(email="a@b.co", timeline="soon", country="Scotland")) == []

    def test_spam_flags_lead_the_list(self):
        fraud = FakeLeadCheck(is_fake=True, flags=("one", "two", "three"))
        flags = flags_for(LeadRecord(email="a@b.co", timeline="soon"), fraud=fraud)
        assert flags == ["one", "two"]

    def test_disqualification_reason_follows_spam(self):
        fraud = FakeLeadCheck(is_fake=True, flags=("spam",))
        quality = QualityScore(total=0, is_disqualified=True, disqualification_reason="Too cheap")
        flags = flags_for(LeadRecord(email="a@b.co", timeline="soon"), fraud=fraud, quality=quality)
        assert flags == ["spam", "Too cheap"]

    def test_low_confidence(self):
        flags = flags_for(LeadRecord(email="a@b.co", timeline="soon"), confidence=ConfidenceScore(total=4.9))
        assert flags == ["Low data confidence - needs verification"]

    def test_capped_at_five(self):
        fraud = FakeLeadCheck(is_fake=True, flags=("a", "b", "c"))
        lead = LeadRecord(payment_method="mortgage", country="France")
        flags = flags_for(lead, fraud=fraud, confidence=ConfidenceScore(total=1.0))
        assert flags == [
            "a",
            "b",
            "Mortgage not yet approved",
            "Timeline not specified",
            "Mortgage buyer without broker",
        ]

    def test_cap_is_configurable(self):
        lead = LeadRecord(payment_method="mortgage", country="France")
        flags = flags_for(lead, rules=RiskFlagRules(max_flags=2))
        assert len(flags) == 2


class TestLeadAge:
    """Staleness depends only on the supplied reference time."""

    def test_no_as_of_means_no_stale_flag(self):
        lead = LeadRecord(email="a@b.co", timeline="soon", created_at="2020-01-01")
        assert lead_age_days(lead, None) is None
        assert flags_for(lead) == []

    def test_stale_lead(self):
        lead = LeadRecord(email="a@b.co", timeline="soon", created_at="2026-01-01")
        as_of = datetime(2026, 4, 1)
        assert lead_age_days(lead, as_of) == 90
        assert flags_for(lead, as_of=as_of) == ["Lead is 90 days old"]

    def test_recent_lead(self):
        lead = LeadRecord(email="a@b.co", timeline="soon", created_at="2026-03-15T09:30:00Z")
        assert flags_for(lead, as_of=datetime(2026, 4, 1)) == []

    def test_unparseable_created_at(self):
        lead = LeadRecord(created_at="last tuesday")
        assert lead_age_days(lead, datetime(2026, 4, 1)) is None


class TestLowUrgency:
    """Tests for detect_low_urgency."""

    def test_extended_timeline(self):
        assert detect_low_urgency(LeadRecord(timeline="no rush"))
        assert detect_low_urgency(LeadRecord(timeline="18 months+"))

    def test_browsing(self):
        assert detect_low_urgency(LeadRecord(timeline="just browsing"))

    def test_holiday_home_without_timeline(self):
        assert detect_low_urgency(LeadRecord(purpose="holiday home"))
        assert not detect_low_urgency(LeadRecord(purpose="holiday home", timeline="3 months"))

    def test_status(self):
        assert detect_low_urgency(LeadRecord(timeline="3 months", status="Not Proceeding"))

    def test_urgent_lead(self, hot_buyer):
        assert not detect_low_urgency(hot_buyer)
