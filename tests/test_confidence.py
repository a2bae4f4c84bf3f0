"""Tests for the confidence score."""

from nb_lead_engine.core.confidence import calculate_confidence_score
from nb_lead_engine.core.config import ConfidenceWeights
from nb_lead_engine.core.models import LeadRecord


class TestConfidenceScore:
    """Tests for calculate_confidence_score."""

    def test_complete_lead(self, hot_buyer):
        result = calculate_confidence_score(hot_buyer)
        # 5 + 0.5 + 1 + 1 + 7 * 0.25 + 0.5 = 9.75, rounded half up
        assert result.total == 9.8

    def test_empty_lead(self):
        result = calculate_confidence_score(LeadRecord())
        assert result.total == 2.0
        points = result.points()
        assert points["Name Missing"] == -1.0
        assert points["No Contact Details"] == -2.0

    def test_complete_beats_minimal(self, hot_buyer, holiday_buyer):
        assert calculate_confidence_score(hot_buyer).total > calculate_confidence_score(holiday_buyer).total

    def test_placeholder_values_reduce_confidence(self, fake_buyer):
        result = calculate_confidence_score(fake_buyer)
        points = result.points()
        assert points["Placeholder Name"] == -1.5
        assert points["Disposable Email"] == -1.5
        assert result.total == 3.3

    def test_malformed_contact(self):
        result = calculate_confidence_score(LeadRecord(full_name="Ana", email="ana@", phone="123"))
        points = result.points()
        assert points["Malformed Email"] == -1.0
        assert points["Malformed Phone"] == -1.0

    def test_notes_length(self):
        basic = calculate_confidence_score(LeadRecord(notes="x" * 60))
        detailed = calculate_confidence_score(LeadRecord(notes="x" * 250))
        placeholder = calculate_confidence_score(LeadRecord(notes="n/a"))
        assert basic.points()["Basic Notes"] == 0.5
        assert detailed.points()["Detailed Notes"] == 1.0
        assert "Basic Notes" not in placeholder.points()

    def test_inverted_budget_range(self):
        result = calculate_confidence_score(LeadRecord(budget_min="£900k", budget_max="£600k"))
        assert result.points()["Inverted Budget Range"] == -1.0

    def test_clamped_to_ten(self, hot_buyer):
        weights = ConfidenceWeights(baseline=9.5)
        assert calculate_confidence_score(hot_buyer, weights).total == 10.0

    def test_clamped_to_zero(self):
        weights = ConfidenceWeights(baseline=0.0)
        assert calculate_confidence_score(LeadRecord(), weights).total == 0.0
