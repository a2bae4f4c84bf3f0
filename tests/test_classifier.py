"""Tests for the classification table and priority lookups."""

import pytest

from nb_lead_engine.core.classifier import (
    Classification,
    Priority,
    Temperature,
    call_priority_for,
    classify,
    priority_for,
    quick_temperature,
)
from nb_lead_engine.core.config import ClassifierThresholds, QuickTemperatureThresholds


class TestClassify:
    """Tests for the top-down decision table."""

    @pytest.mark.parametrize("quality,intent,expected", [
        (90, 90, Classification.HOT),
        (70, 70, Classification.HOT),
        (80, 45, Classification.WARM_QUALIFIED),
        (70, 69, Classification.WARM_QUALIFIED),
        (45, 80, Classification.WARM_ENGAGED),
        (69, 70, Classification.WARM_ENGAGED),
        (50, 50, Classification.NURTURE),
        (35, 69, Classification.NURTURE),
        (68, 45, Classification.NURTURE),
        (34, 50, Classification.COLD),
        (80, 40, Classification.COLD),
        (40, 75, Classification.COLD),
        (19, 90, Classification.DISQUALIFIED),
        (90, 19, Classification.DISQUALIFIED),
        (20, 20, Classification.COLD),
    ])
    def test_table(self, quality, intent, expected):
        assert classify(quality, intent, 5) == expected

    def test_spam_wins_over_everything(self):
        assert classify(100, 100, 10, is_spam=True) == Classification.SPAM
        assert classify(0, 0, 0, is_spam=True) == Classification.SPAM

    def test_custom_thresholds(self):
        thresholds = ClassifierThresholds(hot=60, nurture_max=59)
        assert classify(65, 65, thresholds=thresholds) == Classification.HOT
        assert classify(65, 65) == Classification.NURTURE

    def test_classification_values(self):
        assert [c.value for c in Classification] == [
            "Hot", "Warm-Qualified", "Warm-Engaged", "Nurture", "Cold", "Disqualified", "Spam",
        ]


class TestPriority:
    """The priority lookup is total over all seven classifications."""

    @pytest.mark.parametrize("classification,expected,response_time", [
        (Classification.HOT, Priority.P1, "< 1 hour"),
        (Classification.WARM_QUALIFIED, Priority.P2, "< 4 hours"),
        (Classification.WARM_ENGAGED, Priority.P2, "< 4 hours"),
        (Classification.NURTURE, Priority.P3, "< 24 hours"),
        (Classification.COLD, Priority.P4, "48+ hours"),
        (Classification.DISQUALIFIED, Priority.P4, "48+ hours"),
        (Classification.SPAM, Priority.P4, "48+ hours"),
    ])
    def test_mapping(self, classification, expected, response_time):
        info = priority_for(classification)
        assert info.priority == expected
        assert info.response_time == response_time
        assert info.description
        assert classification.priority == info

    def test_every_classification_has_a_priority(self):
        assert {priority_for(c).priority for c in Classification} == set(Priority)

    def test_lookup_by_value(self):
        assert priority_for("Warm-Engaged").priority == Priority.P2

    def test_unknown_classification(self):
        with pytest.raises(ValueError):
            priority_for("Lukewarm")


class TestCallPriority:
    """Tests for call urgency."""

    def test_28_day_buyer_jumps_queue(self):
        call = call_priority_for(Classification.NURTURE, is_28_day_buyer=True)
        assert call.level == 1
        assert call.response_time == "Within 1 hour"

    def test_hot_without_28_days(self):
        call = call_priority_for(Classification.HOT)
        assert call.level == 1
        assert call.response_time == "Within 2 hours"

    @pytest.mark.parametrize("classification", [Classification.SPAM, Classification.DISQUALIFIED])
    def test_28_day_does_not_rescue_spam_or_disqualified(self, classification):
        call = call_priority_for(classification, is_28_day_buyer=True)
        assert call.level == 5
        assert call.response_time == "N/A"

    def test_levels(self):
        levels = {c: call_priority_for(c).level for c in Classification}
        assert levels[Classification.WARM_QUALIFIED] == levels[Classification.WARM_ENGAGED] == 2
        assert levels[Classification.NURTURE] == 3
        assert levels[Classification.COLD] == 4


class TestQuickTemperature:
    """The dashboard heuristic is separate from the classifier."""

    def test_bands(self):
        assert quick_temperature(70, 70) == Temperature.HOT
        assert quick_temperature(90, 50) == Temperature.HOT
        assert quick_temperature(45, 45) == Temperature.WARM
        assert quick_temperature(50, 39) == Temperature.COLD

    def test_disagrees_with_classifier(self):
        # Mean of 70 is Hot here, but the classifier needs both scores at 70
        assert quick_temperature(90, 50) == Temperature.HOT
        assert classify(90, 50) == Classification.WARM_QUALIFIED

    def test_configurable(self):
        thresholds = QuickTemperatureThresholds(hot=80, warm=60)
        assert quick_temperature(70, 70, thresholds) == Temperature.WARM
