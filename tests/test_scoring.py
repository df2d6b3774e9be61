"""Tests for lead value, urgency and service label rules."""

import math

import pytest

from leadhub.models.lead import Urgency
from leadhub.services.scoring import (
    DEFAULT_BASE_VALUE,
    SERVICE_BASE_VALUES,
    URGENCY_MULTIPLIERS,
    calculate_lead_value,
    normalize_urgency,
    resolve_service_label,
    timeline_label,
)


@pytest.mark.parametrize("service", list(SERVICE_BASE_VALUES) + ["Gutter Cleaning", ""])
@pytest.mark.parametrize("urgency", list(Urgency))
def test_value_is_rounded_base_times_multiplier(service, urgency):
    base = SERVICE_BASE_VALUES.get(service, DEFAULT_BASE_VALUE)
    expected = math.floor(base * URGENCY_MULTIPLIERS[urgency] + 0.5)
    assert calculate_lead_value(service, urgency) == expected


def test_known_values():
    assert calculate_lead_value("Roofing", "normal") == 450
    assert calculate_lead_value("Roofing", "emergency") == 810
    assert calculate_lead_value("AC/HVAC", "urgent") == 350
    assert calculate_lead_value("Roofing", "urgent") == calculate_lead_value("Roofing", "normal")
    assert calculate_lead_value("Unknown Service", None) == DEFAULT_BASE_VALUE


def test_unspecified_urgency_uses_multiplier_one():
    assert calculate_lead_value("Solar") == 750
    assert calculate_lead_value("Solar", "") == 750
    assert calculate_lead_value("Solar", "whenever") == 750


def test_landing_timeline_choices_map_to_tiers():
    assert normalize_urgency("Emergency") == Urgency.EMERGENCY
    assert normalize_urgency("1-week") == Urgency.URGENT
    assert normalize_urgency("3-months") == Urgency.NORMAL
    assert normalize_urgency("  URGENT ") == Urgency.URGENT


def test_other_uses_custom_service():
    assert resolve_service_label("Other", "Gutter Cleaning") == "Gutter Cleaning"
    assert resolve_service_label("Other", "   ") == "Other"
    assert resolve_service_label("Plumbing", "ignored") == "Plumbing"


def test_timeline_label():
    assert timeline_label("emergency") == "Emergency"
    assert timeline_label("urgent") == "Within 1 week"
    assert timeline_label(None) == "Within 1 month"
