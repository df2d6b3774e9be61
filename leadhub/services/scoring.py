"""Lead scoring: service label resolution, lead value and timeline.

Simple lookup-table scoring. The table below is the single source of lead
values for every landing page and the chat quick form.
"""

import math

from leadhub.models.lead import Urgency

OTHER_SERVICE = "Other"

# Base lead value (USD) per service
SERVICE_BASE_VALUES: dict[str, int] = {
    "Roofing": 450,
    "AC/HVAC": 350,
    "Plumbing": 300,
    "Electrical": 400,
    "Pool Service": 250,
    "Landscaping": 280,
    "Home Remodeling": 600,
    "Cleaning Services": 180,
    "Windows/Doors": 350,
    "Solar": 750,
    "Hurricane Prep": 500,
}
DEFAULT_BASE_VALUE = 250

URGENCY_MULTIPLIERS: dict[Urgency, float] = {
    Urgency.NORMAL: 1.0,
    Urgency.URGENT: 1.0,
    Urgency.EMERGENCY: 1.8,
}

# Landing pages offer a timeline picker instead of the three urgency tiers
_TIMELINE_CHOICES: dict[str, Urgency] = {
    "emergency": Urgency.EMERGENCY,
    "asap": Urgency.EMERGENCY,
    "urgent": Urgency.URGENT,
    "1-week": Urgency.URGENT,
    "normal": Urgency.NORMAL,
    "1-month": Urgency.NORMAL,
    "3-months": Urgency.NORMAL,
    "planning": Urgency.NORMAL,
}

TIMELINE_LABELS: dict[Urgency, str] = {
    Urgency.EMERGENCY: "Emergency",
    Urgency.URGENT: "Within 1 week",
    Urgency.NORMAL: "Within 1 month",
}


def normalize_urgency(value: str | None) -> Urgency:
    """Map a tier name or timeline choice (any case) to an urgency tier."""
    if not value:
        return Urgency.NORMAL
    return _TIMELINE_CHOICES.get(value.strip().lower(), Urgency.NORMAL)


def resolve_service_label(service_type: str, custom_service: str | None = None) -> str:
    """Return the label stored on the lead.

    "Other" is replaced by the visitor's own description of the service.
    """
    if service_type == OTHER_SERVICE:
        custom = (custom_service or "").strip()
        return custom or OTHER_SERVICE
    return service_type


def base_value(service: str) -> int:
    return SERVICE_BASE_VALUES.get(service, DEFAULT_BASE_VALUE)


def calculate_lead_value(service: str, urgency: str | Urgency | None = None) -> int:
    """round(base value * urgency multiplier), halves rounded up."""
    tier = urgency if isinstance(urgency, Urgency) else normalize_urgency(urgency)
    return int(math.floor(base_value(service) * URGENCY_MULTIPLIERS[tier] + 0.5))


def timeline_label(urgency: str | Urgency | None) -> str:
    tier = urgency if isinstance(urgency, Urgency) else normalize_urgency(urgency)
    return TIMELINE_LABELS[tier]
