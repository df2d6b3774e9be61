"""Landing page variants.

Every marketing page is the same intake page rendered from a
``LandingConfig``: copy, contact details, theme colours and which optional
fields the form shows. Service options come from the catalog.
"""

import html
import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from string import Template

from leadhub.services.scoring import OTHER_SERVICE

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

BUDGET_RANGES = [
    "Under $1,000",
    "$1,000 - $5,000",
    "$5,000 - $15,000",
    "$15,000 - $50,000",
    "Over $50,000",
]

TIMELINE_OPTIONS = [
    ("Emergency", "🚨 Emergency (ASAP)"),
    ("1-week", "⚡ Within 1 week"),
    ("1-month", "📅 Within 1 month"),
    ("3-months", "🗓️ Within 3 months"),
    ("planning", "💭 Planning phase"),
]


@dataclass(frozen=True)
class LandingConfig:
    slug: str
    brand: str
    headline: str
    subheadline: str
    phone: str
    email: str
    submit_label: str
    success_title: str
    success_copy: str
    theme: dict = field(default_factory=dict)
    services: tuple[str, ...] | None = None  # None means the full active catalog
    show_budget: bool = True
    show_address: bool = True
    allow_other: bool = True
    chat_enabled: bool = True


VARIANTS: dict[str, LandingConfig] = {
    "florida": LandingConfig(
        slug="florida",
        brand="Florida Service Pros",
        headline="Florida's Smartest Contractor Network",
        subheadline="Licensed pros in all 67 counties. Emergency crews respond in 30-90 minutes.",
        phone="(954) 123-4567",
        email="leads@floridaservicepros.com",
        submit_label="Get Instant Contractor Matches! ⚡",
        success_title="Lead Secured!",
        success_copy="Our top-rated contractors will contact you within hours with competitive quotes.",
        theme={"primary": "#0ea5e9", "accent": "#a855f7", "background": "#0f172a", "text": "#e2e8f0"},
    ),
    "roofing": LandingConfig(
        slug="roofing",
        brand="RoofLeads Pro",
        headline="Get Your Roof Fixed Fast",
        subheadline="Free quotes from 3-5 licensed local roofers.",
        phone="(555) 123-4567",
        email="leads@roofleadspro.com",
        submit_label="Get My Free Roofing Quotes",
        success_title="Request Received!",
        success_copy="Local roofers will reach out shortly with free estimates.",
        theme={"primary": "#2563eb", "accent": "#16a34a", "background": "#f8fafc", "text": "#0f172a"},
        services=("Roofing",),
        show_budget=False,
        allow_other=False,
        chat_enabled=False,
    ),
}


def get_variant(slug: str) -> LandingConfig | None:
    return VARIANTS.get(slug)


def service_options(config: LandingConfig, catalog: list[str]) -> list[str]:
    names = [name for name in catalog if config.services is None or name in config.services]
    if config.services:
        names += [name for name in config.services if name not in names]
    if config.allow_other:
        names.append(OTHER_SERVICE)
    return names


def _options(pairs) -> str:
    return "\n".join(
        f'<option value="{html.escape(value)}">{html.escape(label)}</option>' for value, label in pairs
    )


def render_landing(config: LandingConfig, catalog: list[str]) -> str:
    """Render the intake page for one variant."""
    template = Template((TEMPLATES_DIR / "landing.html").read_text(encoding="utf-8"))
    theme = {"primary": "#0ea5e9", "accent": "#a855f7", "background": "#ffffff", "text": "#0f172a", **config.theme}
    services = service_options(config, catalog)
    return template.safe_substitute(
        brand=html.escape(config.brand),
        headline=html.escape(config.headline),
        subheadline=html.escape(config.subheadline),
        phone=html.escape(config.phone),
        email=html.escape(config.email),
        submit_label=html.escape(config.submit_label),
        primary=theme["primary"],
        accent=theme["accent"],
        background=theme["background"],
        text=theme["text"],
        service_options=_options((s, s) for s in services),
        timeline_options=_options(TIMELINE_OPTIONS),
        budget_options=_options((b, b) for b in BUDGET_RANGES),
        budget_display="block" if config.show_budget else "none",
        address_display="block" if config.show_address else "none",
        chat_display="block" if config.chat_enabled else "none",
        config_json=json.dumps(asdict(config)).replace("</", "<\\/"),
    )
