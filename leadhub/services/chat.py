"""Chat widget reply selection.

Replies come from the AI completion service when it is configured and
answers; otherwise from canned topic replies picked by keyword. Keyword
matching is plain substring containment on the lowercased utterance, and
the first rule in ``TOPIC_RULES`` that matches wins.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from leadhub.core.config import settings
from leadhub.services.ai_chat import AIChatClient

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "default"

REPLIES: dict[str, str] = {
    "greeting": (
        "🤖 Hi! I'm your Florida Service AI Assistant. I can instantly connect you with "
        "verified contractors across all 67 Florida counties. What service do you need help with today?"
    ),
    "roofing": (
        "🏠 Roofing emergency or planned repair? I work with 150+ licensed roofers across Florida. "
        "Emergency repairs typically get responses in 30-60 minutes. What's your situation?"
    ),
    "hvac": (
        "❄️ AC issues in Florida heat are serious! I can connect you with certified HVAC techs who "
        "offer 24/7 emergency service. Most respond within 1-2 hours. What's happening with your system?"
    ),
    "plumbing": (
        "🔧 Plumbing problems can't wait! I work with master plumbers throughout Florida who offer "
        "emergency service. Water damage prevention is critical. Describe your issue?"
    ),
    "electrical": (
        "⚡ Electrical issues require licensed professionals immediately. I connect you with Master "
        "Electricians across Florida. Safety first - what's the problem?"
    ),
    "pool": (
        "🏊 Pool problems during Florida season? I work with certified pool technicians statewide. "
        "Equipment repair, cleaning, or chemical issues? Tell me more."
    ),
    "hurricane": (
        "🌪️ Hurricane preparation is crucial in Florida! I connect you with certified storm contractors "
        "who can board up, install shutters, or handle emergency repairs. What do you need?"
    ),
    "emergency": (
        "🚨 I understand this is URGENT! I'm immediately connecting you with emergency service providers "
        "in your area. They typically respond within 30-90 minutes. What's your exact location and emergency?"
    ),
    "pricing": (
        "💰 Great question! Our service is 100% FREE for Florida homeowners. Contractors pay us only when "
        "they successfully connect with quality leads like you. You get competitive pricing and quality work!"
    ),
    "timeline": (
        "⏰ Perfect! I can match you with 2-4 contractors based on your timeline and project scope. They'll "
        "contact you with detailed estimates within 4-6 hours. Much faster than traditional methods!"
    ),
    "location": (
        "📍 I serve all Florida counties! From Miami-Dade to Escambia, Jacksonville to Key West. Where in "
        "Florida are you located? This helps me match you with the closest, highest-rated contractors."
    ),
    DEFAULT_TOPIC: (
        "I'm here to help connect you with Florida's best contractors! Ask me about roofing, AC/HVAC, "
        "plumbing, electrical, pools, landscaping, or emergency services. What can I help you find?"
    ),
}

# Emergency copy while the team is marked away
AWAY_EMERGENCY_REPLY = (
    "🚨 I understand this is URGENT! Our team is away right now, so a specialist will call you back as "
    "soon as they're available. Leave your name, phone and exact location in the quick form and we'll "
    "prioritize your emergency."
)


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)


# Priority order matters: "roof leak emergency" is a roofing request.
TOPIC_RULES: list[tuple[Callable[[str], bool], str]] = [
    (_contains_any("roof", "leak", "shingle"), "roofing"),
    (_contains_any("ac", "hvac", "cooling", "air condition"), "hvac"),
    (_contains_any("plumb", "water", "drain", "pipe"), "plumbing"),
    (_contains_any("electric", "wire", "outlet", "power"), "electrical"),
    (_contains_any("pool", "spa", "chlorine"), "pool"),
    (_contains_any("hurricane", "storm", "shutter"), "hurricane"),
    (_contains_any("emergency", "urgent", "asap", "help"), "emergency"),
    (_contains_any("cost", "price", "free", "money"), "pricing"),
    (_contains_any("when", "timeline", "how long"), "timeline"),
    (_contains_any("where", "location", "area"), "location"),
]

QUICK_ACTIONS: list[dict] = [
    {"label": "🚨 Emergency Repair", "value": "emergency", "urgent": True, "popular": False},
    {"label": "🏠 Roofing", "value": "roofing", "urgent": False, "popular": True},
    {"label": "❄️ AC/HVAC", "value": "hvac", "urgent": False, "popular": True},
    {"label": "🔧 Plumbing", "value": "plumbing", "urgent": False, "popular": True},
    {"label": "⚡ Electrical", "value": "electrical", "urgent": False, "popular": False},
    {"label": "🏊 Pool Service", "value": "pool", "urgent": False, "popular": False},
    {"label": "🌪️ Hurricane Prep", "value": "hurricane", "urgent": True, "popular": False},
]


def select_topic(text: str) -> str:
    lowered = text.lower()
    for matches, topic in TOPIC_RULES:
        if matches(lowered):
            return topic
    return DEFAULT_TOPIC


def topic_reply(topic: str, away: bool = False) -> str:
    if topic == "emergency" and away:
        return AWAY_EMERGENCY_REPLY
    return REPLIES.get(topic, REPLIES[DEFAULT_TOPIC])


def keyword_reply(text: str, away: bool = False) -> tuple[str, str]:
    """Return (topic, reply) for an utterance."""
    topic = select_topic(text)
    return topic, topic_reply(topic, away)


def quick_action_utterance(value: str) -> str:
    return f"I need help with {value}"


def is_quick_action(value: str) -> bool:
    return any(action["value"] == value for action in QUICK_ACTIONS)


@dataclass
class ChatEntry:
    role: str  # user or assistant
    text: str
    timestamp: datetime = field(default_factory=datetime.utcnow)


@dataclass
class ChatSession:
    """One visitor's conversation. Lives only as long as the widget does."""
    messages: list[ChatEntry] = field(default_factory=list)

    def append(self, role: str, text: str) -> ChatEntry:
        entry = ChatEntry(role=role, text=text)
        self.messages.append(entry)
        return entry

    def history_for_ai(self, limit: int | None = None) -> list[dict]:
        history = [{"role": m.role, "content": m.text} for m in self.messages]
        if limit:
            history = history[-limit:]
        return history


@dataclass
class ChatReply:
    text: str
    topic: str
    source: str  # "ai" or "keywords"


class ChatResponder:
    def __init__(self, ai_client: AIChatClient | None = None, max_history: int | None = None):
        self.ai_client = ai_client or AIChatClient()
        self.max_history = settings.AI_CHAT_MAX_HISTORY if max_history is None else max_history

    async def reply(self, session: ChatSession, utterance: str, away: bool = False) -> ChatReply:
        """Answer one utterance and record both turns on the session."""
        history = session.history_for_ai(self.max_history)
        topic = select_topic(utterance)
        result = None

        if self.ai_client.configured:
            try:
                text = await self.ai_client.complete(utterance, history)
                result = ChatReply(text=text, topic=topic, source="ai")
            except Exception as e:
                logger.warning("AI chat failed, using keyword reply: %s", e)

        if result is None:
            result = ChatReply(text=topic_reply(topic, away), topic=topic, source="keywords")

        session.append("user", utterance)
        session.append("assistant", result.text)
        return result
