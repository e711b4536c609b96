"""
Participant scoring profile.

Defines the per-participant record consumed by the engine. Every field
except the identifier is optional; missing data degrades to neutral
defaults during scoring rather than failing.

Record Shape (as supplied by the caller):
- id, full_name, role, intents / intent, looking_for, offering
- profile fields: title, bio, company_name, industry, expertise_areas, interests
- cache fields: intent_vector, intent_confidence
- ai_intent_classification (carried through, not fused)

Profile fields may be given flat or nested under a "profiles" key.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

_PROFILE_FIELDS = (
    "full_name", "title", "bio", "company_name",
    "industry", "expertise_areas", "interests",
)

_LIST_FIELDS = ("intents", "expertise_areas", "interests")


@dataclass
class ParticipantScoringProfile:
    """
    Scoring input for one event participant.

    Attributes:
        id: Participant identifier (compared as a string for canonical ordering)
        full_name: Display name used in match reasons
        title: Job title
        bio: Free-text biography
        company_name: Company name (used by the same-company exclusion)
        looking_for: Free-text answer to "what are you looking for"
        offering: Free-text answer to "what are you offering"
        intents: Explicitly selected intent keys
        intent: Legacy single intent selection, used when intents is empty
        industry: Industry label
        expertise_areas: Areas the participant is expert in
        interests: Topics the participant is interested in
        role: Participant role at the event (e.g. attendee, sponsor)
        intent_vector: Cached normalized intent vector from a previous run
        intent_confidence: Confidence of the cached vector (0 = no cache)
        ai_intent_classification: Externally produced classification payload
    """
    id: str
    full_name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    company_name: Optional[str] = None
    looking_for: Optional[str] = None
    offering: Optional[str] = None
    intents: List[str] = field(default_factory=list)
    intent: Optional[str] = None
    industry: Optional[str] = None
    expertise_areas: List[str] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    role: Optional[str] = None
    intent_vector: Optional[Dict[str, float]] = None
    intent_confidence: int = 0
    ai_intent_classification: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        """Validate the identifier and coerce loosely typed inputs."""
        if self.id is None or str(self.id).strip() == "":
            raise ValueError("Participant record is missing an id")
        self.id = str(self.id)

        for attr in _LIST_FIELDS:
            value = getattr(self, attr)
            if value is None:
                setattr(self, attr, [])
            elif isinstance(value, str):
                setattr(self, attr, [value])
            else:
                setattr(self, attr, list(value))

        if self.intent_confidence is None:
            self.intent_confidence = 0
        self.intent_confidence = int(self.intent_confidence)

    @property
    def explicit_intents(self) -> List[str]:
        """Explicit selections, falling back to the legacy single intent."""
        if self.intents:
            return list(self.intents)
        if self.intent:
            return [self.intent]
        return []

    @property
    def display_name(self) -> str:
        """Name used in human-readable reasons."""
        return self.full_name or self.id

    def needs_met_by(self, other: "ParticipantScoringProfile", min_length: int = 0) -> bool:
        """
        Check whether any word of this participant's looking-for text occurs
        inside the other participant's offering (case-insensitive substring).

        Args:
            other: Participant whose offering is searched
            min_length: Only words longer than this count
        """
        if not self.looking_for or not other.offering:
            return False
        offering = other.offering.lower()
        return any(
            len(word) > min_length and word in offering
            for word in self.looking_for.lower().split()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "title": self.title,
            "bio": self.bio,
            "company_name": self.company_name,
            "looking_for": self.looking_for,
            "offering": self.offering,
            "intents": list(self.intents),
            "intent": self.intent,
            "industry": self.industry,
            "expertise_areas": list(self.expertise_areas),
            "interests": list(self.interests),
            "role": self.role,
            "intent_vector": self.intent_vector,
            "intent_confidence": self.intent_confidence,
            "ai_intent_classification": self.ai_intent_classification,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantScoringProfile":
        """
        Create from a participant record.

        Nested "profiles" values fill profile fields the flat record does
        not set. Unknown keys are ignored.
        """
        flat = {k: v for k, v in data.items() if k != "profiles"}
        nested = data.get("profiles") or {}
        for name in _PROFILE_FIELDS:
            if flat.get(name) is None and nested.get(name) is not None:
                flat[name] = nested[name]

        flat.setdefault("id", None)

        known = cls.__dataclass_fields__.keys()
        return cls(**{k: v for k, v in flat.items() if k in known})
