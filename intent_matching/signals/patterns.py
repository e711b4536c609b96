"""
Keyword pattern tables for text-based intent signals.

Each entry maps a case-insensitive regular expression to an intent and a
weight. Every pattern that matches anywhere in the relevant text adds its
full weight to its intent; distinct matches accumulate.

Two tables exist:
- TITLE_SIGNALS: role and job-title keywords
- BODY_SIGNALS: phrases found in bios and looking-for / offering text

Tables are tuples of immutable records compiled once at import time.
"""

import re
from typing import NamedTuple, Pattern, Tuple


class SignalPattern(NamedTuple):
    """One keyword rule: a compiled pattern, the intent it supports, and its weight."""
    pattern: Pattern
    intent: str
    weight: int


def _rule(expression: str, intent: str, weight: int) -> SignalPattern:
    return SignalPattern(re.compile(expression, re.IGNORECASE), intent, weight)


TITLE_SIGNALS: Tuple[SignalPattern, ...] = (
    # Buying
    _rule(r"\b(procurement|purchasing|sourcing|buyer|supply chain)\b", "buying", 20),
    _rule(r"\b(operations|logistics|category manager)\b", "buying", 12),
    _rule(r"\b(CTO|CIO|IT Director|IT Manager|tech lead)\b", "buying", 8),

    # Selling
    _rule(r"\b(sales|account executive|account manager|business development|BD)\b", "selling", 20),
    _rule(r"\b(marketing|growth|revenue|commercial)\b", "selling", 12),
    _rule(r"\b(founder|co-founder|CEO|managing director)\b", "selling", 10),

    # Investing
    _rule(r"\b(investor|venture|VC|angel|investment|portfolio|fund)\b", "investing", 25),
    _rule(r"\b(private equity|PE|capital|asset management)\b", "investing", 20),

    # Partnering
    _rule(r"\b(partnership|alliances|strategic|channel|ecosystem)\b", "partnering", 20),
    _rule(r"\b(business development|BD|expansion)\b", "partnering", 10),

    # Learning
    _rule(r"\b(student|researcher|academic|professor|analyst|junior|intern)\b", "learning", 20),
    _rule(r"\b(exploring|learning|curious)\b", "learning", 15),

    # Networking
    _rule(r"\b(consultant|advisor|freelance|independent|community)\b", "networking", 15),
    _rule(r"\b(HR|people|talent|recruiter|recruiting)\b", "networking", 10),
)

BODY_SIGNALS: Tuple[SignalPattern, ...] = (
    # Buying
    _rule(
        r"\b(looking for|searching for|need|seeking)\s+(a\s+)?"
        r"(supplier|vendor|solution|tool|platform|provider|service)",
        "buying", 25
    ),
    _rule(r"\b(evaluating|comparing|reviewing)\s+(solutions|options|vendors|tools)", "buying", 20),

    # Selling
    _rule(r"\b(we (offer|provide|deliver|build|help)|our (solution|platform|product|service))\b", "selling", 25),
    _rule(r"\b(helping (companies|businesses|teams|organizations))\b", "selling", 20),
    _rule(r"\b(SaaS|B2B|platform|software|solution)\b", "selling", 8),

    # Investing
    _rule(r"\b(invest(ing|ment)?|fund(ing|ed)?|portfolio|deal flow|due diligence)\b", "investing", 20),
    _rule(r"\b(startup|seed|series [A-D]|raise|round)\b", "investing", 12),

    # Partnering
    _rule(r"\b(partner(ship|ing)?|collaborat(e|ion)|joint venture|alliance|distribution)\b", "partnering", 20),
    _rule(r"\b(looking for.{0,30}partner|open to.{0,30}collaborat)", "partnering", 25),

    # Learning
    _rule(r"\b(learn(ing)?|discover|explore|understand|research|study)\b", "learning", 12),
    _rule(r"\b(best practices|trends|insights|knowledge)\b", "learning", 10),

    # Networking
    _rule(r"\b(connect(ing)?|network(ing)?|meet(ing)?\s+(like-minded|people|professionals))\b", "networking", 15),
    _rule(r"\b(expand.{0,20}(network|connections)|build.{0,20}relationships)\b", "networking", 15),
)
