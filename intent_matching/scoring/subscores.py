"""
Non-intent sub-scores for a candidate pair.

Each sub-score lies in [0, 100]; 50 is the neutral value used whenever the
data needed to judge a dimension is missing.

Sub-score Rules:
- industry: 100 if equal, 40 if both present but different, 50 if either missing
- interest: mean of the applicable factors
    A.expertise -> B.interests   |A.exp & B.int| / |B.int| * 100
    B.expertise -> A.interests   |B.exp & A.int| / |A.int| * 100
    shared expertise             |A.exp & B.exp| / |A.exp | B.exp| * 80
  a factor applies only when both of its sets are non-empty
- complementarity: 50, +20 if roles differ, +15 per direction in which a
  looking-for word appears in the other side's offering, capped at 100
- embedding: round(similarity * 100), or 50 without similarity data
"""

from typing import Optional

from ..intents import round_half_up
from ..profiles import ParticipantScoringProfile

NEUTRAL_SCORE = 50.0

INDUSTRY_MATCH_SCORE = 100.0
INDUSTRY_MISMATCH_SCORE = 40.0

SHARED_EXPERTISE_SCALE = 80.0

ROLE_DIFFERENCE_BONUS = 20.0
NEED_OFFER_BONUS = 15.0


def compute_industry_score(a: ParticipantScoringProfile, b: ParticipantScoringProfile) -> float:
    """Score industry alignment."""
    if not a.industry or not b.industry:
        return NEUTRAL_SCORE
    if a.industry == b.industry:
        return INDUSTRY_MATCH_SCORE
    return INDUSTRY_MISMATCH_SCORE


def compute_interest_score(a: ParticipantScoringProfile, b: ParticipantScoringProfile) -> float:
    """Score how well expertise and interests line up in both directions."""
    a_expertise = set(a.expertise_areas)
    b_expertise = set(b.expertise_areas)
    a_interests = set(a.interests)
    b_interests = set(b.interests)

    factors = []

    if a_expertise and b_interests:
        factors.append(len(a_expertise & b_interests) / len(b_interests) * 100)

    if b_expertise and a_interests:
        factors.append(len(b_expertise & a_interests) / len(a_interests) * 100)

    if a_expertise and b_expertise:
        union = a_expertise | b_expertise
        factors.append(len(a_expertise & b_expertise) / len(union) * SHARED_EXPERTISE_SCALE)

    if not factors:
        return NEUTRAL_SCORE
    return sum(factors) / len(factors)


def compute_complementarity_score(a: ParticipantScoringProfile, b: ParticipantScoringProfile) -> float:
    """Score how much the two participants complement each other."""
    score = NEUTRAL_SCORE

    if a.role != b.role:
        score += ROLE_DIFFERENCE_BONUS

    if a.needs_met_by(b):
        score += NEED_OFFER_BONUS
    if b.needs_met_by(a):
        score += NEED_OFFER_BONUS

    return min(score, 100.0)


def compute_embedding_score(similarity: Optional[float]) -> float:
    """Scale an embedding similarity in [0, 1] to a 0-100 score."""
    if similarity is None:
        return NEUTRAL_SCORE
    return round_half_up(similarity * 100)
