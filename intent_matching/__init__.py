"""
Intent Matching Engine

This package recommends which pairs of event participants should be
introduced. It fuses noisy, multi-source intent signals about each person
into a probability distribution, scores every candidate pair on several
independent dimensions, and ranks the surviving pairs with short reasons.

Key Design Decisions:
- The engine is a pure computation over supplied records (no I/O inside scoring)
- Intent vectors are fused from weighted signals, never learned
- A fixed 6x6 compatibility model drives intent scoring
- Every unordered pair is evaluated exactly once, in canonical id order
"""

__version__ = "1.0.0"
