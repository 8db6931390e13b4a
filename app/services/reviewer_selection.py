# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Reviewer selection — pure computation, no side effects.
"""

import random
from typing import List, Optional, Sequence

from app.models.domain import MAX_REVIEWERS

_default_rng = random.Random()


def select_reviewers(
    candidates: Sequence[str],
    limit: int = MAX_REVIEWERS,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """
    Draw up to ``limit`` reviewers from ``candidates`` without replacement.
    Every subset of size ``min(limit, len(candidates))`` is equally likely.
    """
    if not candidates or limit <= 0:
        return []
    rng = rng or _default_rng
    return rng.sample(list(candidates), min(limit, len(candidates)))


def pick_replacement(
    candidates: Sequence[str],
    rng: Optional[random.Random] = None,
) -> Optional[str]:
    """One candidate chosen uniformly, or None for an empty pool."""
    if not candidates:
        return None
    return (rng or _default_rng).choice(list(candidates))
