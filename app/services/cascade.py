# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Deactivation cascade planning — pure computation, no I/O.

Given the open PRs touched by a batch of deactivated users and the pool of
teammates that stay active, decide who takes over authorship and which
reviewers fill the freed seats. Replacements are handed out round-robin from
one cursor shared by the author and reviewer passes, so a single batch spreads
the load over the whole remaining pool.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from app.models.domain import MAX_REVIEWERS

AUTHOR = "reassign_author"
REMOVE = "remove_reviewer"
ADD = "add_reviewer"


@dataclass
class CascadePlan:
    # (action, pull_request_id, user_id), in application order
    steps: List[Tuple[str, str, str]] = field(default_factory=list)
    author_reassignments: int = 0
    reviewer_replacements: int = 0
    skipped_authors: List[str] = field(default_factory=list)

    @property
    def reassigned_count(self) -> int:
        return self.author_reassignments + self.reviewer_replacements


def next_candidate(
    pool: Sequence[str], cursor: int, exclude: Set[str]
) -> Tuple[Optional[str], int]:
    """
    Return the first pool member at or after ``cursor`` (wrapping) that is not
    excluded, together with the advanced cursor. The cursor is unchanged when
    nobody qualifies.
    """
    size = len(pool)
    for offset in range(size):
        idx = (cursor + offset) % size
        if pool[idx] not in exclude:
            return pool[idx], (idx + 1) % size
    return None, cursor


def plan_cascade(
    deactivated: Iterable[str],
    remaining: Sequence[str],
    authored: Iterable[Dict[str, Any]],
    reviewed: Dict[str, List[Dict[str, Any]]],
) -> CascadePlan:
    """
    Build the ordered list of ledger changes for one deactivation batch.

    ``authored`` are the open PRs whose author is deactivated, ``reviewed``
    the open PRs grouped by deactivated reviewer. PR dicts are not mutated.
    """
    order = list(dict.fromkeys(deactivated))
    gone = set(order)
    plan = CascadePlan()
    cursor = 0
    state: Dict[str, Dict[str, Any]] = {}

    def track(pr: Dict[str, Any]) -> Dict[str, Any]:
        return state.setdefault(pr["pull_request_id"], {
            "author_id": pr["author_id"],
            "reviewers": list(pr["assigned_reviewers"]),
        })

    for pr in authored:
        pr_id = pr["pull_request_id"]
        current = track(pr)
        if current["author_id"] not in gone:
            continue
        pick, cursor = next_candidate(remaining, cursor, set(current["reviewers"]))
        if pick is None:
            plan.skipped_authors.append(pr_id)
            continue
        current["author_id"] = pick
        plan.steps.append((AUTHOR, pr_id, pick))
        plan.author_reassignments += 1

    for reviewer_id in order:
        for pr in reviewed.get(reviewer_id, []):
            pr_id = pr["pull_request_id"]
            current = track(pr)
            if reviewer_id not in current["reviewers"]:
                continue
            current["reviewers"].remove(reviewer_id)
            plan.steps.append((REMOVE, pr_id, reviewer_id))
            if len(current["reviewers"]) >= MAX_REVIEWERS:
                continue
            taken = set(current["reviewers"]) | {current["author_id"]}
            pick, cursor = next_candidate(remaining, cursor, taken)
            if pick is None:
                continue
            current["reviewers"].append(pick)
            plan.steps.append((ADD, pr_id, pick))
            plan.reviewer_replacements += 1

    return plan
