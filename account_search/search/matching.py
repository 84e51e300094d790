"""Fuzzy "did you mean" matching for account field values.

Scores every account against a search term with an additive heuristic and
returns the best few distinct values. Used when a query finds nothing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from account_search.accounts import Account
from account_search.search.fields import MAX_SUGGESTIONS, resolve_field

# ---------------------------------------------------------------------------
# Score weights
# ---------------------------------------------------------------------------

EXACT_BONUS = 1000
PREFIX_BONUS = 500
SUBSTRING_BONUS = 200
SUBSEQUENCE_BONUS = 150
CONSECUTIVE_RUN_BONUS = 20
OVERLAP_WEIGHT = 50
WORD_PREFIX_BONUS = 100
WORD_SUBSTRING_BONUS = 50
LONG_LENGTH_DIFF = 10


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def subsequence_run(value: str, term: str) -> int | None:
    """Scan ``value`` for the characters of ``term`` in order.

    Returns the longest streak of immediately successive matches seen during
    the scan, or None if ``term`` is not a subsequence of ``value``. The
    streak resets on every mismatch, and the scan stops as soon as the last
    character of ``term`` has been found.
    """
    term_index = 0
    run = 0
    longest = 0
    for char in value:
        if term_index >= len(term):
            break
        if char == term[term_index]:
            run += 1
            longest = max(longest, run)
            term_index += 1
        else:
            run = 0
    if term_index < len(term):
        return None
    return longest


def score_candidate(value: str, term: str) -> float:
    """Score how closely ``value`` resembles ``term``. Higher is better.

    Both strings are compared case-insensitively. ``term`` must be non-empty.
    """
    value = value.lower()
    term = term.lower()
    score = 0.0

    if value == term:
        score += EXACT_BONUS
    if value.startswith(term):
        score += PREFIX_BONUS
    if term in value:
        score += SUBSTRING_BONUS

    run = subsequence_run(value, term)
    if run is not None:
        score += SUBSEQUENCE_BONUS + run * CONSECUTIVE_RUN_BONUS

    term_chars = set(term)
    overlap = sum(1 for char in value if char in term_chars)
    score += overlap / len(term) * OVERLAP_WEIGHT

    for word in value.split():
        if word.startswith(term):
            score += WORD_PREFIX_BONUS
        if term in word:
            score += WORD_SUBSTRING_BONUS

    length_diff = abs(len(value) - len(term))
    if length_diff > LONG_LENGTH_DIFF:
        score -= length_diff * 2
    else:
        score -= length_diff

    return score


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoredAccount:
    """An account with its match score for one field."""

    account: Account
    value: str
    score: float


def rank_candidates(term: str, accounts: Iterable[Account], field: str) -> list[ScoredAccount]:
    """Score every account on ``field`` and order by score, best first.

    Equal scores keep their input order. Non-positive scores are dropped.
    """
    field_name = resolve_field(field)
    scored: list[ScoredAccount] = []
    for account in accounts:
        value = account.text(field_name)
        scored.append(ScoredAccount(account, value, score_candidate(value, term)))
    scored.sort(key=lambda s: s.score, reverse=True)
    return [s for s in scored if s.score > 0]


def closest_candidates(
    search_term: str,
    accounts: Iterable[Account],
    field: str,
    limit: int = MAX_SUGGESTIONS,
) -> list[ScoredAccount]:
    """Like find_closest_matches, but keep each account's value and score."""
    if not search_term:
        return []

    seen: set[str] = set()
    unique: list[ScoredAccount] = []
    for candidate in rank_candidates(search_term, accounts, field):
        key = candidate.value.lower().strip()
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
        if len(unique) >= limit:
            break
    return unique


def find_closest_matches(
    search_term: str,
    accounts: Iterable[Account],
    field: str,
    limit: int = MAX_SUGGESTIONS,
) -> list[Account]:
    """Return up to ``limit`` accounts whose ``field`` best matches the term.

    Accounts sharing a field value (ignoring case and surrounding whitespace)
    are suggested once, keeping the highest ranked one.

    Args:
        search_term: What the user searched for. Empty returns no matches.
        accounts: Accounts to draw suggestions from.
        field: Field name or alias to compare.
        limit: Maximum number of suggestions.

    Returns:
        Accounts in descending score order.
    """
    return [c.account for c in closest_candidates(search_term, accounts, field, limit)]
