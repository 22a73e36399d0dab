"""
search.py — Keyword Matching & Ranking
---------------------------------------

Maps a free-text query to a ranked list of catalog keywords using a
three-tier policy:

1. Exact keyword match (highest)
2. Exact alias (OtherKeywords) match
3. Fuzzy token match: each query token is compared against every word of the
   keyword and its aliases by equality, substring containment, then
   Levenshtein distance

Fuzzy score = matched_tokens * token_weight
              - round(distance_weight * distance_sum / token_count)

Results are ordered by tier, then score, then index order, so repeated
searches against the same index always return the same list.

Project: Field Guide
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum

from core.catalog import Category, Scope
from core.distance import levenshtein
from core.normalize import normalize, tokenize


class MatchTier(IntEnum):
    FUZZY = 0
    ALIAS = 1
    KEYWORD = 2


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Tunable constants of the ranking heuristic.
    """
    keyword_score: int = 10000
    alias_score: int = 9000
    token_weight: int = 100
    distance_weight: int = 10
    max_token_distance: int = 1


DEFAULT_POLICY = ScoringPolicy()


@dataclass(frozen=True)
class MatchResult:
    keyword: str
    category: Category
    score: int
    tier: MatchTier = MatchTier.FUZZY


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def entry_words(entry) -> set[str]:
    """
    All normalized words of an entry's keyword and aliases.
    """
    words = set(tokenize(entry.keyword))
    for alias in entry.aliases:
        words.update(tokenize(alias))
    return words


def best_token_distance(token: str, words) -> float:
    """
    Smallest distance between a query token and any candidate word.
    Equality and substring containment in either direction count as 0.
    Returns math.inf when there are no words to compare against.
    """
    best = math.inf
    for word in words:
        if token == word or token in word or word in token:
            return 0
        best = min(best, levenshtein(token, word))
    return best


def fuzzy_score(tokens, words, policy=DEFAULT_POLICY):
    """
    Score an entry's words against the query tokens.

    Returns:
        int | None: Score, or None when no token matched within the distance threshold.
    """
    if not tokens:
        return None

    token_matches = 0
    distance_sum = 0
    for token in tokens:
        distance = best_token_distance(token, words)
        if distance == math.inf:
            continue
        distance_sum += distance
        if distance <= policy.max_token_distance:
            token_matches += 1

    if token_matches == 0:
        return None
    penalty = round_half_up(policy.distance_weight * distance_sum / len(tokens))
    return token_matches * policy.token_weight - penalty


def _candidates(index, scope):
    if hasattr(index, "in_scope"):
        return index.in_scope(scope)
    parsed = Scope.parse(scope)
    if parsed is None or not isinstance(index, Mapping):
        return []
    return [entry for entry in index.values() if parsed.includes(entry.category)]


def search(query, scope, index, policy=DEFAULT_POLICY) -> list[MatchResult]:
    """
    Rank the entries of `index` that match `query` within `scope`.

    Args:
        query (str): Raw user query.
        scope (Scope | str): "All" or a category name.
        index (KeywordIndex | Mapping[str, KeywordEntry]): Keyword index.
        policy (ScoringPolicy): Scoring constants.

    Returns:
        list[MatchResult]: Best match first; empty when nothing matches.
    """
    normalized_query = normalize(query)
    if not normalized_query:
        return []
    tokens = tokenize(normalized_query)

    scored = []
    for position, entry in enumerate(_candidates(index, scope)):
        if normalize(entry.keyword) == normalized_query:
            result = MatchResult(entry.keyword, entry.category, policy.keyword_score, MatchTier.KEYWORD)
        elif any(normalize(alias) == normalized_query for alias in entry.aliases):
            result = MatchResult(entry.keyword, entry.category, policy.alias_score, MatchTier.ALIAS)
        else:
            score = fuzzy_score(tokens, entry_words(entry), policy)
            if score is None:
                continue
            result = MatchResult(entry.keyword, entry.category, score, MatchTier.FUZZY)
        scored.append((position, result))

    scored.sort(key=lambda item: (-item[1].tier, -item[1].score, item[0]))

    seen = set()
    results = []
    for _, result in scored:
        if result.keyword in seen:
            continue
        seen.add(result.keyword)
        results.append(result)
    return results
