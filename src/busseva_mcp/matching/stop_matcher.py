"""Fuzzy matching of destination queries against route stop names."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from busseva_mcp.models.routes import Route

# Queries (and query words) shorter than this never use edit distance
MIN_FUZZY_LENGTH = 3

# Upper bound on the distance of a "did you mean" suggestion
MAX_SUGGESTION_DISTANCE = 3

# Words too generic to identify a stop on their own
COMMON_WORDS = frozenset({
    "college", "school", "hospital", "station", "market",
    "road", "street", "park", "mall", "bus", "stop",
})

# Ratio check for 3-4 char single-word queries (MatchPolicy.short_word_ratio)
SHORT_WORD_MAX_LENGTH = 4
SHORT_WORD_MIN_RATIO = 0.75


def normalize(text: str) -> str:
    """Lower-case and trim surrounding whitespace.

    Example: "  Howrah Station " -> "howrah station"
    """
    return text.lower().strip()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two already-normalized strings.

    Dynamic programming over a (len(b)+1) x (len(a)+1) table where
    table[i][j] is the distance between b[:i] and a[:j]. Insertions,
    deletions and substitutions each cost 1.
    """
    table = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        table[i][0] = i
    for j in range(len(a) + 1):
        table[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j - 1],  # substitution
                    table[i][j - 1],  # insertion
                    table[i - 1][j],  # deletion
                )

    return table[len(b)][len(a)]


def word_threshold(word: str) -> int:
    """Maximum edit distance tolerated for one query word.

    Example: "howra" (5 chars) -> 1, "santragachi" (11 chars) -> 3
    """
    return max(1, len(word) // 3)


def suggestion_threshold(query: str) -> int:
    """Maximum edit distance for a stop to be offered as a suggestion."""
    return min(MAX_SUGGESTION_DISTANCE, math.ceil(len(query) / 2))


@dataclass(frozen=True)
class MatchPolicy:
    """Optional stricter rules layered on top of the default match policy.

    Attributes:
        guard_common_words: A query that is exactly one common word
            ("college", "station", ...) only matches stops where the word is
            qualified ("BT College") or part of a compound word.
        short_word_ratio: Single-word queries of 3-4 characters must reach a
            75% character match ratio against some stop word instead of the
            edit-distance threshold.
    """

    guard_common_words: bool = False
    short_word_ratio: bool = False


class StopMatcher:
    """Matches a destination query against the stops of a route corpus.

    Normalization and distance results are memoized on the instance, so a
    matcher should be created per request and discarded afterwards.

    Usage:
        matcher = StopMatcher()
        routes = matcher.find_matching_routes(corpus, "Howrah")
        if not routes:
            suggestions = matcher.suggest_stops(corpus, "Howrah", limit=3)
    """

    def __init__(self, policy: MatchPolicy | None = None) -> None:
        self.policy = policy or MatchPolicy()
        self._normalized: dict[str, str] = {}
        self._distances: dict[tuple[str, str], int] = {}

    def normalize(self, text: str) -> str:
        """Memoized normalize()."""
        result = self._normalized.get(text)
        if result is None:
            result = normalize(text)
            self._normalized[text] = result
        return result

    def distance(self, a: str, b: str) -> int:
        """Memoized edit_distance() on normalized strings."""
        # distance is symmetric, so one entry serves both orders
        key = (a, b) if a <= b else (b, a)
        result = self._distances.get(key)
        if result is None:
            result = edit_distance(a, b)
            self._distances[key] = result
        return result

    def is_fuzzy_match(self, query: str, candidate: str) -> bool:
        """Decide whether a stop name matches a query.

        Policy (in order):
        1. Queries under 3 chars match by containment only
        2. Containment of the whole query is a direct hit
        3. Multi-word queries need one word (3+ chars) contained in a stop word
        4. Every query word of 3+ chars must be within word_threshold() edits
           of some stop word; shorter words are skipped
        """
        query_normalized = self.normalize(query)
        candidate_normalized = self.normalize(candidate)

        if self.policy.guard_common_words and not self._is_qualified_common_word(
            query_normalized, candidate_normalized
        ):
            return False

        if len(query_normalized) < MIN_FUZZY_LENGTH:
            return query_normalized in candidate_normalized

        if query_normalized in candidate_normalized:
            return True

        query_words = query_normalized.split()
        candidate_words = candidate_normalized.split()

        if (
            self.policy.short_word_ratio
            and len(query_words) == 1
            and len(query_normalized) <= SHORT_WORD_MAX_LENGTH
        ):
            return self._best_match_ratio(query_normalized, candidate_words) >= SHORT_WORD_MIN_RATIO

        if len(query_words) > 1:
            has_exact_word = any(
                len(query_word) >= MIN_FUZZY_LENGTH
                and any(query_word in candidate_word for candidate_word in candidate_words)
                for query_word in query_words
            )
            if not has_exact_word:
                return False

        for query_word in query_words:
            if len(query_word) < MIN_FUZZY_LENGTH:
                continue
            max_distance = word_threshold(query_word)
            if not any(
                self.distance(query_word, candidate_word) <= max_distance
                for candidate_word in candidate_words
            ):
                return False

        return True

    def find_matching_routes(self, corpus: Sequence[Route], query: str) -> list[Route]:
        """Routes with at least one stop matching the query, in corpus order."""
        return [
            route
            for route in corpus
            if any(self.is_fuzzy_match(query, stop) for stop in route.stops)
        ]

    def distinct_stops(self, corpus: Sequence[Route]) -> list[str]:
        """All stop names in first-seen order, deduplicated on normalized text.

        The first spelling seen is kept.
        """
        seen: set[str] = set()
        stops: list[str] = []
        for route in corpus:
            for stop in route.stops:
                key = self.normalize(stop)
                if key not in seen:
                    seen.add(key)
                    stops.append(stop)
        return stops

    def suggestion_distance(self, query: str, stop: str) -> int:
        """Distance of a stop from the query for "did you mean" ranking.

        The smaller of the whole-name distance and the distance to the
        closest single word of the stop name, so "howra" is 1 away from
        "Howrah Station".
        """
        query_normalized = self.normalize(query)
        stop_normalized = self.normalize(stop)
        best = self.distance(query_normalized, stop_normalized)
        for word in stop_normalized.split():
            best = min(best, self.distance(query_normalized, word))
        return best

    def suggest_stops(self, corpus: Sequence[Route], query: str, limit: int = 3) -> list[str]:
        """Near-miss stop names for a query that matched no route.

        Stops within suggestion_threshold() are ordered by ascending distance,
        ties keep corpus order.
        """
        if limit < 1:
            return []

        max_distance = suggestion_threshold(self.normalize(query))
        scored: list[tuple[int, str]] = []
        for stop in self.distinct_stops(corpus):
            distance = self.suggestion_distance(query, stop)
            if distance <= max_distance:
                scored.append((distance, stop))

        # sort() is stable, so equal distances stay in first-seen order
        scored.sort(key=lambda item: item[0])
        return [stop for _, stop in scored[:limit]]

    def recommend_stops(self, corpus: Sequence[Route], query: str, limit: int = 5) -> list[str]:
        """Autocomplete candidates for a partially typed query.

        Queries under 2 chars return nothing. Up to 3 chars use containment,
        longer queries use is_fuzzy_match(). Stops containing the query rank
        first, then by ascending whole-name distance.
        """
        query_normalized = self.normalize(query)
        if len(query_normalized) < 2 or limit < 1:
            return []

        if len(query_normalized) <= MIN_FUZZY_LENGTH:
            candidates = [
                stop for stop in self.distinct_stops(corpus)
                if query_normalized in self.normalize(stop)
            ]
        else:
            candidates = [
                stop for stop in self.distinct_stops(corpus)
                if self.is_fuzzy_match(query_normalized, stop)
            ]

        def rank(stop: str) -> tuple[int, int]:
            stop_normalized = self.normalize(stop)
            contains = 0 if query_normalized in stop_normalized else 1
            return (contains, self.distance(query_normalized, stop_normalized))

        candidates.sort(key=rank)
        return candidates[:limit]

    def is_common_word(self, query: str) -> bool:
        """True if the query is exactly one of COMMON_WORDS."""
        return self.normalize(query) in COMMON_WORDS

    def general_stops(self, corpus: Sequence[Route], word: str, limit: int = 5) -> list[str]:
        """Stops that contain a generic word but are not just that word.

        Example: "college" -> ["BT College", "Medical College Gate", ...]
        """
        word_normalized = self.normalize(word)
        stops = [
            stop
            for stop in self.distinct_stops(corpus)
            if word_normalized in self.normalize(stop) and self.normalize(stop) != word_normalized
        ]
        return stops[:limit]

    def is_exact_stop(self, corpus: Sequence[Route], query: str) -> bool:
        """True if the query equals some stop name after normalization."""
        query_normalized = self.normalize(query)
        return any(self.normalize(stop) == query_normalized for stop in self.distinct_stops(corpus))

    def _is_qualified_common_word(self, query: str, candidate: str) -> bool:
        """Common-word guard; True when the query is not a bare common word."""
        if query not in COMMON_WORDS or candidate == query:
            return True

        candidate_words = candidate.split()
        # "busstand" qualifies "bus" as part of a compound word
        if any(query in word and word != query for word in candidate_words):
            return True

        # otherwise the word must appear with a qualifier, e.g. "bt college"
        return query in candidate_words and len(candidate_words) > 1

    def _best_match_ratio(self, query: str, candidate_words: list[str]) -> float:
        best = 0.0
        for word in candidate_words:
            if query in word:
                return 1.0
            distance = self.distance(query, word)
            # equals rapidfuzz Levenshtein.normalized_similarity
            best = max(best, 1 - distance / max(len(query), len(word)))
        return best


def is_fuzzy_match(query: str, candidate: str, policy: MatchPolicy | None = None) -> bool:
    """Convenience wrapper around StopMatcher.is_fuzzy_match()."""
    return StopMatcher(policy).is_fuzzy_match(query, candidate)


def find_matching_routes(
    corpus: Sequence[Route], query: str, policy: MatchPolicy | None = None
) -> list[Route]:
    """Convenience wrapper around StopMatcher.find_matching_routes()."""
    return StopMatcher(policy).find_matching_routes(corpus, query)


def suggest_stops(corpus: Sequence[Route], query: str, limit: int = 3) -> list[str]:
    """Convenience wrapper around StopMatcher.suggest_stops()."""
    return StopMatcher().suggest_stops(corpus, query, limit)
