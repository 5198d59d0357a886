"""Edit-distance similarity used for fuzzy matching.

Similarity is ``1 - levenshtein(a, b) / max(len(a), len(b))`` with unit
cost for insertions, deletions and substitutions. Comparison is
case-sensitive; callers lowercase romanized and English text themselves
and pass Devanagari through unchanged.
"""

from typing import Optional


class FuzzyMatcher:
    """Levenshtein-based string similarity."""

    def levenshtein_distance(self, s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return self.levenshtein_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]

    def similarity(self, s1: str, s2: str) -> float:
        """Calculate Levenshtein similarity (0 to 1)."""
        max_len = max(len(s1), len(s2))
        if max_len == 0:
            return 1.0
        distance = self.levenshtein_distance(s1, s2)
        return 1 - (distance / max_len)

    def similarity_upper_bound(self, s1: str, s2: str) -> float:
        """Best similarity two strings could reach given only their lengths.

        The edit distance is at least the length difference, so this bound
        lets a scan skip keys that cannot clear a threshold.
        """
        max_len = max(len(s1), len(s2))
        if max_len == 0:
            return 1.0
        return 1 - abs(len(s1) - len(s2)) / max_len

    def similarity_above(
        self,
        s1: str,
        s2: str,
        threshold: float,
        inclusive: bool = False
    ) -> Optional[float]:
        """Return the similarity if it clears ``threshold``, else None."""
        bound = self.similarity_upper_bound(s1, s2)
        if bound < threshold or (not inclusive and bound == threshold):
            return None
        score = self.similarity(s1, s2)
        if score > threshold or (inclusive and score == threshold):
            return score
        return None


_default_matcher = FuzzyMatcher()


def similarity(s1: str, s2: str) -> float:
    """Module-level shortcut for ``FuzzyMatcher().similarity``."""
    return _default_matcher.similarity(s1, s2)
