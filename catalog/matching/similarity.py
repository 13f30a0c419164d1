"""String similarity used for duplicate detection.

Scores are in [0, 1] and symmetric. Inputs are expected to be normalized
matching keys (see catalog.normalization), so no case folding happens here.
"""

from rapidfuzz.distance import Levenshtein

# Score given when one key is contained in the other ("acme" vs "acmecloud")
CONTAINMENT_SCORE = 0.9


def similarity_score(a: str, b: str) -> float:
    """Compute the similarity between two normalized strings.

    Rules, in order:
    1. Equal strings score 1.0
    2. An empty string scores 0.0 against anything else
    3. One string containing the other scores 0.9
    4. Otherwise 1 - edit_distance / max(len(a), len(b))

    Args:
        a: First normalized string
        b: Second normalized string

    Returns:
        Similarity in [0, 1]

    Example:
        >>> similarity_score("acme", "acmecorp")
        0.9
        >>> round(similarity_score("backend engineer", "backend enginer"), 3)
        0.938
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    if a in b or b in a:
        return CONTAINMENT_SCORE

    longest = max(len(a), len(b))
    return 1.0 - Levenshtein.distance(a, b) / longest
