from rapidfuzz.distance import OSA


def damerau_levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance counting insertions, deletions, substitutions and
    transpositions of two adjacent characters, each at cost 1.

    This is the optimal string alignment variant: a substring is never
    edited again after being transposed.
    """
    return OSA.distance(a or "", b or "")
