"""Edit distance between short strings."""


def edit_distance(a: str, b: str) -> int:
    """
    Compute the Levenshtein distance between two strings.

    Characters are compared exactly, so callers that want case-insensitive
    matching must normalize first.

    Args:
        a: Source string
        b: Target string

    Returns:
        Minimum number of single-character insertions, deletions or
        substitutions needed to turn a into b
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    # matrix[j][i] = distance between b[:j] and a[:i]
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j][i - 1] + 1,  # deletion
                matrix[j - 1][i] + 1,  # insertion
                matrix[j - 1][i - 1] + cost,  # substitution
            )

    return matrix[len(b)][len(a)]
