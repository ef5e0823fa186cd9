"""
Levenshtein edit distance between two token strings.
"""

import numpy as np


def edit_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions or
    substitutions turning ``a`` into ``b``.

    The table is laid out with ``b`` along the rows and ``a`` along the
    columns; the result is symmetric either way.

    Args:
        a: First string
        b: Second string

    Returns:
        Edit distance, ``len(b)`` when ``a`` is empty and vice versa
    """
    rows = len(b) + 1
    cols = len(a) + 1

    matrix = np.zeros((rows, cols), dtype=np.int64)
    matrix[:, 0] = np.arange(rows)
    matrix[0, :] = np.arange(cols)

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                matrix[i, j] = matrix[i - 1, j - 1]
            else:
                matrix[i, j] = 1 + min(
                    matrix[i - 1, j - 1],  # substitution
                    matrix[i, j - 1],      # insertion
                    matrix[i - 1, j]       # deletion
                )

    return int(matrix[rows - 1, cols - 1])
