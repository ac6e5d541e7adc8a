"""
Pairwise compatibility matrix construction.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from .models import MatrixCell, MatrixRow
from .versions import npm_semver_key, sort_versions


def build_matrix(versions: Iterable[str]) -> List[MatrixRow]:
    """Build the upper-triangular matrix of version pairs.

    Versions are deduplicated and sorted ascending first. A cell is populated
    when its right version is not lower than its left version, so the
    diagonal is always populated.
    """
    ordered = sort_versions(versions)
    keys = {version: npm_semver_key(version) for version in ordered}

    rows = []
    for left in ordered:
        cells = tuple(
            MatrixCell(left=left, right=right, populated=not keys[right] < keys[left])
            for right in ordered
        )
        rows.append(MatrixRow(left=left, cells=cells))
    return rows


def populated_pairs(matrix: Iterable[MatrixRow]) -> Iterator[Tuple[str, str]]:
    """Yield (left, right) for every populated cell in row-major order."""
    for row in matrix:
        for cell in row.populated_cells:
            yield cell.left, cell.right


def matrix_frame(
    matrix: List[MatrixRow],
    cell_value: Optional[Callable[[MatrixCell], Any]] = None,
    empty: Any = False,
) -> pd.DataFrame:
    """Pivot the matrix into a DataFrame indexed by left and keyed by right version.

    Populated cells hold ``cell_value(cell)`` (True when no callable is given),
    placeholders hold ``empty``.
    """
    columns = [row.left for row in matrix]
    data = []
    for row in matrix:
        values = []
        for cell in row.cells:
            if not cell.populated:
                values.append(empty)
            elif cell_value is None:
                values.append(True)
            else:
                values.append(cell_value(cell))
        data.append(values)

    frame = pd.DataFrame(data, index=columns, columns=columns)
    frame.index.name = "previous_version"
    frame.columns.name = "new_version"
    return frame
