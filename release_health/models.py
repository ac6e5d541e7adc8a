"""
Core data models for release health.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class MatrixCell:
    """One (left, right) pair of the compatibility matrix."""

    left: str
    right: str
    populated: bool


@dataclass(frozen=True)
class MatrixRow:
    """A matrix row: every cell sharing the same left version."""

    left: str
    cells: Tuple[MatrixCell, ...]

    @property
    def populated_cells(self) -> Tuple[MatrixCell, ...]:
        return tuple(cell for cell in self.cells if cell.populated)


@dataclass(frozen=True)
class LibraryState:
    """Everything known about the package currently being inspected."""

    name: str
    versions: Tuple[str, ...] = ()
    version_start: str = "none"
    version_end: str = "none"
    versions_state: str = "done"
    error: Optional[str] = None


@dataclass(frozen=True)
class Badge:
    """A compatibility badge image and the score page it links to."""

    image_url: str
    link_url: str
    alt: str
    title: str
