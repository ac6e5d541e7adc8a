"""
Reporting and export utilities.
"""

from __future__ import annotations

import html
import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .badges import badge_for, overview_url
from .config import Endpoints
from .matrix import build_matrix, matrix_frame
from .models import LibraryState, MatrixRow
from .state import FAILED, is_loading, selected_versions
from .versions import build_range


logger = logging.getLogger(__name__)

TITLE = "release health"
DESCRIPTION = "Displays health of releases by listing dependabot compatibility scores"
EMPTY_PROMPT = "Enter a name and version range"


def safe_filename(package: str) -> str:
    """Turn a package name such as ``@scope/name`` into ``scope_name``."""
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", package.lstrip("@")).strip("_")
    return cleaned or "package"


def build_results(
    state: LibraryState,
    matrix: Optional[List[MatrixRow]] = None,
    endpoints: Optional[Endpoints] = None,
) -> Dict:
    """Collect the state and its matrix into a JSON-friendly dictionary."""
    endpoints = endpoints or Endpoints()
    if matrix is None:
        matrix = build_matrix(selected_versions(state))

    cells = []
    for row in matrix:
        for cell in row.populated_cells:
            badge = badge_for(state.name, cell.left, cell.right, endpoints)
            cells.append({
                "previous_version": cell.left,
                "new_version": cell.right,
                "badge_url": badge.image_url,
                "score_url": badge.link_url,
            })

    return {
        "package": state.name,
        "version_start": state.version_start,
        "version_end": state.version_end,
        "range": build_range(state.version_start, state.version_end) or "*",
        "versions_state": state.versions_state,
        "error": state.error,
        "num_published_versions": len(state.versions),
        "versions": [row.left for row in matrix],
        "cells": cells,
        "overview_url": overview_url(state.name, endpoints),
    }


def print_summary(results: Dict) -> None:
    logger.info("=" * 60)
    logger.info("RELEASE HEALTH")
    logger.info("=" * 60)
    logger.info("Package: %s", results["package"])
    logger.info("Range: %s", results["range"])
    logger.info("Published versions: %s", results["num_published_versions"])
    logger.info("Versions in range: %s", len(results["versions"]))
    logger.info("Compatibility scores: %s", len(results["cells"]))
    logger.info("=" * 60)


def _render_table(
    name: str, matrix: List[MatrixRow], endpoints: Endpoints
) -> List[str]:
    esc = html.escape
    lines = ["<table>", "<tbody>", "<tr>", "<td></td>"]
    lines.extend(f"<td>{esc(row.left)}</td>" for row in matrix)
    lines.append("</tr>")
    for row in matrix:
        lines.append("<tr>")
        lines.append(f"<td>{esc(row.left)}</td>")
        for cell in row.cells:
            if not cell.populated:
                lines.append("<td></td>")
                continue
            badge = badge_for(name, cell.left, cell.right, endpoints)
            lines.append(
                f'<td><a href="{esc(badge.link_url)}">'
                f'<img alt="{esc(badge.alt)}" title="{esc(badge.title)}" '
                f'src="{esc(badge.image_url)}"></a></td>'
            )
        lines.append("</tr>")
    lines.extend(["</tbody>", "</table>"])
    return lines


def render_html(
    state: LibraryState,
    matrix: Optional[List[MatrixRow]] = None,
    endpoints: Optional[Endpoints] = None,
) -> str:
    """Render the release health page for ``state``."""
    endpoints = endpoints or Endpoints()
    esc = html.escape
    if matrix is None:
        matrix = build_matrix(selected_versions(state))

    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{esc(TITLE)}: {esc(state.name)}</title>",
        "</head>",
        "<body>",
        f"<h1>{esc(TITLE)}</h1>",
        f"<p>{esc(DESCRIPTION)}</p>",
        "<h2>package information</h2>",
        "<dl>",
        f"<dt>package name</dt><dd>{esc(state.name)}</dd>",
        f"<dt>version start</dt><dd>{esc(state.version_start)}</dd>",
        f"<dt>version end</dt><dd>{esc(state.version_end)}</dd>",
        "</dl>",
    ]
    if is_loading(state):
        lines.append('<p class="loading">loading versions&hellip;</p>')
    elif state.versions_state == FAILED:
        lines.append(f'<p class="error">Could not load versions: {esc(state.error or "")}</p>')

    lines.append("<h2>compatibility scores</h2>")
    if not matrix or not state.name:
        lines.append(f"<p>{esc(EMPTY_PROMPT)}</p>")
    else:
        lines.extend(_render_table(state.name, matrix, endpoints))

    lines.extend([
        "<h3>more information</h3>",
        f'<a href="{esc(overview_url(state.name, endpoints))}">Score overview</a>',
        "</body>",
        "</html>",
    ])
    return "\n".join(lines) + "\n"


def save_html(page: str, output_dir: Path, package: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    html_file = output_dir / f"{safe_filename(package)}_release_health.html"
    html_file.write_text(page, encoding="utf-8")
    return html_file


def save_results_json(results: Dict, output_dir: Path, package: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / f"{safe_filename(package)}_results.json"
    with open(results_file, 'w') as f:
        json.dump(results, f, indent=2, default=str)
    return results_file


def badge_frame(
    package: str, matrix: List[MatrixRow], endpoints: Optional[Endpoints] = None
) -> pd.DataFrame:
    """Matrix of badge image URLs, blank where the pair is not an upgrade."""
    endpoints = endpoints or Endpoints()
    return matrix_frame(
        matrix,
        cell_value=lambda cell: badge_for(package, cell.left, cell.right, endpoints).image_url,
        empty="",
    )


def export_matrix_csv(
    package: str,
    matrix: List[MatrixRow],
    output_dir: Path,
    endpoints: Optional[Endpoints] = None,
) -> Optional[Path]:
    if not matrix:
        return None
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / f"{safe_filename(package)}_matrix.csv"
    badge_frame(package, matrix, endpoints).to_csv(csv_file)
    return csv_file


def export_matrix_excel(
    package: str,
    matrix: List[MatrixRow],
    output_dir: Path,
    endpoints: Optional[Endpoints] = None,
) -> Optional[Path]:
    if not matrix:
        return None
    output_dir.mkdir(parents=True, exist_ok=True)
    excel_file = output_dir / f"{safe_filename(package)}_matrix.xlsx"
    with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
        badge_frame(package, matrix, endpoints).to_excel(writer, sheet_name="badges")
        matrix_frame(matrix).to_excel(writer, sheet_name="populated")
    return excel_file
