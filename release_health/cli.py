"""
Command-line interface for the release health tool.
"""

import argparse
import logging
import sys
from pathlib import Path

import requests

from .config import Endpoints
from .matrix import build_matrix
from .reporting import (
    build_results,
    export_matrix_csv,
    export_matrix_excel,
    print_summary,
    render_html,
    save_html,
    save_results_json,
)
from .resolvers import NpmRegistryClient, RegistryError
from .session import ReleaseHealthSession
from .state import selected_versions, version_choices
from .versions import NO_VERSION


logger = logging.getLogger(__name__)

FORMATS = ["html", "json", "csv", "xlsx"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Display dependabot compatibility scores between releases of an npm package"
    )

    parser.add_argument(
        "--package",
        required=True,
        help="The name of the npm package, e.g. @material-ui/core"
    )

    parser.add_argument(
        "--start",
        default=NO_VERSION,
        help="First version of the range. Default: none (unbounded)"
    )

    parser.add_argument(
        "--end",
        default=NO_VERSION,
        help="Last version of the range. Default: none (unbounded)"
    )

    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=FORMATS,
        help="Output format, may be repeated. Default: html"
    )

    parser.add_argument(
        "--list-versions",
        action="store_true",
        help="Print the published versions, newest first, and exit"
    )

    parser.add_argument(
        "--output-dir",
        default="./output",
        help="Output directory for results. Default: ./output"
    )

    parser.add_argument(
        "--registry-url",
        default=None,
        help="npm registry base URL. Default: https://registry.npmjs.org"
    )

    parser.add_argument(
        "--proxy-url",
        default=None,
        help="Prefix put in front of the registry URL; pass '' to skip the proxy"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.package.strip():
        parser.error("--package must not be empty")

    endpoints = Endpoints().with_overrides(
        registry_url=args.registry_url,
        proxy_url=args.proxy_url,
    )
    formats = args.formats or ["html"]
    output_dir = Path(args.output_dir)

    with ReleaseHealthSession(NpmRegistryClient(endpoints)) as session:
        session.change_name(args.package.strip())
        try:
            session.load_versions()
        except (requests.RequestException, RegistryError) as e:
            print(f"Error: could not load versions of {args.package}: {e}", file=sys.stderr)
            sys.exit(1)

        choices = version_choices(session.state)
        if args.list_versions:
            for version in choices[1:]:
                print(version)
            return

        for endpoint in (args.start, args.end):
            if endpoint not in choices:
                logger.warning("%s is not a published version of %s", endpoint, args.package)

        state = session.select_range(args.start, args.end)

    matrix = build_matrix(selected_versions(state))
    results = build_results(state, matrix, endpoints)
    print_summary(results)

    if not matrix:
        print("No versions in range. Enter a name and version range.")

    written = []
    if "html" in formats:
        written.append(save_html(render_html(state, matrix, endpoints), output_dir, state.name))
    if "json" in formats:
        written.append(save_results_json(results, output_dir, state.name))
    if "csv" in formats:
        written.append(export_matrix_csv(state.name, matrix, output_dir, endpoints))
    if "xlsx" in formats:
        written.append(export_matrix_excel(state.name, matrix, output_dir, endpoints))

    for path in written:
        if path is not None:
            print(f"Saved: {path}")


if __name__ == "__main__":
    main()
