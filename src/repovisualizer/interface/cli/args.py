from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the RepoVisualizer CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="repovisualizer",
        description=(
            "Build a containment graph and an annotated, paginated report "
            "from a flat repository listing."
        ),
    )

    # --- Listing Source ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-i", "--input",
        dest="input_file",
        default=None,
        help="JSON listing file: an array of {path, type} or a GitHub tree payload.",
    )
    source.add_argument(
        "-u", "--url",
        dest="repo_url",
        default=None,
        help="GitHub repository URL to fetch the recursive listing from.",
    )
    p.add_argument(
        "--name",
        dest="repo_name",
        default=None,
        help="Repository title for the report (defaults to the source name).",
    )

    # --- Output Management ---
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory receiving the generated artifacts.",
    )
    p.add_argument(
        "--prefix",
        dest="output_prefix",
        default=None,
        help="Filename prefix for the generated artifacts.",
    )
    p.add_argument("--no-json", action="store_true", help="Do not write the graph JSON.")
    p.add_argument("--html", action="store_true", help="Also write a standalone 3D HTML viewer.")
    p.add_argument("--no-report", action="store_true", help="Do not write the text report.")
    p.add_argument("--report-json", action="store_true", help="Also write the report pages as JSON.")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Build everything without writing files.",
    )

    # --- Annotation & Layout ---
    p.add_argument(
        "--annotations",
        dest="annotations_file",
        default=None,
        help="JSON file with extra annotation names and extension rules.",
    )
    p.add_argument(
        "--page-capacity",
        dest="page_capacity",
        type=int,
        default=None,
        help="Maximum vertical offset of a row on a report page.",
    )

    # --- Console Previews ---
    p.add_argument("--print-tree", action="store_true", help="Print the ASCII tree.")
    p.add_argument("--print-report", action="store_true", help="Print the text report.")

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration as the new defaults.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the execution summary as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--save-log",
        action="store_true",
        help="Also write a rotating log file in the user data directory.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset. None means "not set".
    """
    overrides: Dict[str, Any] = {}

    overrides["source"] = args.repo_url or args.input_file
    overrides["repo_name"] = args.repo_name
    overrides["output_dir"] = args.output_dir
    overrides["output_prefix"] = args.output_prefix
    overrides["annotations_file"] = args.annotations_file
    overrides["page_capacity"] = args.page_capacity

    if args.no_json:
        overrides["export_graph_json"] = False
    if args.html:
        overrides["export_graph_html"] = True
    if args.no_report:
        overrides["export_report"] = False
    if args.report_json:
        overrides["export_report_json"] = True
    if args.print_tree:
        overrides["print_tree"] = True
    if args.print_report:
        overrides["print_report"] = True

    return overrides
