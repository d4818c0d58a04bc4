from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, merging of
configuration sources (defaults, persistent storage and CLI overrides),
pipeline execution and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from repovisualizer.core.pipeline.engine import run_pipeline
from repovisualizer.core.pipeline.stages.validator import validate_config
from repovisualizer.core.report.renderer import render_report_lines
from repovisualizer.domain.config import get_default_config, load_config, save_config
from repovisualizer.domain.pipeline_models import PipelineResult
from repovisualizer.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from repovisualizer.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_file = get_default_log_path() if args.save_log else None
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(clean_conf)
        logger.info("Configuration persisted.")
        if not clean_conf["source"] and not args.dump_config:
            return EXIT_OK

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not clean_conf["source"]:
        msg = "No listing source given. Use --input FILE or --url URL."
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_USAGE

    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Execution interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if args.json_output:
        print(json.dumps(result.to_summary_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, print_report=clean_conf["print_report"])

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only keys already known to the base configuration are merged and unset
    (None) overrides are ignored.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult, print_report: bool = False) -> None:
    """
    Format and print the execution result to the standard output.

    Args:
        result: The pipeline result to render.
        print_report: Also print the full text report.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    print(f"Repository: {result.repo_name}")
    print(f"Entries: {result.entry_count}")
    print(f"Graph: {summary.get('nodes', 0)} nodes, {summary.get('edges', 0)} links")
    print(f"Report: {summary.get('pages', 0)} pages")

    conflicts = summary.get("conflicts") or []
    if conflicts:
        print(f"Kind conflicts ({len(conflicts)}):")
        for path in conflicts:
            print(f"  - {path}")

    if result.generated_files:
        print("\nGenerated files:")
        for key, path in result.generated_files.items():
            print(f"  - {key}: {path}")

    if result.tree_lines:
        print()
        print("\n".join(result.tree_lines))

    if print_report and result.report is not None:
        print()
        print("\n".join(render_report_lines(result.report)))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
