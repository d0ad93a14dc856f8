# src/a11yscan/cli.py
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from tqdm import tqdm

from a11yscan.analyzer import AccessibilityAnalyzer
from a11yscan.utils.config_manager import config_manager
from a11yscan.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["fileName", "type", "severity", "message", "element"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="a11yscan", description="Scan HTML files for accessibility issues.")
    parser.add_argument(
        "--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
        help="Overrides a setting for this run, e.g. --set logging.level=DEBUG (repeatable)."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan one or more HTML files.")
    scan.add_argument("files", nargs="+", help="Paths of the HTML files to scan.")
    scan.add_argument("--summary", action="store_true", help="Print one summary line per file instead of JSON.")
    scan.add_argument("--csv", dest="csv_path", help="Write all issues of all files to this CSV file.")
    scan.add_argument("--log-level", default=None, help="Overrides the configured log level.")

    subparsers.add_parser("config", help="Print the effective configuration as JSON.")
    return parser


def scan_file(analyzer: AccessibilityAnalyzer, path: Path) -> Dict[str, Any]:
    """Scans one file and returns the result envelope with the file name attached."""
    html = path.read_text(encoding="utf-8", errors="replace")
    result = analyzer.analyze(html)
    for failure in result.rule_errors:
        logger.warning(f"Rule '{failure.rule}' skipped for {path}: {failure.message}")
    payload = result.to_dict()
    payload["fileName"] = path.name
    return payload


def export_csv(results: List[Dict[str, Any]], csv_path: str) -> int:
    """Flattens the issues of all results into one CSV; returns the row count."""
    rows = [
        {"fileName": res["fileName"], **issue}
        for res in results
        for issue in res["issues"]
    ]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    df.to_csv(csv_path, index=False)
    return len(df)


def handle_scan(args: argparse.Namespace) -> int:
    """
    Scans every file given on the command line.

    Returns:
        0 when all files were scanned, 1 if any file could not be read or parsed.
    """
    analyzer = AccessibilityAnalyzer()
    results: List[Dict[str, Any]] = []
    exit_code = 0

    for name in tqdm(args.files, desc="Scanning", unit="file", disable=len(args.files) < 2):
        path = Path(name)
        try:
            payload = scan_file(analyzer, path)
        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            exit_code = 1
            continue
        except Exception as e:
            logger.error(f"Failed to analyze {path}: {e}", exc_info=True)
            exit_code = 1
            continue

        results.append(payload)
        if args.summary:
            tqdm.write(f"{payload['fileName']}: score {payload['score']} ({payload['totalIssues']} issues)")
        else:
            tqdm.write(json.dumps(payload, indent=2))

    if args.csv_path:
        count = export_csv(results, args.csv_path)
        logger.info(f"Exported {count} issues to {args.csv_path}")

    return exit_code


def handle_config(_args: argparse.Namespace) -> int:
    """Prints the merged settings, including any --set overrides."""
    print(json.dumps(config_manager.get_all(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config_manager.apply_overrides(args.overrides)
    except ValueError as e:
        parser.error(str(e))

    log_level = getattr(args, "log_level", None)
    configure_logger(
        general_level=log_level or config_manager.get_nested("logging.level", "INFO"),
        module_specific_levels=None if log_level else config_manager.get_nested("logging.modules", {}),
        silenced_loggers=config_manager.get_nested("logging.silenced", {})
    )

    if args.command == "scan":
        return handle_scan(args)
    if args.command == "config":
        return handle_config(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())
