from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nexus_toolkit import __version__
from nexus_toolkit.config import LOG_LEVELS, Settings, get_settings
from nexus_toolkit.errors import BridgeLoadError
from nexus_toolkit.logging import configure_logging, get_logger
from nexus_toolkit.report import ReportFormat, generate_report
from nexus_toolkit.results import ToolkitAudit

logger = get_logger(__name__)

FORMATS = [f.value for f in ReportFormat]


def _write_output(text: str, *, out_path: str | None) -> None:
    if not text.endswith("\n"):
        text += "\n"
    if out_path is None:
        sys.stdout.write(text)
        return
    Path(out_path).write_text(text, encoding="utf-8")
    sys.stdout.write(f"Wrote report: {out_path}\n")


def _load_json_file(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Could not read {path}: {exc}") from exc


def _cmd_run(args: argparse.Namespace, settings: Settings) -> int:
    from nexus_toolkit.api import run
    from nexus_toolkit.caller import is_live_mode, load_bridge

    if not is_live_mode(settings):
        sys.stderr.write("Set NEXUS_LIVE=true to run against a live MCP server.\n")
        sys.stderr.write("Usage: NEXUS_LIVE=true nexus-toolkit run --bridge live_bridge:create_mcp_caller\n")
        return 1

    # Bridge modules are user files; resolve them from the working directory.
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    bridge = args.bridge or settings.bridge
    try:
        caller = load_bridge(bridge)
    except BridgeLoadError as exc:
        sys.stderr.write(f"{exc}\n")
        sys.stderr.write("Create a bridge module that exports create_mcp_caller().\n")
        return 1

    sys.stderr.write("Running toolkit audit against live MCP server...\n")
    audit = run(caller=caller)
    _write_output(generate_report(audit, args.format or settings.report_format), out_path=args.out)
    return 0 if audit.ok else 1


def _cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    data = _load_json_file(args.report)
    try:
        audit = ToolkitAudit.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise SystemExit(f"Not a toolkit audit report: {args.report}: {exc}") from exc
    _write_output(generate_report(audit, args.format or settings.report_format), out_path=args.out)
    return 0 if audit.ok else 1


def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    from nexus_toolkit.schemas import SchemaRegistry

    registry = SchemaRegistry()
    if args.contract not in registry.contracts:
        raise SystemExit(f"Unknown contract {args.contract!r} (choose from: {', '.join(registry.names())})")
    errors = registry.validate(_load_json_file(args.payload), contract=args.contract)
    logger.info("payload_validated", contract=args.contract, payload=args.payload, errors=len(errors))
    if errors:
        lines = [f"FAIL {args.contract}: {args.payload}"] + [f"    - {e}" for e in errors]
        sys.stdout.write("\n".join(lines) + "\n")
        return 1
    sys.stdout.write(f"PASS {args.contract}: {args.payload}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="nexus-toolkit")
    parser.add_argument("--version", action="version", version=f"nexus-toolkit {__version__}")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Override NEXUS_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_output_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument("--format", choices=FORMATS, help="Report format (default: NEXUS_REPORT_FORMAT or text)")
        p.add_argument("--out", type=str, help="Write report to file instead of stdout")

    run_parser = sub.add_parser("run", help="Run the toolkit audit against a live MCP server")
    run_parser.add_argument("--bridge", type=str, help="Bridge factory as module:function (default: NEXUS_BRIDGE)")
    add_output_flags(run_parser)

    render = sub.add_parser("render", help="Render a saved JSON audit report")
    render.add_argument("report", type=str)
    add_output_flags(render)

    validate = sub.add_parser("validate", help="Validate a captured payload against a tool contract")
    validate.add_argument("contract", type=str, help="e.g. registry_import.response")
    validate.add_argument("payload", type=str, help="Path to a JSON file")

    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        raise SystemExit(f"Invalid NEXUS_* settings:\n{exc}") from exc
    configure_logging(args.log_level or settings.log_level, settings.log_format)

    handlers = {"run": _cmd_run, "render": _cmd_render, "validate": _cmd_validate}
    return handlers[args.command](args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
