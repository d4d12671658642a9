#!/usr/bin/env python3
"""
Command line entry point for the campaign modeling engine.
Usage examples:
    # Run a brief and print a readable summary
    campaign-model run brief.json

    # Same run without calling the narrative provider, full JSON report
    campaign-model run brief.json --offline --json

    # Check a brief before running it
    campaign-model preflight brief.json

    # Write the merged benchmark tables to a file
    campaign-model benchmarks export merged_benchmarks.json --config-path overrides.json

    # Update a platform's base rates in the benchmark override file
    campaign-model benchmarks set --platform meta --base-cpm 4.5 --base-ctr 1.5

    # Show the benchmark entry of one platform
    campaign-model benchmarks show --platform google_ads
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .benchmarks import (
    default_benchmarks_path, load_benchmarks, normalize_key, save_benchmarks, update_benchmark_override
)
from .errors import CampaignModelingError
from .models import CampaignBrief
from .narrative import build_narrative_service, preflight_messages
from .orchestrator import run_campaign_sync
from .rules import preflight
from .settings import load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_brief(path: str) -> Dict[str, Any]:
    with open(path, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def format_report(report: Dict[str, Any]) -> str:
    """Format a campaign report for human-readable output"""
    totals = report["kpis"]["totals"]
    text = f"""
## Campaign Plan: {report['industry']}

{report['narrative']}

### Projected Totals
- **Budget**: {totals['budget']:,.2f}
- **Impressions**: {totals['impressions']:,}
- **Clicks**: {totals['clicks']:,}
- **Conversions**: {totals['conversions']:,}
- **Revenue**: {totals['revenue']:,.2f}
- **ROAS**: {totals['roas']:.2f}x
- **CAC**: {totals['cac']:,.2f}
- **Confidence**: {report['confidence']:.0%}

### Budget Allocation
"""
    budget = totals['budget'] or 1
    for platform, amount in sorted(report["budgetAllocation"].items(), key=lambda x: x[1], reverse=True):
        text += f"- **{platform}**: {amount:,.2f} ({amount / budget * 100:.1f}%)\n"

    if report["recommendations"]:
        text += "\n### Recommendations\n"
        for item in report["recommendations"]:
            text += f"- {item}\n"

    if report["uiWarnings"]:
        text += "\n### Warnings\n"
        for warning in report["uiWarnings"]:
            text += f"- [{warning['severity']}] {warning['message']}\n"

    if report["anomalies"]:
        text += "\n### Anomalies\n"
        for anomaly in report["anomalies"]:
            text += f"- [{anomaly['severity']}] {anomaly['message']}\n"

    mirror = report.get("competitorMirror")
    if mirror:
        text += f"\n### Competitor Mirror\n{mirror['summary']}\n"
        text += f"- Competitor ROAS: {mirror['kpis']['totals']['roas']:.2f}x\n"

    text += f"\nTrace id: {report['traceId']}"
    return text.strip()


# -----------------------------
# Commands
# -----------------------------
def cmd_run(args) -> int:
    settings = load_settings(args.settings)
    repository = load_benchmarks(args.benchmarks or settings.benchmarks_path)
    service = None if args.offline else build_narrative_service(settings)

    report = run_campaign_sync(load_brief(args.brief), repository, settings, service)
    if report.get("errors"):
        for error in report["errors"]:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(format_report(report))
    return 0


def cmd_preflight(args) -> int:
    settings = load_settings(args.settings)
    repository = load_benchmarks(args.benchmarks or settings.benchmarks_path)
    brief = CampaignBrief(**load_brief(args.brief))

    warnings = preflight(brief, repository, settings.max_seasons)
    if not warnings:
        print("No preflight warnings.")
        return 0
    if not args.offline:
        warnings = preflight_messages(warnings, build_narrative_service(settings))
    for warning in warnings:
        print(f"{warning.code} ({warning.severity}): {warning.message}")
    return 0


def cmd_benchmarks_set(args) -> int:
    values = {}
    for param in ['base_cpm', 'base_ctr', 'base_cvr', 'optimal_budget_min']:
        value = getattr(args, param)
        if value is not None:
            values[param] = value
    if not values:
        print("Nothing to update: pass at least one of --base-cpm, --base-ctr, --base-cvr, --optimal-budget-min")
        return 1

    update_benchmark_override(args.config_path, "platforms", args.platform, values)
    key = normalize_key(args.platform)
    for param, value in values.items():
        print(f"Updated {key}.{param} = {value}")
    print(f"Configuration saved to {args.config_path}")
    return 0


def cmd_benchmarks_show(args) -> int:
    repository = load_benchmarks(args.config_path)
    if args.platform:
        entry = repository.platform(args.platform)
        if entry is None:
            print(f"Unknown platform: {args.platform}", file=sys.stderr)
            return 1
        print(json.dumps({normalize_key(args.platform): entry.model_dump()}, indent=2))
    else:
        print(json.dumps(repository.tables.model_dump(), indent=2))
    return 0


def cmd_benchmarks_export(args) -> int:
    repository = load_benchmarks(args.config_path, strict=True)
    path = save_benchmarks(repository, args.output)
    print(f"Benchmarks written to {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    parser = argparse.ArgumentParser(prog="campaign-model", description="Campaign modeling engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", parents=[common], help="Run the full pipeline for a brief")
    run.add_argument('brief', help='Path to a campaign brief JSON file')
    run.add_argument('--benchmarks', help='Benchmark override JSON file')
    run.add_argument('--settings', help='Engine settings JSON file')
    run.add_argument('--json', action='store_true', help='Print the full JSON report')
    run.add_argument('--offline', action='store_true', help='Skip the narrative provider, use fallback texts')
    run.set_defaults(func=cmd_run)

    check = subparsers.add_parser("preflight", parents=[common], help="Print preflight warnings for a brief")
    check.add_argument('brief', help='Path to a campaign brief JSON file')
    check.add_argument('--benchmarks', help='Benchmark override JSON file')
    check.add_argument('--settings', help='Engine settings JSON file')
    check.add_argument('--offline', action='store_true', help='Keep the default warning messages')
    check.set_defaults(func=cmd_preflight)

    bench = subparsers.add_parser("benchmarks", help="Inspect or update benchmark tables")
    bench_sub = bench.add_subparsers(dest="benchmarks_command", required=True)

    set_cmd = bench_sub.add_parser("set", parents=[common], help="Update a platform in the override file")
    set_cmd.add_argument('--platform', required=True, help='Platform id (e.g., meta, google_ads, tiktok)')
    set_cmd.add_argument('--config-path', default=default_benchmarks_path(), help='Path to override file')
    set_cmd.add_argument('--base-cpm', dest='base_cpm', type=float, help='Base CPM')
    set_cmd.add_argument('--base-ctr', dest='base_ctr', type=float, help='Base CTR in percent')
    set_cmd.add_argument('--base-cvr', dest='base_cvr', type=float, help='Base CVR in percent')
    set_cmd.add_argument('--optimal-budget-min', dest='optimal_budget_min', type=float,
                         help='Smallest budget the platform performs well with')
    set_cmd.set_defaults(func=cmd_benchmarks_set)

    show = bench_sub.add_parser("show", parents=[common], help="Print benchmark tables as JSON")
    show.add_argument('--platform', help='Only show this platform')
    show.add_argument('--config-path', help='Override file to merge over the defaults')
    show.set_defaults(func=cmd_benchmarks_show)

    export = bench_sub.add_parser("export", parents=[common], help="Write the merged benchmark tables as JSON")
    export.add_argument('output', help='Destination JSON file')
    export.add_argument('--config-path', help='Override file to merge over the defaults')
    export.set_defaults(func=cmd_benchmarks_export)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO, format=LOG_FORMAT)
    try:
        return args.func(args)
    except (OSError, ValueError, ValidationError, CampaignModelingError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
