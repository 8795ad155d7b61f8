"""Main CLI entry point."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from vuce_dashboard.models.row import CanonicalRow


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="vuce-dashboard", description="VUCE requirements tracking dashboard")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    source_parent = argparse.ArgumentParser(add_help=False)
    source_parent.add_argument(
        "--url",
        type=str,
        default=None,
        help="Webhook URL (default: $VUCE_WEBHOOK_URL or the built-in endpoint)",
    )
    source_parent.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Read a saved raw webhook payload (JSON array) instead of fetching",
    )
    source_parent.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON to file (default: stdout)",
    )

    # fetch
    subparsers.add_parser("fetch", parents=[source_parent], help="Fetch and normalize records")

    # filter
    filter_parser = subparsers.add_parser("filter", parents=[source_parent], help="Filter records by spec")
    filter_parser.add_argument(
        "--spec",
        type=Path,
        default=None,
        help="Path to filter spec YAML (default: no filters)",
    )
    filter_parser.add_argument(
        "--page",
        type=int,
        default=None,
        help="Return only this 1-based page of results",
    )
    filter_parser.add_argument(
        "--page-size",
        type=int,
        default=10,
        help="Rows per page when --page is given (default: 10)",
    )
    filter_parser.add_argument(
        "--show-explanations",
        action="store_true",
        help="Include per-rule explanations for every row",
    )

    # summary
    summary_parser = subparsers.add_parser("summary", parents=[source_parent], help="KPI and chart aggregates")
    summary_parser.add_argument(
        "--spec",
        type=Path,
        default=None,
        help="Filter spec YAML applied before aggregating",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "fetch":
        _run_fetch(args)
    elif args.command == "filter":
        _run_filter(args)
    elif args.command == "summary":
        _run_summary(args)
    else:
        parser.print_help()


async def _load_from_webhook(url: Optional[str]) -> list[CanonicalRow]:
    from vuce_dashboard.connectors import WebhookConnector
    from vuce_dashboard.loader import DataLoader
    from vuce_dashboard.settings import LoaderSettings

    settings = LoaderSettings.from_env()
    if url:
        settings = settings.model_copy(update={"webhook_url": url})

    async with WebhookConnector(settings) as connector:
        state = await DataLoader(connector).refetch()
    if state.error is not None:
        print(f"Error al cargar datos: {state.error}", file=sys.stderr)
        raise SystemExit(1)
    return state.data


def _load_rows(args: argparse.Namespace) -> list[CanonicalRow]:
    """Rows from --input (raw payload file) or the webhook."""
    if args.input:
        from vuce_dashboard.normalization import map_records

        try:
            payload = json.loads(args.input.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise SystemExit(f"Cannot read {args.input}: {e}")
        if not isinstance(payload, list):
            raise SystemExit(f"{args.input} must contain a JSON array of records")
        return map_records(r for r in payload if isinstance(r, dict))
    return asyncio.run(_load_from_webhook(args.url))


def _load_spec(path: Optional[Path]):
    from vuce_dashboard.models.filters import FilterSpec

    return FilterSpec.from_yaml(path) if path else FilterSpec()


def _emit(data: object, output: Optional[Path], summary_line: str) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        print(summary_line)
    else:
        print(text)


def _dump_rows(rows: list[CanonicalRow]) -> list[dict]:
    return [r.model_dump(mode="json", by_alias=True) for r in rows]


def _run_fetch(args: argparse.Namespace) -> None:
    """Run fetch command."""
    rows = _load_rows(args)
    _emit(_dump_rows(rows), args.output, f"Wrote {len(rows)} rows to {args.output}")


def _run_filter(args: argparse.Namespace) -> None:
    """Run filter command."""
    from vuce_dashboard.analytics import paginate
    from vuce_dashboard.filtering import FilterEngine, sort_by_greq_date

    rows = _load_rows(args)
    engine = FilterEngine(_load_spec(args.spec))

    if args.show_explanations:
        results = engine.filter_many(rows)
        passed = sort_by_greq_date(r.row for r in results if r.passed)
        output_data: object = [
            {
                "row": r.row.model_dump(mode="json", by_alias=True),
                "passed": r.passed,
                "excludedByRule": r.excluded_by_rule,
                "explanations": r.explanations,
            }
            for r in results
        ]
    else:
        passed = engine.apply(rows)
        output_data = _dump_rows(passed)
        if args.page is not None:
            page = paginate(passed, page=args.page, page_size=args.page_size)
            output_data = {
                "page": page.page,
                "pageSize": page.page_size,
                "totalItems": page.total_items,
                "totalPages": page.total_pages,
                "items": _dump_rows(page.items),
            }

    _emit(output_data, args.output, f"Filtered: {len(passed)} passed of {len(rows)} (wrote to {args.output})")


def _run_summary(args: argparse.Namespace) -> None:
    """Run summary command."""
    from vuce_dashboard.analytics import (
        compute_kpis,
        monthly_observations,
        observation_counts,
        top_developers,
        top_entities,
    )
    from vuce_dashboard.filtering import filter_rows

    rows = filter_rows(_load_rows(args), _load_spec(args.spec))
    summary = {
        "kpis": compute_kpis(rows).model_dump(mode="json"),
        "observaciones": observation_counts(rows),
        "monthly": monthly_observations(rows).model_dump(mode="json"),
        "topEntities": top_entities(rows),
        "topDevelopers": top_developers(rows),
    }
    _emit(summary, args.output, f"Summarized {len(rows)} rows (wrote to {args.output})")


if __name__ == "__main__":
    main()
