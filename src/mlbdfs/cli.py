"""Command-line interface for projecting a slate from a JSON file."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from mlbdfs.config import ProjectionSettings, get_table
from mlbdfs.config_loader import ScoringProfile
from mlbdfs.ingest import load_slate
from mlbdfs.projection import project_slate
from mlbdfs.slate import FilterCriteria, export_projections_to_csv, filter_projections


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Project MLB DFS points for a slate")
    parser.add_argument("slate", type=Path, help="Path to slate JSON")
    parser.add_argument("--site", default="DK", help="Scoring table key (e.g., DK, FD)")
    parser.add_argument("--scoring-profile", type=Path, default=None, help="Custom scoring table JSON")
    parser.add_argument("--save-profile", type=Path, default=None, help="Write the active scoring table as JSON")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default MLBDFS_WORKERS)")
    parser.add_argument("--kind", choices=("batter", "pitcher"), default=None, help="Only keep one player kind")
    parser.add_argument("--min-confidence", type=float, default=None, help="Drop projections below this confidence")
    parser.add_argument(
        "--sort-by",
        choices=("expected", "floor", "ceiling", "confidence", "value"),
        default="expected",
        help="Ranking metric",
    )
    parser.add_argument("--limit", type=int, default=None, help="Keep only the top N projections")
    parser.add_argument("--output", type=Path, default=Path("projections.csv"), help="Output CSV path")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write slate summary JSON",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.scoring_profile:
        table = ScoringProfile.load(args.scoring_profile).to_table()
    else:
        table = get_table(args.site)
    if args.save_profile:
        ScoringProfile.from_table(table).save(args.save_profile)
        print(f"Saved scoring profile to {args.save_profile}")

    loaded = load_slate(args.slate)
    if loaded.skipped:
        preview = ", ".join(f"#{item.index} ({item.reason})" for item in loaded.skipped[:5])
        more = len(loaded.skipped) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Skipped slate entries: {preview}{suffix}")

    projections = project_slate(
        loaded.requests,
        table=table,
        settings=ProjectionSettings.from_env(),
        workers=args.workers,
    )
    result = filter_projections(
        projections,
        FilterCriteria(
            kind=args.kind,
            min_confidence=args.min_confidence,
            limit=args.limit,
            sort_by=args.sort_by,
        ),
    )
    selected = [item.projection for item in result.projections]

    args.output.write_text(export_projections_to_csv(selected), encoding="utf-8")
    print(f"Wrote {len(selected)}/{len(projections)} projections to {args.output}")

    if args.report:
        summary = result.summary
        report_payload = {
            "site": table.site,
            "total_entries": len(loaded.requests) + len(loaded.skipped),
            "projected": len(projections),
            "selected": summary.selected,
            "skipped": [
                {"index": item.index, "player_id": item.player_id, "reason": item.reason}
                for item in loaded.skipped
            ],
            "expected_mean": summary.expected_mean,
            "expected_median": summary.expected_median,
            "expected_std": summary.expected_std,
            "confidence_mean": summary.confidence_mean,
            "top_tier_threshold": result.pool_summary.top_tier_threshold,
            "mid_tier_threshold": result.pool_summary.mid_tier_threshold,
            "tiers": {
                item.projection.context.player_id: item.tier for item in result.projections
            },
        }
        args.report.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")
        print(f"Wrote slate report to {args.report}")


if __name__ == "__main__":
    main()
