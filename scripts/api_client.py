"""Lightweight REST client for the mlbdfs API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_json(path: Path | None) -> object | None:
    if path is None:
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the mlbdfs REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("slate", type=Path, nargs="?", help="Slate JSON to project")
    parser.add_argument("--site", default=None, help="Scoring table key (defaults to the server's)")
    parser.add_argument("--scoring-profile", type=Path, help="Custom scoring table JSON sent with the slate")
    parser.add_argument("--min-confidence", type=float, default=None, help="Drop projections below this confidence")
    parser.add_argument("--limit", type=int, default=None, help="Keep only the top N projections")
    parser.add_argument("--list-tables", action="store_true", help="List scoring tables and exit")
    parser.add_argument("--normalize", metavar="KIND", choices=("batter", "pitcher"), help="Normalize a raw stat JSON file")
    parser.add_argument("--stats", type=Path, help="Raw stat JSON used with --normalize")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_tables:
            resp = client.get("/scoring-tables")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.normalize:
            if args.stats is None:
                raise SystemExit("--stats is required with --normalize")
            resp = client.post(f"/normalize/{args.normalize}", json=load_json(args.stats))
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.slate is None:
            raise SystemExit("a slate file is required unless using --list-tables/--normalize")

        slate = load_json(args.slate)
        players = slate.get("players", []) if isinstance(slate, dict) else slate
        body: dict[str, object] = {
            "players": players,
            "min_confidence": args.min_confidence,
            "limit": args.limit,
        }
        scoring = load_json(args.scoring_profile)
        if scoring is not None:
            body["scoring"] = scoring
        params = {"site": args.site} if args.site else None

        resp = client.post("/projections/slate", json=body, params=params)
        if resp.status_code == 404:
            raise SystemExit(resp.json().get("detail", "not found"))
        resp.raise_for_status()
        payload = resp.json()
        print("Summary:", json.dumps(payload["summary"], indent=2))
        if payload["skipped"]:
            print(f"Skipped {len(payload['skipped'])} entries")
        for item in payload["projections"]:
            projection = item["projection"]
            context = projection["context"]
            print(
                f"{item['rank']:>3} {context['name']:<24} {projection['kind']:<8} "
                f"{projection['expected']['total_points']:6.2f} "
                f"({projection['floor']['total_points']:.2f}-{projection['ceiling']['total_points']:.2f}) "
                f"conf {projection['confidence']:.0f} [{item['tier']}]"
            )


if __name__ == "__main__":
    main()
