import sys
import asyncio
import argparse
from typing import Any, Dict

# --- Settings/Logging ---
from savant.logging.setup import setup_logging
from savant.config.settings import settings

setup_logging()

from loguru import logger

from savant.service import SavantService

from rich import print
from rich.panel import Panel
from rich.table import Table

STAT_ROWS = [
    ("GF/60", "gfPerGame"),
    ("GA/60", "gaPerGame"),
    ("xGF%", "xgfPercent"),
    ("xGA/60", "xgaPer60"),
    ("HDCF%", "hdcfPercent"),
    ("CF%", "corsiPercent"),
    ("SH%", "shootingPercent"),
    ("PDO", "pdo"),
    ("PP%", "ppPercent"),
    ("PK%", "pkPercent"),
    ("PIM/GP", "pimsPerGame"),
    ("FO%", "faceoffPercent"),
]


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    return "-" if value is None else str(value)


def render_matchup(result: Dict[str, Any]) -> None:
    home, away, odds = result["home"], result["away"], result["odds"]
    table = Table(title=f"{away['name']} @ {home['name']}")
    table.add_column("Stat")
    table.add_column(away["name"], justify="right")
    table.add_column(home["name"], justify="right")

    for side in (away, home):
        if "error" in side:
            logger.warning(f"{side['name']}: {side['error']}")

    for label, key in STAT_ROWS:
        table.add_row(label, _fmt(away.get(key)), _fmt(home.get(key)))
    table.add_row("Record", _fmt(away.get("record")), _fmt(home.get("record")))
    table.add_row(
        "Goalie",
        _fmt((away.get("goalie") or {}).get("name")),
        _fmt((home.get("goalie") or {}).get("name")),
    )
    print(table)
    print(Panel(f"Line: {odds['line']}   Total: {odds['total']}", title=odds["source"]))


def render_schedule(result: Dict[str, Any]) -> None:
    table = Table(title=f"Games for {result['date']} ({result['count']})")
    table.add_column("Game")
    table.add_column("Status")
    table.add_column("Line")
    table.add_column("Total")
    for game in result["games"]:
        matchup = f"{game['awayTeam']['code']} @ {game['homeTeam']['code']}"
        table.add_row(matchup, game["status"], game["odds"]["line"], game["odds"]["total"])
    print(table)


async def run_command(args: argparse.Namespace) -> None:
    service = SavantService()
    try:
        if args.command == "matchup":
            render_matchup(await service.get_matchup(args.home, args.away))
        elif args.command == "schedule":
            render_schedule(await service.get_schedule(args.date))
    finally:
        await service.aclose()


def serve(args: argparse.Namespace) -> None:
    import uvicorn

    logger.info(f"Starting Savant API on {args.host}:{args.port}")
    uvicorn.run("savant.api.app:app", host=args.host, port=args.port, log_config=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Savant hockey matchup API")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_parser = sub.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)

    matchup_parser = sub.add_parser("matchup", help="Print stats for a matchup")
    matchup_parser.add_argument("home")
    matchup_parser.add_argument("away")

    schedule_parser = sub.add_parser("schedule", help="Print a day's games and lines")
    schedule_parser.add_argument("date", nargs="?", help="YYYY-MM-DD (default: today, Eastern)")
    return parser


def main() -> None:
    """Main entry point for the application."""
    args = build_parser().parse_args()
    if args.command == "serve":
        serve(args)
    else:
        asyncio.run(run_command(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
