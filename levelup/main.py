"""Command-line dashboard for a stored Level Up user"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from levelup import config
from levelup.exceptions import LevelUpError
from levelup.services import ProgressService
from levelup.storage import JsonStore
from levelup.utils.datetime_helpers import parse_date

logger = logging.getLogger(__name__)


def format_dashboard(service: ProgressService, today) -> str:
    """Render level, stats and the day's due goals as text"""
    level = service.level_info()
    stats = service.stats(today)
    due = service.due_today(today)

    lines = [
        f"📅 {today.isoformat()}",
        f"⭐ Level {level.level} - {level.current_level_exp}/{level.exp_to_next_level} EXP "
        f"({level.progress_percentage:.0f}%), {level.total_exp} EXP total",
        f"🔥 Streak: {stats.current_streak} days (best: {stats.longest_streak})",
        f"✅ Completed: {stats.total_goals_completed} "
        f"(hard {stats.hard_goals_completed}, physical {stats.physical_goals_completed}, "
        f"mental {stats.mental_goals_completed})",
    ]

    for heading, key in (("YOUR QUESTS", "user"), ("DAILY CHALLENGES", "system")):
        lines.append(f"\n{heading}")
        if not due[key]:
            lines.append("  Nothing due today")
        for item in due[key]:
            mark = "x" if item.is_completed else " "
            lines.append(f"  [{mark}] {item.goal.title} ({item.goal.priority.value})")

    return "\n".join(lines)


async def run(args: argparse.Namespace) -> int:
    store = JsonStore(data_path=args.data_path)
    # load() writes default settings; reject unknown users before it
    if await store.get_user_profile(args.user) is None:
        logger.error(f"Unknown user {args.user} in {args.data_path}")
        return 1

    service = ProgressService(store, args.user)
    await service.load()

    today = parse_date(args.date) if args.date else service.today()
    print(format_dashboard(service, today))

    if args.export:
        Path(args.export).write_text(service.export_csv(), encoding="utf-8")
        logger.info(f"Exported completions to {args.export}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show the Level Up dashboard for a user")
    parser.add_argument("--user", required=True, help="User id")
    parser.add_argument("--data-path", type=Path, default=config.DATA_PATH, help="Data directory")
    parser.add_argument("--date", help="Day to show (YYYY-MM-DD), defaults to today")
    parser.add_argument("--export", help="Write completion history CSV to this file")
    args = parser.parse_args(argv)

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    )

    try:
        config.validate_config()
        return asyncio.run(run(args))
    except (LevelUpError, ValueError, OSError) as e:
        logger.error(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
