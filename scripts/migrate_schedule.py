#!/usr/bin/env python3
"""
Schedule Migration

Loads a schedule JSON file ({"schedule": [...]}) into the session table,
creating the table first when it does not exist.

Each item is upserted under the UTC date of its startTime; the row key is
its sessionId when present, otherwise its videoId.

Usage:
    python scripts/migrate_schedule.py video-schedule.json
    python scripts/migrate_schedule.py video-schedule.json --skip-create-table

Table naming and credentials come from the environment (see SiteConfig).
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple

from conference_api.config import SiteConfig
from conference_api.core import TableGateway, create_table_gateway
from conference_api.models import Session, default_video_url
from conference_api.utils.timezone import partition_key_for


def build_session(item: Dict[str, Any]) -> Session:
    """Convert one schedule JSON item to a Session row."""
    start_time = str(item.get("startTime") or "").strip()
    video_id = item.get("videoId") or ""
    row_key = item.get("sessionId") or video_id
    if not row_key:
        raise ValueError("Item has neither sessionId nor videoId")

    return Session(
        partition_key=partition_key_for(start_time),
        row_key=row_key,
        video_id=video_id,
        title=item.get("title") or "",
        description=item.get("description") or "",
        url=item.get("url") or default_video_url(video_id),
        start_time=start_time,
        duration=item.get("duration")
    )


def migrate(items: Iterable[Dict[str, Any]], gateway: TableGateway) -> Tuple[int, int]:
    """
    Upsert every schedule item, reporting progress per item.

    Returns:
        (migrated, failed) counts
    """
    migrated = 0
    failed = 0
    for item in items:
        title = str(item.get("title") or item.get("videoId") or "?")
        try:
            session = build_session(item)
            gateway.put_item(session.to_table_item())
            print(f"✅ Uploaded: {title[:50]}")
            migrated += 1
        except Exception as e:
            print(f"❌ Failed: {title} - {e}")
            failed += 1
    return migrated, failed


def load_schedule(path: Path) -> list:
    """Read the schedule list from a JSON file."""
    with path.open(encoding="utf-8") as handle:
        data = json.load(handle)
    schedule = data.get("schedule") if isinstance(data, dict) else None
    if not isinstance(schedule, list):
        raise ValueError(f"{path} does not contain a 'schedule' list")
    return schedule


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Migrate a schedule JSON file into the session table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "json_file",
        type=Path,
        help="Schedule JSON file ({\"schedule\": [...]})"
    )

    parser.add_argument(
        "--skip-create-table",
        action="store_true",
        help="Do not create the table when it is missing"
    )

    args = parser.parse_args(argv)

    print("🚀 Starting migration...\n")
    try:
        schedule = load_schedule(args.json_file)
    except (OSError, ValueError) as e:
        print(f"❌ Cannot read {args.json_file}: {e}")
        return 1
    print(f"📁 Found {len(schedule)} schedule items to migrate\n")

    config = SiteConfig.from_env()
    gateway = create_table_gateway(config, config.schedule_table)

    if not args.skip_create_table:
        if gateway.ensure_table():
            print(f"✅ Table {gateway.table_name} created\n")
        else:
            print(f"ℹ️  Table {gateway.table_name} already exists\n")

    migrated, failed = migrate(schedule, gateway)

    print("\n========================================")
    print(f"✅ Successfully migrated: {migrated}")
    print(f"❌ Failed: {failed}")
    print("========================================\n")

    return 0 if migrated > 0 else 1


if __name__ == "__main__":
    sys.exit(main())
