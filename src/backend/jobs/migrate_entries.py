"""Journal Entry Re-analysis Job

Re-runs the analysis pipeline over exported journal entries. Reads a JSON
array of ``{id, content, title?, user_id?}`` objects and writes the
per-entry updates (sentiment data, category, mood, replacement title) to
the output file.
"""
import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from bizzin.core.config import get_settings
from bizzin.services.analyzer import SentimentAnalyzer
from bizzin.services.migration import EntryUpdate, JournalEntry, MigrationReport, migrate_entries

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_entries(path: Path) -> list[JournalEntry]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON array of entries")
    return [JournalEntry.from_dict(item) for item in payload]


async def run(input_path: Path, output_path: Path, batch_size: int, delay: float) -> MigrationReport:
    entries = load_entries(input_path)
    updates: list[dict[str, Any]] = []

    async def save(update: EntryUpdate) -> None:
        updates.append(update.to_dict())

    def progress(current: int, total: int, entry: JournalEntry) -> None:
        logger.info("[%s/%s] analyzing entry %s", current, total, entry.id)

    analyzer = SentimentAnalyzer.from_settings(get_settings())
    try:
        report = await migrate_entries(
            entries,
            analyzer,
            save,
            batch_size=batch_size,
            delay=delay,
            on_progress=progress,
        )
    finally:
        await analyzer.aclose()

    output_path.write_text(json.dumps(updates, indent=2), encoding="utf-8")
    logger.info("Wrote %s updates to %s", len(updates), output_path)
    return report


async def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Re-analyze exported journal entries")
    parser.add_argument("input", type=Path, help="JSON file with journal entries")
    parser.add_argument("output", type=Path, help="Where to write the entry updates")
    parser.add_argument("--batch-size", type=int, default=settings.migration_batch_size, help="Entries per batch")
    parser.add_argument(
        "--delay",
        type=float,
        default=settings.migration_batch_delay_seconds,
        help="Seconds to wait between batches",
    )
    args = parser.parse_args()

    report = await run(args.input, args.output, args.batch_size, args.delay)

    print("=" * 60)
    print(f"Total entries:  {report.total}")
    print(f"Succeeded:      {report.success}")
    print(f"Failed:         {report.failed}")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
