"""Batch re-analysis of stored journal entries.

Entries are processed in fixed-size batches: entries inside a batch run
concurrently, and batches are separated by a fixed delay to stay gentle on
the remote inference API. Per-entry failures are counted, never raised.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence

from .analyzer import SentimentAnalyzer

logger = logging.getLogger(__name__)

GENERIC_TITLE_MARKERS = ("journal entry", "untitled")
MIN_TITLE_LENGTH = 5


@dataclass(slots=True)
class JournalEntry:
    id: str
    content: str
    title: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JournalEntry":
        return cls(
            id=str(data["id"]),
            content=data.get("content") or "",
            title=data.get("title"),
            user_id=data.get("user_id"),
        )


@dataclass(slots=True)
class EntryUpdate:
    entry_id: str
    sentiment_data: dict[str, Any]
    category: str
    mood: str
    title: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.entry_id,
            "sentiment_data": self.sentiment_data,
            "category": self.category,
            "mood": self.mood,
        }
        if self.title is not None:
            data["title"] = self.title
        return data


@dataclass(slots=True)
class MigrationReport:
    success: int = 0
    failed: int = 0
    total: int = 0


SaveEntry = Callable[[EntryUpdate], Awaitable[None]]
ProgressCallback = Callable[[int, int, JournalEntry], None]


def is_generic_title(title: Optional[str]) -> bool:
    if not title or len(title.strip()) < MIN_TITLE_LENGTH:
        return True
    lowered = title.lower()
    return any(marker in lowered for marker in GENERIC_TITLE_MARKERS)


async def migrate_entries(
    entries: Sequence[JournalEntry],
    analyzer: SentimentAnalyzer,
    save: SaveEntry,
    batch_size: int = 5,
    delay: float = 1.0,
    on_progress: Optional[ProgressCallback] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> MigrationReport:
    report = MigrationReport(total=len(entries))
    batch_size = max(1, batch_size)
    logger.info("Starting re-analysis for %s entries", report.total)

    async def process(index: int, entry: JournalEntry) -> None:
        if on_progress is not None:
            on_progress(index + 1, report.total, entry)
        try:
            update = await build_update(entry, analyzer)
            await save(update)
        except Exception as exc:
            report.failed += 1
            logger.error("Failed to migrate entry %s: %s", entry.id, exc)
            return
        report.success += 1
        logger.debug("Migrated entry %s", entry.id)

    for start in range(0, report.total, batch_size):
        batch = entries[start : start + batch_size]
        await asyncio.gather(*(process(start + offset, entry) for offset, entry in enumerate(batch)))
        if start + batch_size < report.total:
            await sleep(delay)

    logger.info("Migration complete: %s success, %s failed", report.success, report.failed)
    return report


async def build_update(entry: JournalEntry, analyzer: SentimentAnalyzer) -> EntryUpdate:
    result = await analyzer.analyze(entry.content, entry.title, entry.user_id)
    update = EntryUpdate(
        entry_id=entry.id,
        sentiment_data=result.to_dict(),
        category=result.business_category.capitalize(),
        mood=result.primary_mood.capitalize(),
    )
    if is_generic_title(entry.title):
        suggested = result.suggested_title or analyzer.titles.generate_title(
            entry.content, result.business_category, result.primary_mood, result.energy
        )
        if suggested and suggested != entry.title:
            logger.info("Replacing generic title %r with %r", entry.title, suggested)
            update.title = suggested
    return update
