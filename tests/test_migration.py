"""Tests for batch re-analysis of journal entries"""
import asyncio

from bizzin.services.analyzer import SentimentAnalyzer
from bizzin.services.cache import SentimentCache
from bizzin.services.insights import InsightSynthesizer
from bizzin.services.migration import EntryUpdate, JournalEntry, is_generic_title, migrate_entries
from conftest import make_settings


def _analyzer() -> SentimentAnalyzer:
    settings = make_settings(remote_enabled=False)
    return SentimentAnalyzer(settings, SentimentCache(), synthesizer=InsightSynthesizer.seeded(1))


def _entries(count: int) -> list[JournalEntry]:
    return [JournalEntry(id=str(index), content=f"Entry {index}: closed a new client deal today") for index in range(count)]


def test_is_generic_title():
    assert is_generic_title(None)
    assert is_generic_title("  ")
    assert is_generic_title("Idea")
    assert is_generic_title("My Journal Entry #4")
    assert is_generic_title("untitled draft")
    assert not is_generic_title("Quarterly planning offsite")


def test_entries_processed_in_batches_with_delay():
    saved: list[EntryUpdate] = []
    sleeps: list[float] = []
    progress: list[tuple[int, int]] = []

    async def save(update: EntryUpdate) -> None:
        saved.append(update)

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    report = asyncio.run(
        migrate_entries(
            _entries(12),
            _analyzer(),
            save,
            batch_size=5,
            delay=1.0,
            on_progress=lambda current, total, entry: progress.append((current, total)),
            sleep=fake_sleep,
        )
    )

    assert (report.success, report.failed, report.total) == (12, 0, 12)
    assert sleeps == [1.0, 1.0]
    assert sorted(current for current, _ in progress) == list(range(1, 13))
    assert {total for _, total in progress} == {12}
    assert len(saved) == 12


def test_failures_are_counted_not_raised():
    async def save(update: EntryUpdate) -> None:
        if update.entry_id == "2":
            raise RuntimeError("database unavailable")

    async def fake_sleep(seconds: float) -> None:
        return None

    report = asyncio.run(migrate_entries(_entries(4), _analyzer(), save, sleep=fake_sleep))

    assert (report.success, report.failed, report.total) == (3, 1, 4)


def test_generic_titles_are_replaced():
    saved: dict[str, EntryUpdate] = {}

    async def save(update: EntryUpdate) -> None:
        saved[update.entry_id] = update

    entries = [
        JournalEntry(id="a", content="Closed our biggest customer deal this quarter", title="Journal Entry"),
        JournalEntry(id="b", content="Mapped out the roadmap for next quarter", title="Quarterly planning offsite"),
    ]
    asyncio.run(migrate_entries(entries, _analyzer(), save, delay=0))

    assert saved["a"].title
    assert saved["a"].title != "Journal Entry"
    assert len(saved["a"].title) <= 60
    assert saved["b"].title is None
    assert saved["b"].category == "Planning"
    assert saved["b"].sentiment_data["business_category"] == "planning"
    assert "title" not in saved["b"].to_dict()
