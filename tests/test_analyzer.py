"""Tests for the SentimentAnalyzer orchestration"""
import asyncio

import pytest

from bizzin.services.analyzer import SentimentAnalyzer
from bizzin.services.cache import SentimentCache
from bizzin.services.huggingface import LabelScore, RemoteClassifierError, map_remote_labels
from bizzin.services.insights import InsightSynthesizer
from bizzin.services.results import BUSINESS_CATEGORIES, SOURCE_LOCAL, SOURCE_REMOTE, default_result
from bizzin.services.titles import MAX_TITLE_LENGTH
from conftest import FakeRemote, make_settings


def _analyzer(settings=None, remote=None, synthesizer=None) -> SentimentAnalyzer:
    return SentimentAnalyzer(
        settings or make_settings(),
        SentimentCache(),
        remote=remote,
        synthesizer=synthesizer or InsightSynthesizer.seeded(7),
    )


class ExplodingSynthesizer(InsightSynthesizer):
    def synthesize(self, mood, category, text, confidence=0):
        raise RuntimeError("template table corrupted")


def test_local_analysis_of_sad_entry(local_settings):
    analyzer = _analyzer(local_settings)
    result = asyncio.run(analyzer.analyze("I feel sad today and dont have the energy"))

    assert result.primary_mood == "sad"
    assert result.business_category == "challenge"
    assert result.energy == "low"
    assert result.confidence == 60
    assert result.analysis_source == SOURCE_LOCAL
    assert len(result.insights) == 1
    assert result.suggested_title
    assert len(result.suggested_title) <= 60


def test_excited_entry_confidence(local_settings):
    result = asyncio.run(_analyzer(local_settings).analyze("Feeling excited, I can't wait for tomorrow"))

    assert result.primary_mood == "excited"
    assert result.energy == "high"
    assert result.confidence >= 85


def test_patent_entry_gets_patent_insight(local_settings):
    result = asyncio.run(_analyzer(local_settings).analyze("Our patent application approved today, huge win for the team"))

    assert result.business_category == "achievement"
    assert any("Patent approval" in insight for insight in result.insights)


def test_cache_hit_returns_identical_result(local_settings):
    analyzer = _analyzer(local_settings)

    async def run():
        first = await analyzer.analyze("Working on the roadmap for next quarter", "Roadmap")
        second = await analyzer.analyze("Working on the roadmap for next quarter", "Roadmap")
        return first, second

    first, second = asyncio.run(run())
    assert second is first
    assert len(analyzer.cache) == 1


def test_cache_miss_paths_only_vary_in_insights(local_settings):
    text = "Thinking through what we learned this month"
    results = [asyncio.run(_analyzer(local_settings, synthesizer=InsightSynthesizer.seeded(seed)).analyze(text)) for seed in range(4)]

    assert len({(r.primary_mood, r.business_category, r.confidence, r.energy) for r in results}) == 1


def test_remote_skipped_below_threshold():
    remote = FakeRemote()
    analyzer = _analyzer(remote=remote)

    async def run():
        short = await analyzer.analyze("a" * 29)
        long = await analyzer.analyze("b" * 30)
        return short, long

    short, long = asyncio.run(run())

    assert short.analysis_source == SOURCE_LOCAL
    assert long.analysis_source == SOURCE_REMOTE
    assert remote.calls == [" " + "b" * 30]


def test_title_counts_towards_threshold():
    remote = FakeRemote()
    analyzer = _analyzer(remote=remote)
    result = asyncio.run(analyzer.analyze("Short body text", "A fairly long entry title"))

    assert result.analysis_source == SOURCE_REMOTE
    assert result.suggested_title is None


def test_remote_result_uses_local_category():
    remote = FakeRemote()
    analyzer = _analyzer(remote=remote)
    result = asyncio.run(analyzer.analyze("Our patent application approved today, huge win for the team"))

    assert result.analysis_source == SOURCE_REMOTE
    assert result.primary_mood == "excited"
    assert result.confidence == 88
    assert result.business_category == "achievement"
    assert any("Patent approval" in insight for insight in result.insights)
    assert result.suggested_title


def test_remote_failure_falls_back_to_local(failing_remote):
    analyzer = _analyzer(remote=failing_remote)
    result = asyncio.run(analyzer.analyze("I feel sad today and dont have the energy"))

    assert failing_remote.calls
    assert result.analysis_source == SOURCE_LOCAL
    assert result.primary_mood == "sad"


def test_disabled_remote_is_not_called():
    remote = FakeRemote()
    analyzer = _analyzer(make_settings(remote_enabled=False), remote=remote)
    asyncio.run(analyzer.analyze("A long enough journal entry about our launch plans"))
    assert remote.calls == []


def test_unexpected_errors_return_default_result(local_settings):
    analyzer = _analyzer(local_settings, synthesizer=ExplodingSynthesizer())
    result = asyncio.run(analyzer.analyze("Any entry at all"))

    assert result == default_result()
    assert len(analyzer.cache) == 0


def test_analyze_remote_requires_remote(local_settings):
    with pytest.raises(RemoteClassifierError):
        asyncio.run(_analyzer(local_settings).analyze_remote("Some text worth analyzing remotely"))


def test_analyze_remote_propagates_failure(failing_remote):
    with pytest.raises(RemoteClassifierError) as excinfo:
        asyncio.run(_analyzer(remote=failing_remote).analyze_remote("Some text worth analyzing remotely"))
    assert excinfo.value.details == "boom"


def test_status_reports_cache_and_usage():
    remote = FakeRemote()
    analyzer = _analyzer(remote=remote)
    asyncio.run(analyzer.analyze("b" * 40))

    status = analyzer.status()
    assert status["remote_enabled"] is True
    assert status["cache_size"] == 1
    assert status["usage_stats"]["requests"] == 1


def test_from_settings_wires_components():
    analyzer = SentimentAnalyzer.from_settings(make_settings(SENTIMENT_CACHE_MAX_SIZE=3))
    try:
        assert analyzer.cache.max_size == 3
        assert analyzer.remote is not None
    finally:
        asyncio.run(analyzer.aclose())

    assert SentimentAnalyzer.from_settings(make_settings(remote_enabled=False)).remote is None


SWEEP_ENTRIES = [
    "",
    "   ",
    "ok",
    "I feel sad today and dont have the energy",
    "Feeling excited, I can't wait for the launch next week!!!",
    "Revenue grew from $10k to $25k MRR this month, up 150% and we hired two engineers",
    "Our patent application approved today, huge win for the team",
    "Had an accident on the warehouse floor, one employee injured and OSHA is calling",
    "Spent the afternoon on the roadmap and budget allocations for next quarter",
    "Finished a pricing course and my mentor gave blunt feedback on my mistakes",
    "Ran customer interviews and an A/B test against two competitors",
    "Had to let him go. Cash flow is tight and runway is six months. Stressed and exhausted.",
    "1 2 3 4 5 6 7 8 9 0 " * 400,
    "Ünïcödé entry 🚀 with emoji and ümlauts, growth growth growth",
    "word " * 3000,
]
REMOTE_LABELS = [
    None,
    (LabelScore("positive", 0.99), LabelScore("joy", 0.99)),
    (LabelScore("negative", 0.55), LabelScore("fear", 0.45)),
    (LabelScore("LABEL_1", 0.2), LabelScore("sadness", 0.1)),
    (LabelScore("mystery", 0.6), LabelScore("disgust", 0.9)),
]


@pytest.mark.parametrize("labels", REMOTE_LABELS)
@pytest.mark.parametrize("content", SWEEP_ENTRIES)
def test_results_stay_within_declared_ranges(content, labels):
    if labels is None:
        analyzer = _analyzer(make_settings(remote_enabled=False))
    else:
        analyzer = _analyzer(remote=FakeRemote(result=map_remote_labels(*labels)))

    result = asyncio.run(analyzer.analyze(content))

    assert isinstance(result.confidence, int)
    assert 0 <= result.confidence <= 100
    assert result.energy in {"high", "medium", "low"}
    assert result.business_category in BUSINESS_CATEGORIES
    assert len(result.emotions) <= 3
    assert not result.emotions or result.emotions[0] == result.primary_mood
    assert len(result.insights) <= 1
    assert result.suggested_title is None or 0 < len(result.suggested_title) <= MAX_TITLE_LENGTH
    if labels is not None and len(content.strip()) >= 30:
        assert result.analysis_source == SOURCE_REMOTE
        assert 75 <= result.confidence <= 95
