"""Tests for BusinessTitleGenerator"""
import time

from bizzin.services.titles import (
    BusinessTitleGenerator,
    MAX_TITLE_LENGTH,
    clean_title,
    generate_business_title,
)


class TestBusinessTitleGenerator:
    """Test suite for BusinessTitleGenerator"""

    def setup_method(self):
        self.generator = BusinessTitleGenerator()

    def test_empty_content_returns_fixed_title(self):
        assert generate_business_title("") == "Journal Entry"
        assert generate_business_title("   ") == "Journal Entry"

    def test_default_growth_title(self):
        assert generate_business_title("Launching the new product feature") == "Scaling New Heights: Product"

    def test_low_energy_stressed_prefers_navigating_templates(self):
        title = self.generator.generate_title("We had a problem with the supplier", "challenge", "Stressed", "low")
        assert title == "Navigating Challenges: Problem"

    def test_high_energy_excited_filter(self):
        templates = self.generator.get_templates("achievement", "excited", "high")
        assert templates[:3] == [
            "Victory Celebration: {success_story}",
            "Breaking Through: {breakthrough_moment}",
            "Milestone Reached: {achievement_type}",
        ]

    def test_unknown_category_falls_back_to_growth(self):
        assert self.generator.get_templates("marketing", "focused", "medium") == list(
            BusinessTitleGenerator.TEMPLATES["growth"]
        )

    def test_extract_business_elements_keeps_first_match(self):
        elements = self.generator.extract_business_elements(
            "Revenue and profit climbed after the team shipped 3 new clients"
        )
        assert elements.financial == "revenue"
        assert elements.people == "team"
        assert elements.metrics == "3 new clients"

    def test_titles_never_exceed_limit(self):
        content = "Our 250% revenue increase across enterprise clients and partner channels " * 5
        for category in BusinessTitleGenerator.TEMPLATES:
            for mood, energy in (("excited", "high"), ("stressed", "low"), ("focused", "medium")):
                title = self.generator.generate_title(content, category, mood, energy)
                assert 0 < len(title) <= MAX_TITLE_LENGTH

    def test_suggestions_are_first_five_templates(self):
        suggestions = self.generator.generate_title_suggestions("Planning next quarter", "planning", "focused", "medium")
        assert len(suggestions) == 5
        assert suggestions[0] == "Strategic Planning: Plan"


def test_clean_title_collapses_and_title_cases():
    assert clean_title("  hello   world ") == "Hello World"
    assert len(clean_title("word " * 30)) == MAX_TITLE_LENGTH


def test_large_digit_heavy_entry_is_fast():
    content = "1 " * 32000
    started = time.perf_counter()
    title = generate_business_title(content, "growth", "focused", "medium")
    assert time.perf_counter() - started < 1.0
    assert 0 < len(title) <= MAX_TITLE_LENGTH


def test_metric_scan_stays_linear_on_long_digit_runs():
    generator = BusinessTitleGenerator()
    started = time.perf_counter()
    elements = generator.extract_business_elements("9" * 50000 + " users")
    assert time.perf_counter() - started < 1.0
    assert elements.metrics is None
    assert generator.extract_business_elements("Signed 12 new enterprise clients").metrics == "12 new enterprise clients"
