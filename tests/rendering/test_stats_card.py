"""Tests for stats card rendering module."""

import re
from datetime import date
from xml.etree import ElementTree

import pytest

from rendering.stats_card import (
    CARD_HEIGHT,
    CARD_WIDTH,
    EMPTY_LABEL,
    format_number,
    format_range,
    render_stats_card,
)
from schemas import ContributionStats, DateRange

pytestmark = pytest.mark.unit

SVG_NS = "{http://www.w3.org/2000/svg}"


def _texts(svg: str) -> list[str]:
    root = ElementTree.fromstring(svg)
    return [" ".join(node.text.split()) for node in root.iter(f"{SVG_NS}text")]


@pytest.fixture
def stats() -> ContributionStats:
    return ContributionStats(
        total=12345,
        longest_streak=42,
        current_streak=7,
        longest_range=DateRange(start=date(2023, 11, 20), end=date(2024, 1, 5)),
        current_range=DateRange(start=date(2024, 3, 4), end=date(2024, 3, 12)),
        overall_range=DateRange(start=date(2021, 6, 1), end=date(2024, 3, 12)),
    )


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (999, "999"),
            (1000, "1,000"),
            (1234567, "1,234,567"),
            (None, "0"),
        ],
    )
    def test_thousands_separators(self, value, expected):
        assert format_number(value) == expected


class TestFormatRange:
    def test_empty_range(self):
        assert format_range(DateRange()) == EMPTY_LABEL

    def test_half_open_range_is_empty(self):
        assert format_range(DateRange(start=date(2024, 1, 1))) == EMPTY_LABEL

    def test_same_year_omits_end_year(self):
        date_range = DateRange(start=date(2024, 3, 4), end=date(2024, 3, 12))
        assert format_range(date_range) == "Mar 4, 2024 - Mar 12"

    def test_different_years_show_both(self):
        date_range = DateRange(start=date(2023, 11, 20), end=date(2024, 1, 5))
        assert format_range(date_range) == "Nov 20, 2023 - Jan 5, 2024"

    def test_single_day(self):
        date_range = DateRange(start=date(2024, 9, 1), end=date(2024, 9, 1))
        assert format_range(date_range) == "Sep 1, 2024 - Sep 1"


class TestRenderStatsCard:
    def test_is_well_formed_svg_with_fixed_size(self, stats: ContributionStats):
        svg = render_stats_card(stats)

        root = ElementTree.fromstring(svg)
        assert root.tag == f"{SVG_NS}svg"
        assert root.get("viewBox") == f"0 0 {CARD_WIDTH} {CARD_HEIGHT}"

    def test_contains_three_labelled_columns(self, stats: ContributionStats):
        texts = _texts(render_stats_card(stats))

        assert texts == [
            "12,345",
            "Total Contributions",
            "Jun 1, 2021 - Mar 12, 2024",
            "Current Streak",
            "Mar 4, 2024 - Mar 12",
            "7",
            "42",
            "Longest Streak",
            "Nov 20, 2023 - Jan 5, 2024",
        ]

    def test_empty_stats_render_dashes(self):
        texts = _texts(render_stats_card(ContributionStats()))

        assert texts.count("0") == 3
        assert texts.count(EMPTY_LABEL) == 3

    def test_fade_delays_are_formatted(self, stats: ContributionStats):
        svg = render_stats_card(stats)

        delays = re.findall(r"forwards (\d+\.\d+)s", svg)
        assert delays == [
            "0.6",
            "0.7",
            "0.8",
            "0.9",
            "0.9",
            "0.4",
            "0.6",
            "1.2",
            "1.3",
            "1.4",
        ]
