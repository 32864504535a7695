"""Tests for landing page helpers."""
import random

from holipass.ui.landing import (
    EVENT_TITLE,
    FESTIVAL_COLORS,
    build_landing_html,
    pick_background_color,
)


class TestLandingHtml:
    """Landing hero content."""

    def test_contains_event_details(self):
        html = build_landing_html()
        assert EVENT_TITLE in html
        assert "Date: March 11, 2025" in html
        assert "Venue: Holi Square, Colorful City" in html

    def test_no_indented_lines(self):
        """Indented lines would render as Markdown code blocks."""
        html = build_landing_html()
        assert all(not line.startswith(" ") for line in html.splitlines())


class TestBackgroundColor:
    """Festival palette selection."""

    def test_color_from_palette(self):
        assert pick_background_color(random.Random(7)) in FESTIVAL_COLORS

    def test_seeded_choice_is_stable(self):
        assert pick_background_color(random.Random(3)) == pick_background_color(random.Random(3))
