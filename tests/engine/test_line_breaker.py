"""Tests for greedy line breaking."""

import pytest

from pagewright.engine.line_breaker import LineBreaker
from pagewright.engine.text_metrics import WIDTH_CACHE_SIZE, MonospaceMetrics, TextMetricsEngine, _measure


class CharCounter:
    """Measurer where every character is exactly 1 unit wide."""

    def string_width(self, text, family, size, weight="normal"):
        return float(len(text))


class TestLineBreaker:
    """Test suite for LineBreaker."""

    def test_blank_text_yields_no_lines(self):
        breaker = LineBreaker(CharCounter(), "helvetica", 11)
        assert breaker.break_text("", 10) == []
        assert breaker.break_text("   ", 10) == []

    def test_short_text_single_line(self):
        breaker = LineBreaker(CharCounter(), "helvetica", 11)
        assert breaker.break_text("hello world", 20) == ["hello world"]

    def test_greedy_wrapping(self):
        breaker = LineBreaker(CharCounter(), "helvetica", 11)
        lines = breaker.break_text("the quick brown fox jumps over the lazy dog", 15)
        assert lines == ["the quick brown", "fox jumps over", "the lazy dog"]
        assert all(len(line) <= 15 for line in lines)

    def test_exact_fit_stays_on_line(self):
        breaker = LineBreaker(CharCounter(), "helvetica", 11)
        assert breaker.break_text("abcde fghij", 11) == ["abcde fghij"]

    def test_overlong_word_split_by_character(self):
        breaker = LineBreaker(CharCounter(), "helvetica", 11)
        lines = breaker.break_text("ab abcdefghijkl cd", 5)
        assert lines == ["ab", "abcde", "fghij", "kl cd"]

    def test_words_are_never_lost(self):
        text = "one two three four five six seven eight nine ten"
        breaker = LineBreaker(MonospaceMetrics(), "helvetica", 11)
        lines = breaker.break_text(text, 30)
        assert " ".join(lines) == text

    def test_proportional_metrics(self):
        breaker = LineBreaker(TextMetricsEngine(), "helvetica", 11)
        lines = breaker.break_text("iiii iiii iiii WWWW WWWW WWWW", 30)
        assert len(lines) >= 2
        for line in lines:
            assert breaker.width(line) <= 30


class TestTextMetrics:
    """Test suite for the text-measurement collaborators."""

    def test_monospace_width(self):
        metrics = MonospaceMetrics()
        assert metrics.string_width("abcd", "helvetica", 10) == pytest.approx(4 * 10 * 0.6 * 25.4 / 72)

    def test_reportlab_widths_are_millimetres(self):
        metrics = TextMetricsEngine()
        # Courier advance is exactly 600/1000 em
        assert metrics.string_width("abc", "courier", 10) == pytest.approx(3 * 6 * 25.4 / 72)

    def test_bold_is_wider(self):
        metrics = TextMetricsEngine()
        regular = metrics.string_width("Heading text", "helvetica", 12)
        bold = metrics.string_width("Heading text", "helvetica", 12, "bold")
        assert bold > regular

    def test_empty_string(self):
        assert TextMetricsEngine().string_width("", "helvetica", 12) == 0.0

    def test_width_cache_is_bounded(self):
        metrics = TextMetricsEngine()
        _measure.cache_clear()
        for index in range(WIDTH_CACHE_SIZE + 500):
            metrics.string_width(f"word{index}", "helvetica", 11)

        info = _measure.cache_info()
        assert info.maxsize == WIDTH_CACHE_SIZE
        assert info.currsize == WIDTH_CACHE_SIZE

    def test_repeated_measurement_hits_cache(self):
        metrics = TextMetricsEngine()
        _measure.cache_clear()
        first = metrics.string_width("repeat me", "helvetica", 11)
        second = metrics.string_width("repeat me", "helvetica", 11)

        assert first == second
        assert _measure.cache_info().hits == 1
