import math

import pytest

from textcanvas.config import DEFAULT_STYLE, resolve_style
from textcanvas.errors import InvalidConfiguration, MeasurementFailure
from textcanvas.utils.text import (
    LayoutResult,
    Line,
    get_anchor_x,
    get_dimensions,
    iter_line_positions,
    layout_text,
)


def texts(result: LayoutResult) -> list[str]:
    return [line.text for line in result.lines]


class TestHardBreaks:
    def test_single_line_without_wrap(self, measure):
        result = layout_text("Hello world", DEFAULT_STYLE, measure)
        assert len(result.lines) == 1
        assert result.lines[0].text == "Hello world"
        assert result.lines[0].width == measure("Hello world")

    def test_one_line_per_newline_in_order(self, measure):
        result = layout_text("one\ntwo\nthree\nfour", DEFAULT_STYLE, measure)
        assert texts(result) == ["one", "two", "three", "four"]
        assert [line.width for line in result.lines] == [30, 30, 50, 40]

    def test_hello_world_default_line_height(self, measure):
        style = resolve_style({"fontSize": 16})
        result = layout_text("Hello\nWorld", style, measure)
        assert len(result.lines) == 2
        assert all(line.height == pytest.approx(19.2) for line in result.lines)
        assert result.height == 39
        assert result.width == 50

    def test_explicit_line_height(self, measure):
        style = resolve_style({"lineHeight": 20})
        result = layout_text("a\nb\nc", style, measure)
        assert [line.height for line in result.lines] == [20, 20, 20]
        assert result.height == 60

    def test_zero_line_height_falls_back(self, measure):
        style = resolve_style({"fontSize": 10, "lineHeight": 0})
        result = layout_text("a", style, measure)
        assert result.lines[0].height == pytest.approx(12)

    def test_long_line_is_not_wrapped_without_word_wrap(self, measure):
        text = "word " * 50
        result = layout_text(text.strip(), DEFAULT_STYLE, measure)
        assert len(result.lines) == 1


class TestWordWrap:
    def test_line_that_fits_matches_unwrapped(self, measure):
        wrapped = layout_text("the quick fox", resolve_style({"wordWrap": 1000}), measure)
        unwrapped = layout_text("the quick fox", DEFAULT_STYLE, measure)
        assert wrapped == unwrapped

    def test_exact_fit_stays_on_one_line(self, measure):
        # 11 characters + 2 separators = 130px
        result = layout_text("the quick fox", resolve_style({"wordWrap": 130}), measure)
        assert texts(result) == ["the quick fox"]
        assert result.lines[0].width == 130

    def test_wraps_at_word_boundary(self, measure):
        result = layout_text("aaa bbb ccc", resolve_style({"wordWrap": 70}), measure)
        assert texts(result) == ["aaa bbb", "ccc"]
        assert [line.width for line in result.lines] == [70, 30]
        assert (result.width, result.height) == (70, 39)

    def test_every_word_on_its_own_line_when_limit_is_tiny(self, measure):
        result = layout_text("a b c", resolve_style({"wordWrap": 1}), measure)
        assert texts(result) == ["a", "b", "c"]
        assert [line.width for line in result.lines] == [10, 10, 10]

    def test_first_word_of_text_is_kept_on_first_line(self, measure):
        result = layout_text("abcdef", resolve_style({"wordWrap": 20}), measure)
        assert texts(result) == ["abcdef"]
        assert result.lines[0].width == 60
        assert result.width == 60

    def test_oversized_first_word_of_later_line_starts_fresh_line(self, measure):
        result = layout_text("ab\ncdefgh", resolve_style({"wordWrap": 30}), measure)
        assert texts(result) == ["ab", "cdefgh"]
        assert [line.width for line in result.lines] == [20, 60]

    def test_oversized_later_line_adds_no_height(self, measure):
        style = resolve_style({"fontSize": 16, "wordWrap": 50})
        result = layout_text("Hi\nSupercalifragilistic", style, measure)
        assert texts(result) == ["Hi", "Supercalifragilistic"]
        assert result.height == 39

    def test_oversized_word_after_others_still_breaks(self, measure):
        result = layout_text("ab\nc defgh", resolve_style({"wordWrap": 30}), measure)
        assert texts(result) == ["ab", "c", "defgh"]

    def test_hard_breaks_are_kept_when_wrapping(self, measure):
        result = layout_text("aaa bbb\nccc", resolve_style({"wordWrap": 1000}), measure)
        assert texts(result) == ["aaa bbb", "ccc"]

    def test_blank_forced_line(self, measure):
        result = layout_text("a\n\nb", resolve_style({"wordWrap": 100}), measure)
        assert texts(result) == ["a", "", "b"]
        assert result.lines[1].width == 0

    def test_space_is_measured_once_per_forced_line(self):
        measured = []

        def counting_measure(text):
            measured.append(text)
            return 10.0 * len(text)

        layout_text("a b c\nd e", resolve_style({"wordWrap": 1000}), counting_measure)
        assert measured.count(" ") == 2

    def test_wrapped_lines_share_height(self, measure):
        style = resolve_style({"wordWrap": 1, "lineHeight": 25})
        result = layout_text("a b c", style, measure)
        assert result.height == 75


class TestTrimming:
    def test_spaces_around_hard_breaks_are_trimmed_without_wrap(self, measure):
        result = layout_text("Hello \n World", DEFAULT_STYLE, measure)
        assert [(line.text, line.width) for line in result.lines] == [("Hello", 50), ("World", 50)]
        assert result.width == 50

    def test_spaces_around_hard_breaks_are_trimmed_when_wrapping(self, measure):
        result = layout_text("Hello \n World", resolve_style({"wordWrap": 1000}), measure)
        assert [(line.text, line.width) for line in result.lines] == [("Hello", 50), ("World", 50)]
        assert result.width == 50

    def test_inner_spaces_are_kept(self, measure):
        result = layout_text("a  b", DEFAULT_STYLE, measure)
        assert texts(result) == ["a  b"]
        assert result.lines[0].width == 40


class TestDeterminism:
    def test_layout_twice_gives_equal_results(self, measure):
        style = resolve_style({"wordWrap": 45})
        first = layout_text("lorem ipsum dolor\nsit amet", style, measure)
        second = layout_text("lorem ipsum dolor\nsit amet", style, measure)
        assert first == second
        assert first is not second

    def test_lines_are_immutable(self, measure):
        result = layout_text("abc", DEFAULT_STYLE, measure)
        with pytest.raises(AttributeError):
            result.lines[0].text = "changed"


class TestMeasurementFailure:
    def test_raising_measure(self):
        def broken(text):
            raise ZeroDivisionError("no font")

        with pytest.raises(MeasurementFailure) as exc_info:
            layout_text("abc", DEFAULT_STYLE, broken)
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)

    @pytest.mark.parametrize("bad_width", [-1, math.nan, "10", None])
    def test_bad_widths(self, bad_width):
        with pytest.raises(MeasurementFailure):
            layout_text("abc", DEFAULT_STYLE, lambda text: bad_width)

    def test_bad_space_width_when_wrapping(self):
        def measure(text):
            return -1.0 if text == " " else 10.0

        with pytest.raises(MeasurementFailure):
            layout_text("a b", resolve_style({"wordWrap": 100}), measure)


class TestDimensions:
    def test_rounds_up(self):
        lines = [Line("a", 10.2, 19.2), Line("b", 3.0, 19.2)]
        assert get_dimensions(lines) == (11, 39)

    def test_empty(self):
        assert get_dimensions([]) == (0, 0)


class TestAlignment:
    @pytest.mark.parametrize(
        ("align", "expected"),
        [("left", 0), ("center", 50), ("right", 100)],
    )
    def test_anchor_x(self, align, expected):
        assert get_anchor_x(100, align) == expected

    def test_unknown_alignment(self):
        with pytest.raises(InvalidConfiguration):
            get_anchor_x(100, "justify")

    def test_vertical_cursor_advances_before_each_line(self):
        lines = tuple(Line(text, 30, 20) for text in ("a", "b", "c"))
        result = LayoutResult(lines=lines, width=30, height=60)
        positions = list(iter_line_positions(result, "center"))
        assert [y for _, _, y in positions] == [20, 40, 60]
        assert [x for _, x, _ in positions] == [15, 15, 15]
        assert [line.text for line, _, _ in positions] == ["a", "b", "c"]
