"""Unit tests for pattern compilation and ANY/ALL evaluation."""

import re

import pytest

from mlgrep.engine.patterns import PatternSet, compile_pattern, merge_spans, normalize_pattern
from mlgrep.exceptions import InvalidPatternError, ValidationError


@pytest.mark.unit
class TestNormalizePattern:
    """Test normalize_pattern function."""

    def test_regex_passes_through(self):
        assert normalize_pattern(r"err(or)?\s+\d+") == r"err(or)?\s+\d+"

    def test_fixed_strings_are_escaped(self):
        normalized = normalize_pattern("a.b*c", fixed_strings=True)
        assert re.search(normalized, "xa.b*cx")
        assert not re.search(normalized, "aXbbc")


@pytest.mark.unit
class TestPatternSetCompile:
    """Test PatternSet.compile."""

    def test_compiles_each_pattern(self):
        patterns = PatternSet.compile(["err", "warn"])
        assert len(patterns) == 2
        assert [p.pattern for p in patterns.patterns] == ["err", "warn"]

    def test_empty_pattern_list_rejected(self):
        with pytest.raises(ValidationError):
            PatternSet.compile([])

    def test_invalid_pattern_reports_position(self):
        with pytest.raises(InvalidPatternError) as exc_info:
            PatternSet.compile(["ok", "bad(", "never reached"])

        error = exc_info.value
        assert error.pattern == "bad("
        assert error.position == 2
        assert error.role == "pattern"
        assert "bad(" in error.message
        assert isinstance(error.original_error, re.error)

    def test_fixed_strings_make_invalid_regex_valid(self):
        patterns = PatternSet.compile(["bad("], fixed_strings=True)
        assert patterns.evaluate(["a bad(input"])

    def test_ignore_case(self):
        patterns = PatternSet.compile(["error"], ignore_case=True)
        assert patterns.evaluate(["ERROR: boom"])

    def test_single_string_accepted(self):
        patterns = PatternSet.compile("foo")
        assert len(patterns) == 1

    def test_compile_pattern_separator_role(self):
        with pytest.raises(InvalidPatternError) as exc_info:
            compile_pattern("[", role="separator")
        assert exc_info.value.role == "separator"
        assert "separator" in exc_info.value.message


@pytest.mark.unit
class TestPatternSetEvaluate:
    """Test ANY/ALL/invert evaluation over record lines."""

    def test_any_matches_one_line(self):
        patterns = PatternSet.compile(["err", "warn"])
        assert patterns.evaluate(["nothing", "warn: x"])

    def test_any_no_match(self):
        patterns = PatternSet.compile(["err", "warn"])
        assert not patterns.evaluate(["nothing", "at all"])

    def test_all_across_different_lines(self):
        patterns = PatternSet.compile(["err", "warn"], require_all=True)
        assert patterns.evaluate(["err: a", "warn: b"])

    def test_all_requires_every_pattern(self):
        patterns = PatternSet.compile(["err", "warn"], require_all=True)
        assert not patterns.evaluate(["err: a", "err: b"])

    def test_invert_flips_any(self):
        patterns = PatternSet.compile(["err"], invert=True)
        assert not patterns.evaluate(["err"])
        assert patterns.evaluate(["fine"])

    def test_invert_applies_after_all(self):
        # NOT (err AND warn): a record with only "err" is selected
        patterns = PatternSet.compile(["err", "warn"], require_all=True, invert=True)
        assert patterns.evaluate(["err only"])
        assert not patterns.evaluate(["err", "warn"])

    def test_empty_record(self):
        assert not PatternSet.compile(["x"]).evaluate([])
        assert PatternSet.compile(["x"], invert=True).evaluate([])

    def test_combine(self):
        patterns = PatternSet.compile(["a", "b"], require_all=True)
        assert patterns.combine([True, True])
        assert not patterns.combine([True, False])

    def test_describe(self):
        assert PatternSet.compile(["a", "b"]).describe() == "a OR b"
        assert PatternSet.compile(["a", "b"], require_all=True, invert=True).describe() == "NOT (a AND b)"


@pytest.mark.unit
class TestFindSpans:
    """Test highlight span computation."""

    def test_spans_for_single_pattern(self):
        patterns = PatternSet.compile(["ab"])
        assert patterns.find_spans("xaby") == [(1, 3)]

    def test_spans_union_of_patterns(self):
        patterns = PatternSet.compile(["abc", "cd"])
        assert patterns.find_spans("abcde") == [(0, 4)]

    def test_spans_ignore_zero_width(self):
        patterns = PatternSet.compile(["^", "x*"])
        assert patterns.find_spans("abc") == []

    def test_spans_respect_ignore_case(self):
        patterns = PatternSet.compile(["err"], ignore_case=True)
        assert patterns.find_spans("Err and ERR") == [(0, 3), (8, 11)]

    def test_merge_spans(self):
        assert merge_spans([(5, 7), (0, 2), (1, 3), (3, 4)]) == [(0, 4), (5, 7)]
