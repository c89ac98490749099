"""Unit tests for GrepDriver."""

import io
from contextlib import contextmanager

import pytest

from mlgrep.engine.driver import GrepDriver, read_lines, resolve_output_mode
from mlgrep.engine.types import OutputMode
from mlgrep.exceptions import FileError
from mlgrep.exceptions import FileNotFoundError as InputNotFoundError
from mlgrep.exceptions import InvalidPatternError, ValidationError
from mlgrep.options import GrepOptions


def _opener(contents):
    @contextmanager
    def opener(name):
        if name not in contents:
            raise InputNotFoundError(name)
        yield io.StringIO(contents[name])

    return opener


@pytest.mark.unit
class TestGrepDriver:
    """Test end-to-end search over in-memory sources."""

    def test_any_mode(self, log_text):
        out = io.StringIO()
        driver = GrepDriver(["err"], stream=out)
        counters = driver.run(["log"], _opener({"log": log_text}))
        assert counters.matched == 2
        assert counters.scanned == 4
        assert out.getvalue() == "----\njob 2\nerr: disk full\nwarn: retrying\n\n----\njob 3\nerr: timeout\n"
        assert driver.success

    def test_all_mode(self, log_text):
        out = io.StringIO()
        driver = GrepDriver(["err", "warn"], GrepOptions(match_mode="all"), stream=out)
        driver.run(["log"], _opener({"log": log_text}))
        assert out.getvalue() == "----\njob 2\nerr: disk full\nwarn: retrying\n"

    def test_invert(self):
        out = io.StringIO()
        driver = GrepDriver(["foo"], GrepOptions(invert_match=True), stream=out)
        driver.run(["x"], _opener({"x": "a\n\n b\nfoo\n\nc\n"}))
        assert out.getvalue() == "a\n\nc\n"

    def test_no_match(self, log_text):
        out = io.StringIO()
        driver = GrepDriver(["nothing here"], stream=out)
        counters = driver.run(["log"], _opener({"log": log_text}))
        assert out.getvalue() == ""
        assert not counters.success

    def test_count_single_source_is_unlabelled(self, log_text):
        out = io.StringIO()
        driver = GrepDriver(["err"], GrepOptions(count=True), stream=out)
        driver.run(["log"], _opener({"log": log_text}))
        assert out.getvalue() == "2\n"

    def test_count_several_sources_are_labelled(self, log_text):
        out = io.StringIO()
        driver = GrepDriver(["err"], GrepOptions(count=True), stream=out)
        counters = driver.run(["a", "b"], _opener({"a": log_text, "b": "quiet\n"}))
        assert out.getvalue() == "a:2\nb:0\n"
        assert counters.per_source == {"a": 2, "b": 0}

    def test_separator_spans_sources(self):
        out = io.StringIO()
        driver = GrepDriver(["x"], stream=out)
        driver.run(["a", "b"], _opener({"a": "x1\n", "b": "x2\n"}))
        assert out.getvalue() == "x1\n\nx2\n"

    def test_unreadable_source_is_skipped(self, log_text, caplog):
        out = io.StringIO()
        driver = GrepDriver(["err"], stream=out)
        with caplog.at_level("ERROR"):
            counters = driver.run(["missing", "log"], _opener({"log": log_text}))
        assert counters.failed_sources == ["missing"]
        assert counters.matched == 2
        assert not counters.success
        assert "missing" in caplog.text

    def test_multi_line_separator(self):
        out = io.StringIO()
        driver = GrepDriver(["hello"], GrepOptions(separator=r"^From: .*\n^Date: "), stream=out)
        driver.run(["mbox"], _opener({"mbox": "From: a\nDate: 1\nhello\nFrom: b\nDate: 2\nbye\n"}))
        assert driver.counters.matched == 1
        assert out.getvalue() == "From: a\nDate: 1\nhello\n"

    def test_read_error_skips_source(self, caplog):
        def broken():
            yield "err: first\n"
            raise OSError(5, "Input/output error")

        @contextmanager
        def opener(name):
            yield broken() if name == "bad" else io.StringIO("err: second\n")

        out = io.StringIO()
        driver = GrepDriver(["err"], stream=out)
        with caplog.at_level("ERROR"):
            counters = driver.run(["bad", "good"], opener)
        assert counters.failed_sources == ["bad"]
        assert "err: second" in out.getvalue()
        assert "Input/output error" in caplog.text

    def test_output_error_propagates(self):
        class FullStream(io.StringIO):
            def write(self, text):
                raise OSError(28, "No space left on device")

        driver = GrepDriver(["x"], stream=FullStream())
        with pytest.raises(OSError):
            driver.run(["a"], _opener({"a": "x\n"}))
        assert driver.counters.failed_sources == []

    def test_timestamp_mode_with_header_matching(self, timestamped_log):
        out = io.StringIO()
        options = GrepOptions(timestamp=True, match_header=True, count=True)
        driver = GrepDriver(["ERROR"], options, stream=out)
        driver.run(["log"], _opener({"log": timestamped_log}))
        assert out.getvalue() == "1\n"

    def test_records_does_not_touch_counters(self, log_stream):
        driver = GrepDriver(["err"])
        selected = list(driver.records(log_stream, "log"))
        assert [record.index for record in selected] == [2, 3]
        assert driver.counters.matched == 0

    def test_bad_pattern_fails_before_reading(self):
        with pytest.raises(InvalidPatternError) as exc_info:
            GrepDriver(["ok", "("])
        assert exc_info.value.position == 2

    def test_bad_separator(self):
        with pytest.raises(InvalidPatternError) as exc_info:
            GrepDriver(["ok"], GrepOptions(separator="[unclosed"))
        assert exc_info.value.role == "separator"

    def test_no_patterns(self):
        with pytest.raises(ValidationError):
            GrepDriver([])


@pytest.mark.unit
class TestReadLines:
    """Test read failure reporting."""

    def test_lines_pass_through(self):
        assert list(read_lines("a", io.StringIO("x\ny\n"))) == ["x\n", "y\n"]

    def test_decode_error_becomes_file_error(self):
        stream = io.TextIOWrapper(io.BytesIO(b"ok\n\xff\xfe\n"), encoding="utf-8")
        with pytest.raises(FileError) as exc_info:
            list(read_lines("data.bin", stream))
        assert exc_info.value.file_path == "data.bin"
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)


@pytest.mark.unit
class TestResolveOutputMode:
    """Test output mode selection."""

    def test_count_wins(self):
        assert resolve_output_mode(GrepOptions(count=True), highlight=True) is OutputMode.COUNT

    def test_highlight(self):
        assert resolve_output_mode(GrepOptions(), highlight=True) is OutputMode.HIGHLIGHT
        assert resolve_output_mode(GrepOptions(), highlight=False) is OutputMode.PLAIN
