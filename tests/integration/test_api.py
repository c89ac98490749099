"""Integration tests for the library API."""

import io

import pytest

from mlgrep import GrepOptions, InvalidPatternError, count_records, grep_records


@pytest.mark.integration
class TestGrepRecords:
    """Test grep_records and count_records on in-memory text."""

    def test_selects_records(self, log_stream):
        records = list(grep_records(log_stream, ["err"], source="app.log"))
        assert [record.body[0] for record in records] == ["job 2", "job 3"]
        assert {record.source for record in records} == {"app.log"}

    def test_accepts_single_pattern_string(self, log_stream):
        assert count_records(log_stream, "timeout") == 1

    def test_options(self, log_stream):
        options = GrepOptions(match_mode="all", ignore_case=True)
        assert count_records(log_stream, ["ERR", "WARN"], options) == 1

    def test_record_text_round_trips(self, log_text):
        records = list(grep_records(io.StringIO(log_text), ["."], GrepOptions(match_header=True)))
        assert "".join(record.text for record in records) == log_text

    def test_errors_raised_before_reading(self):
        def never_read():
            raise AssertionError("stream was read")
            yield  # pragma: no cover

        with pytest.raises(InvalidPatternError):
            grep_records(never_read(), ["("])

    def test_timestamp_entries(self, timestamped_log):
        options = GrepOptions(timestamp=True)
        records = list(grep_records(io.StringIO(timestamped_log), ["ValueError"], options))
        assert len(records) == 1
        assert records[0].header.endswith("ERROR request failed")
