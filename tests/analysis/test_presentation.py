"""Tests for presentation helpers."""

import csv
import io

import pytest

from cron_reality.analysis import (
    Snapshot,
    classify,
    format_interval,
    top_hooks,
    top_overdue,
    write_events_csv,
)


class TestFormatInterval:
    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0 s"),
            (59, "59 s"),
            (60, "1 min"),
            (299, "4 min"),
            (3599, "59 min"),
            (3600, "1 h"),
            (43200, "12 h"),
            (86399, "23 h"),
            (86400, "1 days"),
            (604800, "7 days"),
        ],
    )
    def test_units(self, seconds, expected):
        assert format_interval(seconds) == expected

    def test_float_is_floored(self):
        assert format_interval(90.9) == "1 min"


class TestTopHooks:
    def test_orders_by_count(self, snapshot):
        assert top_hooks(snapshot)[0] == ("cleanup", 2)

    def test_ties_keep_snapshot_order(self, snapshot):
        ranked = [hook for hook, _ in top_hooks(snapshot)]

        assert ranked == ["cleanup", "wp_version_check", "old_plugin_task", "publish_future_post"]

    def test_limit(self, snapshot):
        assert len(top_hooks(snapshot, limit=2)) == 2

    def test_empty(self, now):
        assert top_hooks(Snapshot(now=now)) == []


class TestTopOverdue:
    def test_limit_applies_at_render_time(self, snapshot):
        classification = classify(snapshot, {})

        shown = top_overdue(classification, limit=1)

        assert [e.hook for e in shown] == ["wp_version_check"]
        assert len(classification.overdue) == 2

    def test_default_limit(self, snapshot):
        assert len(top_overdue(classify(snapshot, {}))) == 2


class TestWriteEventsCsv:
    def test_rows(self, snapshot, now):
        stream = io.StringIO()

        count = write_events_csv(snapshot, stream)

        rows = list(csv.reader(io.StringIO(stream.getvalue())))
        assert count == 5
        assert rows[0] == ["timestamp", "hook", "schedule", "interval", "args"]
        assert len(rows) == 6
        assert rows[1] == [str(now - 7200), "wp_version_check", "twicedaily", "43200", "[]"]

    def test_one_off_has_blank_interval(self, snapshot):
        stream = io.StringIO()
        write_events_csv(snapshot, stream)

        rows = {row[1]: row for row in csv.reader(io.StringIO(stream.getvalue()))}
        assert rows["publish_future_post"][2:] == ["", "", "[42]"]

    def test_empty_snapshot_writes_header_only(self, now):
        stream = io.StringIO()

        assert write_events_csv(Snapshot(now=now), stream) == 0
        assert stream.getvalue().strip() == "timestamp,hook,schedule,interval,args"
