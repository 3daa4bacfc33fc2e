"""Tests for snapshot document loading."""

import pytest

from cron_reality.analysis import RealityCheck, SnapshotDocument, load_document, parse_document
from cron_reality.core.errors import (
    ErrorCategory,
    ParseError,
    SourceError,
    SourceNotFoundError,
    ValidationError,
)


class TestParseDocument:
    def test_full_document(self, snapshot_document, now):
        document = parse_document(snapshot_document, source_path="cron.json")

        assert isinstance(document, SnapshotDocument)
        assert document.now == now
        assert document.schedules["hourly"]["interval"] == 3600
        assert document.cron_lock == [now - 5.5, "web-1"]
        assert document.source_path == "cron.json"

    def test_minimal_document(self):
        document = parse_document({})

        assert document.cron is None
        assert document.schedules == {}
        assert document.config is None
        assert document.now is None

    @pytest.mark.parametrize("data", [[], "cron", 3, None])
    def test_non_object_rejected(self, data):
        with pytest.raises(ParseError) as exc_info:
            parse_document(data, source_path="x.json")

        assert exc_info.value.category is ErrorCategory.PARSE
        assert exc_info.value.context.source_path == "x.json"

    @pytest.mark.parametrize("now", ["1700000000", 1.5, True])
    def test_bad_now(self, now):
        with pytest.raises(ValidationError) as exc_info:
            parse_document({"now": now})

        assert exc_info.value.field == "now"

    def test_bad_schedules(self):
        with pytest.raises(ValidationError, match="schedules"):
            parse_document({"schedules": ["hourly"]})

    def test_bad_config(self):
        with pytest.raises(ValidationError, match="config"):
            parse_document({"config": "DISABLE_WP_CRON"})

    @pytest.mark.parametrize("callbacks", [5, "wp_version_check", [{"a": 1}], ["ok", 3], True])
    def test_bad_callbacks(self, callbacks):
        with pytest.raises(ValidationError) as exc_info:
            parse_document({"callbacks": callbacks}, source_path="cron.json")

        assert exc_info.value.field == "callbacks"
        assert exc_info.value.value == callbacks
        assert exc_info.value.context.source_path == "cron.json"

    @pytest.mark.parametrize("callbacks", [None, {}, {"a": ["x"]}, [], ["a", "b"]])
    def test_accepted_callbacks(self, callbacks):
        assert parse_document({"callbacks": callbacks}).callbacks == callbacks

    def test_cron_table_not_validated(self):
        """Malformed tables are left for the snapshot builder to tolerate."""
        document = parse_document({"cron": "garbage"})

        assert document.cron == "garbage"


class TestLoadDocument:
    def test_round_trip(self, write_document, snapshot_document):
        path = write_document(snapshot_document)

        document = load_document(path)

        assert document.source_path == str(path)
        assert document.callbacks["cleanup"] == ["purge_transients"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceNotFoundError) as exc_info:
            load_document(tmp_path / "nope.json")

        assert isinstance(exc_info.value, SourceError)
        assert exc_info.value.category is ErrorCategory.SOURCE

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ParseError, match="not valid JSON") as exc_info:
            load_document(path)

        assert exc_info.value.cause is not None
        assert exc_info.value.context.source_path == str(path)

    def test_directory_is_not_a_document(self, tmp_path):
        with pytest.raises(SourceNotFoundError):
            load_document(tmp_path)


class TestDocumentRun:
    def test_run_matches_engine(self, write_document, snapshot_document):
        document = load_document(write_document(snapshot_document))

        result = document.run(RealityCheck())

        assert result.snapshot.total == 5
        assert result.classification.orphaned_hooks == ["old_plugin_task"]
        assert result.lock.owner == "web-1"
        assert result.lock.is_stale is False
        assert result.config.trigger_url == "https://example.test/wp-cron.php"
        assert result.health.score == 93

    def test_falls_back_to_process_environment(self, monkeypatch, now):
        monkeypatch.setenv("DISABLE_WP_CRON", "1")

        result = parse_document({"now": now}).run(RealityCheck())

        assert result.config.scheduler_disabled is True
        assert result.health.score == 50

    def test_explicit_config_ignores_environment(self, monkeypatch, now):
        monkeypatch.setenv("DISABLE_WP_CRON", "1")

        result = parse_document({"now": now, "config": {}}).run(RealityCheck())

        assert result.config.scheduler_disabled is False
