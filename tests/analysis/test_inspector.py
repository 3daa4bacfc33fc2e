"""Tests for lock and configuration inspection."""

import pytest

from cron_reality.analysis import LOCK_STALE_SECONDS, ConfigFlags, LockInfo, inspect_lock, read_config
from cron_reality.analysis.inspector import coerce_flag


class TestInspectLock:
    """Test inspect_lock."""

    def test_absent_lock(self):
        lock = inspect_lock(None, 1000.0)

        assert lock.timestamp is None
        assert lock.owner is None
        assert lock.is_stale is False
        assert lock.age_seconds is None

    def test_fresh_lock(self):
        lock = inspect_lock([990.25, "web-1"], 1000.0)

        assert lock.timestamp == 990.25
        assert lock.owner == "web-1"
        assert lock.is_stale is False
        assert lock.age_seconds == pytest.approx(9.75)

    def test_stale_lock(self):
        lock = inspect_lock((900.0, "web-2"), 1000.5)

        assert lock.is_stale is True
        assert lock.age_seconds == pytest.approx(100.5)

    def test_exactly_sixty_seconds_is_not_stale(self):
        assert LOCK_STALE_SECONDS == 60
        assert inspect_lock([940.0, "x"], 1000.0).is_stale is False
        assert inspect_lock([939.9, "x"], 1000.0).is_stale is True

    def test_string_timestamp_coerced(self):
        lock = inspect_lock(["1699999990.5", "web-1"], 1700000000.0)

        assert lock.timestamp == 1699999990.5

    def test_missing_owner(self):
        lock = inspect_lock([995.0, None], 1000.0)

        assert lock.timestamp == 995.0
        assert lock.owner is None

    @pytest.mark.parametrize(
        "raw",
        [
            "1699999990.5",
            1699999990.5,
            [1699999990.5],
            [1699999990.5, "web-1", "extra"],
            {"0": 1699999990.5, "1": "web-1"},
            ["soon", "web-1"],
            [None, "web-1"],
            [True, "web-1"],
            [float("nan"), "web-1"],
            False,
        ],
    )
    def test_malformed_lock_is_inert(self, raw):
        """Any shape other than [timestamp, owner] gives an inert lock."""
        lock = inspect_lock(raw, 2_000_000_000.0)

        assert lock.timestamp is None
        assert lock.is_stale is False
        assert lock.raw == raw or lock.raw is raw

    def test_to_dict(self):
        lock = inspect_lock([990.0, "web-1"], 1000.0)

        assert lock.to_dict() == {
            "timestamp": 990.0,
            "owner": "web-1",
            "is_stale": False,
            "age_seconds": 10.0,
        }

    def test_default_lock_info(self):
        assert LockInfo() == LockInfo(timestamp=None, owner=None, is_stale=False)


class TestReadConfig:
    """Test read_config."""

    def test_defaults(self):
        assert read_config({}) == ConfigFlags(
            scheduler_disabled=False, alternate_mode_enabled=False, trigger_url=""
        )

    def test_reads_flags(self):
        flags = read_config(
            {
                "DISABLE_WP_CRON": True,
                "ALTERNATE_WP_CRON": "1",
                "WP_CRON_URL": "https://example.test/wp-cron.php",
            }
        )

        assert flags.scheduler_disabled is True
        assert flags.alternate_mode_enabled is True
        assert flags.trigger_url == "https://example.test/wp-cron.php"

    def test_none_environment(self):
        assert read_config(None) == ConfigFlags()

    def test_does_not_mutate(self):
        env = {"DISABLE_WP_CRON": "true"}

        read_config(env)

        assert env == {"DISABLE_WP_CRON": "true"}

    def test_process_environment(self, monkeypatch):
        import os

        monkeypatch.setenv("DISABLE_WP_CRON", "yes")

        assert read_config(os.environ).scheduler_disabled is True

    def test_to_dict(self):
        assert read_config({"WP_CRON_URL": "u"}).to_dict() == {
            "scheduler_disabled": False,
            "alternate_mode_enabled": False,
            "trigger_url": "u",
        }


class TestCoerceFlag:
    @pytest.mark.parametrize("value", [True, 1, "1", "true", "TRUE", " yes ", "on"])
    def test_truthy(self, value):
        assert coerce_flag(value) is True

    @pytest.mark.parametrize("value", [None, False, 0, "", "0", "false", "no", "off", "disabled"])
    def test_falsy(self, value):
        assert coerce_flag(value) is False
