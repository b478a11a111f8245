"""
Tests for core.config — POS rules.
"""

from types import SimpleNamespace

import pytest

from core.config.rules import PosConfig, load_pos_config
from core.time.temporal import WeekStart


class TestPosConfig:
    def test_defaults(self):
        cfg = PosConfig()
        assert cfg.week_start is WeekStart.MONDAY
        assert cfg.payment_methods == ("CARD", "CASH")
        assert cfg.percentage_tiers == (5, 10, 20)
        assert cfg.refresh_seconds == 60
        assert str(cfg.tz) == "UTC"

    def test_unknown_zone_rejected(self):
        with pytest.raises(ValueError, match="report_time_zone"):
            PosConfig(report_time_zone="Mars/Olympus_Mons")

    def test_non_positive_refresh_rejected(self):
        with pytest.raises(ValueError, match="refresh_seconds"):
            PosConfig(refresh_seconds=0)

    def test_empty_payment_methods_rejected(self):
        with pytest.raises(ValueError, match="payment_methods"):
            PosConfig(payment_methods=())

    def test_bad_tier_rejected(self):
        with pytest.raises(ValueError, match="percentage tier"):
            PosConfig(percentage_tiers=(5, 150))

    def test_frozen(self):
        cfg = PosConfig()
        with pytest.raises(AttributeError):
            cfg.week_start = WeekStart.SUNDAY


class TestFromSettings:
    def test_reads_pos_keys(self):
        settings_obj = SimpleNamespace(
            POS_WEEK_START="sunday",
            POS_REPORT_TIME_ZONE="Europe/London",
            POS_REPORT_REFRESH_SECONDS="30",
            POS_PAYMENT_METHODS="card, cash ,voucher",
            POS_PERCENTAGE_TIERS=[5, 15],
            POS_CURRENCY_SYMBOL="€",
        )
        cfg = PosConfig.from_settings(settings_obj)
        assert cfg.week_start is WeekStart.SUNDAY
        assert cfg.report_time_zone == "Europe/London"
        assert cfg.refresh_seconds == 30.0
        assert cfg.payment_methods == ("CARD", "CASH", "VOUCHER")
        assert cfg.percentage_tiers == (5, 15)
        assert cfg.currency_symbol == "€"

    def test_missing_keys_fall_back_to_defaults(self):
        cfg = PosConfig.from_settings(SimpleNamespace())
        assert cfg == PosConfig()

    def test_unknown_week_start_rejected(self):
        with pytest.raises(KeyError):
            PosConfig.from_settings(SimpleNamespace(POS_WEEK_START="FRIDAY"))

    def test_load_from_django_settings(self, settings):
        settings.POS_WEEK_START = "SUNDAY"
        settings.POS_PAYMENT_METHODS = "CASH"
        cfg = load_pos_config()
        assert cfg.week_start is WeekStart.SUNDAY
        assert cfg.payment_methods == ("CASH",)
