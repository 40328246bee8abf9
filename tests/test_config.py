"""
설정(Settings)과 데모 스크립트 테스트.
"""

import pytest
from zkholdem.config import Settings
from zkholdem.holdem.chip import StraightMode
from zkholdem.holdem import example


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.db_path == "db.json"
        assert settings.k == 3
        assert settings.straight_mode is StraightMode.LITERAL
        assert settings.bind_public is False
        assert settings.log_level == "INFO"

    def test_from_env(self):
        settings = Settings.from_env({
            "HOLDEM_DB_PATH": "/tmp/holdem.json",
            "HOLDEM_K": "4",
            "HOLDEM_STRAIGHT_MODE": " Adjacent ",
            "HOLDEM_BIND_PUBLIC": "yes",
            "LOG_LEVEL": "debug",
        })
        assert settings.db_path == "/tmp/holdem.json"
        assert settings.k == 4
        assert settings.straight_mode is StraightMode.ADJACENT
        assert settings.bind_public is True
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["0", "no", "off", ""])
    def test_bind_public_off(self, raw):
        assert Settings.from_env({"HOLDEM_BIND_PUBLIC": raw}).bind_public is False

    @pytest.mark.parametrize("env", [
        {"HOLDEM_K": "three"},
        {"HOLDEM_K": "0"},
        {"HOLDEM_STRAIGHT_MODE": "sideways"},
    ])
    def test_invalid(self, env):
        with pytest.raises(ValueError):
            Settings.from_env(env)


class TestExample:
    def test_check(self):
        prepared, preprocessed, prover = example.check(3, "7h 7s", "7d Kc Kh", "full house")
        assert prepared.counts == (1, 3)
        assert preprocessed.n == 8
        assert prover.verify() == []

    def test_main(self, capsys, monkeypatch):
        monkeypatch.delenv("HOLDEM_K", raising=False)
        assert example.main() is True
        out = capsys.readouterr().out
        assert "Hold'em Hand Claim Demo" in out
        assert "데모 완료" in out
