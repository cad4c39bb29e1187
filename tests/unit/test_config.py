"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from price_oracles.config import (
    AppConfig,
    TorConfig,
    TradeOgreConfig,
    _interpolate_env,
    load_config,
)


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOST", "exchange.test")
        result = _interpolate_env({"host": "${HOST}", "plain": "text"})
        assert result == {"host": "exchange.test", "plain": "text"}

    def test_nested_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A", "x")
        assert _interpolate_env(["${A}", "y"]) == ["x", "y"]

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(True) is True


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.tor.proxy_url == "http://127.0.0.1:9050"
        assert cfg.tor.timeout == 15
        assert cfg.oracles.enabled == ("tradeogre",)
        assert cfg.oracles.tradeogre.host == "tradeogre.example.com"
        assert cfg.oracles.tradeogre.port == 8443

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("")
        cfg = load_config(cfg_file)
        assert cfg == AppConfig()
        assert cfg.oracles.tradeogre.history_path == "/api/v1/history/MWC-BTC"
        assert cfg.oracles.tradeogre.ticker_path == "/api/v1/ticker/BTC-USDT"

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEST_TOR_PROXY", "http://tor.internal:9080")
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('tor:\n  proxy_url: "${TEST_TOR_PROXY}"\n')
        cfg = load_config(cfg_file)
        assert cfg.tor.proxy_url == "http://tor.internal:9080"

    def test_unset_proxy_means_direct(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("UNSET_TOR_PROXY_XYZ", raising=False)
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('tor:\n  proxy_url: "${UNSET_TOR_PROXY_XYZ}"\n')
        assert load_config(cfg_file).tor.proxy_url == ""


class TestValidation:
    @pytest.mark.parametrize(
        "yaml_content, match",
        [
            ("tor: {timeout: 0}\n", "timeout must be positive"),
            ("oracles: {enabled: []}\n", "At least one oracle"),
            ("oracles: {enabled: [binance]}\n", "Unknown oracle 'binance'"),
            ("oracles: {tradeogre: {host: ''}}\n", "no host"),
            ("oracles: {tradeogre: {port: 70000}}\n", "port out of range"),
            ("oracles: {tradeogre: {ticker_path: api/v1}}\n", "must start with '/'"),
        ],
    )
    def test_invalid_config_raises(
        self, tmp_path: Path, yaml_content: str, match: str
    ) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(yaml_content)
        with pytest.raises(ValueError, match=match):
            load_config(cfg_file)


class TestFrozenConfigs:
    def test_tor_config_immutable(self) -> None:
        t = TorConfig()
        with pytest.raises(AttributeError):
            t.timeout = 99  # type: ignore[misc]

    def test_tradeogre_config_immutable(self) -> None:
        c = TradeOgreConfig()
        with pytest.raises(AttributeError):
            c.host = "evil.example.com"  # type: ignore[misc]
