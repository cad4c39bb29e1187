"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import MAX_PORT, MIN_PORT

logger = logging.getLogger(__name__)

HTTPS_PORT = 443

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TorConfig:
    proxy_url: str = "http://127.0.0.1:9080"
    timeout: int = 30


@dataclass(frozen=True)
class TradeOgreConfig:
    host: str = "tradeogre.com"
    port: int = HTTPS_PORT
    history_path: str = "/api/v1/history/MWC-BTC"
    ticker_path: str = "/api/v1/ticker/BTC-USDT"


@dataclass(frozen=True)
class OraclesConfig:
    enabled: tuple[str, ...] = ("tradeogre",)
    tradeogre: TradeOgreConfig = field(default_factory=TradeOgreConfig)


@dataclass(frozen=True)
class AppConfig:
    tor: TorConfig = field(default_factory=TorConfig)
    oracles: OraclesConfig = field(default_factory=OraclesConfig)


KNOWN_ORACLES = frozenset({"tradeogre"})

# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_tor(raw: dict[str, Any]) -> TorConfig:
    return TorConfig(
        proxy_url=raw.get("proxy_url", TorConfig.proxy_url) or "",
        timeout=int(raw.get("timeout", TorConfig.timeout)),
    )


def _build_tradeogre(raw: dict[str, Any]) -> TradeOgreConfig:
    return TradeOgreConfig(
        host=raw.get("host", TradeOgreConfig.host),
        port=int(raw.get("port", TradeOgreConfig.port)),
        history_path=raw.get("history_path", TradeOgreConfig.history_path),
        ticker_path=raw.get("ticker_path", TradeOgreConfig.ticker_path),
    )


def _build_oracles(raw: dict[str, Any]) -> OraclesConfig:
    return OraclesConfig(
        enabled=tuple(raw.get("enabled", OraclesConfig.enabled)),
        tradeogre=_build_tradeogre(raw.get("tradeogre") or {}),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        tor=_build_tor(raw.get("tor") or {}),
        oracles=_build_oracles(raw.get("oracles") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.tor.timeout <= 0:
        raise ValueError("Tor timeout must be positive")

    if not cfg.oracles.enabled:
        raise ValueError("At least one oracle must be enabled")

    for name in cfg.oracles.enabled:
        if name not in KNOWN_ORACLES:
            raise ValueError(f"Unknown oracle '{name}'")

    tradeogre = cfg.oracles.tradeogre
    if not tradeogre.host:
        raise ValueError("Oracle 'tradeogre' has no host")
    if not MIN_PORT <= tradeogre.port <= MAX_PORT:
        raise ValueError(f"Oracle 'tradeogre' port out of range: {tradeogre.port}")
    for path in (tradeogre.history_path, tradeogre.ticker_path):
        if not path.startswith("/"):
            raise ValueError(f"Oracle 'tradeogre' path must start with '/': {path}")
