"""Shared test fixtures and sample data."""
from __future__ import annotations

import json
import textwrap
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from price_oracles.config import AppConfig, OraclesConfig, TorConfig, TradeOgreConfig
from price_oracles.models import RequestDescriptor


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_tor_config() -> TorConfig:
    return TorConfig(proxy_url="http://127.0.0.1:9080", timeout=10)


@pytest.fixture()
def sample_tradeogre_config() -> TradeOgreConfig:
    return TradeOgreConfig(
        host="tradeogre.example.com",
        port=443,
        history_path="/api/v1/history/MWC-BTC",
        ticker_path="/api/v1/ticker/BTC-USDT",
    )


@pytest.fixture()
def sample_app_config(
    sample_tor_config: TorConfig, sample_tradeogre_config: TradeOgreConfig
) -> AppConfig:
    return AppConfig(
        tor=sample_tor_config,
        oracles=OraclesConfig(enabled=("tradeogre",), tradeogre=sample_tradeogre_config),
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    tor:
      proxy_url: "http://127.0.0.1:9050"
      timeout: 15
    oracles:
      enabled: [tradeogre]
      tradeogre:
        host: tradeogre.example.com
        port: 8443
        history_path: /api/v1/history/MWC-BTC
        ticker_path: /api/v1/ticker/BTC-USDT
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Sample exchange responses
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_history() -> list[dict[str, Any]]:
    return [
        {"date": 1699990000, "type": "sell", "price": "0.00000900", "quantity": "12.5"},
        {"date": 1700000000, "type": "buy", "price": "0.50000", "quantity": "1.0"},
    ]


@pytest.fixture()
def sample_ticker() -> dict[str, Any]:
    return {
        "success": True,
        "initialprice": "29500.00",
        "price": "30000.12",
        "high": "30500.00",
        "low": "29000.00",
        "volume": "1234.56",
    }


# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class FakeTransport:
    """Serves canned bodies by request path and records every batch."""

    def __init__(self, bodies: dict[str, bytes], succeed: bool = True) -> None:
        self.bodies = bodies
        self.succeed = succeed
        self.batches: list[list[RequestDescriptor]] = []

    async def perform_requests(self, requests: Sequence[RequestDescriptor]) -> bool:
        self.batches.append(list(requests))
        for request in requests:
            request.output_buffer.extend(self.bodies.get(request.path, b""))
        return self.succeed


def encode(value: Any) -> bytes:
    return json.dumps(value).encode()


@pytest.fixture()
def make_transport(
    sample_tradeogre_config: TradeOgreConfig,
):
    """Build a FakeTransport answering the TradeOgre history and ticker paths."""

    def _make(history: Any, ticker: Any, succeed: bool = True) -> FakeTransport:
        bodies = {}
        for path, body in (
            (sample_tradeogre_config.history_path, history),
            (sample_tradeogre_config.ticker_path, ticker),
        ):
            bodies[path] = body if isinstance(body, bytes) else encode(body)
        return FakeTransport(bodies, succeed=succeed)

    return _make
