"""Tests for EngineConfig."""

import pytest

from exchange.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from exchange.constants import DEFAULT_ADMIN, DEFAULT_EXCHANGE_ADDRESS, DEFAULT_FEE
from exchange.errors import ExchangeError, FeeOutOfRange, InvalidConfiguration
from tests.helpers import ADMIN, ALICE


def test_defaults():
    assert DEFAULT_ENGINE_CONFIG == EngineConfig(
        address=DEFAULT_EXCHANGE_ADDRESS,
        admin=DEFAULT_ADMIN,
        fee=DEFAULT_FEE,
    )
    assert DEFAULT_ENGINE_CONFIG.fee == 3


@pytest.mark.parametrize("fee", [-1, 1001])
def test_fee_out_of_range(fee: int):
    with pytest.raises(FeeOutOfRange):
        EngineConfig(fee=fee)


@pytest.mark.parametrize("fee", [0, 1000])
def test_fee_bounds_inclusive(fee: int):
    assert EngineConfig(fee=fee).fee == fee


def test_address_must_differ_from_admin():
    with pytest.raises(InvalidConfiguration) as exc_info:
        EngineConfig(address=ADMIN, admin=ADMIN)
    assert isinstance(exc_info.value, ExchangeError)
    assert exc_info.value.reason == "InvalidConfiguration"


class TestFromEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("EXCHANGE_ADDRESS", ALICE)
        monkeypatch.setenv("EXCHANGE_ADMIN", ADMIN)
        monkeypatch.setenv("EXCHANGE_FEE", "25")
        assert EngineConfig.from_env() == EngineConfig(address=ALICE, admin=ADMIN, fee=25)

    def test_falls_back_to_defaults(self, monkeypatch):
        for name in ("EXCHANGE_ADDRESS", "EXCHANGE_ADMIN", "EXCHANGE_FEE"):
            monkeypatch.delenv(name, raising=False)
        assert EngineConfig.from_env() == DEFAULT_ENGINE_CONFIG

    def test_rejects_bad_fee(self, monkeypatch):
        monkeypatch.setenv("EXCHANGE_FEE", "5000")
        with pytest.raises(FeeOutOfRange):
            EngineConfig.from_env()
