# tests/test_rates.py
from showroom.rates import FALLBACK_RATE, ExchangeRateState, init_rate, parse_rate

from tests.conftest import FakeStore


def test_starts_at_fallback():
    assert init_rate() == 50.0
    assert ExchangeRateState().rate == FALLBACK_RATE


def test_refresh_reads_setting_once():
    store = FakeStore(settings={"USD_TO_EGP": "48.5"})
    state = ExchangeRateState()
    assert state.refresh(store) == 48.5
    assert state.rate == 48.5
    assert store.setting_fetches == 1


def test_failed_fetch_keeps_last_known_good():
    store = FakeStore(settings={"USD_TO_EGP": "60"})
    state = ExchangeRateState()
    state.refresh(store)
    store.fail = True
    assert state.refresh(store) == 60.0
    assert state.rate == 60.0


def test_failed_first_fetch_keeps_fallback():
    store = FakeStore()
    store.fail = True
    state = ExchangeRateState()
    assert state.refresh(store) == FALLBACK_RATE


def test_missing_setting_keeps_current_value():
    state = ExchangeRateState(55.0)
    assert state.refresh(FakeStore()) == 55.0


def test_malformed_values_are_ignored():
    for raw in ("abc", "", "inf", "nan", None, True):
        state = ExchangeRateState()
        state.refresh(FakeStore(settings={"USD_TO_EGP": raw}))
        assert state.rate == FALLBACK_RATE


def test_parse_rate():
    assert parse_rate("50") == 50.0
    assert parse_rate(47.25) == 47.25
    assert parse_rate(" 61 ") == 61.0
    assert parse_rate("fifty") is None
    assert parse_rate(float("inf")) is None
    assert parse_rate(False) is None
    assert parse_rate([50]) is None
