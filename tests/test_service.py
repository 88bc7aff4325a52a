import logging
import sqlite3

import pytest

from gwexchanger.errors import NotFoundError, StorageError
from gwexchanger.models import CurrencyRequest, Empty
from gwexchanger.service import ExchangeError, ExchangeService
from gwexchanger.storage import Storage


def _make_db(path, rows):
    con = sqlite3.connect(path)
    con.execute('CREATE TABLE rates ("from" TEXT, "to" TEXT, rate REAL)')
    con.executemany("INSERT INTO rates VALUES (?, ?, ?)", rows)
    con.commit()
    con.close()


@pytest.fixture
def storage(tmp_path):
    path = str(tmp_path / "rates.db")
    _make_db(path, [("USD", "EUR", 0.5), ("EUR", "USD", 2.0)])
    st = Storage(path)
    yield st
    st.close()


@pytest.fixture
def log():
    return logging.getLogger("test.gwexchanger.service")


def test_get_exchange_rates(storage, log):
    svc = ExchangeService(log, storage)
    resp = svc.get_exchange_rates(Empty())
    assert resp.rates == {"USDEUR": 0.5, "EURUSD": 2.0}


def test_get_rate_for_currency(storage, log):
    svc = ExchangeService(log, storage)
    resp = svc.get_exchange_rate_for_currency(CurrencyRequest("EUR", "USD"))
    assert resp.rate == 2.0


@pytest.mark.parametrize(
    "req", [CurrencyRequest("", "USD"), CurrencyRequest("USD", ""), CurrencyRequest()]
)
def test_empty_currency_rejected(storage, log, req):
    svc = ExchangeService(log, storage)
    with pytest.raises(ExchangeError, match="from/to currency is empty"):
        svc.get_exchange_rate_for_currency(req)


def test_missing_rate_wraps_not_found(storage, log, caplog):
    svc = ExchangeService(log, storage)
    with caplog.at_level(logging.WARNING, logger=log.name):
        with pytest.raises(ExchangeError) as info:
            svc.get_exchange_rate_for_currency(CurrencyRequest("USD", "JPY"))
    assert str(info.value).startswith("exchanger.GetExchangeRateForCurrency: ")
    assert isinstance(info.value.__cause__, NotFoundError)
    assert any(r.levelno == logging.WARNING and r.error for r in caplog.records)


def test_broken_storage_logged_as_error(tmp_path, log, caplog):
    st = Storage(str(tmp_path / "empty.db"))
    svc = ExchangeService(log, st)
    with caplog.at_level(logging.ERROR, logger=log.name):
        with pytest.raises(ExchangeError) as info:
            svc.get_exchange_rates(Empty())
    st.close()
    assert str(info.value).startswith("exchanger.GetExchangeRates: ")
    assert isinstance(info.value.__cause__, StorageError)
    assert not isinstance(info.value.__cause__, NotFoundError)
    assert [r.getMessage() for r in caplog.records] == ["failed to get rates"]