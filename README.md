# gwexchanger

A small currency exchange-rate service library. Rates are kept in an SQLite
table `rates` with the columns `from`, `to` and `rate`, and are answered by an
exchange service that handles two kinds of request:

* all known rates at once, keyed by the two currency codes joined together
  (for example `USDEUR`);
* the rate for one pair of currencies.

Rates are returned at single precision, as they are stored.

## Storage

`gwexchanger.storage.Storage` opens an SQLite database and reads the `rates`
table. It can be used as a context manager, or closed with `close()`.

```python
from gwexchanger.storage import Storage

with Storage("rates.db") as storage:
    storage.get_rate("USD", "EUR")   # a float
    storage.get_rates()              # {"USDEUR": ..., ...}
```

A missing pair raises `gwexchanger.errors.NotFoundError`, a subclass of
`StorageError`; any other database failure raises `StorageError`.

## Service and server

`gwexchanger.service.ExchangeService(log, storage)` answers requests built from
the messages in `gwexchanger.models` (`Empty`, `CurrencyRequest`,
`ExchangeRatesResponse`, `ExchangeRateResponse`). It logs a warning for a
missing rate, an error for other storage failures, and raises `ExchangeError`
in both cases. A `CurrencyRequest` with an empty source or target currency is
rejected with `ExchangeError`.

`gwexchanger.server.ExchangeServer(exchange)` sits in front of the service and
turns failures into `RpcError`, whose `code` is a `StatusCode` and whose
`details` is a short description:

* `INVALID_ARGUMENT` — a missing request, or an empty currency code;
* `INTERNAL` — any failure of the service.

```python
from gwexchanger.logs import new_discard_logger
from gwexchanger.models import CurrencyRequest, Empty
from gwexchanger.server import ExchangeServer
from gwexchanger.service import ExchangeService
from gwexchanger.storage import Storage

storage = Storage("rates.db")
server = ExchangeServer(ExchangeService(new_discard_logger(), storage))

server.get_exchange_rates(Empty()).rates
server.get_exchange_rate_for_currency(CurrencyRequest("USD", "EUR")).rate
```

`CurrencyRequest` converts to and from a mapping with `to_dict()` and
`CurrencyRequest.from_dict(data)`, using the keys `from_currency` and
`to_currency`.

## Configuration

`gwexchanger.config.read_config(path)` reads a YAML file into a `Config`:

```yaml
env: local            # local, dev or prod
storage_path: ./storage/rates.db
token_ttl: 1h
grpc:
  port: 44044
  timeout: 10h
```

`storage_path` is required; the other keys fall back to the defaults shown.
Durations are written like `1h`, `30m`, `1h30m`, `500ms`; `parse_duration`
turns them into a `timedelta`, and treats a plain integer as nanoseconds.

`fetch_config_path(argv, environ)` takes the path from a `-config` /
`--config` argument, or else from the `CONFIG_PATH` environment variable.
`must_load(argv, environ)` does the whole lookup — argument, environment
variable, file check and parsing — and raises `ConfigError` when any step
fails.

## Logging

`gwexchanger.logs.setup_logger(env, stream)` configures a logger for the
environment:

* `local` — coloured, human-readable lines at debug level, with extra fields
  printed as indented JSON;
* `dev` — one JSON object per line at debug level;
* `prod` — one JSON object per line at info level.

Any other environment name raises `ValueError`. `err_attr(err)` gives an error
as a field to pass as `extra=`. `new_discard_logger()` returns a logger that
drops everything, which suits tests.

## Putting it together

```python
import sys
from gwexchanger.app import build_app
from gwexchanger.config import read_config
from gwexchanger.logs import setup_logger

cfg = read_config("config/local.yaml")
log = setup_logger(cfg.env, sys.stdout)

with build_app(log, cfg.grpc.port, cfg.storage_path, cfg.token_ttl) as application:
    application.server.get_exchange_rates(...)
```

`build_app` opens the storage and builds the service and server on it; the
returned `Application` closes the storage on `close()` or when its `with`
block ends.

## What this package does not do

* It has no command-line program; it is used as a library.
* `ExchangeServer` is called in-process. Nothing listens on a network port:
  `Application.grpc_port`, `Application.token_ttl` and the `grpc.timeout`
  setting are kept but not acted upon.
* It does not create or fill the `rates` table; the database must already
  hold it.