"""Wiring of storage, service and server into one application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from types import TracebackType

from gwexchanger.server import ExchangeServer
from gwexchanger.service import ExchangeService
from gwexchanger.storage import Storage


@dataclass
class Application:
    """The assembled exchanger application."""

    server: ExchangeServer
    service: ExchangeService
    storage: Storage
    grpc_port: int
    token_ttl: timedelta

    def __enter__(self) -> Application:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the storage held by the application."""
        self.storage.close()


def build_app(
    log: logging.Logger,
    grpc_port: int,
    storage_path: str,
    token_ttl: timedelta,
) -> Application:
    """Open the storage and build the service and server on top of it."""
    storage = Storage(storage_path)
    service = ExchangeService(log, storage)
    server = ExchangeServer(service)
    return Application(
        server=server,
        service=service,
        storage=storage,
        grpc_port=grpc_port,
        token_ttl=token_ttl,
    )