"""SQLite-backed storage of exchange rates."""

from __future__ import annotations

import sqlite3
import struct
from types import TracebackType

from gwexchanger.errors import NotFoundError, StorageError


def _float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


class Storage:
    """Exchange rates kept in a ``rates`` table of a SQLite database."""

    def __init__(self, storage_path: str) -> None:
        try:
            self._db = sqlite3.connect(storage_path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StorageError(f"storage.grpc.New: {exc}") from exc

    def __enter__(self) -> Storage:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        """Return the rate from one currency to another."""
        op = "sqlite.grpc.GetRate"
        try:
            row = self._db.execute(
                'SELECT rate FROM rates WHERE "from" = ? AND "to" = ?',
                (from_currency, to_currency),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"{op}: {exc}") from exc
        if row is None:
            raise NotFoundError(f"{op}: not found")
        return _float32(row[0])

    def get_rates(self) -> dict[str, float]:
        """Return every rate keyed by the two currency codes joined together."""
        op = "sqlite.grpc.GetRates"
        try:
            rows = self._db.execute('SELECT "from", "to", rate FROM rates').fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"{op}: {exc}") from exc
        return {f"{src}{dst}": _float32(rate) for src, dst, rate in rows}