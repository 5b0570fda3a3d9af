"""Database client wrappers shared by generated code.

A :class:`PGClient` wraps a top-level database connection. Transactions and
dedicated connections taken from it are wrapped in :class:`TxPGClient` and
:class:`ConnPGClient`, which all expose the same database handle interface.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NoReturn, Protocol, runtime_checkable

from pggen.sql_builder import is_invalid_cached_plan_error

ErrorConverter = Callable[[BaseException], "BaseException | None"]


@runtime_checkable
class DBHandle(Protocol):
    """The operations shared by connections, transactions and pinned connections."""

    def execute(self, query: str, *args: Any) -> Any: ...

    def prepare(self, query: str) -> Any: ...

    def query(self, query: str, *args: Any) -> Any: ...

    def query_row(self, query: str, *args: Any) -> Any: ...


@runtime_checkable
class DBConn(DBHandle, Protocol):
    """A top-level database connection that can start transactions.

    Wrappers around a real connection, for logging or tracing, may implement
    this interface as long as they forward every call to the connection.
    """

    def begin_tx(self) -> Any: ...

    def conn(self) -> Any: ...

    def close(self) -> None: ...

    def ping(self) -> None: ...


def _identity(err: BaseException) -> BaseException:
    return err


class PGClient:
    """Wraps a database connection; generated access methods hang off it.

    If ``conn`` has an ``error_converter()`` method returning a callable, that
    callable is applied to every error before it is raised. If the method is
    missing or returns ``None``, errors are raised unchanged.
    """

    def __init__(self, conn: DBConn) -> None:
        self._db = conn
        converter: ErrorConverter | None = None
        factory = getattr(conn, "error_converter", None)
        if callable(factory):
            converter = factory()
        self._error_converter: ErrorConverter = converter or _identity

    def handle(self) -> DBConn:
        """Return the underlying top-level connection."""
        return self._db

    def convert_error(self, err: BaseException) -> BaseException:
        """Apply the configured error converter to ``err``."""
        converted = self._error_converter(err)
        return err if converted is None else converted

    def _raise_converted(self, err: BaseException) -> NoReturn:
        converted = self.convert_error(err)
        if converted is err:
            raise err
        raise converted from err

    def begin_tx(self) -> TxPGClient:
        """Start a transaction and return a client bound to it."""
        try:
            tx = self._db.begin_tx()
        except Exception as err:
            self._raise_converted(err)
        return TxPGClient(tx, self)

    def conn(self) -> ConnPGClient:
        """Take a dedicated connection and return a client bound to it."""
        try:
            connection = self._db.conn()
        except Exception as err:
            self._raise_converted(err)
        return ConnPGClient(connection, self)

    def query(self, query: str, *args: Any) -> Any:
        """Run a query, retrying once if the server's cached plan went stale."""
        return _run_query(self, self._db, query, args)


def _run_query(client: PGClient, db: DBHandle, query: str, args: tuple) -> Any:
    try:
        return db.query(query, *args)
    except Exception as err:
        if not is_invalid_cached_plan_error(err):
            client._raise_converted(err)
    # The driver has flushed its statement cache, so one retry is enough.
    try:
        return db.query(query, *args)
    except Exception as err:
        client._raise_converted(err)


class TxPGClient:
    """A client operating within a transaction.

    Used as a context manager it commits on normal exit and rolls back when
    the block raises.
    """

    def __init__(self, tx: Any, client: PGClient) -> None:
        self._db = tx
        self._client = client

    def handle(self) -> Any:
        """Return the underlying transaction."""
        return self._db

    def query(self, query: str, *args: Any) -> Any:
        """Run a query inside the transaction."""
        return _run_query(self._client, self._db, query, args)

    def commit(self) -> None:
        """Commit the transaction."""
        self._db.commit()

    def rollback(self) -> None:
        """Roll the transaction back."""
        self._db.rollback()

    def __enter__(self) -> TxPGClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


class ConnPGClient:
    """A client bound to one dedicated connection; closes it on exit."""

    def __init__(self, connection: Any, client: PGClient) -> None:
        self._db = connection
        self._client = client

    def handle(self) -> Any:
        """Return the underlying connection."""
        return self._db

    def query(self, query: str, *args: Any) -> Any:
        """Run a query on the dedicated connection."""
        return _run_query(self._client, self._db, query, args)

    def close(self) -> None:
        """Return the connection."""
        self._db.close()

    def __enter__(self) -> ConnPGClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()