"""
scripts/health/mongo.py — MongoDB connectivity probe and collection summary.

Opens exactly one pymongo client per call and always closes it before
returning. No retries: these are manual diagnostics, not a resilience layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union

from pymongo import MongoClient

DEFAULT_DATABASE = "test"


@dataclass(frozen=True)
class NotConfigured:
    reason: str = "connection string not set"


@dataclass(frozen=True)
class Success:
    database_name: str
    host: str


@dataclass(frozen=True)
class Failure:
    message: str


ProbeResult = Union[NotConfigured, Success, Failure]


@dataclass
class CollectionSummary:
    database_name: str
    missing: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def empty(self) -> list[str]:
        return [name for name, n in self.counts.items() if n == 0]


def _client_kwargs(timeout_ms: int | None) -> dict[str, Any]:
    if timeout_ms is None:
        return {}
    return {"serverSelectionTimeoutMS": timeout_ms}


def _error_message(exc: BaseException) -> str:
    return str(exc).strip() or type(exc).__name__


def _connected_host(client: Any) -> str:
    # client.address raises InvalidOperation behind several mongoses (sharded
    # Atlas clusters); nodes is populated for every topology once ping succeeds.
    hosts = sorted(host for host, _port in client.nodes)
    return hosts[0] if hosts else "?"


def probe_connection(
    uri: str | None,
    timeout_ms: int | None = None,
    client_factory: Callable[..., Any] = MongoClient,
) -> ProbeResult:
    """Open one connection to `uri`, report database and host, then close it."""
    if not uri:
        return NotConfigured()

    client = None
    try:
        client = client_factory(uri, **_client_kwargs(timeout_ms))
        # MongoClient connects lazily; ping forces server selection.
        client.admin.command("ping")
        database = client.get_default_database(default=DEFAULT_DATABASE)
        return Success(database_name=database.name, host=_connected_host(client))
    except Exception as exc:  # noqa: BLE001
        return Failure(_error_message(exc))
    finally:
        if client is not None:
            client.close()


def collection_summary(
    uri: str,
    expected: tuple[str, ...],
    timeout_ms: int | None = None,
    client_factory: Callable[..., Any] = MongoClient,
) -> CollectionSummary:
    """List which expected collections exist and how many documents each holds.

    Raises:
        pymongo.errors.PyMongoError: if the server cannot be reached.
    """
    client = client_factory(uri, **_client_kwargs(timeout_ms))
    try:
        database = client.get_default_database(default=DEFAULT_DATABASE)
        existing = set(database.list_collection_names())
        summary = CollectionSummary(database_name=database.name)
        for name in expected:
            if name in existing:
                summary.counts[name] = database[name].count_documents({})
            else:
                summary.missing.append(name)
        return summary
    finally:
        client.close()
