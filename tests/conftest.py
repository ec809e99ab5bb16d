"""
tests/conftest.py — Shared fixtures and path setup for all tests.

Adds the project root to sys.path so unit tests can import:
    from config.settings import Settings
    from scripts.health import CheckResult
    from scripts import check_atlas

Also provides an in-memory stand-in for pymongo.MongoClient so no test ever
touches the network.
"""
import pathlib
import sys

import pytest
from pymongo.errors import InvalidOperation

# Make project root importable without installing as a package
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class _FakeAdmin:
    def __init__(self, client):
        self._client = client

    def command(self, name):
        self._client.commands.append(name)
        if self._client.error is not None:
            raise self._client.error
        return {"ok": 1.0}


class _FakeCollection:
    def __init__(self, docs):
        self._docs = docs

    def count_documents(self, query):
        return self._docs


class _FakeDatabase:
    def __init__(self, name, collections):
        self.name = name
        self._collections = collections

    def list_collection_names(self):
        return list(self._collections)

    def __getitem__(self, name):
        return _FakeCollection(self._collections[name])


class FakeMongo:
    """Records every client it creates; behaviour is configured per test."""

    def __init__(self):
        self.clients = []
        self.error = None
        self.host = "cluster0-shard-00-00.abcde.mongodb.net"
        # Set to several hosts to mimic a sharded cluster reached through mongoses
        self.mongos = []
        self.collections = {}

    def __call__(self, uri, **kwargs):
        client = _FakeClient(self, uri, kwargs)
        self.clients.append(client)
        return client


class _FakeClient:
    def __init__(self, owner, uri, kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.error = owner.error
        self.commands = []
        self.closed = False
        self._hosts = list(owner.mongos) or ([owner.host] if owner.host else [])
        self._collections = owner.collections
        self.admin = _FakeAdmin(self)

    @property
    def nodes(self):
        return frozenset((h, 27017) for h in self._hosts)

    @property
    def address(self):
        if len(self._hosts) > 1:
            raise InvalidOperation(
                'Cannot use "address" property when load balancing among mongoses, use "nodes" instead.'
            )
        return (self._hosts[0], 27017) if self._hosts else None

    def get_default_database(self, default=None):
        if self.error is not None:
            raise self.error
        path = self.uri.split("://", 1)[-1].partition("/")[2]
        name = path.split("?", 1)[0] or default
        return _FakeDatabase(name, self._collections)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_mongo():
    return FakeMongo()
