"""Shared fixtures: an in-memory stand-in for the Redis server."""

import threading
from typing import Any

import pytest
import redis

from kiqforge.client import Client, reset_default_client
from kiqforge.config import ClientSettings


class FakeRedisServer:
    """Records commands and keeps list/set state across reconnects."""

    def __init__(self) -> None:
        self.commands: list[tuple[Any, ...]] = []
        self.lists: dict[str, list[Any]] = {}
        self.sets: dict[str, set[Any]] = {}
        self.failing: set[str] = set()
        self.clients: list["StubRedis"] = []
        self.lock = threading.Lock()

    def client(self, *args: Any, **kwargs: Any) -> "StubRedis":
        stub = StubRedis(self, kwargs.get("connection_pool"))
        self.clients.append(stub)
        return stub

    def commands_named(self, name: str) -> list[tuple[Any, ...]]:
        return [c for c in self.commands if c[0] == name]


class StubRedis:
    def __init__(self, server: FakeRedisServer, connection_pool: Any) -> None:
        self.server = server
        self.connection_pool = connection_pool

    def execute_command(self, command: str, *args: Any) -> Any:
        with self.server.lock:
            return self._execute(command, *args)

    def _execute(self, command: str, *args: Any) -> Any:
        server = self.server
        server.commands.append((command, *args))
        if command in server.failing:
            raise redis.ConnectionError(f"{command} refused")

        if command == "RPUSH":
            key, *values = args
            if not values:
                raise redis.ResponseError("wrong number of arguments for 'rpush' command")
            server.lists.setdefault(key, []).extend(values)
            return len(server.lists[key])
        if command == "SADD":
            key, *members = args
            if not members:
                raise redis.ResponseError("wrong number of arguments for 'sadd' command")
            members_set = server.sets.setdefault(key, set())
            added = len(set(members) - members_set)
            members_set.update(members)
            return added
        if command == "PING":
            return True
        raise redis.ResponseError(f"unknown command '{command}'")


@pytest.fixture
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> FakeRedisServer:
    server = FakeRedisServer()
    monkeypatch.setattr(redis, "Redis", server.client)
    return server


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def client(settings: ClientSettings, fake_redis: FakeRedisServer) -> Client:
    return Client(settings)


@pytest.fixture(autouse=True)
def _reset_default_client():
    yield
    reset_default_client()
