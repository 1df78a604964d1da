"""Durable key-value store interface and an in-process implementation."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Minimal get/put store that outlives a single cache instance."""

    async def get(self, name: str) -> str | None: ...

    async def put(self, name: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store for tests and single-process deployments."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.reads = 0
        self.writes = 0

    async def get(self, name: str) -> str | None:
        self.reads += 1
        return self._data.get(name)

    async def put(self, name: str, value: str) -> None:
        self.writes += 1
        self._data[name] = value
