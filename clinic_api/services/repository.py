"""
Storage layer for the clinic API.

Handlers never touch collections directly; they go through a Repository
so the in-memory store can be swapped for Redis (or anything else) and
tests can start each app from a clean, freshly seeded store.
"""
import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from flask import Flask, current_app


logger = logging.getLogger("clinic_api.repository")


def normalize_id(record_id) -> str:
    """Single identifier type at the storage boundary."""
    return str(record_id).strip()


class Repository(ABC):
    """Append-only record store keyed by collection name and normalized id."""

    @abstractmethod
    def list(self, collection: str) -> List[dict]:
        ...

    @abstractmethod
    def get(self, collection: str, record_id) -> Optional[dict]:
        ...

    @abstractmethod
    def add(self, collection: str, record: dict) -> dict:
        ...

    @abstractmethod
    def next_id(self, collection: str) -> int:
        ...

    @abstractmethod
    def reset(self) -> None:
        ...

    def count(self, collection: str) -> int:
        return len(self.list(collection))

    def seed(self, data: Dict[str, List[dict]]) -> None:
        """
        Load seed collections. Sequences continue after the highest
        integer id found in each collection.
        """
        for collection, records in data.items():
            for record in records:
                self.add(collection, record)
            self._bump_sequence(collection, records)

    def _bump_sequence(self, collection: str, records: List[dict]) -> None:
        # Seed data decides where auto-increment ids pick up
        numeric = [r["id"] for r in records if isinstance(r.get("id"), int)]
        self._set_sequence(collection, max(numeric) if numeric else len(records))

    @abstractmethod
    def _set_sequence(self, collection: str, value: int) -> None:
        ...


class InMemoryRepository(Repository):
    """Process-local store. Insertion order is preserved per collection."""

    def __init__(self):
        self._lock = threading.Lock()
        self._collections: Dict[str, Dict[str, dict]] = {}
        self._sequences: Dict[str, int] = {}

    def list(self, collection: str) -> List[dict]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._collections.get(collection, {}).values()]

    def get(self, collection: str, record_id) -> Optional[dict]:
        with self._lock:
            record = self._collections.get(collection, {}).get(normalize_id(record_id))
            return copy.deepcopy(record) if record is not None else None

    def add(self, collection: str, record: dict) -> dict:
        if "id" not in record:
            raise ValueError(f"record for '{collection}' has no id")
        with self._lock:
            self._collections.setdefault(collection, {})[normalize_id(record["id"])] = copy.deepcopy(record)
        return record

    def next_id(self, collection: str) -> int:
        with self._lock:
            value = self._sequences.get(collection, 0) + 1
            self._sequences[collection] = value
            return value

    def count(self, collection: str) -> int:
        with self._lock:
            return len(self._collections.get(collection, {}))

    def reset(self) -> None:
        with self._lock:
            self._collections.clear()
            self._sequences.clear()

    def _set_sequence(self, collection: str, value: int) -> None:
        with self._lock:
            self._sequences[collection] = max(self._sequences.get(collection, 0), value)


class RepositoryStore:
    """Flask extension that owns the app's repository instance."""

    def __init__(self, repository: Optional[Repository] = None):
        self._default = repository

    def init_app(self, app: Flask, repository: Optional[Repository] = None) -> Repository:
        repo = repository or self._default or build_repository(app.config)
        app.extensions["repository"] = repo
        return repo

    @property
    def repository(self) -> Repository:
        return current_app.extensions["repository"]


def build_repository(config) -> Repository:
    """Pick the backend named by STORE_BACKEND."""
    backend = (config.get("STORE_BACKEND") or "memory").lower()

    if backend == "memory":
        return InMemoryRepository()

    if backend == "redis":
        # Local import so the memory backend works without a redis server.
        import redis
        from clinic_api.services.redis_repository import RedisRepository

        client = redis.Redis(
            host=config.get("REDIS_HOST", "localhost"),
            port=int(config.get("REDIS_PORT", 6379)),
            db=int(config.get("REDIS_DB", 0)),
            decode_responses=True,
        )
        return RedisRepository(client, prefix=config.get("REDIS_PREFIX", "clinic"))

    raise ValueError(f"Unknown STORE_BACKEND '{backend}'")
