import json
import logging
from typing import List, Optional

from clinic_api.services.repository import Repository, normalize_id


logger = logging.getLogger("clinic_api.redis")


# ✅ Helpers for redis key formatting
def _records_key(prefix: str, collection: str) -> str:
    return f"{prefix}:{collection}"

def _order_key(prefix: str, collection: str) -> str:
    return f"{prefix}:{collection}:order"

def _seq_key(prefix: str, collection: str) -> str:
    return f"{prefix}:{collection}:seq"


class RedisRepository(Repository):
    """
    Redis-backed store.
    - records live as JSON in a hash per collection
    - insertion order is kept in a list next to it
    - auto-increment ids come from INCR, so they are safe across processes
    """

    def __init__(self, client, prefix: str = "clinic"):
        self.r = client
        self.prefix = prefix

    def list(self, collection: str) -> List[dict]:
        ids = self.r.lrange(_order_key(self.prefix, collection), 0, -1)
        if not ids:
            return []
        raws = self.r.hmget(_records_key(self.prefix, collection), ids)
        records = []
        for rid, raw in zip(ids, raws):
            if raw is None:
                logger.warning(f"[Redis] Dangling id {rid} in {collection} order list")
                continue
            records.append(json.loads(raw))
        return records

    def get(self, collection: str, record_id) -> Optional[dict]:
        raw = self.r.hget(_records_key(self.prefix, collection), normalize_id(record_id))
        return json.loads(raw) if raw else None

    def add(self, collection: str, record: dict) -> dict:
        if "id" not in record:
            raise ValueError(f"record for '{collection}' has no id")
        rid = normalize_id(record["id"])
        created = self.r.hset(_records_key(self.prefix, collection), rid, json.dumps(record))
        # hset returns 0 when the field already existed; keep order entries unique
        if created:
            self.r.rpush(_order_key(self.prefix, collection), rid)
        return record

    def next_id(self, collection: str) -> int:
        return int(self.r.incr(_seq_key(self.prefix, collection)))

    def count(self, collection: str) -> int:
        return int(self.r.hlen(_records_key(self.prefix, collection)))

    def reset(self) -> None:
        keys = list(self.r.scan_iter(f"{self.prefix}:*"))
        if keys:
            self.r.delete(*keys)
        logger.info(f"[Redis] Cleared {len(keys)} keys under '{self.prefix}'")

    def _set_sequence(self, collection: str, value: int) -> None:
        key = _seq_key(self.prefix, collection)
        current = int(self.r.get(key) or 0)
        if value > current:
            self.r.set(key, value)
