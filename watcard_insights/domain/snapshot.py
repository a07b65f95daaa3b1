"""Persisted snapshot of the last ingested batch, timestamp and balance"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

TRANSACTIONS_KEY = "watcard-txns-v1"
TIMESTAMP_KEY = "watcard-ts-v1"
BALANCE_KEY = "watcard-bal-v1"

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


class KeyValueStore(Protocol):
    """String key-value capability the snapshot is persisted through"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store for tests and one-off runs"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


@dataclass
class Snapshot:
    records: Optional[List[Any]]
    last_updated: Optional[str]
    balance: Optional[str]


def parse_balance(text: Optional[str]) -> Optional[float]:
    """Lenient balance parse: leading number wins, anything else is no balance"""
    if not text:
        return None
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(0))


class SnapshotStore:
    """Load/save/clear the last ingested raw batch over a key-value store"""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def save_batch(self, records: List[Any], timestamp: str) -> None:
        """Store the raw records verbatim so they reload in the same shape"""
        self.kv.set(TRANSACTIONS_KEY, json.dumps(records))
        self.kv.set(TIMESTAMP_KEY, timestamp)

    def save_balance(self, balance: Optional[str]) -> None:
        if balance:
            self.kv.set(BALANCE_KEY, balance)
        else:
            self.kv.delete(BALANCE_KEY)

    def load(self) -> Snapshot:
        """
        Read back the stored snapshot.

        Corrupt or non-array transaction data is reported as absent.
        """
        records = None
        stored = self.kv.get(TRANSACTIONS_KEY)
        if stored:
            try:
                parsed = json.loads(stored)
            except ValueError:
                logger.warning("Ignoring corrupt stored transactions", extra={"key": TRANSACTIONS_KEY})
                parsed = None
            if isinstance(parsed, list):
                records = parsed
            elif parsed is not None:
                logger.warning("Ignoring stored transactions that are not an array", extra={"key": TRANSACTIONS_KEY})

        return Snapshot(
            records=records,
            last_updated=self.kv.get(TIMESTAMP_KEY) or None,
            balance=self.kv.get(BALANCE_KEY) or None,
        )

    def clear(self) -> None:
        for key in (TRANSACTIONS_KEY, TIMESTAMP_KEY, BALANCE_KEY):
            self.kv.delete(key)
