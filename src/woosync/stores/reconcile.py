"""Upsert and prune stored records against a fresh remote snapshot.

Callers run these inside ``StorageManager.perform_write`` so that an upsert and
its prune land in the same commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from woosync.domain.ports import Storage
    from woosync.domain.records import NaturalKey, StoredRecord


def upsert_records[E, R: StoredRecord](
    storage: Storage, record_cls: type[R], entities: Iterable[E]
) -> list[R]:
    """Find or insert one record per natural key and overwrite it from the entity.

    The session does not autoflush, so records inserted earlier in the batch are
    tracked in a local index rather than found again through the store.
    """
    index: dict[NaturalKey, R] = {}
    for entity in entities:
        key = record_cls.natural_key_of(entity)
        record = index.get(key)
        if record is None:
            record = storage.find(record_cls, **dict(zip(record_cls.NATURAL_KEY, key, strict=True)))
            if record is None:
                record = storage.insert_new(record_cls)
            index[key] = record
        record.update(entity)
    return list(index.values())


def prune_records(
    storage: Storage,
    record_cls: type[StoredRecord],
    scope: Mapping[str, object],
    keep: Iterable[NaturalKey],
) -> int:
    """Delete the records in ``scope`` whose natural key is not in ``keep``."""
    kept = set(keep)
    removed = 0
    for record in storage.all(record_cls, **scope):
        if record.natural_key not in kept:
            storage.delete(record)
            removed += 1
    return removed


def upsert_and_prune[E, R: StoredRecord](
    storage: Storage,
    record_cls: type[R],
    entities: Iterable[E],
    scope: Mapping[str, object],
) -> list[R]:
    """Make the records in ``scope`` mirror ``entities`` exactly."""
    records = upsert_records(storage, record_cls, entities)
    prune_records(storage, record_cls, scope, (record.natural_key for record in records))
    return records
