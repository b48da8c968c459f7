import pytest

from demokrat import config
from demokrat.session_version import (
    INITIAL_VERSION,
    MemoryVersionCounter,
    MongoVersionCounter,
    get_version_counter,
)


def test_memory_counter_starts_at_one():
    counter = MemoryVersionCounter()
    assert counter.current_version() == INITIAL_VERSION == 1


def test_memory_counter_advance_returns_new_value():
    counter = MemoryVersionCounter()
    assert counter.advance() == 2
    assert counter.advance() == 3
    assert counter.current_version() == 3


def test_mongo_counter_defaults_before_first_advance(counter):
    assert counter.current_version() == 1


@pytest.mark.parametrize('n_advances', [1, 2, 5])
def test_mongo_counter_is_monotonic(counter, n_advances):
    seen = [counter.current_version()]
    for _ in range(n_advances):
        seen.append(counter.advance())
    assert seen == list(range(1, n_advances + 2))
    assert counter.current_version() == n_advances + 1


def test_mongo_counter_is_shared_between_instances(db):
    first = MongoVersionCounter(db)
    second = MongoVersionCounter(db)
    first.advance()
    assert second.current_version() == 2
    assert db[config.COUNTERS_COLLECTION_NAME].count_documents({}) == 1


def test_backend_selection(db, monkeypatch):
    monkeypatch.setattr(config, 'SESSION_COUNTER_BACKEND', 'memory')
    assert isinstance(get_version_counter(db), MemoryVersionCounter)
    assert get_version_counter(db) is get_version_counter(db)
    monkeypatch.setattr(config, 'SESSION_COUNTER_BACKEND', 'mongo')
    assert isinstance(get_version_counter(db), MongoVersionCounter)
