"""Tests for the TTL result cache."""
from datetime import datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from anime_api.models import ApiCache
from anime_api.services.result_cache import ResultCache

KEY = "top_airing_anime"
TTL = timedelta(hours=2)


class FakeClock:
    """Settable clock returning naive UTC datetimes."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def make_cache(session_factory, clock=None):
    clock = clock or FakeClock(datetime(2026, 10, 19, 12, 0, 0))
    return ResultCache(session_factory, clock=clock), clock


def test_get_missing_key_returns_none(session_factory):
    cache, _ = make_cache(session_factory)
    assert cache.get(KEY) is None


def test_put_then_get_returns_value(session_factory, make_anime):
    cache, clock = make_cache(session_factory)
    value = [make_anime(1, rank=1), make_anime(2, rank=2, trailer_youtube_id="vid00000002")]

    assert cache.put(KEY, value, TTL) is True
    entry = cache.get(KEY)

    assert entry is not None
    assert list(entry.value) == value
    assert entry.expires_at == clock.now + TTL
    assert entry.updated_at == clock.now


def test_expired_entry_reads_as_absent_but_row_remains(session_factory, make_anime):
    cache, clock = make_cache(session_factory)
    cache.put(KEY, [make_anime(1)], TTL)

    clock.advance(TTL)
    assert cache.get(KEY) is None

    with session_factory() as db:
        assert db.get(ApiCache, KEY) is not None


def test_entry_valid_just_before_expiry(session_factory, make_anime):
    cache, clock = make_cache(session_factory)
    cache.put(KEY, [make_anime(1)], TTL)

    clock.advance(TTL - timedelta(seconds=1))
    assert cache.get(KEY) is not None


def test_put_overwrites_existing_row(session_factory, make_anime):
    cache, clock = make_cache(session_factory)
    cache.put(KEY, [make_anime(1)], TTL)
    clock.advance(TTL * 2)
    cache.put(KEY, [make_anime(2), make_anime(3)], TTL)

    entry = cache.get(KEY)
    assert [a.mal_id for a in entry.value] == [2, 3]
    assert entry.updated_at == clock.now

    with session_factory() as db:
        assert db.query(ApiCache).count() == 1


def test_put_is_a_single_upsert_statement(engine, session_factory, make_anime):
    cache, _ = make_cache(session_factory)
    cache.put(KEY, [make_anime(1)], TTL)

    statements = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", capture)
    try:
        assert cache.put(KEY, [make_anime(2)], TTL) is True
    finally:
        event.remove(engine, "before_cursor_execute", capture)

    assert len(statements) == 1
    assert statements[0].lstrip().upper().startswith("INSERT")
    assert "ON CONFLICT" in statements[0].upper()
    assert [a.mal_id for a in cache.get(KEY).value] == [2]


def test_put_merges_on_dialect_without_upsert(make_anime):
    db = MagicMock()
    db.__enter__.return_value = db
    db.get_bind.return_value.dialect.name = "mssql"
    cache = ResultCache(MagicMock(return_value=db))

    assert cache.put(KEY, [make_anime(1)], TTL) is True

    merged = db.merge.call_args.args[0]
    assert isinstance(merged, ApiCache)
    assert merged.key == KEY
    db.execute.assert_not_called()
    db.commit.assert_called_once()

def test_cached_value_is_independent_copy(session_factory, make_anime):
    cache, _ = make_cache(session_factory)
    original = make_anime(1, genres=["Action"])
    cache.put(KEY, [original], TTL)

    first = cache.get(KEY).value[0]
    first.genres.append("Drama")

    assert original.genres == ["Action"]
    assert cache.get(KEY).value[0].genres == ["Action"]


def test_read_failure_is_a_miss():
    failing_factory = MagicMock(side_effect=OperationalError("SELECT", {}, Exception("db down")))
    cache = ResultCache(failing_factory)
    assert cache.get(KEY) is None


def test_write_failure_is_a_noop(make_anime):
    failing_factory = MagicMock(side_effect=OperationalError("INSERT", {}, Exception("db down")))
    cache = ResultCache(failing_factory)
    assert cache.put(KEY, [make_anime(1)], TTL) is False


def test_corrupt_payload_is_a_miss(session_factory):
    cache, clock = make_cache(session_factory)
    with session_factory() as db:
        db.add(ApiCache(key=KEY, value="{not json", expires_at=clock.now + TTL, updated_at=clock.now))
        db.commit()

    assert cache.get(KEY) is None


def test_ping(session_factory):
    cache, _ = make_cache(session_factory)
    assert cache.ping() is True
    assert ResultCache(MagicMock(side_effect=OperationalError("SELECT", {}, Exception("x")))).ping() is False
