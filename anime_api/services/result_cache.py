"""TTL cache for computed anime lists, stored in the api_cache table."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from anime_api.models import ApiCache, utcnow
from anime_api.schemas import AnimeSummary

logger = logging.getLogger(__name__)

_anime_list = TypeAdapter(list[AnimeSummary])

_UPSERT_DIALECTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def _upsert(db: Session, **row) -> None:
    """Insert or replace one api_cache row in a single statement."""
    insert = _UPSERT_DIALECTS.get(db.get_bind().dialect.name)
    if insert is None:
        db.merge(ApiCache(**row))
        return
    stmt = insert(ApiCache).values(**row)
    stmt = stmt.on_conflict_do_update(
        index_elements=[ApiCache.key],
        set_={
            "value": stmt.excluded["value"],
            "expires_at": stmt.excluded["expires_at"],
            "updated_at": stmt.excluded["updated_at"],
        },
    )
    db.execute(stmt)


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: tuple[AnimeSummary, ...]
    expires_at: datetime
    updated_at: datetime


class ResultCache:
    """
    Get/put of anime lists by key with an absolute expiry.

    Expired rows read as absent and are left in place until the next `put`
    for the same key overwrites them. Store errors never propagate: a failed
    read is a miss and a failed write is a no-op.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.clock = clock

    def get(self, key: str) -> Optional[CacheEntry]:
        try:
            with self.session_factory() as db:
                row = db.get(ApiCache, key)
                if row is None:
                    logger.debug(f"Cache miss for key: {key}")
                    return None
                if row.expires_at <= self.clock():
                    logger.debug(f"Cache expired for key: {key}")
                    return None
                value = tuple(_anime_list.validate_json(row.value))
                logger.debug(f"Cache hit for key: {key}")
                return CacheEntry(
                    key=row.key,
                    value=value,
                    expires_at=row.expires_at,
                    updated_at=row.updated_at,
                )
        except (SQLAlchemyError, ValidationError, ValueError) as e:
            logger.warning(f"Cache read failed for key {key}: {e}")
            return None

    def put(self, key: str, value: list[AnimeSummary], ttl: timedelta) -> bool:
        """Insert or replace the entry for `key`. Returns False if the write failed."""
        now = self.clock()
        try:
            payload = _anime_list.dump_json(list(value)).decode("utf-8")
            with self.session_factory() as db:
                _upsert(db, key=key, value=payload, expires_at=now + ttl, updated_at=now)
                db.commit()
        except (SQLAlchemyError, ValueError) as e:
            logger.warning(f"Cache write failed for key {key}: {e}")
            return False

        logger.debug(f"Cached {len(value)} entries for key: {key} (ttl={ttl})")
        return True

    def ping(self) -> bool:
        """True when the backing store answers a trivial query."""
        try:
            with self.session_factory() as db:
                db.query(ApiCache.key).first()
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Cache store unreachable: {e}")
            return False
