"""
Generic CRUD over one SQLAlchemy model.

Subclasses describe their entity (model, natural key, references, eager
relationships) and override `prepare` to validate and derive fields. Every
write goes through `prepare` and a reference existence check, then commits
in its own transaction.
"""
import asyncio
import json
import logging
import math
import os
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import DateTime, Uuid, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from core.config import InventoryConfig, settings
from core.errors import ConflictError, NotFoundError, ValidationError
from .database import utcnow

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 1000


class CrudRepository:
    model: Any = None
    entity_name: str = "Record"

    # fields identifying "the same" record when upserting without an id
    natural_key: Tuple[str, ...] = ()
    # field -> model the id must resolve to
    references: Dict[str, Any] = {}
    # relationships loaded with every read
    eager: Tuple[str, ...] = ()
    searchable: Tuple[str, ...] = ()
    # seeds file name (without .json) under SEEDS_PATH
    seed_name: Optional[str] = None
    default_sort: str = "-updated_at"

    managed_fields = ("id", "created_at", "updated_at")

    def __init__(self, config: InventoryConfig):
        self.config = config
        self.columns = {c.key: c for c in self.model.__table__.columns}

    # ------------------------------------------------------------------
    # hooks
    # ------------------------------------------------------------------

    async def prepare(self, session: AsyncSession, record: Dict) -> Dict:
        """Validate and derive the full record about to be written."""
        return record

    async def normalize(self, session: AsyncSession, record: Dict) -> Dict:
        """Fill in fields needed to compute upsert criteria."""
        return record

    async def after_insert(self, session: AsyncSession, obj) -> None:
        pass

    def default_conditions(self) -> list:
        return []

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _coerce_value(self, key: str, value):
        column = self.columns[key]
        if value is None:
            return None
        if isinstance(column.type, Uuid) and not isinstance(value, uuid.UUID):
            try:
                return uuid.UUID(str(value))
            except ValueError:
                raise ValidationError({key: "must be a valid id"})
        if isinstance(column.type, DateTime):
            if isinstance(value, str):
                try:
                    value = datetime.fromisoformat(value.replace("Z", "+00:00"))
                except ValueError:
                    raise ValidationError({key: "must be an ISO 8601 date"})
            if isinstance(value, datetime) and value.tzinfo is not None:
                value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def coerce(self, record: Dict) -> Dict:
        """Keep known columns only and convert id/date strings."""
        out = {}
        for key, value in (record or {}).items():
            if key not in self.columns or key in ("created_at", "updated_at"):
                continue
            out[key] = self._coerce_value(key, value)
        return out

    def to_dict(self, obj) -> Dict:
        return {key: getattr(obj, key) for key in self.columns}

    def defaults(self) -> Dict:
        out = {}
        for key, column in self.columns.items():
            if key in self.managed_fields:
                continue
            default = column.default
            out[key] = default.arg if default is not None and default.is_scalar else None
        return out

    def criteria(self, record: Dict) -> Dict:
        if record.get("id"):
            return {"id": record["id"]}
        return {k: record[k] for k in self.natural_key if record.get(k) is not None}

    def _options(self) -> list:
        return [selectinload(getattr(self.model, name)) for name in self.eager]

    def _select(self):
        stmt = select(self.model).options(*self._options())
        for condition in self.default_conditions():
            stmt = stmt.where(condition)
        return stmt

    async def _find_one(self, session: AsyncSession, criteria: Dict):
        stmt = self._select()
        for key, value in criteria.items():
            stmt = stmt.where(self.columns[key] == value)
        res = await session.execute(stmt.limit(1))
        return res.scalar_one_or_none()

    async def _load(self, session: AsyncSession, record_id):
        record_id = self._coerce_value("id", record_id)
        stmt = self._select().where(self.model.id == record_id).execution_options(populate_existing=True)
        res = await session.execute(stmt)
        obj = res.scalar_one_or_none()
        if obj is None:
            raise NotFoundError(self.entity_name, record_id)
        return obj

    def reference_conditions(self, key: str) -> list:
        """Extra conditions a referenced row must meet besides existing."""
        return []

    async def check_references(self, session: AsyncSession, record: Dict) -> None:
        errors = {}
        for key, target in self.references.items():
            value = record.get(key)
            if value is None:
                continue
            stmt = select(target.id).where(target.id == value, *self.reference_conditions(key))
            if (await session.execute(stmt.limit(1))).first() is None:
                errors[key] = f"{target.__name__} not found"
        if errors:
            raise ValidationError(errors)

    @asynccontextmanager
    async def transaction(self, session: AsyncSession):
        try:
            yield
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning("%s write rejected: %s", self.entity_name, e.orig)
            raise ConflictError(f"{self.entity_name} already exists or is still referenced") from e
        except Exception:
            await session.rollback()
            raise

    def _assign(self, obj, record: Dict) -> None:
        for key, value in record.items():
            if key in self.managed_fields:
                continue
            setattr(obj, key, value)
        obj.updated_at = utcnow()

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    def _parse_sort(self, sort: Optional[str]):
        sort = (sort or self.default_sort).strip()
        desc = sort.startswith("-")
        key = sort.lstrip("-+")
        if key not in self.columns:
            raise ValidationError({"sort": f"unknown field '{key}'"})
        column = self.columns[key]
        return column.desc() if desc else column.asc()

    def _filter_conditions(self, filters: Optional[Dict]) -> list:
        conditions = []
        for key, value in (filters or {}).items():
            if key not in self.columns:
                raise ValidationError({"filter": f"unknown field '{key}'"})
            column = self.columns[key]
            if isinstance(value, list):
                conditions.append(column.in_([self._coerce_value(key, v) for v in value]))
            elif value is None:
                conditions.append(column.is_(None))
            else:
                conditions.append(column == self._coerce_value(key, value))
        return conditions

    async def get(self, session: AsyncSession, options: Optional[Dict] = None) -> Dict:
        """Paginated list: {data, total, size, limit, skip, page, pages, last_modified}."""
        options = options or {}
        page = max(int(options.get("page") or 1), 1)
        limit = min(max(int(options.get("limit") or DEFAULT_LIMIT), 1), MAX_LIMIT)
        skip = (page - 1) * limit

        conditions = self.default_conditions() + self._filter_conditions(options.get("filter"))
        q = (options.get("q") or "").strip()
        if q and self.searchable:
            like = f"%{q.lower()}%"
            conditions.append(or_(*[func.lower(self.columns[f]).like(like) for f in self.searchable]))

        count_stmt = select(func.count()).select_from(self.model)
        modified_stmt = select(func.max(self.model.updated_at))
        stmt = select(self.model).options(*self._options())
        for condition in conditions:
            count_stmt = count_stmt.where(condition)
            modified_stmt = modified_stmt.where(condition)
            stmt = stmt.where(condition)

        total = (await session.execute(count_stmt)).scalar_one()
        last_modified = (await session.execute(modified_stmt)).scalar_one_or_none()
        stmt = stmt.order_by(self._parse_sort(options.get("sort")), self.model.id.asc())
        res = await session.execute(stmt.offset(skip).limit(limit))
        data = list(res.scalars().all())

        return {
            "data": data,
            "total": total,
            "size": len(data),
            "limit": limit,
            "skip": skip,
            "page": page,
            "pages": math.ceil(total / limit) if total else 0,
            "last_modified": last_modified,
        }

    async def get_by_id(self, session: AsyncSession, record_id):
        return await self._load(session, record_id)

    async def create(self, session: AsyncSession, record: Dict):
        async with self.transaction(session):
            data = self.coerce(record)
            data = await self.prepare(session, {**self.defaults(), **data})
            await self.check_references(session, data)
            obj = self.model(**{k: v for k, v in data.items() if k not in ("created_at", "updated_at")})
            session.add(obj)
            await session.flush()
            await self.after_insert(session, obj)
        logger.debug("%s %s created", self.entity_name, obj.id)
        return await self._load(session, obj.id)

    async def _update(self, session: AsyncSession, obj, record: Dict):
        async with self.transaction(session):
            data = await self.prepare(session, record)
            await self.check_references(session, data)
            self._assign(obj, data)
        return await self._load(session, obj.id)

    async def patch(self, session: AsyncSession, record_id, changes: Dict):
        """Partial update: fields absent from changes keep their value."""
        obj = await self._load(session, record_id)
        return await self._update(session, obj, {**self.to_dict(obj), **self.coerce(changes)})

    async def put(self, session: AsyncSession, record_id, record: Dict, preserve: Iterable[str] = ()):
        """Full replace: writable fields absent from record reset to their defaults."""
        obj = await self._load(session, record_id)
        current = self.to_dict(obj)
        kept = {k: current[k] for k in preserve}
        return await self._update(session, obj, {**self.defaults(), **kept, **self.coerce(record), "id": obj.id})

    async def delete(self, session: AsyncSession, record_id):
        obj = await self._load(session, record_id)
        async with self.transaction(session):
            await session.delete(obj)
        logger.debug("%s %s deleted", self.entity_name, obj.id)
        return obj

    async def upsert(self, session: AsyncSession, candidate: Dict):
        """
        Create or merge by id or natural key.

        Candidate values win over the stored ones for the keys the candidate
        carries; everything else is kept from the stored record. This is a
        read-then-write, concurrent upserts of the same key can race.
        """
        data = await self.normalize(session, self.coerce(candidate))
        criteria = self.criteria(data)
        found = await self._find_one(session, criteria) if criteria else None
        if found is None:
            return await self.create(session, data)
        logger.debug("%s %s matched by %s", self.entity_name, found.id, sorted(criteria))
        return await self._update(session, found, {**self.to_dict(found), **data})

    def load_seeds(self, seeds_path: Optional[str] = None) -> List[Dict]:
        if not self.seed_name:
            return []
        path = os.path.join(seeds_path or settings.seeds_path, f"{self.seed_name}.json")
        if not os.path.exists(path):
            logger.debug("no %s seeds at %s", self.entity_name, path)
            return []
        with open(path, encoding="utf-8") as fh:
            loaded = json.load(fh)
        return loaded if isinstance(loaded, list) else [loaded]

    async def seed(
        self,
        session_maker: async_sessionmaker,
        seeds: Optional[Iterable[Dict]] = None,
        seeds_path: Optional[str] = None,
    ) -> list:
        """
        Upsert caller seeds plus the seeds file, all at once.

        Each upsert runs in its own session. The first failure is raised for
        the whole batch; upserts that already committed stay committed.
        """
        records = [r for r in list(seeds or []) + self.load_seeds(seeds_path) if r]
        unique: List[Dict] = []
        for r in records:
            if r not in unique:
                unique.append(r)

        async def _upsert_one(candidate: Dict):
            async with session_maker() as session:
                return await self.upsert(session, candidate)

        seeded = await asyncio.gather(*(_upsert_one(r) for r in unique))
        logger.info("seeded %d %s record(s)", len(seeded), self.entity_name)
        return list(seeded)
