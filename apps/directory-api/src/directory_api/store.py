from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from devkit.db import AsyncDatabaseManager, Base, create_all_tables
from facility_query.builder import SortSpec
from facility_query.models import Category, FacilityField, FacilityRecord, StatusEntry
from facility_query.predicates import (
    AllOf,
    AnyOf,
    Between,
    Contains,
    Equals,
    MatchAll,
    Predicate,
    StartsWith,
)
from sqlalchemy import DateTime, Float, Integer, String, Text, and_, func, or_, select, true
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.elements import ColumnElement


class FacilityORM(Base):
    __tablename__ = "facilities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    house_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    street_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    town: Mapped[str | None] = mapped_column(String(128), index=True, nullable=True)
    county: Mapped[str | None] = mapped_column(String(128), index=True, nullable=True)
    postcode: Mapped[str | None] = mapped_column(String(16), index=True, nullable=True)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)
    contributor_id: Mapped[int | None] = mapped_column(Integer, nullable=True)


class CategoryORM(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)


class FacilityStatusORM(Base):
    __tablename__ = "facility_statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    facility_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    comment: Mapped[str] = mapped_column(String(100), nullable=False)
    author_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


_COLUMNS = {
    FacilityField.ID: FacilityORM.id,
    FacilityField.TITLE: FacilityORM.title,
    FacilityField.CATEGORY_ID: FacilityORM.category_id,
    FacilityField.DESCRIPTION: FacilityORM.description,
    FacilityField.TOWN: FacilityORM.town,
    FacilityField.COUNTY: FacilityORM.county,
    FacilityField.POSTCODE: FacilityORM.postcode,
    FacilityField.LAT: FacilityORM.lat,
    FacilityField.LNG: FacilityORM.lng,
}

# one ordering for "current status" everywhere it is read from SQL
CURRENT_STATUS_ORDER = (FacilityStatusORM.timestamp.desc(), FacilityStatusORM.id.desc())


def to_clause(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a predicate tree into bound-parameter SQL; user text is never inlined."""
    if isinstance(predicate, MatchAll):
        return true()
    if isinstance(predicate, Equals):
        return _COLUMNS[predicate.field] == predicate.value
    if isinstance(predicate, Contains):
        return _COLUMNS[predicate.field].icontains(predicate.value, autoescape=True)
    if isinstance(predicate, StartsWith):
        return _COLUMNS[predicate.field].istartswith(predicate.value, autoescape=True)
    if isinstance(predicate, Between):
        return _COLUMNS[predicate.field].between(predicate.low, predicate.high)
    if isinstance(predicate, AnyOf):
        return or_(*(to_clause(term) for term in predicate.terms))
    if isinstance(predicate, AllOf):
        return and_(*(to_clause(term) for term in predicate.terms))
    raise TypeError(f"unsupported predicate: {type(predicate).__name__}")


def order_clauses(sort: SortSpec) -> tuple:
    column = _COLUMNS[sort.field]
    if sort.field is FacilityField.CATEGORY_ID:
        key = func.coalesce(column, 0)
    else:
        key = func.lower(func.coalesce(column, ""))
    return (key.desc() if sort.descending else key.asc(), FacilityORM.id.asc())


class SqlDirectoryStore:
    """Facility and status reads over SQLAlchemy; tables are created on first use."""

    def __init__(self, db: AsyncDatabaseManager) -> None:
        self._db = db
        self._ready = False

    async def count(self, predicate: Predicate) -> int:
        await self._ensure_ready()

        async def _run(session):
            stmt = select(func.count()).select_from(FacilityORM).where(to_clause(predicate))
            return int((await session.scalar(stmt)) or 0)

        return await self._db.run_with_session(_run)

    async def fetch(
        self,
        predicate: Predicate,
        sort: SortSpec,
        offset: int,
        limit: int,
    ) -> list[FacilityRecord]:
        await self._ensure_ready()

        async def _run(session):
            stmt = (
                select(FacilityORM)
                .where(to_clause(predicate))
                .order_by(*order_clauses(sort))
                .offset(offset)
                .limit(limit)
            )
            rows = (await session.scalars(stmt)).all()
            return [self._to_record(row) for row in rows]

        return await self._db.run_with_session(_run)

    async def fetch_all(self, predicate: Predicate) -> list[FacilityRecord]:
        await self._ensure_ready()

        async def _run(session):
            stmt = select(FacilityORM).where(to_clause(predicate)).order_by(FacilityORM.id)
            rows = (await session.scalars(stmt)).all()
            return [self._to_record(row) for row in rows]

        return await self._db.run_with_session(_run)

    async def get(self, facility_id: int) -> FacilityRecord | None:
        await self._ensure_ready()

        async def _run(session):
            row = await session.get(FacilityORM, facility_id)
            return self._to_record(row) if row else None

        return await self._db.run_with_session(_run)

    async def list_categories(self) -> list[Category]:
        await self._ensure_ready()

        async def _run(session):
            stmt = select(CategoryORM).order_by(func.lower(CategoryORM.name), CategoryORM.id)
            rows = (await session.scalars(stmt)).all()
            return [Category(id=row.id, name=row.name) for row in rows]

        return await self._db.run_with_session(_run)

    async def distinct_values(self, field: FacilityField) -> list[str]:
        await self._ensure_ready()
        column = _COLUMNS[field]

        async def _run(session):
            stmt = select(column).where(column.is_not(None), func.trim(column) != "").distinct().order_by(column)
            return [value for value in (await session.scalars(stmt)).all()]

        return await self._db.run_with_session(_run)

    async def current_status(self, facility_id: int) -> StatusEntry | None:
        await self._ensure_ready()

        async def _run(session):
            stmt = (
                select(FacilityStatusORM)
                .where(FacilityStatusORM.facility_id == facility_id)
                .order_by(*CURRENT_STATUS_ORDER)
                .limit(1)
            )
            row = await session.scalar(stmt)
            if row is None:
                return None
            return StatusEntry(
                id=row.id,
                facility_id=row.facility_id,
                comment=row.comment,
                author_id=row.author_id,
                timestamp=row.timestamp,
            )

        return await self._db.run_with_session(_run)

    async def seed_if_empty(
        self,
        facilities: Iterable[FacilityRecord],
        categories: Iterable[Category] = (),
        statuses: Iterable[StatusEntry] = (),
    ) -> bool:
        await self._ensure_ready()

        async def _run(session):
            count = int((await session.scalar(select(func.count()).select_from(FacilityORM))) or 0)
            if count > 0:
                return False
            for category in categories:
                session.add(CategoryORM(id=category.id, name=category.name))
            for record in facilities:
                session.add(
                    FacilityORM(
                        id=record.id,
                        title=record.title,
                        category_id=record.category_id,
                        description=record.description,
                        house_number=record.house_number,
                        street_name=record.street_name,
                        town=record.town,
                        county=record.county,
                        postcode=record.postcode,
                        lat=record.lat,
                        lng=record.lng,
                        contributor_id=record.contributor_id,
                    )
                )
            for status in statuses:
                session.add(
                    FacilityStatusORM(
                        id=status.id,
                        facility_id=status.facility_id,
                        comment=status.comment,
                        author_id=status.author_id,
                        timestamp=status.timestamp,
                    )
                )
            return True

        return await self._db.run_with_session(_run)

    async def _ensure_ready(self) -> None:
        if self._ready:
            return
        await self._db.connect()
        await create_all_tables(self._db.engine, Base.metadata)
        self._ready = True

    def _to_record(self, row: FacilityORM) -> FacilityRecord:
        return FacilityRecord(
            id=row.id,
            title=row.title,
            lat=row.lat,
            lng=row.lng,
            category_id=row.category_id,
            description=row.description or "",
            house_number=row.house_number,
            street_name=row.street_name,
            town=row.town,
            county=row.county,
            postcode=row.postcode,
            contributor_id=row.contributor_id,
        )
