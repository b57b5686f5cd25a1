import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .errors import ConstraintViolation, InvalidSort, StorageFailure
from .models import MUTABLE_COLUMNS, SampleModel

logger = logging.getLogger(__name__)

# wire property name -> sortable column
SORTABLE_COLUMNS = {
    "id": SampleModel.id,
    "sampleIdentifier": SampleModel.sample_identifier,
    "sampleName": SampleModel.sample_name,
    "sampleType": SampleModel.sample_type,
    "collectionDate": SampleModel.collection_date,
    "collectorName": SampleModel.collector_name,
    "locationName": SampleModel.location_name,
    "storageLocation": SampleModel.storage_location,
    "createdAt": SampleModel.created_at,
    "updatedAt": SampleModel.updated_at,
}

DEFAULT_SORT = "id"


@dataclass(frozen=True)
class SortOrder:
    prop: str
    descending: bool = False


def parse_sort(sort: str | None) -> SortOrder:
    """
    Parse `property[,direction]`, e.g. `sampleName,desc`.
    """
    raw = (sort or "").strip() or DEFAULT_SORT
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) > 2 or not parts[0]:
        raise InvalidSort(raw, "expected 'property[,asc|desc]'")
    prop = parts[0]
    if prop not in SORTABLE_COLUMNS:
        raise InvalidSort(raw, f"unknown property '{prop}'")
    direction = parts[1].lower() if len(parts) == 2 and parts[1] else "asc"
    if direction not in ("asc", "desc"):
        raise InvalidSort(raw, f"unknown direction '{parts[1]}'")
    return SortOrder(prop=prop, descending=direction == "desc")


class SampleRepository:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _reading(self) -> Iterator[Session]:
        try:
            with self._session_factory() as db:
                yield db
        except SQLAlchemyError as exc:
            logger.exception("sample_read_failed")
            raise StorageFailure(str(exc)) from exc

    @contextmanager
    def _writing(self) -> Iterator[Session]:
        try:
            with self._session_factory.begin() as db:
                yield db
        except IntegrityError as exc:
            raise ConstraintViolation(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.exception("sample_write_failed")
            raise StorageFailure(str(exc)) from exc

    def insert(self, record: SampleModel) -> SampleModel:
        with self._writing() as db:
            db.add(record)
            db.flush()
        return record

    def find_by_id(self, sample_id: uuid.UUID) -> SampleModel | None:
        with self._reading() as db:
            return db.get(SampleModel, sample_id)

    def find_by_identifier(self, identifier: str) -> SampleModel | None:
        with self._reading() as db:
            stmt = select(SampleModel).where(SampleModel.sample_identifier == identifier)
            return db.execute(stmt).scalars().first()

    def exists_by_identifier(self, identifier: str, exclude_id: uuid.UUID | None = None) -> bool:
        cond = SampleModel.sample_identifier == identifier
        if exclude_id is not None:
            cond = cond & (SampleModel.id != exclude_id)
        with self._reading() as db:
            return bool(db.execute(select(exists().where(cond))).scalar())

    def update(self, record: SampleModel) -> SampleModel | None:
        with self._writing() as db:
            row = db.get(SampleModel, record.id)
            if row is None:
                return None
            for column in MUTABLE_COLUMNS:
                setattr(row, column, getattr(record, column))
            db.flush()
        return row

    def delete(self, sample_id: uuid.UUID) -> bool:
        with self._writing() as db:
            result = db.execute(delete(SampleModel).where(SampleModel.id == sample_id))
            return result.rowcount > 0

    def list(self, page: int, size: int, sort: str | None = None) -> tuple[list[SampleModel], int]:
        order = parse_sort(sort)
        column = SORTABLE_COLUMNS[order.prop]
        ordering = [column.desc() if order.descending else column.asc()]
        if order.prop != "id":
            ordering.append(SampleModel.id.asc())
        with self._reading() as db:
            total = db.execute(select(func.count()).select_from(SampleModel)).scalar_one()
            stmt = select(SampleModel).order_by(*ordering).offset(page * size).limit(size)
            rows = list(db.execute(stmt).scalars().all())
        return rows, total
