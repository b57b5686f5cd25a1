import datetime as dt
import logging
import math
import uuid
from collections.abc import Callable

from .errors import ConstraintViolation, DuplicateIdentifier, SampleNotFound
from .models import SampleModel
from .repository import SampleRepository
from .schemas import SamplePage, SampleRequest, SampleResponse

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 2000
MAX_PAGE = 2**31 - 1


def utc_now() -> dt.datetime:
    # stored naive, always UTC
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


def normalize_paging(page: int, size: int) -> tuple[int, int]:
    # out-of-range values are corrected, never rejected
    page = min(max(page, 0), MAX_PAGE)
    if size < 1:
        size = DEFAULT_PAGE_SIZE
    return page, min(size, MAX_PAGE_SIZE)


def stamp_on_create(record: SampleModel, now: dt.datetime) -> SampleModel:
    record.created_at = now
    record.updated_at = now
    return record


def stamp_on_update(record: SampleModel, now: dt.datetime) -> SampleModel:
    previous = record.updated_at
    record.updated_at = now if previous is None or now > previous else previous
    return record


def apply_request(record: SampleModel, request: SampleRequest) -> SampleModel:
    record.sample_identifier = request.sample_identifier
    record.sample_name = request.sample_name
    record.sample_type = request.sample_type
    record.collection_date = request.collection_date
    record.latitude = request.latitude
    record.longitude = request.longitude
    record.location_name = request.location_name
    record.collector_name = request.collector_name
    record.description = request.description
    record.storage_location = request.storage_location
    return record


def to_record(request: SampleRequest) -> SampleModel:
    return apply_request(SampleModel(), request)


def to_response(record: SampleModel) -> SampleResponse:
    return SampleResponse(
        id=record.id,
        sample_identifier=record.sample_identifier,
        sample_name=record.sample_name,
        sample_type=record.sample_type,
        collection_date=record.collection_date,
        latitude=record.latitude,
        longitude=record.longitude,
        location_name=record.location_name,
        collector_name=record.collector_name,
        description=record.description,
        storage_location=record.storage_location,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SampleService:
    def __init__(self, repository: SampleRepository, clock: Callable[[], dt.datetime] = utc_now) -> None:
        self._repository = repository
        self._clock = clock

    def create(self, request: SampleRequest) -> SampleResponse:
        identifier = request.sample_identifier
        logger.info("Creating sample identifier=%s", identifier)
        if self._repository.exists_by_identifier(identifier):
            logger.warning("Sample identifier already exists: %s", identifier)
            raise DuplicateIdentifier(identifier)

        record = stamp_on_create(to_record(request), self._clock())
        try:
            saved = self._repository.insert(record)
        except ConstraintViolation as exc:
            logger.warning("Sample identifier already exists: %s", identifier)
            raise DuplicateIdentifier(identifier) from exc
        logger.info("Created sample id=%s", saved.id)
        return to_response(saved)

    def get(self, sample_id: uuid.UUID) -> SampleResponse:
        logger.debug("Fetching sample id=%s", sample_id)
        record = self._repository.find_by_id(sample_id)
        if record is None:
            logger.warning("Sample not found id=%s", sample_id)
            raise SampleNotFound(sample_id)
        return to_response(record)

    def list(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE, sort: str | None = None) -> SamplePage:
        page, size = normalize_paging(page, size)
        logger.debug("Listing samples page=%s size=%s sort=%s", page, size, sort)
        records, total = self._repository.list(page, size, sort)
        total_pages = math.ceil(total / size) if size else 0
        return SamplePage(
            content=[to_response(r) for r in records],
            total_elements=total,
            total_pages=total_pages,
            number=page,
            size=size,
            number_of_elements=len(records),
            first=page == 0,
            last=page + 1 >= total_pages,
            empty=not records,
        )

    def update(self, sample_id: uuid.UUID, request: SampleRequest) -> SampleResponse:
        logger.info("Updating sample id=%s", sample_id)
        record = self._repository.find_by_id(sample_id)
        if record is None:
            logger.warning("Sample not found id=%s", sample_id)
            raise SampleNotFound(sample_id)

        identifier = request.sample_identifier
        if identifier != record.sample_identifier and self._repository.exists_by_identifier(
            identifier, exclude_id=sample_id
        ):
            logger.warning("Sample identifier already exists: %s", identifier)
            raise DuplicateIdentifier(identifier)

        record = stamp_on_update(apply_request(record, request), self._clock())
        try:
            updated = self._repository.update(record)
        except ConstraintViolation as exc:
            logger.warning("Sample identifier already exists: %s", identifier)
            raise DuplicateIdentifier(identifier) from exc
        if updated is None:
            # removed between the read and the write
            raise SampleNotFound(sample_id)
        logger.info("Updated sample id=%s", sample_id)
        return to_response(updated)

    def delete(self, sample_id: uuid.UUID) -> None:
        logger.info("Deleting sample id=%s", sample_id)
        if not self._repository.delete(sample_id):
            logger.warning("Sample not found id=%s", sample_id)
            raise SampleNotFound(sample_id)
        logger.info("Deleted sample id=%s", sample_id)
