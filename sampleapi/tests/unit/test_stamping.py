import datetime as dt
import uuid

from sampleapi.models import SampleModel, SampleType
from sampleapi.service import apply_request, stamp_on_create, stamp_on_update, to_record, to_response

T0 = dt.datetime(2024, 1, 15, 9, 30, 0)


def test_stamp_on_create_sets_both_timestamps():
    record = stamp_on_create(SampleModel(), T0)
    assert record.created_at == T0
    assert record.updated_at == T0


def test_stamp_on_update_refreshes_updated_at_only():
    record = stamp_on_create(SampleModel(), T0)
    later = T0 + dt.timedelta(minutes=5)
    stamp_on_update(record, later)
    assert record.created_at == T0
    assert record.updated_at == later


def test_stamp_on_update_never_moves_backwards():
    record = stamp_on_create(SampleModel(), T0)
    stamp_on_update(record, T0 - dt.timedelta(seconds=1))
    assert record.updated_at == T0


def test_to_record_copies_every_request_field(make_sample_request):
    request = make_sample_request(sampleIdentifier="GS-2024-001", sampleType="FOSSIL", latitude=None)
    record = to_record(request)
    assert record.sample_identifier == "GS-2024-001"
    assert record.sample_type is SampleType.FOSSIL
    assert record.collection_date == dt.date(2024, 1, 15)
    assert record.latitude is None
    assert record.longitude == -74.006
    assert record.collector_name == "Dr. Jane Smith"
    assert record.storage_location == "Lab-A-Shelf-12"
    assert record.id is None


def test_apply_request_keeps_identity_and_created_at(make_sample_request):
    sample_id = uuid.uuid4()
    record = stamp_on_create(to_record(make_sample_request()), T0)
    record.id = sample_id
    apply_request(record, make_sample_request(sampleName="Basalt", description=None))
    assert record.id == sample_id
    assert record.created_at == T0
    assert record.sample_name == "Basalt"
    assert record.description is None


def test_to_response_uses_camel_case_on_the_wire(make_sample_request):
    record = stamp_on_create(to_record(make_sample_request(sampleIdentifier="GS-2024-001")), T0)
    record.id = uuid.uuid4()
    body = to_response(record).model_dump(mode="json", by_alias=True)
    assert body["id"] == str(record.id)
    assert body["sampleIdentifier"] == "GS-2024-001"
    assert body["sampleType"] == "ROCK"
    assert body["collectionDate"] == "2024-01-15"
    assert body["createdAt"] == body["updatedAt"]
    assert "sample_identifier" not in body
