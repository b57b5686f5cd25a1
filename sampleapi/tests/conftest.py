import datetime as dt
import os
import sys
from collections.abc import Callable
from itertools import count
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = "sqlite+pysqlite://"

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sampleapi.database import build_engine, build_session_factory, init_schema  # noqa: E402
from sampleapi.main import create_app  # noqa: E402
from sampleapi.repository import SampleRepository  # noqa: E402
from sampleapi.schemas import SampleRequest  # noqa: E402
from sampleapi.service import SampleService  # noqa: E402


class FakeClock:
    def __init__(self, start: dt.datetime) -> None:
        self.now = start

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **kwargs) -> dt.datetime:
        self.now = self.now + dt.timedelta(**kwargs)
        return self.now


@pytest.fixture()
def static_dir(tmp_path: Path) -> Path:
    path = tmp_path / "static"
    path.mkdir()
    return path


@pytest.fixture()
def client(static_dir: Path):
    # fresh in-memory database per test
    app = create_app(database_url="sqlite+pysqlite://", static_dir=static_dir)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def repository() -> SampleRepository:
    engine = build_engine("sqlite+pysqlite://")
    init_schema(engine)
    return SampleRepository(build_session_factory(engine))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(dt.datetime(2024, 1, 15, 9, 30, 0))


@pytest.fixture()
def service(repository: SampleRepository, clock: FakeClock) -> SampleService:
    return SampleService(repository, clock=clock)


@pytest.fixture()
def make_sample_payload() -> Callable[..., dict]:
    seq = count(1)

    def _build(**overrides) -> dict:
        idx = next(seq)
        payload = {
            "sampleIdentifier": f"GS-TEST-{idx:03d}",
            "sampleName": f"Granite Sample {idx}",
            "sampleType": "ROCK",
            "collectionDate": "2024-01-15",
            "latitude": 40.7128,
            "longitude": -74.006,
            "locationName": "Central Park",
            "collectorName": "Dr. Jane Smith",
            "description": "Fine-grained granite sample",
            "storageLocation": "Lab-A-Shelf-12",
        }
        payload.update(overrides)
        return payload

    return _build


@pytest.fixture()
def make_sample_request(make_sample_payload: Callable[..., dict]) -> Callable[..., SampleRequest]:
    def _build(**overrides) -> SampleRequest:
        return SampleRequest.model_validate(make_sample_payload(**overrides))

    return _build
