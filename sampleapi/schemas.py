import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import SampleType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SampleRequest(CamelModel):
    sample_identifier: str = Field(max_length=50)
    sample_name: str = Field(max_length=200)
    sample_type: SampleType
    collection_date: dt.date
    latitude: float | None = Field(default=None, allow_inf_nan=False)
    longitude: float | None = Field(default=None, allow_inf_nan=False)
    location_name: str | None = Field(default=None, max_length=200)
    collector_name: str = Field(max_length=100)
    description: str | None = None
    storage_location: str | None = Field(default=None, max_length=200)

    @field_validator("sample_identifier", "sample_name", "collector_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class SampleResponse(CamelModel):
    id: uuid.UUID
    sample_identifier: str
    sample_name: str
    sample_type: SampleType
    collection_date: dt.date
    latitude: float | None = None
    longitude: float | None = None
    location_name: str | None = None
    collector_name: str
    description: str | None = None
    storage_location: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class SamplePage(CamelModel):
    content: list[SampleResponse]
    total_elements: int
    total_pages: int
    number: int
    size: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool


class HealthOut(BaseModel):
    status: str
    timestamp: dt.datetime
    service: str
