import datetime as dt
import enum
import uuid

from sqlalchemy import Date, DateTime, Enum, Float, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class SampleType(str, enum.Enum):
    ROCK = "ROCK"
    MINERAL = "MINERAL"
    SOIL = "SOIL"
    FOSSIL = "FOSSIL"
    SEDIMENT = "SEDIMENT"
    OTHER = "OTHER"


class SampleModel(Base):
    __tablename__ = "samples"
    __table_args__ = (UniqueConstraint("sample_identifier", name="uq_samples_sample_identifier"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    sample_identifier: Mapped[str] = mapped_column(String(50), nullable=False)
    sample_name: Mapped[str] = mapped_column(String(200), nullable=False)
    sample_type: Mapped[SampleType] = mapped_column(Enum(SampleType, length=20), nullable=False)
    collection_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    location_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    collector_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    storage_location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)


# columns replaced wholesale by an update; id and created_at never change
MUTABLE_COLUMNS = (
    "sample_identifier",
    "sample_name",
    "sample_type",
    "collection_date",
    "latitude",
    "longitude",
    "location_name",
    "collector_name",
    "description",
    "storage_location",
    "updated_at",
)
