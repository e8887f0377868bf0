from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(UTC)


class Production(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default=None)

    # Timing
    shoot_date: str | None = Field(default=None)  # YYYY-MM-DD format
    call_time: str | None = Field(default=None)
    wrap_time: str | None = Field(default=None)
    lunch_time: str | None = Field(default=None)
    estimated_wrap: str | None = Field(default=None)

    # Location
    location_address: str | None = Field(default=None)
    location_details: str | None = Field(default=None)
    parking_info: str | None = Field(default=None)
    weather_backup: str | None = Field(default=None)

    # Contact
    client_name: str | None = Field(default=None)
    producer_name: str | None = Field(default=None)
    producer_phone: str | None = Field(default=None)

    special_notes: str | None = Field(default=None)

    # Weather snapshot
    weather_city: str | None = Field(default=None)
    weather_condition: str | None = Field(default=None)
    weather_temp: str | None = Field(default=None)
    sunrise_time: str | None = Field(default=None)
    sunset_time: str | None = Field(default=None)


class CrewMember(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    production_id: int = Field(foreign_key="production.id", index=True)
    name: str
    role: str = Field(index=True)  # Free text, display order is by role
    call_time: str | None = Field(default=None)
    phone: str | None = Field(default=None)
    email: str | None = Field(default=None)
    notes: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)


class Look(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    production_id: int = Field(foreign_key="production.id", index=True)
    name: str
    description: str = Field(default="")
    styling_notes: str = Field(default="")
    image_url: str | None = Field(default=None)
    sequence_order: int = Field(default=0, index=True)  # Dense 0..N-1 per production
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default=None)
