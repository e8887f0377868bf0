from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from sqlmodel import SQLModel

# Weather glyphs offered on the call sheet form
WEATHER_CONDITIONS = {
    "\u2600\ufe0f": "Sunny",
    "\u26c5": "Partly Cloudy",
    "\u2601\ufe0f": "Cloudy",
    "\U0001f327\ufe0f": "Rainy",
    "\u26c8\ufe0f": "Stormy",
    "\U0001f328\ufe0f": "Snow",
    "\U0001f32b\ufe0f": "Foggy",
}


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class ProductionCreate(BaseModel):
    name: str = Field(..., min_length=1)


class ProductionRename(BaseModel):
    name: str = Field(..., min_length=1)


class FieldUpdate(BaseModel):
    """Base for the typed call-sheet edits. Only fields present in the request are written."""

    @field_validator("*", mode="before")
    @classmethod
    def normalize_blank(cls, v):
        return _blank_to_none(v)


class LocationUpdate(FieldUpdate):
    location_address: str | None = None
    location_details: str | None = None
    parking_info: str | None = None
    weather_backup: str | None = None


class TimingUpdate(FieldUpdate):
    shoot_date: str | None = None  # YYYY-MM-DD format
    call_time: str | None = None
    wrap_time: str | None = None
    lunch_time: str | None = None
    estimated_wrap: str | None = None

    @field_validator("shoot_date")
    @classmethod
    def validate_shoot_date(cls, v):
        if v is not None:
            try:
                datetime.strptime(v, "%Y-%m-%d")
            except ValueError:
                raise ValueError("shoot_date must be in YYYY-MM-DD format")
        return v


class ContactUpdate(FieldUpdate):
    client_name: str | None = None
    producer_name: str | None = None
    producer_phone: str | None = None


class WeatherUpdate(FieldUpdate):
    weather_city: str | None = None
    weather_condition: str | None = None
    weather_temp: str | None = None
    sunrise_time: str | None = None
    sunset_time: str | None = None

    @field_validator("weather_condition")
    @classmethod
    def validate_condition(cls, v):
        if v is not None and v not in WEATHER_CONDITIONS:
            raise ValueError(f"weather_condition must be one of: {set(WEATHER_CONDITIONS)}")
        return v


class NotesUpdate(FieldUpdate):
    special_notes: str | None = None


class ProductionResponse(SQLModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime | None = None
    shoot_date: str | None = None
    call_time: str | None = None
    wrap_time: str | None = None
    lunch_time: str | None = None
    estimated_wrap: str | None = None
    location_address: str | None = None
    location_details: str | None = None
    parking_info: str | None = None
    weather_backup: str | None = None
    client_name: str | None = None
    producer_name: str | None = None
    producer_phone: str | None = None
    special_notes: str | None = None
    weather_city: str | None = None
    weather_condition: str | None = None
    weather_temp: str | None = None
    sunrise_time: str | None = None
    sunset_time: str | None = None


class CrewCreate(BaseModel):
    name: str
    role: str
    call_time: str | None = None
    phone: str | None = None
    email: str | None = None
    notes: str | None = None


class CrewResponse(SQLModel):
    id: int
    production_id: int
    name: str
    role: str
    call_time: str | None = None
    phone: str | None = None
    email: str | None = None
    notes: str | None = None
    created_at: datetime


class LookCreate(BaseModel):
    name: str


class LookUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    styling_notes: str | None = None


class LookReorderRequest(BaseModel):
    look_ids: list[int]


class LookResponse(SQLModel):
    id: int
    production_id: int
    name: str
    description: str
    styling_notes: str
    image_url: str | None = None
    sequence_order: int
    created_at: datetime
    updated_at: datetime | None = None


class OkResponse(BaseModel):
    ok: bool
    message: str


# Call sheet document tree


class CallSheetHeader(BaseModel):
    title: str
    date: str


class LocationBlock(BaseModel):
    address: str
    details: str


class ContactBlock(BaseModel):
    name: str
    phone: str


class WeatherLine(BaseModel):
    condition: str
    temperature: str
    sunrise: str
    sunset: str
    text: str


class TimingBlock(BaseModel):
    call_time: str
    wrap_time: str
    lunch_break: str
    estimated_wrap: str


class CrewRow(BaseModel):
    name: str = ""
    role: str = ""
    phone: str = ""
    call_time: str = ""
    placeholder: bool = False


class LookLine(BaseModel):
    number: int
    name: str
    text: str


class CallSheetDocument(BaseModel):
    production_id: int | None = None
    header: CallSheetHeader
    location: LocationBlock
    contact: ContactBlock
    weather: WeatherLine
    timing: TimingBlock
    crew: list[CrewRow]
    parking: str
    looks: list[LookLine]
    special_notes: str | None = None
    footer: list[str]
    export_filename: str
