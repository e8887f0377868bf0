"""Call sheet assembly.

``assemble`` is a pure function: it merges one production, its crew and its
ordered looks into a printable document tree. Every required slot falls back
to a fixed placeholder so the exported sheet never shows a blank.
"""
import os
from datetime import datetime

from schemas import (
    CallSheetDocument,
    CallSheetHeader,
    ContactBlock,
    CrewRow,
    LocationBlock,
    LookLine,
    TimingBlock,
    WeatherLine,
)

BLANK_CREW_ROWS = int(os.getenv("CALL_SHEET_BLANK_ROWS", "6"))

PLACEHOLDERS = {
    "title": "PRODUCTION TITLE",
    "date": "DATE",
    "location_address": "LOCATION ADDRESS",
    "contact_name": "CONTACT NAME",
    "contact_phone": "CONTACT PHONE",
    "weather_condition": "\u2600\ufe0f",
    "weather_temp": "32\u00b0C",
    "sunrise_time": "5:53AM",
    "sunset_time": "8:54PM",
    "call_time": "TBD",
    "wrap_time": "TBD",
    "lunch_time": "1:00 PM - 2:00 PM",
    "estimated_wrap": "6:00 PM",
    "parking_info": "PARKING INSTRUCTIONS",
}

FOOTER = [
    "This is a closed set. No personal photos or videos",
    "are to be captured without prior consent.",
]


def _value(value, placeholder: str) -> str:
    if value is None:
        return placeholder
    value = str(value).strip()
    return value or placeholder


def format_shoot_date(shoot_date: str | None) -> str:
    """Long US form, e.g. ``Saturday, March 15, 2025``. Unparseable dates pass through."""
    if not shoot_date or not shoot_date.strip():
        return PLACEHOLDERS["date"]
    try:
        parsed = datetime.strptime(shoot_date.strip()[:10], "%Y-%m-%d")
    except ValueError:
        return shoot_date.strip()
    return f"{parsed.strftime('%A, %B')} {parsed.day}, {parsed.year}"


def assemble(production, crew, looks, blank_rows: int = BLANK_CREW_ROWS) -> CallSheetDocument:
    """Build the call sheet document.

    Args:
        production: Production record (any object with the production attributes)
        crew: Crew members in display order; the caller sorts them
        looks: Looks in shoot order; numbering is by position, not sequence_order
        blank_rows: Number of empty crew rows printed when there is no crew
    """
    p = production

    condition = _value(p.weather_condition, PLACEHOLDERS["weather_condition"])
    temperature = _value(p.weather_temp, PLACEHOLDERS["weather_temp"])
    sunrise = _value(p.sunrise_time, PLACEHOLDERS["sunrise_time"])
    sunset = _value(p.sunset_time, PLACEHOLDERS["sunset_time"])

    if crew:
        crew_rows = [
            CrewRow(
                name=member.name,
                role=member.role,
                phone=member.phone or "",
                call_time=member.call_time or "",
            )
            for member in crew
        ]
    else:
        crew_rows = [CrewRow(placeholder=True) for _ in range(blank_rows)]

    look_lines = [
        LookLine(number=index, name=look.name, text=f"Look {index}: {look.name}")
        for index, look in enumerate(looks, start=1)
    ]

    special_notes = (p.special_notes or "").strip() or None
    title = _value(p.name, PLACEHOLDERS["title"])

    return CallSheetDocument(
        production_id=getattr(p, "id", None),
        header=CallSheetHeader(title=title, date=format_shoot_date(p.shoot_date)),
        location=LocationBlock(
            address=_value(p.location_address, PLACEHOLDERS["location_address"]),
            details=(p.location_details or "").strip(),
        ),
        contact=ContactBlock(
            name=_value(p.producer_name, PLACEHOLDERS["contact_name"]),
            phone=_value(p.producer_phone, PLACEHOLDERS["contact_phone"]),
        ),
        weather=WeatherLine(
            condition=condition,
            temperature=temperature,
            sunrise=sunrise,
            sunset=sunset,
            text=f"{condition} / {temperature} / Sunrise {sunrise} / Sunset {sunset}",
        ),
        timing=TimingBlock(
            call_time=_value(p.call_time, PLACEHOLDERS["call_time"]),
            wrap_time=_value(p.wrap_time, PLACEHOLDERS["wrap_time"]),
            lunch_break=_value(p.lunch_time, PLACEHOLDERS["lunch_time"]),
            estimated_wrap=_value(p.estimated_wrap, PLACEHOLDERS["estimated_wrap"]),
        ),
        crew=crew_rows,
        parking=_value(p.parking_info, PLACEHOLDERS["parking_info"]),
        looks=look_lines,
        special_notes=special_notes,
        footer=list(FOOTER),
        export_filename=f"{title} - Call Sheet.pdf",
    )
