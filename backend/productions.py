"""Production records and their typed call-sheet edits."""
import logging
from datetime import UTC, datetime

from errors import ValidationError
from models import Production
from schemas import ContactUpdate, LocationUpdate, NotesUpdate, TimingUpdate, WeatherUpdate
from store import RecordStore

logger = logging.getLogger(__name__)


def demo_weather_snapshot(city: str, shoot_date: str) -> WeatherUpdate:
    """Fixed snapshot used until a real forecast provider is wired in."""
    return WeatherUpdate(
        weather_condition="\u2600\ufe0f",
        weather_temp="28\u00b0C",
        sunrise_time="6:15AM",
        sunset_time="8:30PM",
    )


class ProductionService:
    def __init__(self, store: RecordStore):
        self.store = store

    def list(self) -> list[Production]:
        return self.store.query("production", order_by=("-created_at", "-id"))

    def get(self, production_id: int) -> Production:
        return self.store.get("production", production_id)

    def create(self, name: str) -> Production:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Production name must not be empty")
        now = datetime.now(UTC)
        production = self.store.insert("production", {"name": name, "created_at": now, "updated_at": now})
        logger.info(f"Created production {production.id}: {name}")
        return production

    def rename(self, production_id: int, name: str) -> Production:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Production name must not be empty")
        return self._patch(production_id, {"name": name})

    def delete(self, production_id: int) -> None:
        """Delete a production together with its crew and looks."""
        self.get(production_id)
        with self.store.transaction():
            self.store.delete("crewmember", {"production_id": production_id})
            self.store.delete("look", {"production_id": production_id})
            self.store.delete("production", {"id": production_id})
        logger.info(f"Deleted production {production_id}")

    def update_location(self, production_id: int, update: LocationUpdate) -> Production:
        return self._apply(production_id, update)

    def update_timing(self, production_id: int, update: TimingUpdate) -> Production:
        return self._apply(production_id, update)

    def update_contact(self, production_id: int, update: ContactUpdate) -> Production:
        return self._apply(production_id, update)

    def update_weather(self, production_id: int, update: WeatherUpdate) -> Production:
        return self._apply(production_id, update)

    def update_notes(self, production_id: int, update: NotesUpdate) -> Production:
        return self._apply(production_id, update)

    def refresh_weather(self, production_id: int, provider=demo_weather_snapshot) -> Production:
        production = self.get(production_id)
        if not production.weather_city or not production.shoot_date:
            raise ValidationError("Please enter city and shoot date first")
        snapshot = provider(production.weather_city, production.shoot_date)
        logger.info(f"Refreshing weather for production {production_id} ({production.weather_city})")
        return self.update_weather(production_id, snapshot)

    def _apply(self, production_id: int, update) -> Production:
        # Only fields sent by the caller change; the rest of the record is left alone
        return self._patch(production_id, update.model_dump(exclude_unset=True))

    def _patch(self, production_id: int, patch: dict) -> Production:
        self.get(production_id)
        patch["updated_at"] = datetime.now(UTC)
        self.store.update("production", {"id": production_id}, patch)
        logger.info(f"Updated production {production_id}: {sorted(k for k in patch if k != 'updated_at')}")
        return self.get(production_id)
