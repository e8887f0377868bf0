import logging
from datetime import UTC, datetime

from errors import ValidationError
from models import CrewMember
from store import RecordStore

logger = logging.getLogger(__name__)


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CrewRoster:
    """Crew members of a production. No ordering invariant; listed by role."""

    def __init__(self, store: RecordStore):
        self.store = store

    def list(self, production_id: int) -> list[CrewMember]:
        return self.store.query(
            "crewmember",
            {"production_id": production_id},
            order_by=("role", "created_at", "id"),
        )

    def add(
        self,
        production_id: int,
        name: str,
        role: str,
        call_time: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        notes: str | None = None,
    ) -> CrewMember:
        name = (name or "").strip()
        role = (role or "").strip()
        if not name or not role:
            raise ValidationError("Crew member needs both a name and a role")

        self.store.get("production", production_id)
        member = self.store.insert(
            "crewmember",
            {
                "production_id": production_id,
                "name": name,
                "role": role,
                "call_time": _optional(call_time),
                "phone": _optional(phone),
                "email": _optional(email),
                "notes": _optional(notes),
                "created_at": datetime.now(UTC),
            },
        )
        logger.info(f"Added crew member {member.id} ({role}) to production {production_id}")
        return member

    def remove(self, crew_id: int) -> None:
        production_id = self.store.get("crewmember", crew_id).production_id
        self.store.delete("crewmember", {"id": crew_id})
        logger.info(f"Removed crew member {crew_id} from production {production_id}")
