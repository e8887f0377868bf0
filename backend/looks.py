"""Ordered look list management.

Within a production the ``sequence_order`` values of its looks form a dense,
zero-based permutation ``0..N-1``. Reorders and deletes rewrite the affected
rows in a single transaction so a failure never leaves a half-applied order.
"""
import logging
import time
from datetime import UTC, datetime
from pathlib import PurePosixPath

from errors import ValidationError
from models import Look
from store import RecordStore

logger = logging.getLogger(__name__)

LOOK_ORDER = ("sequence_order", "created_at", "id")


def image_extension(filename: str) -> str:
    """Lower-cased extension of the uploaded file's base name, or ``bin``."""
    name = PurePosixPath((filename or "").replace("\\", "/")).name
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    return ext if ext.isalnum() else "bin"


class LookListManager:
    def __init__(self, store: RecordStore):
        self.store = store

    def append(self, production_id: int, name: str) -> Look:
        """Create a look at the end of the list.

        The new order is ``1 + max(existing)``, so a gap left by an older
        delete is kept rather than filled.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Look name must not be empty")

        self.store.get("production", production_id)
        existing = self.list(production_id)
        next_order = max(look.sequence_order for look in existing) + 1 if existing else 0

        now = datetime.now(UTC)
        look = self.store.insert(
            "look",
            {
                "production_id": production_id,
                "name": name,
                "description": "",
                "styling_notes": "",
                "sequence_order": next_order,
                "created_at": now,
                "updated_at": now,
            },
        )
        logger.info(f"Appended look {look.id} to production {production_id} at position {next_order}")
        return look

    def reorder(self, production_id: int, look_ids: list[int]) -> list[Look]:
        """Assign ``sequence_order = index`` for a full permutation of the production's looks."""
        if len(set(look_ids)) != len(look_ids):
            raise ValidationError("Reorder contains duplicate look ids")

        self.store.get("production", production_id)
        current = {look.id for look in self.list(production_id)}
        supplied = set(look_ids)
        if supplied != current:
            missing = sorted(current - supplied)
            foreign = sorted(supplied - current)
            raise ValidationError(
                f"Reorder must list every look of production {production_id} exactly once "
                f"(missing: {missing}, foreign: {foreign})"
            )

        now = datetime.now(UTC)
        self.store.update_many(
            "look",
            [
                ({"id": look_id}, {"sequence_order": index, "updated_at": now})
                for index, look_id in enumerate(look_ids)
            ],
        )
        logger.info(f"Reordered {len(look_ids)} looks for production {production_id}")
        return self.list(production_id)

    def compact(self, production_id: int) -> list[Look]:
        """Renumber looks to ``0..N-1`` keeping their current relative order."""
        looks = self.list(production_id)
        changes = [
            ({"id": look.id}, {"sequence_order": index})
            for index, look in enumerate(looks)
            if look.sequence_order != index
        ]
        if changes:
            self.store.update_many("look", changes)
            logger.info(f"Compacted {len(changes)} look positions for production {production_id}")
        return self.list(production_id)

    def delete(self, look_id: int) -> None:
        """Remove a look and close the gap it leaves behind."""
        look = self.store.get("look", look_id)
        production_id = look.production_id
        with self.store.transaction():
            self.store.delete("look", {"id": look_id})
            self.compact(production_id)
        logger.info(f"Deleted look {look_id} from production {production_id}")

    def update_details(
        self,
        look_id: int,
        name: str | None = None,
        description: str | None = None,
        styling_notes: str | None = None,
    ) -> Look:
        patch = {}
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Look name must not be empty")
            patch["name"] = name
        if description is not None:
            patch["description"] = description
        if styling_notes is not None:
            patch["styling_notes"] = styling_notes

        self.store.get("look", look_id)
        if patch:
            patch["updated_at"] = datetime.now(UTC)
            self.store.update("look", {"id": look_id}, patch)
        return self._reload(look_id)

    def attach_image(self, look_id: int, filename: str, data: bytes, storage) -> Look:
        """Upload image bytes to object storage and point the look at the public URL."""
        if not data:
            raise ValidationError("Image upload is empty")

        self.store.get("look", look_id)
        path = f"looks/{look_id}-{int(time.time() * 1000)}.{image_extension(filename)}"
        public_url = storage.store(path, data)

        self.store.update(
            "look",
            {"id": look_id},
            {"image_url": public_url, "updated_at": datetime.now(UTC)},
        )
        logger.info(f"Attached image {public_url} to look {look_id}")
        return self._reload(look_id)

    def _reload(self, look_id: int) -> Look:
        return self.store.get("look", look_id)

    # Keep last: this name shadows the builtin for annotations further down the class
    def list(self, production_id: int) -> list[Look]:
        """Looks in shoot order; ties fall back to creation time."""
        return self.store.query("look", {"production_id": production_id}, order_by=LOOK_ORDER)
