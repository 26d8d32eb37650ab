"""Placement engine: move one piece of equipment into a slot.

A move is a single transaction: lock the equipment row, lock the target slot
row, refuse if another piece of equipment holds the slot, then update the
equipment and append one ``PlacementHistory`` row. Either both writes commit
or neither does.

Concurrent moves into the same slot are serialized by the slot row lock
(``SELECT ... FOR UPDATE``; on SQLite by ``BEGIN IMMEDIATE``). The unique
constraint on ``equipment.current_slot_id`` is the last line: if two moves
ever both pass the occupancy check, the second commit fails and is reported
as ``slot_occupied``.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from slottrack.database import transaction
from slottrack.exceptions import Conflict, InvalidArgument, NotFound, StorageError
from slottrack.models.equipment import Equipment, ReadinessStatus
from slottrack.models.location import Slot
from slottrack.models.placement import PlacementHistory
from slottrack.services.equipment_service import parse_status

logger = logging.getLogger(__name__)

SLOT_OCCUPIED_MESSAGE = "Target slot is occupied, choose a different slot"


def move(
    db: Session,
    equipment_id: int,
    to_slot_id: int | None,
    status_after: ReadinessStatus | str | None = None,
    description: str | None = None,
    performed_by: int | None = None,
) -> PlacementHistory:
    if to_slot_id is None:
        raise InvalidArgument("to_slot_id", "Target slot is required")
    requested_status = parse_status(status_after, field="status_after")

    try:
        with transaction(db):
            entry = _apply_move(db, equipment_id, to_slot_id, requested_status, description, performed_by)
    except IntegrityError as exc:
        if _is_slot_collision(exc):
            logger.warning(
                "Move of equipment %s lost the race for slot %s (unique constraint)",
                equipment_id, to_slot_id,
            )
            raise Conflict("slot_occupied", SLOT_OCCUPIED_MESSAGE) from exc
        logger.error(
            "Move of equipment %s to slot %s violated a constraint",
            equipment_id, to_slot_id, exc_info=True,
        )
        raise StorageError() from exc
    except SQLAlchemyError as exc:
        logger.error(
            "Move of equipment %s to slot %s failed in storage",
            equipment_id, to_slot_id, exc_info=True,
        )
        raise StorageError() from exc

    logger.info(
        "Moved equipment %s: slot %s -> %s, status %s -> %s, by user %s",
        entry.equipment_id, entry.from_slot_id, entry.to_slot_id,
        _status_value(entry.status_before), _status_value(entry.status_after), entry.performed_by,
    )
    return entry


def _apply_move(
    db: Session,
    equipment_id: int,
    to_slot_id: int,
    requested_status: ReadinessStatus | None,
    description: str | None,
    performed_by: int | None,
) -> PlacementHistory:
    equipment = db.scalar(
        select(Equipment)
        .where(Equipment.id == equipment_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    if equipment is None:
        raise NotFound("equipment", equipment_id)

    from_slot_id = equipment.current_slot_id
    status_before = equipment.readiness_status

    slot = db.scalar(select(Slot).where(Slot.id == to_slot_id).with_for_update())
    if slot is None:
        raise NotFound("slot", to_slot_id)

    occupant_id = _find_occupant(db, to_slot_id, equipment_id)
    if occupant_id is not None:
        logger.info(
            "Refusing move of equipment %s: slot %s is held by equipment %s",
            equipment_id, to_slot_id, occupant_id,
        )
        raise Conflict("slot_occupied", SLOT_OCCUPIED_MESSAGE)

    new_status = requested_status or status_before
    equipment.current_slot_id = to_slot_id
    equipment.readiness_status = new_status
    # Bumped explicitly, a same-slot same-status move emits no other change
    equipment.updated_at = datetime.now(timezone.utc)

    entry = PlacementHistory(
        equipment_id=equipment.id,
        from_slot_id=from_slot_id,
        to_slot_id=to_slot_id,
        status_before=status_before,
        status_after=new_status,
        description=description,
        performed_by=performed_by,
    )
    db.add(entry)
    db.flush()
    # Detached so commit does not expire it; every column was set before the flush
    db.expunge(entry)
    return entry


def _find_occupant(db: Session, slot_id: int, equipment_id: int) -> int | None:
    """Id of equipment other than ``equipment_id`` currently in ``slot_id``."""
    return db.scalar(
        select(Equipment.id)
        .where(Equipment.current_slot_id == slot_id, Equipment.id != equipment_id)
        .limit(1)
    )


def _is_slot_collision(exc: IntegrityError) -> bool:
    # SQLite names the column, PostgreSQL names the constraint uq_equipment_current_slot
    return "current_slot" in str(exc.orig)


def _status_value(status) -> str:
    return status.value if isinstance(status, ReadinessStatus) else str(status)
