from datetime import datetime, timezone
from sqlalchemy import ForeignKey, Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from slottrack.database import Base
from slottrack.models.equipment import readiness_status_type


class PlacementHistory(Base):
    """Append-only ledger, one row per move. No UPDATE, no DELETE."""

    __tablename__ = "placement_history"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    equipment_id: Mapped[int] = mapped_column(ForeignKey("equipment.id"), nullable=False, index=True)
    from_slot_id: Mapped[int | None] = mapped_column(ForeignKey("slots.id"), nullable=True)  # None = was unplaced
    to_slot_id: Mapped[int] = mapped_column(ForeignKey("slots.id"), nullable=False)
    status_before: Mapped[str] = mapped_column(readiness_status_type(), nullable=False)
    status_after: Mapped[str] = mapped_column(readiness_status_type(), nullable=False)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    # Weak reference to users.id, stored as given and never validated
    performed_by: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    equipment: Mapped["Equipment"] = relationship(back_populates="placements")
    from_slot: Mapped["Slot | None"] = relationship(foreign_keys=[from_slot_id])
    to_slot: Mapped["Slot"] = relationship(foreign_keys=[to_slot_id])
