import enum
from datetime import datetime, timezone
from sqlalchemy import ForeignKey, String, DateTime, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from slottrack.database import Base


class ReadinessStatus(str, enum.Enum):
    ready = "Ready"
    disewa = "Disewa"          # rented out
    servis = "Servis"          # under service
    kalibrasi = "Kalibrasi"    # calibration
    rusak = "Rusak"            # damaged
    hilang = "Hilang"          # lost


def readiness_status_type() -> SAEnum:
    return SAEnum(
        ReadinessStatus,
        name="readinessstatus",
        values_callable=lambda e: [x.value for x in e],
    )


class EquipmentClass(Base):
    __tablename__ = "equipment_classes"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    equipment: Mapped[list["Equipment"]] = relationship(back_populates="equipment_class")


class Equipment(Base):
    __tablename__ = "equipment"

    # NULLs never collide, so unplaced equipment is unconstrained
    __table_args__ = (
        UniqueConstraint("current_slot_id", name="uq_equipment_current_slot"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    class_id: Mapped[int] = mapped_column(ForeignKey("equipment_classes.id"), nullable=False, index=True)
    serial_number: Mapped[str | None] = mapped_column(String(128), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(128), nullable=True)
    model: Mapped[str | None] = mapped_column(String(128), nullable=True)
    condition_note: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    readiness_status: Mapped[str] = mapped_column(
        readiness_status_type(), default=ReadinessStatus.ready, nullable=False
    )
    current_slot_id: Mapped[int | None] = mapped_column(ForeignKey("slots.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    equipment_class: Mapped["EquipmentClass"] = relationship(back_populates="equipment")
    current_slot: Mapped["Slot | None"] = relationship(back_populates="occupant")
    placements: Mapped[list["PlacementHistory"]] = relationship(
        back_populates="equipment", order_by="PlacementHistory.created_at"
    )
