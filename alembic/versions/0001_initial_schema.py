"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

READINESS_VALUES = ('Ready', 'Disewa', 'Servis', 'Kalibrasi', 'Rusak', 'Hilang')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        # Created once here, shared by equipment and placement_history
        readiness = postgresql.ENUM(*READINESS_VALUES, name='readinessstatus', create_type=False)
        readiness.create(bind, checkfirst=True)
    else:
        readiness = sa.Enum(*READINESS_VALUES, name='readinessstatus')

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table(
        'warehouses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=1000), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_warehouses_id'), 'warehouses', ['id'], unique=False)
    op.create_index(op.f('ix_warehouses_code'), 'warehouses', ['code'], unique=True)

    op.create_table(
        'racks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('warehouse_id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('zone', sa.String(length=64), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouses.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('warehouse_id', 'code', name='uq_rack_warehouse_code'),
    )
    op.create_index(op.f('ix_racks_id'), 'racks', ['id'], unique=False)
    op.create_index(op.f('ix_racks_warehouse_id'), 'racks', ['warehouse_id'], unique=False)

    op.create_table(
        'slots',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('rack_id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['rack_id'], ['racks.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('rack_id', 'code', name='uq_slot_rack_code'),
    )
    op.create_index(op.f('ix_slots_id'), 'slots', ['id'], unique=False)
    op.create_index(op.f('ix_slots_rack_id'), 'slots', ['rack_id'], unique=False)

    op.create_table(
        'equipment_classes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_equipment_classes_id'), 'equipment_classes', ['id'], unique=False)
    op.create_index(op.f('ix_equipment_classes_code'), 'equipment_classes', ['code'], unique=True)

    op.create_table(
        'equipment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('class_id', sa.Integer(), nullable=False),
        sa.Column('serial_number', sa.String(length=128), nullable=True),
        sa.Column('brand', sa.String(length=128), nullable=True),
        sa.Column('model', sa.String(length=128), nullable=True),
        sa.Column('condition_note', sa.String(length=2000), nullable=True),
        sa.Column('readiness_status', readiness, nullable=False),
        sa.Column('current_slot_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['class_id'], ['equipment_classes.id']),
        sa.ForeignKeyConstraint(['current_slot_id'], ['slots.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('current_slot_id', name='uq_equipment_current_slot'),
    )
    op.create_index(op.f('ix_equipment_id'), 'equipment', ['id'], unique=False)
    op.create_index(op.f('ix_equipment_code'), 'equipment', ['code'], unique=True)
    op.create_index(op.f('ix_equipment_class_id'), 'equipment', ['class_id'], unique=False)

    op.create_table(
        'placement_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('equipment_id', sa.Integer(), nullable=False),
        sa.Column('from_slot_id', sa.Integer(), nullable=True),
        sa.Column('to_slot_id', sa.Integer(), nullable=False),
        sa.Column('status_before', readiness, nullable=False),
        sa.Column('status_after', readiness, nullable=False),
        sa.Column('description', sa.String(length=2000), nullable=True),
        # No FK: performed_by is stored as given
        sa.Column('performed_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['equipment_id'], ['equipment.id']),
        sa.ForeignKeyConstraint(['from_slot_id'], ['slots.id']),
        sa.ForeignKeyConstraint(['to_slot_id'], ['slots.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_placement_history_id'), 'placement_history', ['id'], unique=False)
    op.create_index(op.f('ix_placement_history_equipment_id'), 'placement_history', ['equipment_id'], unique=False)
    op.create_index(op.f('ix_placement_history_performed_by'), 'placement_history', ['performed_by'], unique=False)
    op.create_index(op.f('ix_placement_history_created_at'), 'placement_history', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_table('placement_history')
    op.drop_table('equipment')
    op.drop_table('equipment_classes')
    op.drop_table('slots')
    op.drop_table('racks')
    op.drop_table('warehouses')
    op.drop_table('users')
    # Drop the enum type (needed for PostgreSQL, no-op for SQLite)
    sa.Enum(name='readinessstatus').drop(op.get_bind(), checkfirst=True)
