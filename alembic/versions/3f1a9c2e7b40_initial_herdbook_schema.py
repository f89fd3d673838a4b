"""initial herdbook schema: animals, movements, lots, weighings, treatments, products

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2025-10-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
    ]


def upgrade() -> None:
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('species_id', sa.String(length=64), nullable=False),
        sa.Column('breed_id', sa.String(length=64), nullable=True),
        sa.Column('sex', sa.String(length=6), nullable=False),
        sa.Column('official_number', sa.String(length=64), nullable=True),
        sa.Column('visual_id', sa.String(length=64), nullable=True),
        sa.Column('current_eid', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('acquisition_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='alive'),
        sa.Column('status_changed_at', sa.Date(), nullable=True),
        sa.Column('mother_id', sa.Uuid(), nullable=True),
        sa.Column('father_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['mother_id'], ['animals.id'], name='fk_animals_mother_id_animals'),
        sa.ForeignKeyConstraint(['father_id'], ['animals.id'], name='fk_animals_father_id_animals'),
        sa.PrimaryKeyConstraint('id', name='pk_animals'),
        sa.UniqueConstraint('farm_id', 'official_number', name='ux_animals_farm_official_number'),
    )
    op.create_index('ix_animals_farm_id', 'animals', ['farm_id'], unique=False)
    op.create_index('ix_animals_farm_status', 'animals', ['farm_id', 'status'], unique=False)

    op.create_table(
        'movement_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('movement_date', sa.Date(), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_movement_events'),
    )
    op.create_index('ix_movement_events_farm_id', 'movement_events', ['farm_id'], unique=False)
    op.create_index(
        'ix_movement_events_farm_date', 'movement_events', ['farm_id', 'movement_date'], unique=False
    )
    op.create_index('ix_movement_events_farm_type', 'movement_events', ['farm_id', 'type'], unique=False)

    op.create_table(
        'movement_animals',
        sa.Column('movement_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('species_id', sa.String(length=64), nullable=False),
        sa.Column('breed_id', sa.String(length=64), nullable=True),
        sa.Column('sex', sa.String(length=6), nullable=False),
        sa.Column('status_before', sa.String(length=16), nullable=False),
        sa.Column('official_number', sa.String(length=64), nullable=True),
        sa.Column('visual_id', sa.String(length=64), nullable=True),
        sa.Column('current_eid', sa.String(length=64), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(
            ['movement_id'], ['movement_events.id'], name='fk_movement_animals_movement_id_movement_events'
        ),
        sa.ForeignKeyConstraint(['animal_id'], ['animals.id'], name='fk_movement_animals_animal_id_animals'),
        sa.PrimaryKeyConstraint('movement_id', 'animal_id', name='pk_movement_animals'),
    )
    op.create_index('ix_movement_animals_animal_id', 'movement_animals', ['animal_id'], unique=False)
    op.create_index('ix_movement_animals_farm_id', 'movement_animals', ['farm_id'], unique=False)

    op.create_table(
        'lots',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='open'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('notes', sa.String(length=1024), nullable=True),
        sa.Column('product_id', sa.String(length=64), nullable=True),
        sa.Column('product_name', sa.String(length=255), nullable=True),
        sa.Column('treatment_date', sa.Date(), nullable=True),
        sa.Column('withdrawal_end_date', sa.Date(), nullable=True),
        sa.Column('veterinarian_id', sa.String(length=64), nullable=True),
        sa.Column('veterinarian_name', sa.String(length=255), nullable=True),
        sa.Column('price_total', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('buyer_name', sa.String(length=255), nullable=True),
        sa.Column('seller_name', sa.String(length=255), nullable=True),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_lots'),
    )
    op.create_index('ix_lots_farm_id', 'lots', ['farm_id'], unique=False)

    op.create_table(
        'lot_memberships',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('lot_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('left_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['lot_id'], ['lots.id'], name='fk_lot_memberships_lot_id_lots'),
        sa.ForeignKeyConstraint(['animal_id'], ['animals.id'], name='fk_lot_memberships_animal_id_animals'),
        sa.PrimaryKeyConstraint('id', name='pk_lot_memberships'),
    )
    op.create_index('ix_lot_memberships_farm_id', 'lot_memberships', ['farm_id'], unique=False)
    op.create_index('ix_lot_memberships_lot_left', 'lot_memberships', ['lot_id', 'left_at'], unique=False)
    op.create_index(
        'ix_lot_memberships_animal_left', 'lot_memberships', ['animal_id', 'left_at'], unique=False
    )
    op.create_index(
        'ux_lot_memberships_active',
        'lot_memberships',
        ['lot_id', 'animal_id'],
        unique=True,
        sqlite_where=sa.text('left_at IS NULL'),
        postgresql_where=sa.text('left_at IS NULL'),
    )

    op.create_table(
        'weighings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('weight', sa.Numeric(precision=10, scale=3), nullable=False),
        sa.Column('unit', sa.String(length=4), nullable=False, server_default='kg'),
        sa.Column('weight_date', sa.Date(), nullable=False),
        sa.Column('purpose', sa.String(length=16), nullable=False, server_default='routine'),
        sa.Column('method', sa.String(length=16), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['animal_id'], ['animals.id'], name='fk_weighings_animal_id_animals'),
        sa.PrimaryKeyConstraint('id', name='pk_weighings'),
    )
    op.create_index('ix_weighings_farm_id', 'weighings', ['farm_id'], unique=False)
    op.create_index(
        'ix_weighings_farm_animal_date', 'weighings', ['farm_id', 'animal_id', 'weight_date'], unique=False
    )

    op.create_table(
        'treatments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('treatment_date', sa.Date(), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=True),
        sa.Column('product_name', sa.String(length=255), nullable=True),
        sa.Column('dose', sa.Numeric(precision=10, scale=3), nullable=True),
        sa.Column('dose_unit', sa.String(length=16), nullable=True),
        sa.Column('veterinarian_name', sa.String(length=255), nullable=True),
        sa.Column('diagnosis', sa.Text(), nullable=True),
        sa.Column('next_due_date', sa.Date(), nullable=True),
        sa.Column('cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('withdrawal_meat_until', sa.Date(), nullable=True),
        sa.Column('withdrawal_milk_until', sa.Date(), nullable=True),
        sa.Column('withdrawal_end_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['animal_id'], ['animals.id'], name='fk_treatments_animal_id_animals'),
        sa.PrimaryKeyConstraint('id', name='pk_treatments'),
    )
    op.create_index('ix_treatments_farm_id', 'treatments', ['farm_id'], unique=False)
    op.create_index(
        'ix_treatments_farm_animal_date',
        'treatments',
        ['farm_id', 'animal_id', 'treatment_date'],
        unique=False,
    )

    op.create_table(
        'products',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('withdrawal_meat_days', sa.Integer(), nullable=True),
        sa.Column('withdrawal_milk_hours', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_products'),
    )


def downgrade() -> None:
    op.drop_table('products')
    op.drop_index('ix_treatments_farm_animal_date', table_name='treatments')
    op.drop_index('ix_treatments_farm_id', table_name='treatments')
    op.drop_table('treatments')
    op.drop_index('ix_weighings_farm_animal_date', table_name='weighings')
    op.drop_index('ix_weighings_farm_id', table_name='weighings')
    op.drop_table('weighings')
    op.drop_index('ux_lot_memberships_active', table_name='lot_memberships')
    op.drop_index('ix_lot_memberships_animal_left', table_name='lot_memberships')
    op.drop_index('ix_lot_memberships_lot_left', table_name='lot_memberships')
    op.drop_index('ix_lot_memberships_farm_id', table_name='lot_memberships')
    op.drop_table('lot_memberships')
    op.drop_index('ix_lots_farm_id', table_name='lots')
    op.drop_table('lots')
    op.drop_index('ix_movement_animals_farm_id', table_name='movement_animals')
    op.drop_index('ix_movement_animals_animal_id', table_name='movement_animals')
    op.drop_table('movement_animals')
    op.drop_index('ix_movement_events_farm_type', table_name='movement_events')
    op.drop_index('ix_movement_events_farm_date', table_name='movement_events')
    op.drop_index('ix_movement_events_farm_id', table_name='movement_events')
    op.drop_table('movement_events')
    op.drop_index('ix_animals_farm_status', table_name='animals')
    op.drop_index('ix_animals_farm_id', table_name='animals')
    op.drop_table('animals')
