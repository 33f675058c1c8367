"""Initial migration - create room and patient tables

Revision ID: 001_initial
Revises: 
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


room_type = sa.Enum('ICU', 'GENERAL', 'PRIVATE', 'EMERGENCY', 'SURGERY', name='roomtypeenum')
room_status = sa.Enum('AVAILABLE', 'OCCUPIED', 'MAINTENANCE', 'CLEANING', name='roomstatusenum')
condition = sa.Enum('CRITICAL', 'STABLE', 'NORMAL', name='conditionenum')
patient_status = sa.Enum('ADMITTED', 'DISCHARGED', 'PENDING', name='patientstatusenum')


def upgrade() -> None:
    """Creates the system tables."""
    
    # Room table
    op.create_table(
        'room',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('room_number', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('type', room_type, nullable=False),
        sa.Column('floor', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False, default=1),
        sa.Column('occupied', sa.Boolean(), nullable=False, default=False),
        sa.Column('patient_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('status', room_status, nullable=False),
        sa.Column('daily_rate', sa.Float(), nullable=False, default=0.0),
        sa.Column('amenities', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('equipment', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('last_cleaned', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_room_room_number', 'room', ['room_number'], unique=True)
    op.create_index('ix_room_type', 'room', ['type'])
    op.create_index('ix_room_floor', 'room', ['floor'])
    op.create_index('ix_room_occupied', 'room', ['occupied'])
    op.create_index('ix_room_patient_id', 'room', ['patient_id'])
    op.create_index('ix_room_status', 'room', ['status'])
    
    # Patient table
    op.create_table(
        'patient',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('contact_number', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('emergency_contact_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('emergency_contact_phone', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('emergency_contact_relationship', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('condition', condition, nullable=False),
        sa.Column('priority', sa.Integer(), nullable=False),
        sa.Column('medical_history', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('allergies', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('current_medication', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('status', patient_status, nullable=False),
        sa.Column('assigned_room_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('admission_date', sa.DateTime(), nullable=False),
        sa.Column('discharge_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['assigned_room_id'], ['room.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_patient_condition', 'patient', ['condition'])
    op.create_index('ix_patient_priority', 'patient', ['priority'])
    op.create_index('ix_patient_status', 'patient', ['status'])
    op.create_index('ix_patient_assigned_room_id', 'patient', ['assigned_room_id'])
    op.create_index('ix_patient_admission_date', 'patient', ['admission_date'])


def downgrade() -> None:
    """Drops the system tables."""
    op.drop_table('patient')
    op.drop_table('room')
