"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2024-01-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

ENUMS = {
    'gender': ('male', 'female'),
    'delivery_type': ('normal', 'caesarean', 'assisted'),
    'vaccine_type': ('basic', 'additional', 'booster'),
    'checkup_type': ('routine', 'pregnancy', 'child', 'adult', 'elderly'),
}


def enum_type(name: str) -> sa.Enum:
    # gender is shared by two tables, so PostgreSQL types are created once up front
    return sa.Enum(*ENUMS[name], name=name).with_variant(
        postgresql.ENUM(*ENUMS[name], name=name, create_type=False), 'postgresql'
    )


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name, values in ENUMS.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    # Create patients table
    op.create_table(
        'patients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('gender', enum_type('gender'), nullable=False),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    # Create delivery_services table
    op.create_table(
        'delivery_services',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('delivery_date', sa.Date(), nullable=False),
        sa.Column('delivery_type', enum_type('delivery_type'), nullable=False),
        sa.Column('baby_weight', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('baby_gender', enum_type('gender'), nullable=False),
        sa.Column('baby_name', sa.Text(), nullable=True),
        sa.Column('complications', sa.Text(), nullable=True),
        sa.Column('doctor_name', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], )
    )
    op.create_index('ix_delivery_services_patient_id', 'delivery_services', ['patient_id'], unique=False)

    # Create immunizations table
    op.create_table(
        'immunizations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('vaccine_name', sa.Text(), nullable=False),
        sa.Column('vaccine_type', enum_type('vaccine_type'), nullable=False),
        sa.Column('vaccination_date', sa.Date(), nullable=False),
        sa.Column('next_vaccination_date', sa.Date(), nullable=True),
        sa.Column('batch_number', sa.Text(), nullable=True),
        sa.Column('administered_by', sa.Text(), nullable=False),
        sa.Column('side_effects', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], )
    )
    op.create_index('ix_immunizations_patient_id', 'immunizations', ['patient_id'], unique=False)

    # Create medical_checkups table
    op.create_table(
        'medical_checkups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('checkup_date', sa.Date(), nullable=False),
        sa.Column('checkup_type', enum_type('checkup_type'), nullable=False),
        sa.Column('weight', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('height', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('blood_pressure', sa.Text(), nullable=True),
        sa.Column('temperature', sa.Numeric(precision=4, scale=1), nullable=True),
        sa.Column('heart_rate', sa.Integer(), nullable=True),
        sa.Column('symptoms', sa.Text(), nullable=True),
        sa.Column('diagnosis', sa.Text(), nullable=True),
        sa.Column('treatment', sa.Text(), nullable=True),
        sa.Column('medication_prescribed', sa.Text(), nullable=True),
        sa.Column('doctor_name', sa.Text(), nullable=False),
        sa.Column('next_checkup_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], )
    )
    op.create_index('ix_medical_checkups_patient_id', 'medical_checkups', ['patient_id'], unique=False)


def downgrade() -> None:
    # Drop all tables in reverse order of creation
    op.drop_table('medical_checkups')
    op.drop_table('immunizations')
    op.drop_table('delivery_services')
    op.drop_table('patients')

    # Drop enums
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('DROP TYPE IF EXISTS checkup_type')
        op.execute('DROP TYPE IF EXISTS vaccine_type')
        op.execute('DROP TYPE IF EXISTS delivery_type')
        op.execute('DROP TYPE IF EXISTS gender')
