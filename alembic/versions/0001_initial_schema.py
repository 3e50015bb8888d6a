"""Initial schema: entities, per-guardian and per-child records, link tables

Revision ID: 0001_initial
Revises:
Create Date: 2025-01-15

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_utc', sa.DateTime(), nullable=True),
        sa.Column('updated_utc', sa.DateTime(), nullable=True),
    ]


def _unique_when_set(name, table, column):
    # rows holding NULL stay out of the index
    condition = sa.text(f"{column} IS NOT NULL")
    op.create_index(name, table, [column], unique=True, postgresql_where=condition, sqlite_where=condition)


def upgrade():
    op.create_table(
        'children',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('birth_city', sa.String(length=100), nullable=True),
        sa.Column('has_siblings', sa.Boolean(), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    _unique_when_set('uq_child_email', 'children', 'email')
    _unique_when_set('uq_child_phone', 'children', 'phone')

    op.create_table(
        'guardians',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=10), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('birth_name', sa.String(length=100), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('postal_code', sa.String(length=10), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('phone2', sa.String(length=20), nullable=True),
        sa.Column('beneficiary_number', sa.String(length=50), nullable=True),
        *_timestamps(),
    )
    _unique_when_set('uq_guardian_beneficiary_number', 'guardians', 'beneficiary_number')
    _unique_when_set('uq_guardian_phone2', 'guardians', 'phone2')

    op.create_table(
        'authorized_people',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'financial_informations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('guardian_id', sa.Integer(), sa.ForeignKey('guardians.id', ondelete='CASCADE'), nullable=False),
        sa.Column('family_quotient', sa.Integer(), nullable=True),
        sa.Column('monthly_income', sa.Numeric(10, 2), nullable=True),
        sa.Column('annual_income', sa.Numeric(12, 2), nullable=True),
        sa.Column('model', sa.String(length=50), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_financial_informations_guardian_id', 'financial_informations', ['guardian_id'], unique=True)

    op.create_table(
        'personal_situations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('guardian_id', sa.Integer(), sa.ForeignKey('guardians.id', ondelete='CASCADE'), nullable=False),
        sa.Column('marital_status', sa.String(length=50), nullable=True),
        sa.Column('sector', sa.String(length=100), nullable=True),
        sa.Column('area', sa.String(length=100), nullable=True),
        sa.Column('regime', sa.String(length=100), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_personal_situations_guardian_id', 'personal_situations', ['guardian_id'], unique=True)

    op.create_table(
        'additional_data',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id', ondelete='CASCADE'), nullable=False),
        sa.Column('param_name', sa.String(length=100), nullable=True),
        sa.Column('param_value', sa.Text(), nullable=True),
        sa.Column('param_type', sa.String(length=50), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_additional_data_child_id', 'additional_data', ['child_id'])

    op.create_table(
        'guardian_children',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('guardian_id', sa.Integer(), sa.ForeignKey('guardians.id'), nullable=False),
        sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id'), nullable=False),
        sa.Column('relationship', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('guardian_id', 'child_id', name='uq_guardian_child'),
    )
    op.create_index('ix_guardian_children_guardian_id', 'guardian_children', ['guardian_id'])
    op.create_index('ix_guardian_children_child_id', 'guardian_children', ['child_id'])

    op.create_table(
        'authorized_person_children',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('authorized_person_id', sa.Integer(), sa.ForeignKey('authorized_people.id'), nullable=False),
        sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id'), nullable=False),
        sa.Column('relationship', sa.String(length=50), nullable=True),
        sa.Column('emergency_contact', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('authorized_person_id', 'child_id', name='uq_authorized_person_child'),
    )
    op.create_index('ix_authorized_person_children_authorized_person_id', 'authorized_person_children', ['authorized_person_id'])
    op.create_index('ix_authorized_person_children_child_id', 'authorized_person_children', ['child_id'])


def downgrade():
    # Link tables first, they reference the entities
    op.drop_table('authorized_person_children')
    op.drop_table('guardian_children')
    op.drop_table('additional_data')
    op.drop_table('personal_situations')
    op.drop_table('financial_informations')
    op.drop_table('authorized_people')
    op.drop_table('guardians')
    op.drop_table('children')
