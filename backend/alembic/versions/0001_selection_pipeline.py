"""Selection pipeline schema

Revision ID: 0001_selection_pipeline
Revises:
Create Date: 2026-10-19

Creates the candidate and drive tables read by the engine, and the
registration, round and round result tables it owns. Uniqueness of
(drive, candidate), (drive, round_number) and (round, candidate) is
enforced here so concurrent writers cannot create duplicates.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001_selection_pipeline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


drive_status = sa.Enum('UPCOMING', 'ACTIVE', 'COMPLETED', name='drivestatus')
result_status = sa.Enum('PENDING', 'SELECTED', 'REJECTED', name='resultstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'candidates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', UUID(as_uuid=True), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('enrollment_number', sa.String(50), nullable=False),
        sa.Column('branch', sa.String(20), nullable=False),
        sa.Column('cgpa', sa.Float, nullable=False),
        sa.Column('tenth_percent', sa.Float, nullable=False),
        sa.Column('twelfth_percent', sa.Float, nullable=False),
        sa.Column('has_active_backlog', sa.Boolean, server_default=sa.false(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_candidates_user_id', 'candidates', ['user_id'], unique=True)
    op.create_index('ix_candidates_enrollment_number', 'candidates', ['enrollment_number'], unique=True)
    op.create_index('ix_candidates_branch', 'candidates', ['branch'])

    op.create_table(
        'drives',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('company_name', sa.String(200), nullable=False),
        sa.Column('job_role', sa.String(200), nullable=False),
        sa.Column('ctc', sa.Float, nullable=True),
        sa.Column('min_cgpa', sa.Float, server_default='0', nullable=False),
        sa.Column('min_percent', sa.Float, server_default='0', nullable=False),
        sa.Column('allowed_branches', sa.String(500), nullable=False),
        sa.Column('drive_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('status', drive_status, server_default='UPCOMING', nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_drives_company_name', 'drives', ['company_name'])
    op.create_index('ix_drives_status', 'drives', ['status'])

    op.create_table(
        'drive_registrations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('drive_id', UUID(as_uuid=True), sa.ForeignKey('drives.id', ondelete='CASCADE'), nullable=False),
        sa.Column('candidate_id', UUID(as_uuid=True), sa.ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_eligible', sa.Boolean, server_default=sa.true(), nullable=False),
        sa.Column('registered_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.UniqueConstraint('drive_id', 'candidate_id', name='uq_drive_registrations_drive_candidate'),
    )
    op.create_index('ix_drive_registrations_drive_id', 'drive_registrations', ['drive_id'])
    op.create_index('ix_drive_registrations_candidate_id', 'drive_registrations', ['candidate_id'])

    op.create_table(
        'selection_rounds',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('drive_id', UUID(as_uuid=True), sa.ForeignKey('drives.id', ondelete='CASCADE'), nullable=False),
        sa.Column('round_number', sa.Integer, nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('scheduled_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.UniqueConstraint('drive_id', 'round_number', name='uq_selection_rounds_drive_number'),
        sa.CheckConstraint('round_number >= 1', name='ck_selection_rounds_number_positive'),
    )
    op.create_index('ix_selection_rounds_drive_id', 'selection_rounds', ['drive_id'])

    op.create_table(
        'round_results',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('round_id', UUID(as_uuid=True), sa.ForeignKey('selection_rounds.id', ondelete='CASCADE'), nullable=False),
        sa.Column('candidate_id', UUID(as_uuid=True), sa.ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', result_status, server_default='PENDING', nullable=False),
        sa.Column('feedback', sa.String(2000), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('round_id', 'candidate_id', name='uq_round_results_round_candidate'),
    )
    op.create_index('ix_round_results_round_id', 'round_results', ['round_id'])
    op.create_index('ix_round_results_candidate_id', 'round_results', ['candidate_id'])
    op.create_index('ix_round_results_status', 'round_results', ['status'])


def downgrade() -> None:
    op.drop_table('round_results')
    op.drop_table('selection_rounds')
    op.drop_table('drive_registrations')
    op.drop_table('drives')
    op.drop_table('candidates')
    result_status.drop(op.get_bind(), checkfirst=True)
    drive_status.drop(op.get_bind(), checkfirst=True)
