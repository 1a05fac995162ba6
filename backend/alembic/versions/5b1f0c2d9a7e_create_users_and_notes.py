"""Create users and notes tables

Revision ID: 5b1f0c2d9a7e
Revises:
Create Date: 2026-10-19 09:12:05.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2d9a7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _tags_type():
    # must match StringListType: ARRAY on PostgreSQL, JSON text elsewhere
    if op.get_context().dialect.name == 'postgresql':
        return postgresql.ARRAY(sa.String(length=100))
    return sa.Text()


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column(
            'role',
            sa.Enum('USER', 'ADMIN', name='user_role', native_enum=False, length=10),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('idx_users_role', 'users', ['role'], unique=False)

    op.create_table(
        'notes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'visibility',
            sa.Enum('PUBLIC', 'PRIVATE', name='note_visibility', native_enum=False, length=10),
            nullable=False,
        ),
        sa.Column('tags', _tags_type(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notes_user_id', 'notes', ['user_id'], unique=False)
    op.create_index('idx_notes_visibility', 'notes', ['visibility'], unique=False)
    op.create_index('idx_notes_user_visibility', 'notes', ['user_id', 'visibility'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notes_user_visibility', table_name='notes')
    op.drop_index('idx_notes_visibility', table_name='notes')
    op.drop_index('idx_notes_user_id', table_name='notes')
    op.drop_table('notes')
    op.drop_index('idx_users_role', table_name='users')
    op.drop_table('users')
