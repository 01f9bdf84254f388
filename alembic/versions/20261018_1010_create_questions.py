"""create questions table

Revision ID: 20261018_1010_create_questions
Revises: 20261018_1000_create_categories
Create Date: 2026-10-18 10:10:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261018_1010_create_questions'
down_revision = '20261018_1000_create_categories'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'questions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        sa.Column('language_code', sa.String(10), nullable=False, server_default='en'),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('base_question_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('base_question_id', 'language_code', name='uq_questions_base_language'),
    )
    op.create_index('ix_questions_category_id', 'questions', ['category_id'])
    op.create_index('ix_questions_language_code', 'questions', ['language_code'])
    op.create_index('ix_questions_base_question_id', 'questions', ['base_question_id'])
    op.create_index('ix_questions_category_language', 'questions', ['category_id', 'language_code'])

def downgrade() -> None:
    op.drop_index('ix_questions_category_language', table_name='questions')
    op.drop_index('ix_questions_base_question_id', table_name='questions')
    op.drop_index('ix_questions_language_code', table_name='questions')
    op.drop_index('ix_questions_category_id', table_name='questions')
    op.drop_table('questions')
