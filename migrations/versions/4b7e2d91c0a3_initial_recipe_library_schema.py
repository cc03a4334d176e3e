"""Initial recipe library schema

Revision ID: 4b7e2d91c0a3
Revises:
Create Date: 2026-10-19 09:12:41.518230

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7e2d91c0a3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'course',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('name_key', sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_course_name_key'), 'course', ['name_key'], unique=False)

    op.create_table(
        'category',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('name_key', sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_category_name_key'), 'category', ['name_key'], unique=False)

    op.create_table(
        'tag',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('name_key', sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_tag_name_key'), 'tag', ['name_key'], unique=False)

    op.create_table(
        'recipe',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('created_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_modified_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_prepared', sa.DateTime(timezone=True), nullable=True),
        sa.Column('source', sa.Text(), nullable=True),
        sa.Column('source_details', sa.Text(), nullable=True),
        sa.Column('introduction', sa.Text(), nullable=True),
        sa.Column('difficulty', sa.Integer(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('image_filename', sa.String(length=255), nullable=True),
        sa.Column('image_thumbnail', sa.LargeBinary(), nullable=True),
        sa.Column('is_favorite', sa.Boolean(), nullable=True),
        sa.Column('want_to_make', sa.Boolean(), nullable=True),
        sa.Column('yield', sa.Text(), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=True),
        sa.Column('course_id', sa.String(length=36), nullable=True),
        sa.Column('directions', sa.JSON(), nullable=True),
        sa.Column('ingredients', sa.JSON(), nullable=True),
        sa.Column('notes', sa.JSON(), nullable=True),
        sa.Column('preparation_times', sa.JSON(), nullable=True),
        sa.Column('nutrition', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['course_id'], ['course.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_recipe_name'), 'recipe', ['name'], unique=False)
    op.create_index(op.f('ix_recipe_course_id'), 'recipe', ['course_id'], unique=False)

    op.create_table(
        'recipe_category',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('recipe_id', sa.String(length=36), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['category.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_recipe_category_recipe_id'), 'recipe_category', ['recipe_id'], unique=False)
    op.create_index(op.f('ix_recipe_category_category_id'), 'recipe_category', ['category_id'], unique=False)

    op.create_table(
        'recipe_tag',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('recipe_id', sa.String(length=36), nullable=False),
        sa.Column('tag_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tag.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_recipe_tag_recipe_id'), 'recipe_tag', ['recipe_id'], unique=False)
    op.create_index(op.f('ix_recipe_tag_tag_id'), 'recipe_tag', ['tag_id'], unique=False)


def downgrade():
    op.drop_table('recipe_tag')
    op.drop_table('recipe_category')
    op.drop_table('recipe')
    op.drop_table('tag')
    op.drop_table('category')
    op.drop_table('course')
