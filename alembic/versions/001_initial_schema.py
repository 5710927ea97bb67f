"""Initial schema: users, catalog, pharmacies, prescriptions and reminders

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_categories_id', 'categories', ['id'])

    op.create_table(
        'active_ingredients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_active_ingredients_id', 'active_ingredients', ['id'])
    op.create_index('ix_active_ingredients_name', 'active_ingredients', ['name'], unique=True)

    op.create_table(
        'medicines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('generic_name', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('concentration', sa.String(), nullable=True),
        sa.Column('manufacturer', sa.String(), nullable=True),
        sa.Column('medicine_type', sa.String(), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('discount', sa.Float(), nullable=True),
        sa.Column('available_stock', sa.Integer(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('prescription_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('side_effects', sa.Text(), nullable=True),
        sa.Column('usage_instruction', sa.Text(), nullable=True),
        sa.Column('storage_condition', sa.Text(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_reviews', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=True),
        sa.Column('active_ingredient_id', sa.Integer(), sa.ForeignKey('active_ingredients.id'), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_medicines_id', 'medicines', ['id'])
    op.create_index('ix_medicines_name', 'medicines', ['name'])
    op.create_index('ix_medicines_active_ingredient_id', 'medicines', ['active_ingredient_id'])
    op.create_index(
        'idx_medicines_ingredient_available', 'medicines',
        ['active_ingredient_id', 'is_available', 'is_deleted'],
    )

    op.create_table(
        'medicine_alternatives',
        sa.Column('medicine_id', sa.Integer(), sa.ForeignKey('medicines.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('alternative_id', sa.Integer(), sa.ForeignKey('medicines.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'pharmacies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_pharmacies_id', 'pharmacies', ['id'])

    op.create_table(
        'pharmacy_medicines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('pharmacy_id', sa.Integer(), sa.ForeignKey('pharmacies.id'), nullable=False),
        sa.Column('medicine_id', sa.Integer(), sa.ForeignKey('medicines.id'), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('discount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('pharmacy_id', 'medicine_id', name='uq_pharmacy_medicine'),
    )
    op.create_index('ix_pharmacy_medicines_id', 'pharmacy_medicines', ['id'])
    op.create_index(
        'idx_pharmacy_medicines_lookup', 'pharmacy_medicines',
        ['medicine_id', 'is_available', 'is_deleted', 'stock'],
    )

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('target_type', sa.String(), nullable=False, server_default='medicine'),
        sa.Column('target_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_reviews_id', 'reviews', ['id'])
    op.create_index('idx_reviews_target', 'reviews', ['target_type', 'target_id', 'is_deleted'])

    op.create_table(
        'prescriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('prescription_text', sa.Text(), nullable=True),
        sa.Column('doctor_name', sa.String(), nullable=True),
        sa.Column('doctor_specialty', sa.String(), nullable=True),
        sa.Column('valid_until', sa.DateTime(), nullable=True),
        sa.Column('ocr_text', sa.Text(), nullable=False, server_default=''),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('image_public_id', sa.String(), nullable=True),
        sa.Column('medicines', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_prescriptions_id', 'prescriptions', ['id'])
    op.create_index('idx_prescriptions_patient_created', 'prescriptions', ['patient_id', 'created_at'])

    op.create_table(
        'reminders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('medicine_id', sa.Integer(), sa.ForeignKey('medicines.id'), nullable=True),
        sa.Column('prescription_id', sa.Integer(), sa.ForeignKey('prescriptions.id'), nullable=True),
        sa.Column('product', sa.JSON(), nullable=True),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('time', sa.DateTime(), nullable=True),
        sa.Column('frequency', sa.String(), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('dosage', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('notification_preferences', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        sa.Column('is_taken', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_reminders_id', 'reminders', ['id'])
    op.create_index('ix_reminders_user_id', 'reminders', ['user_id'])
    op.create_index('ix_reminders_user_range', 'reminders', ['user_id', 'is_deleted', 'start_date', 'end_date'])
    op.create_index('ix_reminders_user_time', 'reminders', ['user_id', 'time'])
    op.create_index('ix_reminders_prescription', 'reminders', ['prescription_id'])

    op.create_table(
        'reminder_daily_statuses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('reminder_id', sa.Integer(), sa.ForeignKey('reminders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        sa.Column('is_taken', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('reminder_id', 'date', name='uq_reminder_daily_status_date'),
    )
    op.create_index('ix_reminder_daily_statuses_id', 'reminder_daily_statuses', ['id'])


def downgrade():
    op.drop_table('reminder_daily_statuses')
    op.drop_table('reminders')
    op.drop_table('prescriptions')
    op.drop_table('reviews')
    op.drop_table('pharmacy_medicines')
    op.drop_table('pharmacies')
    op.drop_table('medicine_alternatives')
    op.drop_table('medicines')
    op.drop_table('active_ingredients')
    op.drop_table('categories')
    op.drop_table('users')
