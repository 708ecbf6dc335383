
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(length=120), nullable=True),
        sa.Column('last_name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('phone_number', sa.String(length=13), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('table_id', sa.Integer(), nullable=True),
        sa.Column('seats', sa.Integer(), nullable=False),
        sa.Column('notes', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='requires-approval'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_reservations_email', 'reservations', ['email'])
    op.create_index('ix_reservations_phone_number', 'reservations', ['phone_number'])
    op.create_index('ix_reservations_date', 'reservations', ['date'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])

    op.create_table(
        'blacklist',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('phone_number', sa.String(length=13), nullable=True),
        sa.Column('date_blacklisted', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_blacklist_email', 'blacklist', ['email'], unique=True)
    op.create_index('ix_blacklist_phone_number', 'blacklist', ['phone_number'], unique=True)

def downgrade():
    op.drop_index('ix_blacklist_phone_number', table_name='blacklist')
    op.drop_index('ix_blacklist_email', table_name='blacklist')
    op.drop_table('blacklist')
    op.drop_index('ix_reservations_status', table_name='reservations')
    op.drop_index('ix_reservations_date', table_name='reservations')
    op.drop_index('ix_reservations_phone_number', table_name='reservations')
    op.drop_index('ix_reservations_email', table_name='reservations')
    op.drop_table('reservations')
