"""add social links to business_settings

Revision ID: 9e52b0c4d618
Revises: 4c1d7e2a9b30
Create Date: 2026-10-18 21:02:47.551930

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "9e52b0c4d618"
down_revision = "4c1d7e2a9b30"
branch_labels = None
depends_on = None


def upgrade():
    with op.batch_alter_table("business_settings") as batch:
        batch.add_column(sa.Column("facebook_url", sa.String(500), nullable=True))
        batch.add_column(sa.Column("instagram_url", sa.String(500), nullable=True))


def downgrade():
    with op.batch_alter_table("business_settings") as batch:
        batch.drop_column("instagram_url")
        batch.drop_column("facebook_url")
