"""create samples table

Revision ID: 0001
Revises: 
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "samples",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("sample_identifier", sa.String(50), nullable=False),
        sa.Column("sample_name", sa.String(200), nullable=False),
        sa.Column(
            "sample_type",
            sa.Enum("ROCK", "MINERAL", "SOIL", "FOSSIL", "SEDIMENT", "OTHER", name="sampletype", length=20),
            nullable=False,
        ),
        sa.Column("collection_date", sa.Date(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("location_name", sa.String(200), nullable=True),
        sa.Column("collector_name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("storage_location", sa.String(200), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("sample_identifier", name="uq_samples_sample_identifier"),
    )


def downgrade():
    op.drop_table("samples")
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TYPE IF EXISTS sampletype")
