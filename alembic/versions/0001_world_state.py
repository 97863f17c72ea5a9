"""world state and transaction log

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

_VALIDATION_CODE = sa.Enum("endorsed", "valid", "mvcc_read_conflict", name="validationcode")


def upgrade() -> None:
    op.create_table(
        "state_entries",
        sa.Column("channel", sa.String(128), primary_key=True),
        sa.Column("namespace", sa.String(128), primary_key=True),
        sa.Column("key", sa.String(512), primary_key=True),
        sa.Column("value", sa.LargeBinary(), nullable=False),
        sa.Column("version", sa.String(64), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "ledger_transactions",
        sa.Column("tx_id", sa.String(64), primary_key=True),
        sa.Column("channel", sa.String(128), nullable=False),
        sa.Column("namespace", sa.String(128), nullable=False),
        sa.Column("function", sa.String(128), nullable=False),
        sa.Column("args", sa.JSON(), nullable=False),
        sa.Column("creator_msp_id", sa.String(128), nullable=False),
        sa.Column("creator_cert", sa.Text(), nullable=False),
        sa.Column("read_set", sa.JSON(), nullable=False),
        sa.Column("write_set", sa.JSON(), nullable=False),
        sa.Column("result", sa.LargeBinary(), nullable=False),
        sa.Column("status", _VALIDATION_CODE, nullable=False),
        sa.Column("block_number", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("committed_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_ledger_transactions_status", "ledger_transactions", ["status"])
    op.create_index("ix_ledger_transactions_block_number", "ledger_transactions", ["block_number"])
    op.create_index("ix_ledger_tx_channel_block", "ledger_transactions", ["channel", "block_number"])


def downgrade() -> None:
    op.drop_table("ledger_transactions")
    op.drop_table("state_entries")
