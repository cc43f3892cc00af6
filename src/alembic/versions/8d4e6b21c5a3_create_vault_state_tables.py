"""create vault state, roles, unstake request and history tables

Revision ID: 8d4e6b21c5a3
Revises: 3f1c2a9d7e10
Create Date: 2024-06-03 09:40:02.553917

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8d4e6b21c5a3"
down_revision: Union[str, None] = "3f1c2a9d7e10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "vault_state",
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("admin", sa.String(), nullable=False),
        sa.Column("underlying_asset", sa.String(), nullable=False),
        sa.Column("share_asset", sa.String(), nullable=False),
        sa.Column("custody_account", sa.String(), nullable=False),
        sa.Column("cooldown_duration", sa.Integer(), nullable=False),
        sa.Column("vesting_duration", sa.Integer(), nullable=False),
        sa.Column("min_shares", sa.BigInteger(), nullable=False),
        sa.Column("vesting_amount", sa.BigInteger(), nullable=False),
        sa.Column("last_distribution_at", sa.BigInteger(), nullable=False),
        sa.Column("accounts_initialized", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("namespace"),
    )
    op.create_table(
        "vault_rewarders",
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("identity", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["namespace"], ["vault_state.namespace"]),
        sa.PrimaryKeyConstraint("namespace", "identity"),
    )
    op.create_table(
        "vault_blacklist",
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("identity", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["namespace"], ["vault_state.namespace"]),
        sa.PrimaryKeyConstraint("namespace", "identity"),
    )
    op.create_table(
        "unstake_requests",
        sa.Column("owner", sa.String(), nullable=False),
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("locked_shares", sa.BigInteger(), nullable=False),
        sa.Column("requested_at", sa.BigInteger(), nullable=False),
        sa.Column("ready_at", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["namespace"], ["vault_state.namespace"]),
        sa.PrimaryKeyConstraint("owner", "namespace"),
    )
    op.create_table(
        "pps_history",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("datetime", sa.DateTime(), nullable=False),
        sa.Column("price_per_share", sa.Float(), nullable=False),
        sa.Column("total_assets", sa.BigInteger(), nullable=False),
        sa.Column("total_shares", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["namespace"], ["vault_state.namespace"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pps_history_namespace", "pps_history", ["namespace"])
    op.create_table(
        "transaction",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column(
            "kind",
            sa.Enum("stake", "start_unstake", "unstake", "reward", "transfer", name="transactionkind"),
            nullable=False,
        ),
        sa.Column("actor", sa.String(), nullable=False),
        sa.Column("counterparty", sa.String(), nullable=True),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("shares", sa.BigInteger(), nullable=False),
        sa.Column("created_on", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["namespace"], ["vault_state.namespace"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transaction_namespace", "transaction", ["namespace"])


def downgrade() -> None:
    op.drop_index("ix_transaction_namespace", table_name="transaction")
    op.drop_table("transaction")
    sa.Enum(name="transactionkind").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_pps_history_namespace", table_name="pps_history")
    op.drop_table("pps_history")
    op.drop_table("unstake_requests")
    op.drop_table("vault_blacklist")
    op.drop_table("vault_rewarders")
    op.drop_table("vault_state")
