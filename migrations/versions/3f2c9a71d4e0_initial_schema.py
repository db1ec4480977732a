"""initial_schema

Create the account schema:
- Accounts (provider-agnostic, nickname unique across providers)
- Account linkages (provider + provider uid, unique)

Revision ID: 3f2c9a71d4e0
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9a71d4e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "accounts",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("nickname", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("github", sa.String(255), nullable=True),
        sa.Column("twitter", sa.String(255), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        # Sign-in races are settled by this constraint, not by lookups
        sa.UniqueConstraint("nickname", name="uq_accounts_nickname"),
    )
    op.create_index("idx_accounts_name", "accounts", ["name"])

    op.create_table(
        "account_linkages",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "account_id",
            postgresql.UUID(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("provider_uid", sa.String(255), nullable=False),
        sa.Column("provider_handle", sa.String(255), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("last_login_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "provider", "provider_uid", name="uq_account_linkages_provider_uid"
        ),
    )
    op.create_index(
        "idx_account_linkages_account_id", "account_linkages", ["account_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_account_linkages_account_id", table_name="account_linkages")
    op.drop_table("account_linkages")
    op.drop_index("idx_accounts_name", table_name="accounts")
    op.drop_table("accounts")
