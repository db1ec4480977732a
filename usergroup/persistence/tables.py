"""SQLAlchemy table definitions for user-group accounts.

They match the schema defined in the Alembic migrations. The unique
constraints are what make account creation race-safe.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

NICKNAME_CONSTRAINT = "uq_accounts_nickname"
PROVIDER_UID_CONSTRAINT = "uq_account_linkages_provider_uid"

# ============================================================================
# ACCOUNTS TABLE (Provider-agnostic)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("nickname", Text, nullable=False),  # Case-sensitive, unique
    Column("name", Text, nullable=False, server_default=""),
    Column("email", String(255), nullable=True),  # Format checked on commit only
    Column("github", String(255), nullable=True),
    Column("twitter", String(255), nullable=True),
    Column("image", Text, nullable=True),
    Column("description", Text, nullable=True),
    Column("url", Text, nullable=True),
    Column("location", Text, nullable=True),
    Column("admin", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("nickname", name=NICKNAME_CONSTRAINT),
)

Index("idx_accounts_name", accounts_table.c.name)

# ============================================================================
# ACCOUNT LINKAGES TABLE (Multi-provider authentication)
# ============================================================================
account_linkages_table = Table(
    "account_linkages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "account_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(50), nullable=False),  # 'github', 'twitter'
    Column("provider_uid", String(255), nullable=False),
    Column("provider_handle", String(255), nullable=False, server_default=""),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("provider", "provider_uid", name=PROVIDER_UID_CONSTRAINT),
)

Index("idx_account_linkages_account_id", account_linkages_table.c.account_id)
