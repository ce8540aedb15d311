"""SQLAlchemy table definitions for Huddle.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (tenant members, resolvable by username)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("company_id", UUID, nullable=False),
    Column("username", String(30), nullable=False),
    Column("display_name", String(255), nullable=True),
    Column("role", String(50), nullable=True),
    Column(
        "status",
        postgresql.ENUM("active", "suspended", name="user_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("company_id", "username", name="uq_users_company_username"),
)

Index("idx_users_company_username", users_table.c.company_id, users_table.c.username)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("company_id", UUID, nullable=False),
    Column("title", String(300), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("comment_count >= 0", name="posts_comment_count_non_negative"),
)

Index("idx_posts_company_id", posts_table.c.company_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# parent_comment_id carries no foreign key: deleting a comment leaves its
# replies in place as orphans, which the tree builder drops.
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("company_id", UUID, nullable=False),
    Column("parent_comment_id", UUID, nullable=True),
    Column("author_id", UUID, nullable=False),
    Column("author_name", String(255), nullable=False),
    Column("author_role", String(50), nullable=True),
    Column("is_anonymous", Boolean, nullable=False, server_default="false"),
    Column("text", Text, nullable=False),
    Column("edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("likes >= 0", name="comments_likes_non_negative"),
    CheckConstraint("reply_count >= 0", name="comments_reply_count_non_negative"),
)

Index(
    "idx_comments_post_created", comments_table.c.post_id, comments_table.c.created_at
)
Index("idx_comments_parent_comment_id", comments_table.c.parent_comment_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("company_id", UUID, nullable=False),
    Column(
        "type",
        postgresql.ENUM(
            "mention", "comment", name="notification_type", create_type=False
        ),
        nullable=False,
    ),
    Column("title", String(300), nullable=False),
    Column("message", Text, nullable=False),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("comment_id", UUID, nullable=True),
    Column("mentioned_by", String(255), nullable=False),
    Column("mentioned_by_id", UUID, nullable=False),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_created",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)
