"""SQLAlchemy table definitions for the discussion engine.

These table definitions are used with SQLAlchemy Core.
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
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from discuss.domain.repository import UNIQUE_VOTE_CONSTRAINT

# Metadata object for all tables
metadata = MetaData()

# Activity index target types
ACTIVITY_TYPE_COMMENT = 1

# ============================================================================
# USERS TABLE (read model, owned by the host application)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(64), nullable=False),
    Column("is_admin", Boolean, nullable=False, server_default="false"),
    Column("points", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_users_username", users_table.c.username)

# ============================================================================
# COMMUNITY_MODS TABLE
# ============================================================================
community_mods_table = Table(
    "community_mods",
    metadata,
    Column("community_id", UUID, nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    PrimaryKeyConstraint("community_id", "user_id", name="pk_community_mods"),
)

# ============================================================================
# POSTS TABLE (read model, owned by the host application)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("public_id", String(32), nullable=False, unique=True),
    Column("title", String(300), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("community_id", UUID, nullable=False),
    Column("community_name", String(255), nullable=False),  # Denormalized
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "last_activity_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    Column("locked_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_as", String(16), nullable=True),
)

Index("idx_posts_community_id", posts_table.c.community_id)
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("community_id", UUID, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_username", String(64), nullable=False),  # Denormalized from users
    Column("author_deleted", Boolean, nullable=False, server_default="false"),
    Column("posted_as", String(16), nullable=False, server_default="self"),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    # Root first, immediate parent last
    Column(
        "ancestors", postgresql.ARRAY(UUID), nullable=False, server_default="{}"
    ),
    Column("body", Text, nullable=False),
    # Snapshots of the post taken at creation time
    Column("post_public_id", String(32), nullable=False),
    Column("post_title", String(300), nullable=False),
    Column("community_name", String(255), nullable=False),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("direct_reply_count", Integer, nullable=False, server_default="0"),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("points", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "deleted_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("deleted_as", String(16), nullable=True),
    CheckConstraint("depth >= 0", name="depth_non_negative"),
    CheckConstraint(
        "posted_as IN ('self', 'moderator', 'admin')", name="posted_as_valid"
    ),
    CheckConstraint(
        "cardinality(ancestors) = depth", name="ancestors_match_depth"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id, comments_table.c.created_at)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_deleted_at", comments_table.c.deleted_at)

# ============================================================================
# COMMENT_VOTES TABLE
# ============================================================================
comment_votes_table = Table(
    "comment_votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("up", Boolean, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name=UNIQUE_VOTE_CONSTRAINT),
)

Index("idx_comment_votes_user_id", comment_votes_table.c.user_id)

# ============================================================================
# COMMENT_REPLIES TABLE (ancestor -> descendant edges)
# ============================================================================
comment_replies_table = Table(
    "comment_replies",
    metadata,
    Column(
        "parent_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "reply_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    PrimaryKeyConstraint("parent_id", "reply_id", name="pk_comment_replies"),
)

# ============================================================================
# POSTS_COMMENTS TABLE (profile activity index)
# ============================================================================
activity_table = Table(
    "posts_comments",
    metadata,
    Column("target_id", UUID, nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("target_type", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("target_id", "target_type", name="pk_posts_comments"),
)

Index(
    "idx_posts_comments_user_id",
    activity_table.c.user_id,
    activity_table.c.created_at.desc(),
)

# ============================================================================
# MUTED_USERS TABLE
# ============================================================================
muted_users_table = Table(
    "muted_users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "muted_user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "muted_user_id", name="uq_muted_users"),
)

# ============================================================================
# COMMENT_REPORTS TABLE
# ============================================================================
comment_reports_table = Table(
    "comment_reports",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "reporter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("reason", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comment_reports_comment_id", comment_reports_table.c.comment_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("type", String(32), nullable=False),
    Column("payload", postgresql.JSONB, nullable=False, server_default="{}"),
    Column("seen", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_id",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)
