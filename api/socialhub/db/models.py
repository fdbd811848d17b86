"""SQLAlchemy models for the SocialHub schema."""

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text,
    UniqueConstraint, text
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Create base class for models
Base = declarative_base()

# Expression the full-text search listing matches against
POST_SEARCH_DOCUMENT = "to_tsvector('simple', content || ' ' || author_name || ' ' || author_handle)"


class User(Base):
    """Users table model."""
    __tablename__ = 'users'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text('gen_random_uuid()'))
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    image = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class APIKey(Base):
    """API keys table model."""
    __tablename__ = 'api_keys'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text('gen_random_uuid()'))
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    key_prefix = Column(String(16), nullable=False, index=True)
    token_hash = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    last_used = Column(DateTime(timezone=True))


class PlatformConnection(Base):
    """Platform connections table model."""
    __tablename__ = 'platform_connections'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text('gen_random_uuid()'))
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    platform = Column(String(50), nullable=False)
    platform_user_id = Column(String(255), nullable=False)
    platform_username = Column(String(255), nullable=False)
    access_token = Column(Text, nullable=False)
    refresh_token = Column(Text)
    token_expires_at = Column(DateTime(timezone=True))
    is_active = Column(Boolean, nullable=False, server_default=text('true'))
    connected_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', 'platform', name='platform_connections_user_platform_key'),
    )


class Post(Base):
    """Posts table model."""
    __tablename__ = 'posts'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text('gen_random_uuid()'))
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    platform = Column(String(50), nullable=False)
    platform_post_id = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    media_urls = Column(JSONB, nullable=False, server_default=text("'[]'::jsonb"))
    author_name = Column(String(255), nullable=False)
    author_handle = Column(String(255), nullable=False)
    author_avatar = Column(Text)
    likes = Column(Integer, nullable=False, server_default=text('0'))
    reposts = Column(Integer, nullable=False, server_default=text('0'))
    replies = Column(Integer, nullable=False, server_default=text('0'))
    published_at = Column(DateTime(timezone=True), nullable=False)
    raw_data = Column(JSONB, nullable=False, server_default=text("'{}'::jsonb"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', 'platform', 'platform_post_id', name='posts_user_platform_post_key'),
        Index('posts_user_published_desc', 'user_id', 'published_at', 'id',
              postgresql_ops={'published_at': 'DESC'}),
        Index('posts_search_gin', text(POST_SEARCH_DOCUMENT), postgresql_using='gin'),
    )


class Notification(Base):
    """Notifications table model."""
    __tablename__ = 'notifications'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text('gen_random_uuid()'))
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    platform = Column(String(50), nullable=False)
    type = Column(String(50), nullable=False)
    title = Column(String(500), nullable=False)
    body = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, server_default=text('false'))
    platform_notification_id = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', 'platform_notification_id', name='notifications_platform_notif_key'),
        Index('notifications_user_read_created_desc', 'user_id', 'is_read', 'created_at', 'id',
              postgresql_ops={'created_at': 'DESC'}),
    )
