#!/usr/bin/env python3
"""
Seed a local database with a demo user, an API key and sample feed data.

Usage (from the api/ directory, after ``alembic upgrade head``):

    python scripts/seed.py [--posts 60] [--notifications 25]
"""

import argparse
import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone
from uuid import UUID

from socialhub.auth.api_key import create_api_key
from socialhub.db.connection import db_manager, get_db_pool
from socialhub.models.notifications import NotificationType
from socialhub.platforms import Platform

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@socialhub.dev"

SAMPLE_LINES = [
    "Shipped a new release of the feed reader",
    "Reading about keyset pagination on a rainy afternoon",
    "Conference slides are up, thanks everyone who came",
    "Coffee first, code review second",
    "Our team is hiring backend engineers",
    "Trying out a new search index on the timeline",
]


async def seed_user(conn) -> UUID:
    """Create the demo user, or return it if it already exists."""
    user_id = await conn.fetchval(
        """
        INSERT INTO users (name, email) VALUES ($1, $2)
        ON CONFLICT (email) DO UPDATE SET updated_at = now()
        RETURNING id
        """,
        "Demo User", DEMO_EMAIL
    )
    logger.info(f"Demo user {DEMO_EMAIL} has id {user_id}")
    return user_id


async def seed_connections(conn, user_id: UUID) -> None:
    for platform in (Platform.TWITTER, Platform.BLUESKY, Platform.MASTODON):
        await conn.execute(
            """
            INSERT INTO platform_connections
                (user_id, platform, platform_user_id, platform_username, access_token)
            VALUES ($1, $2, $3, $4, $5)
            ON CONFLICT (user_id, platform) DO NOTHING
            """,
            user_id, platform.value, f"demo-{platform.value}", "demo", "demo-token"
        )


async def seed_posts(conn, user_id: UUID, count: int) -> None:
    """Insert posts spread over the last days, with some sharing a timestamp."""
    now = datetime.now(timezone.utc).replace(microsecond=0)
    platforms = [Platform.TWITTER, Platform.BLUESKY, Platform.MASTODON]

    for i in range(count):
        # Every third post shares its timestamp with the previous one
        published_at = now - timedelta(minutes=17 * (i - i // 3))
        platform = platforms[i % len(platforms)]
        await conn.execute(
            """
            INSERT INTO posts (user_id, platform, platform_post_id, content,
                               author_name, author_handle, likes, reposts, replies,
                               published_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
            ON CONFLICT (user_id, platform, platform_post_id) DO NOTHING
            """,
            user_id, platform.value, f"demo-post-{i}", random.choice(SAMPLE_LINES),
            "Demo Friend", f"@friend{i % 5}", random.randint(0, 200),
            random.randint(0, 40), random.randint(0, 20), published_at
        )
    logger.info(f"Seeded {count} posts")


async def seed_notifications(conn, user_id: UUID, count: int) -> None:
    now = datetime.now(timezone.utc).replace(microsecond=0)
    types = list(NotificationType)

    for i in range(count):
        notification_type = types[i % len(types)]
        await conn.execute(
            """
            INSERT INTO notifications (user_id, platform, type, title, body, is_read,
                                       platform_notification_id, created_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            ON CONFLICT (user_id, platform_notification_id) DO NOTHING
            """,
            user_id, Platform.BLUESKY.value, notification_type.value,
            f"New {notification_type.value}", "Someone interacted with your post",
            i % 4 == 0, f"demo-notification-{i}", now - timedelta(minutes=9 * i)
        )
    logger.info(f"Seeded {count} notifications")


async def main(posts: int, notifications: int) -> None:
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                user_id = await seed_user(conn)
                await seed_connections(conn, user_id)
                await seed_posts(conn, user_id, posts)
                await seed_notifications(conn, user_id, notifications)

        api_key = await create_api_key(user_id)
        logger.info("Seeding complete.")
        print(f"API key for {DEMO_EMAIL}: {api_key}")
    finally:
        await db_manager.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed SocialHub demo data")
    parser.add_argument("--posts", type=int, default=60)
    parser.add_argument("--notifications", type=int, default=25)
    args = parser.parse_args()

    asyncio.run(main(args.posts, args.notifications))
