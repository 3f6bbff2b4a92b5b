"""Startup seeding of the default admin account and sample posts.

Idempotent: the admin is created only if its username is free, and the
sample posts only when the blogs table is empty.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.passwords import Argon2PasswordHasher
from blogapi.config import Settings
from blogapi.models import BlogPost, UserRole, utcnow
from blogapi.repositories.posts import PostRepository
from blogapi.repositories.users import UserRepository

logger = logging.getLogger(__name__)

# (title, slug, content, tags, age in days)
SAMPLE_POSTS: list[tuple[str, str, str, str, int]] = [
    (
        "Getting Started with Spring Boot and Next.js",
        "getting-started-spring-boot-nextjs",
        "# Building a Modern Portfolio\n\n"
        "This is a sample blog post demonstrating the power of **Spring Boot** "
        "and **Next.js**.\n\n## Why this stack?\n\n1. Type Safety with TypeScript\n"
        "2. Robust Backend with Java\n3. Great SEO with Next.js\n\nEnjoy the new site!",
        "java,springboot,nextjs,fullstack",
        2,
    ),
    (
        "The Art of Clean Code",
        "art-of-clean-code",
        "# Clean Code Principles\n\n"
        "> \"Clean code always looks like it was written by someone who cares.\"\n\n"
        "In this post, we explore meaningful names, small functions, and "
        "S.O.L.I.D principles.",
        "coding,best-practices,clean-code",
        1,
    ),
    (
        "Why I Love Framer Motion",
        "why-i-love-framer-motion",
        "# Animations Made Easy\n\n"
        "Framer Motion allows us to create complex animations with declarative "
        "syntax.\n\n```jsx\n<motion.div animate={{ x: 100 }} />\n```\n\n"
        "It makes the UI feel alive!",
        "frontend,animation,react",
        0,
    ),
]


async def seed_admin(
    session: AsyncSession,
    username: str,
    password: str,
    hasher: Argon2PasswordHasher,
) -> bool:
    """Create the admin account if absent. Returns True if created."""
    users = UserRepository(session)
    if await users.exists(username):
        return False

    await users.add(username=username, password_hash=hasher.hash(password), role=UserRole.ADMIN)
    logger.info(f"Admin user seeded: {username}")
    return True


async def seed_sample_posts(session: AsyncSession) -> int:
    """Insert the sample posts if there are no posts yet. Returns the count added."""
    if await PostRepository(session).count() > 0:
        return 0

    now = utcnow()
    for title, slug, content, tags, age_days in SAMPLE_POSTS:
        created = now - timedelta(days=age_days)
        session.add(
            BlogPost(
                title=title,
                slug=slug,
                content=content,
                tags=tags,
                published=True,
                created_at=created,
                updated_at=created,
            )
        )
    await session.flush()
    logger.info("Sample blog posts seeded")
    return len(SAMPLE_POSTS)


async def seed_database(
    session: AsyncSession,
    settings: Settings,
    hasher: Argon2PasswordHasher | None = None,
) -> None:
    """Run all seeding steps allowed by settings."""
    await seed_admin(
        session,
        settings.SEED_ADMIN_USERNAME,
        settings.SEED_ADMIN_PASSWORD,
        hasher or Argon2PasswordHasher(),
    )
    if settings.SEED_SAMPLE_POSTS:
        await seed_sample_posts(session)
