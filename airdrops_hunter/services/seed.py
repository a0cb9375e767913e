"""Bootstrap admin account and demo catalog content."""

import logging
from datetime import UTC, datetime, timedelta

from airdrops_hunter.config import Settings
from airdrops_hunter.schemas.airdrop import AirdropCreate
from airdrops_hunter.schemas.auth import UserInDB
from airdrops_hunter.schemas.blog_post import BlogPostCreate
from airdrops_hunter.services.auth import create_user
from airdrops_hunter.services.storage import DuplicateRecordError, Storage

logger = logging.getLogger(__name__)


def demo_airdrops(now: datetime | None = None) -> list[AirdropCreate]:
    """Sample airdrops. Relative dates are computed from ``now``."""
    now = now or datetime.now(UTC)
    return [
        AirdropCreate(
            title="MoonToken Airdrop",
            project_name="MoonToken",
            description="Participate in MoonToken's community airdrop and earn up to 500 MOON tokens.",
            requirements="Complete social media tasks and join Telegram group.",
            category="DeFi",
            estimated_value="$50-$200",
            status="Ending Soon",
            participants=10543,
            cover_image_url="https://images.unsplash.com/photo-1639322537228-f710d846310a?auto=format&fit=crop&w=600&h=300",
            start_date=datetime(2023, 6, 1, tzinfo=UTC),
            end_date=now + timedelta(days=3),
        ),
        AirdropCreate(
            title="NexusChain Airdrop",
            project_name="NexusChain",
            description="Complete simple tasks to qualify for the NexusChain governance token distribution.",
            requirements="Trade on the platform, refer friends, and hold NXS tokens.",
            category="Layer 2",
            estimated_value="$100-$500",
            status="Active",
            participants=25129,
            cover_image_url="https://images.unsplash.com/photo-1551135049-8a33b5883817?auto=format&fit=crop&w=600&h=300",
            start_date=datetime(2023, 6, 10, tzinfo=UTC),
            end_date=datetime(2023, 7, 10, tzinfo=UTC),
        ),
        AirdropCreate(
            title="CryptoSwap Airdrop",
            project_name="CryptoSwap",
            description="Early users of CryptoSwap DEX will receive SWAP tokens based on trading volume.",
            requirements="Create an account, complete KYC, and perform at least 3 trades.",
            category="Exchange",
            estimated_value="$75-$300",
            status="Upcoming",
            participants=8742,
            cover_image_url="https://images.unsplash.com/photo-1518546305927-5a555bb7020d?auto=format&fit=crop&w=600&h=300",
            start_date=now + timedelta(days=7),
            end_date=now + timedelta(days=30),
        ),
        AirdropCreate(
            title="MetaWorld Airdrop",
            project_name="MetaWorld",
            description="Join the MetaWorld virtual reality platform and claim your META governance tokens.",
            requirements="Create a MetaWorld account, visit 3 virtual locations, and invite 2 friends.",
            category="Metaverse",
            estimated_value="$150-$400",
            status="Ending Soon",
            participants=15321,
            cover_image_url="https://images.unsplash.com/photo-1614064641938-3bbee52942c7?auto=format&fit=crop&w=600&h=300",
            start_date=datetime(2023, 6, 5, tzinfo=UTC),
            end_date=now + timedelta(days=5),
        ),
        AirdropCreate(
            title="DeFiChain Airdrop",
            project_name="DeFiChain",
            description="Stake your assets on DeFiChain to qualify for their upcoming governance token airdrop.",
            requirements="Stake at least $100 worth of assets for 30 days, and participate in governance voting.",
            category="DeFi",
            estimated_value="$200-$600",
            status="Active",
            participants=32874,
            start_date=datetime(2023, 6, 15, tzinfo=UTC),
            end_date=datetime(2023, 7, 15, tzinfo=UTC),
        ),
        AirdropCreate(
            title="GameFi Airdrop",
            project_name="GameFi",
            description="Try GameFi's play-to-earn platform and receive GAME tokens based on gameplay.",
            requirements="Create a GameFi account, complete the tutorial, and play at least 5 games.",
            category="Gaming",
            estimated_value="$50-$250",
            status="Upcoming",
            participants=12638,
            cover_image_url="https://images.unsplash.com/photo-1579547621113-e4bb2a19bdd6?auto=format&fit=crop&w=600&h=300",
            start_date=now + timedelta(days=10),
            end_date=now + timedelta(days=40),
        ),
    ]


def demo_blog_posts(author_id: int | None = None) -> list[BlogPostCreate]:
    """Sample blog posts credited to ``author_id``."""
    return [
        BlogPostCreate(
            title="Top 5 Airdrops Coming in 2023",
            content="Explore the most anticipated crypto airdrops of 2023 and how to prepare for them.",
            category="Guide",
            image_url="https://images.unsplash.com/photo-1640340434855-6084b1f4901c?auto=format&fit=crop&w=600&h=400",
            author_id=author_id,
            tags="airdrops,guide,2023,crypto",
            published_at=datetime(2023, 6, 15, tzinfo=UTC),
        ),
        BlogPostCreate(
            title="How to Maximize Your Airdrop Rewards",
            content="Learn proven strategies to increase your chances of qualifying for high-value airdrops.",
            category="Strategy",
            image_url="https://images.unsplash.com/photo-1605792657660-596af9009e82?auto=format&fit=crop&w=600&h=400",
            author_id=author_id,
            tags="strategy,rewards,maximize,tips",
            published_at=datetime(2023, 6, 10, tzinfo=UTC),
        ),
        BlogPostCreate(
            title="Security Tips for Airdrop Participants",
            content="Protect yourself from scams and stay safe while hunting for legitimate crypto airdrops.",
            category="Security",
            author_id=author_id,
            tags="security,scams,protection,safety",
            published_at=datetime(2023, 6, 5, tzinfo=UTC),
        ),
    ]


def ensure_admin_user(storage: Storage, settings: Settings) -> UserInDB | None:
    """Create the bootstrap admin unless that username already exists.

    Returns None, with a warning, when the admin email belongs to another
    account; startup carries on without an admin.
    """
    existing = storage.get_user_by_username(settings.admin_username)
    if existing:
        return existing
    if storage.get_user_by_email(settings.admin_email):
        logger.warning(
            f"Admin email '{settings.admin_email}' belongs to another account, "
            f"admin user '{settings.admin_username}' not created"
        )
        return None
    try:
        admin = create_user(
            storage,
            settings.admin_username,
            settings.admin_email,
            settings.admin_password,
            is_admin=True,
        )
    except DuplicateRecordError as e:
        # Another worker created it first
        logger.warning(f"Admin user not created: {e}")
        return storage.get_user_by_username(settings.admin_username)
    logger.info(f"Admin user '{admin.username}' created")
    return admin


def seed_demo_content(storage: Storage, author_id: int | None = None) -> bool:
    """Load the demo catalog into an empty store. Returns whether anything was added."""
    if storage.get_airdrops():
        logger.info("Catalog already has airdrops, skipping demo content")
        return False
    for airdrop in demo_airdrops():
        storage.create_airdrop(airdrop)
    for post in demo_blog_posts(author_id):
        storage.create_blog_post(post)
    logger.info("Demo catalog content seeded")
    return True


def seed_storage(storage: Storage, settings: Settings) -> None:
    """Startup seeding: admin always, demo content when enabled."""
    admin = ensure_admin_user(storage, settings)
    if settings.seed_demo_data:
        seed_demo_content(storage, author_id=admin.id if admin else None)
