"""Sample Instagram leads and posts for demos and local development."""

import logging
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from agenthub.core.config import settings
from agenthub.core.database import async_session
from agenthub.models.instagram_lead import InstagramLead, LeadStatus
from agenthub.models.instagram_post import InstagramPost
from agenthub.schemas.instagram_lead import LeadCreate
from agenthub.schemas.instagram_post import PostCreate
from agenthub.services import lead_pipeline, instagram_posts

logger = logging.getLogger(__name__)

SAMPLE_LEADS = [
    {
        "username": "tech.entrepreneur",
        "full_name": "Alex Chen",
        "instagram_id": "12345678",
        "is_verified": False,
        "bio": "Founder of 3 tech startups. Looking for innovative solutions for my latest venture.",
        "followers": 5680,
        "following": 847,
        "tags": ["tech", "startup", "investor"],
    },
    {
        "username": "digital.marketer",
        "full_name": "Maria Johnson",
        "instagram_id": "87654321",
        "is_verified": True,
        "bio": "Digital marketing consultant helping businesses scale. Open to new tools and platforms.",
        "followers": 12500,
        "following": 952,
        "tags": ["marketing", "digital", "consultant"],
    },
    {
        "username": "startup.ceo",
        "full_name": "James Wilson",
        "instagram_id": "23456789",
        "is_verified": False,
        "bio": "CEO of a growing fintech startup. Always looking for ways to improve our operations.",
        "followers": 3420,
        "following": 521,
        "tags": ["fintech", "ceo", "startup"],
        "_stages": [LeadStatus.MESSAGE_SENT],
        "_notes": "Interested in enterprise plan, follow up next week",
    },
    {
        "username": "e.commerce.expert",
        "full_name": "Sophie Taylor",
        "instagram_id": "34567890",
        "is_verified": True,
        "bio": "Helping brands grow online. E-commerce consultant with 10+ years experience.",
        "followers": 28700,
        "following": 1024,
        "tags": ["ecommerce", "retail", "consultant"],
        "_stages": [LeadStatus.MESSAGE_SENT, LeadStatus.SALE_CLOSED],
        "_notes": "Purchased premium plan. Very satisfied with onboarding process.",
    },
    {
        "username": "growth.hacker",
        "full_name": "Daniel Brown",
        "instagram_id": "98765432",
        "is_verified": False,
        "bio": "Growth marketing specialist. Data-driven approach to scaling businesses.",
        "followers": 9400,
        "following": 780,
        "tags": ["growth", "marketing", "data"],
    },
    {
        "username": "product.designer",
        "full_name": "Olivia White",
        "instagram_id": "34567891",
        "is_verified": True,
        "bio": "Product Designer with 8+ years of experience. Creating intuitive user experiences.",
        "followers": 18300,
        "following": 640,
        "tags": ["design", "UX", "product"],
    },
]

SAMPLE_POSTS = [
    {
        "post_url": "https://www.instagram.com/p/CdE123AbCdE/",
        "post_description": "Check out our new summer collection! #fashion #summer",
        "engagement_stats": {"likes": 243, "comments": 56, "shares": 12, "saves": 89},
    },
    {
        "post_url": "https://www.instagram.com/p/CfG456DeFgH/",
        "post_description": "Behind the scenes at our photoshoot today! #behindthescenes",
        "engagement_stats": {"likes": 186, "comments": 32, "shares": 8, "saves": 41},
    },
    {
        "post_url": "https://www.instagram.com/p/ChI789JkLmN/",
        "post_description": "New product alert! Our latest skincare line drops next week. #skincare #beauty",
        "engagement_stats": {"likes": 452, "comments": 98, "shares": 65, "saves": 201},
    },
    {
        "post_url": "https://www.instagram.com/p/CjK012MnOpQ/",
        "post_description": "Meet our team! The people behind the brand. #teamwork #company",
        "engagement_stats": {"likes": 167, "comments": 43, "shares": 5, "saves": 22},
    },
    {
        "post_url": "https://www.instagram.com/p/ClM345RsTuV/",
        "post_description": "Customer feature: @johndoe loving our products! #customerlove #testimonial",
        "engagement_stats": {"likes": 312, "comments": 74, "shares": 28, "saves": 113},
    },
]


async def seed_sample_leads(db: AsyncSession) -> list[InstagramLead]:
    """Insert the sample leads.

    Every lead enters as warm_lead and is then walked through the pipeline
    to its sample stage, so counters and activities match real usage.
    """
    created = []
    for sample in SAMPLE_LEADS:
        data = {k: v for k, v in sample.items() if not k.startswith("_")}
        data["profile_url"] = f"https://instagram.com/{data['username']}"
        lead = await lead_pipeline.create_lead(db, LeadCreate(**data), source="sample")

        stages = sample.get("_stages", [])
        for i, stage in enumerate(stages):
            notes = sample.get("_notes") if i == len(stages) - 1 else None
            lead = await lead_pipeline.update_status(db, lead.id, stage, notes)
        created.append(lead)

    logger.info("Added %d sample Instagram leads", len(created))
    return created


async def seed_sample_posts(db: AsyncSession) -> list[InstagramPost]:
    created = [await instagram_posts.create_post(db, PostCreate(**sample)) for sample in SAMPLE_POSTS]
    logger.info("Added %d sample Instagram posts", len(created))
    return created


async def seed_on_startup():
    """Seed sample leads on startup when enabled and the table is empty."""
    if not settings.SEED_SAMPLE_LEADS:
        return
    async with async_session() as db:
        try:
            count = (await db.execute(select(func.count(InstagramLead.id)))).scalar() or 0
            if count:
                logger.info("Instagram leads table already has %d records", count)
                return
            await seed_sample_leads(db)
        except Exception as e:
            logger.error("Failed to seed sample Instagram leads: %s", e)
            await db.rollback()
