"""Instagram post storage.

Posts are the source side of lead discovery: the agent scrapes who engaged
with a post, pushes those profiles into the lead pipeline and then flags the
post so it is not mined twice.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.models.activity import ActivityType
from agenthub.models.instagram_post import InstagramPost
from agenthub.schemas.instagram_post import PostCreate
from agenthub.services.activity import record_activity

logger = logging.getLogger(__name__)


async def list_posts(db: AsyncSession, only_unprocessed: bool = False) -> list[InstagramPost]:
    """Newest first. only_unprocessed skips posts already mined for leads."""
    query = select(InstagramPost).order_by(InstagramPost.post_date.desc(), InstagramPost.id.desc())
    if only_unprocessed:
        query = query.where(InstagramPost.added_to_warm_leads.is_(False))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_post(db: AsyncSession, post_id: int) -> Optional[InstagramPost]:
    return await db.get(InstagramPost, post_id)


async def create_post(db: AsyncSession, data: PostCreate, source: Optional[str] = None) -> InstagramPost:
    post = InstagramPost(
        post_url=data.post_url,
        post_description=data.post_description,
        engagement_stats=data.engagement_stats or {},
        post_date=datetime.utcnow(),
        added_to_warm_leads=False,
    )
    db.add(post)
    await db.flush()

    if source:
        record_activity(
            db,
            ActivityType.POST_INGESTED,
            f"New Instagram post received ({source})",
            {"post_id": post.id, "post_url": post.post_url},
        )
    await db.commit()
    await db.refresh(post)

    logger.info("Created Instagram post %d: %s", post.id, post.post_url)
    return post


async def mark_added_to_warm_leads(db: AsyncSession, post_ids: list[int]) -> int:
    """Flag posts as mined. Returns the number of posts updated."""
    if not post_ids:
        return 0
    result = await db.execute(
        update(InstagramPost)
        .where(InstagramPost.id.in_(post_ids))
        .values(added_to_warm_leads=True, added_to_warm_leads_date=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    logger.info("Marked %d Instagram posts as added to warm leads", result.rowcount)
    return result.rowcount


async def update_engagement(
    db: AsyncSession,
    post_id: int,
    engagement_stats: dict[str, Any],
) -> Optional[InstagramPost]:
    post = await get_post(db, post_id)
    if post is None:
        return None
    post.engagement_stats = engagement_stats
    await db.commit()
    await db.refresh(post)
    return post


async def delete_post(db: AsyncSession, post_id: int) -> bool:
    result = await db.execute(delete(InstagramPost).where(InstagramPost.id == post_id))
    await db.commit()
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted Instagram post %d", post_id)
    return deleted
