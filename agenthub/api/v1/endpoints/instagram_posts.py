"""Instagram post endpoints.

- GET /instagram-posts → List posts (onlyUnprocessed=true skips mined posts)
- POST /instagram-posts → Create a post
- POST /instagram-posts/sample → Seed sample posts
- POST /instagram-posts/mark-added → Flag posts as pushed into warm leads
- GET /instagram-posts/{id} → Post detail
- PUT /instagram-posts/{id}/engagement → Replace engagement stats
- DELETE /instagram-posts/{id} → Remove a post
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.database import get_db
from agenthub.core.seed import seed_sample_posts
from agenthub.schemas.instagram_post import (
    PostCreate,
    PostOut,
    EngagementUpdate,
    MarkAddedRequest,
    MarkAddedResponse,
    SamplePostsResponse,
)
from agenthub.services import instagram_posts

router = APIRouter()


@router.get("", response_model=List[PostOut])
async def list_posts(
    only_unprocessed: bool = Query(False, alias="onlyUnprocessed"),
    db: AsyncSession = Depends(get_db),
):
    return await instagram_posts.list_posts(db, only_unprocessed)


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post(post: PostCreate, db: AsyncSession = Depends(get_db)):
    return await instagram_posts.create_post(db, post)


@router.post("/sample", response_model=SamplePostsResponse, status_code=status.HTTP_201_CREATED)
async def create_sample_posts(db: AsyncSession = Depends(get_db)):
    posts = await seed_sample_posts(db)
    return {
        "message": f"Created {len(posts)} sample Instagram posts",
        "posts": [PostOut.model_validate(p) for p in posts],
    }


@router.post("/mark-added", response_model=MarkAddedResponse)
async def mark_added_to_warm_leads(request: MarkAddedRequest, db: AsyncSession = Depends(get_db)):
    """Flag posts whose engagers have been added to the warm lead queue."""
    updated = await instagram_posts.mark_added_to_warm_leads(db, request.post_ids)
    return MarkAddedResponse(
        message=f"{updated} Instagram posts marked as added to warm leads",
        updated_count=updated,
    )


@router.get("/{post_id}", response_model=PostOut)
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    post = await instagram_posts.get_post(db, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Instagram post not found")
    return post


@router.put("/{post_id}/engagement", response_model=PostOut)
async def update_engagement(post_id: int, update: EngagementUpdate, db: AsyncSession = Depends(get_db)):
    post = await instagram_posts.update_engagement(db, post_id, update.engagement_stats)
    if not post:
        raise HTTPException(status_code=404, detail="Instagram post not found")
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, db: AsyncSession = Depends(get_db)):
    if not await instagram_posts.delete_post(db, post_id):
        raise HTTPException(status_code=404, detail="Instagram post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
