from fastapi import APIRouter
from agenthub.api.v1.endpoints import instagram_leads, instagram_posts, metrics, webhooks, activities, schedules

api_router = APIRouter()
api_router.include_router(instagram_leads.router, prefix="/instagram-leads", tags=["instagram-leads"])
api_router.include_router(instagram_posts.router, prefix="/instagram-posts", tags=["instagram-posts"])
api_router.include_router(metrics.router, prefix="/metrics", tags=["metrics"])
api_router.include_router(webhooks.router, prefix="/webhook", tags=["webhooks"])
api_router.include_router(activities.router, prefix="/activities", tags=["activities"])
api_router.include_router(schedules.router, tags=["schedules"])
