"""Instagram posts collected for lead discovery."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from agenthub.core.database import Base


class InstagramPost(Base):
    """A post whose engagers get mined for warm leads."""
    __tablename__ = "instagram_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_url = Column(String(500), nullable=False)
    post_description = Column(Text, nullable=True)
    engagement_stats = Column(JSON, nullable=False, default=dict)  # likes, comments, shares, saves
    post_date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Set once the post's engagers have been pushed into the lead pipeline
    added_to_warm_leads = Column(Boolean, nullable=False, default=False, index=True)
    added_to_warm_leads_date = Column(DateTime, nullable=True)
