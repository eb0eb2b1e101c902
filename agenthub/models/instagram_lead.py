"""Instagram lead model for the outreach pipeline."""
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum
from agenthub.core.database import Base


class LeadStatus(str, enum.Enum):
    """Pipeline stage of a lead."""
    WARM_LEAD = "warm_lead"
    MESSAGE_SENT = "message_sent"
    SALE_CLOSED = "sale_closed"


class InstagramLead(Base):
    """A prospect discovered on Instagram."""
    __tablename__ = "instagram_leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, index=True)
    instagram_id = Column(String(255), nullable=True)

    # Profile snapshot at ingest time
    full_name = Column(String(255), nullable=True)
    profile_url = Column(String(255), nullable=True)
    profile_picture_url = Column(Text, nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    bio = Column(Text, nullable=True)
    followers = Column(Integer, nullable=True)
    following = Column(Integer, nullable=True)

    # Pipeline
    status = Column(
        Enum(LeadStatus, name="lead_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=LeadStatus.WARM_LEAD,
        index=True,
    )
    notes = Column(Text, nullable=True)
    tags = Column(Text, nullable=True)  # comma-separated
    messages_sent = Column(Integer, nullable=False, default=0)
    last_message_at = Column(DateTime, nullable=True)
    date_added = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    last_updated = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def tag_list(self) -> list[str]:
        if not self.tags:
            return []
        return [t.strip() for t in self.tags.split(",") if t.strip()]
