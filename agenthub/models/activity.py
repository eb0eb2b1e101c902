from datetime import datetime
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON

from agenthub.core.database import Base


class ActivityType(str, enum.Enum):
    LEAD_INGESTED = "lead_ingested"
    MESSAGE_SENT = "message_sent"
    POST_INGESTED = "post_ingested"
    REFRESH = "refresh"
    WEBHOOK_SUCCESS = "webhook_success"
    WEBHOOK_ERROR = "webhook_error"
    SYSTEM = "system"


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    type = Column(String(50), nullable=False, index=True)
    message = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSON, nullable=True)
