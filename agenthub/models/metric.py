from datetime import datetime

from sqlalchemy import Column, Integer, Float, DateTime

from agenthub.core.database import Base


class Metric(Base):
    """Daily LinkedIn agent KPI snapshot."""
    __tablename__ = "metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    invites_sent = Column(Integer, nullable=False)
    invites_accepted = Column(Integer, nullable=False)
    acceptance_ratio = Column(Float, nullable=False)  # percent
