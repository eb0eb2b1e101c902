"""Instagram lead pipeline service.

Storage and state transitions for leads moving through
warm_lead -> message_sent -> sale_closed. Every query is parameterized;
status values only ever reach SQL as bound LeadStatus members.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select, update, delete, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.config import settings
from agenthub.models.activity import ActivityType
from agenthub.models.instagram_lead import InstagramLead, LeadStatus
from agenthub.schemas.instagram_lead import LeadCreate, LeadCountsOut, DailyQuotaOut
from agenthub.services.activity import record_activity, count_since

logger = logging.getLogger(__name__)

# Pipeline order; a move to a lower rank is a correction.
STATUS_RANK = {
    LeadStatus.WARM_LEAD: 0,
    LeadStatus.MESSAGE_SENT: 1,
    LeadStatus.SALE_CLOSED: 2,
}

ALLOWED_TRANSITIONS: set[tuple[LeadStatus, LeadStatus]] = {
    (src, dst)
    for src in LeadStatus
    for dst in LeadStatus
    if STATUS_RANK[dst] >= STATUS_RANK[src]
}


class InvalidTransition(Exception):
    """Raised when a status change is not permitted."""

    def __init__(self, current: LeadStatus, requested: LeadStatus, reason: str | None = None):
        self.current = current
        self.requested = requested
        super().__init__(
            reason or f"Cannot move lead from {current.value} to {requested.value}"
        )


def parse_status(value: str) -> Optional[LeadStatus]:
    """Return the LeadStatus for a raw string, or None if it is not one."""
    try:
        return LeadStatus(value)
    except ValueError:
        return None


def check_transition(
    current: LeadStatus,
    requested: LeadStatus,
    allow_corrections: bool | None = None,
) -> None:
    if allow_corrections is None:
        allow_corrections = settings.PIPELINE_ALLOW_CORRECTIONS
    if (current, requested) in ALLOWED_TRANSITIONS or allow_corrections:
        return
    raise InvalidTransition(current, requested)


def utc_midnight(now: datetime | None = None) -> datetime:
    now = now or datetime.utcnow()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


async def list_leads(
    db: AsyncSession,
    status: Optional[LeadStatus] = None,
    limit: Optional[int] = None,
    oldest_first: bool = False,
) -> list[InstagramLead]:
    """List leads newest first (oldest first for queue-style consumption)."""
    order = InstagramLead.date_added.asc() if oldest_first else InstagramLead.date_added.desc()
    query = select(InstagramLead).order_by(order, InstagramLead.id.asc() if oldest_first else InstagramLead.id.desc())

    if status:
        query = query.where(InstagramLead.status == status)

    if limit:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())


async def _current_status(db: AsyncSession, lead_id: int) -> Optional[LeadStatus]:
    result = await db.execute(select(InstagramLead.status).where(InstagramLead.id == lead_id))
    return result.scalar_one_or_none()


async def get_lead(db: AsyncSession, lead_id: int) -> Optional[InstagramLead]:
    result = await db.execute(select(InstagramLead).where(InstagramLead.id == lead_id))
    return result.scalar_one_or_none()


async def get_next_warm_lead(db: AsyncSession) -> Optional[InstagramLead]:
    """Oldest lead still waiting for outreach."""
    leads = await list_leads(db, status=LeadStatus.WARM_LEAD, limit=1, oldest_first=True)
    return leads[0] if leads else None


async def create_lead(db: AsyncSession, data: LeadCreate, source: str = "manual") -> InstagramLead:
    """Insert a new lead. Status is always warm_lead regardless of input."""
    now = datetime.utcnow()
    lead = InstagramLead(
        username=data.username,
        instagram_id=data.instagram_id,
        full_name=data.full_name,
        profile_url=data.profile_url,
        profile_picture_url=data.profile_picture_url,
        is_verified=data.is_verified,
        bio=data.bio,
        followers=data.followers,
        following=data.following,
        notes=data.notes,
        tags=",".join(data.tags) or None,
        status=LeadStatus.WARM_LEAD,
        messages_sent=0,
        date_added=now,
        last_updated=now,
    )
    db.add(lead)
    await db.flush()

    record_activity(
        db,
        ActivityType.LEAD_INGESTED,
        f"New Instagram lead @{lead.username} ({source})",
        {"lead_id": lead.id, "source": source},
    )
    await db.commit()
    await db.refresh(lead)

    logger.info("Created Instagram lead %d: @%s via %s", lead.id, lead.username, source)
    return lead


async def update_status(
    db: AsyncSession,
    lead_id: int,
    new_status: LeadStatus,
    notes: Optional[str] = None,
) -> Optional[InstagramLead]:
    """Move a lead to new_status.

    A non-empty notes value overwrites the stored notes. Entering
    message_sent bumps the message counter in the same UPDATE statement.
    Returns None when the lead does not exist.
    """
    current = await _current_status(db, lead_id)
    if current is None:
        return None

    allow_corrections = settings.PIPELINE_ALLOW_CORRECTIONS
    check_transition(current, new_status, allow_corrections)

    now = datetime.utcnow()
    values = {"status": new_status, "last_updated": now}
    if notes:
        values["notes"] = notes
    if new_status == LeadStatus.MESSAGE_SENT:
        values["messages_sent"] = InstagramLead.messages_sent + 1
        values["last_message_at"] = now

    stmt = update(InstagramLead).where(InstagramLead.id == lead_id)
    if not allow_corrections:
        # Guard on the status the transition was validated against
        stmt = stmt.where(InstagramLead.status == current)
    stmt = (
        stmt.values(**values)
        .returning(InstagramLead)
        .execution_options(populate_existing=True, synchronize_session=False)
    )
    result = await db.execute(stmt)
    lead = result.scalar_one_or_none()

    if lead is None:
        await db.rollback()
        if await get_lead(db, lead_id) is None:
            return None
        raise InvalidTransition(current, new_status, "Lead status changed concurrently, reload and retry")

    if new_status == LeadStatus.MESSAGE_SENT:
        record_activity(
            db,
            ActivityType.MESSAGE_SENT,
            f"Message sent to @{lead.username}",
            {"lead_id": lead.id},
        )

    await db.commit()
    logger.info("Updated Instagram lead %d status %s -> %s", lead_id, current.value, new_status.value)
    return lead


async def update_notes(db: AsyncSession, lead_id: int, notes: Optional[str]) -> Optional[InstagramLead]:
    """Overwrite notes only. Status and date_added are untouched."""
    stmt = (
        update(InstagramLead)
        .where(InstagramLead.id == lead_id)
        .values(notes=notes, last_updated=datetime.utcnow())
        .returning(InstagramLead)
        .execution_options(populate_existing=True, synchronize_session=False)
    )
    result = await db.execute(stmt)
    lead = result.scalar_one_or_none()
    if lead is None:
        await db.rollback()
        return None

    await db.commit()
    logger.info("Updated notes on Instagram lead %d", lead_id)
    return lead


async def counts_by_status(db: AsyncSession) -> LeadCountsOut:
    """Tally leads per stage in one aggregate query."""
    query = select(
        func.count(case((InstagramLead.status == LeadStatus.WARM_LEAD, 1))),
        func.count(case((InstagramLead.status == LeadStatus.MESSAGE_SENT, 1))),
        func.count(case((InstagramLead.status == LeadStatus.SALE_CLOSED, 1))),
        func.count(InstagramLead.id),
        func.sum(InstagramLead.messages_sent),
    )
    row = (await db.execute(query)).one()
    daily = await count_since(db, ActivityType.MESSAGE_SENT, utc_midnight())

    return LeadCountsOut(
        warm_lead_count=row[0] or 0,
        message_sent_count=row[1] or 0,
        sale_closed_count=row[2] or 0,
        total_count=row[3] or 0,
        total_messages_sent=row[4] or 0,
        daily_messages_sent=daily,
    )


async def daily_quota(db: AsyncSession, limit: Optional[int] = None) -> DailyQuotaOut:
    """Progress toward today's outreach message target."""
    limit = limit if limit is not None else settings.INSTAGRAM_DAILY_MESSAGE_LIMIT
    sent = await count_since(db, ActivityType.MESSAGE_SENT, utc_midnight())
    percentage = min(100, round(sent / limit * 100)) if limit > 0 else 100
    return DailyQuotaOut(
        sent=sent,
        limit=limit,
        remaining=max(0, limit - sent),
        percentage=percentage,
    )


async def delete_lead(db: AsyncSession, lead_id: int) -> bool:
    result = await db.execute(delete(InstagramLead).where(InstagramLead.id == lead_id))
    await db.commit()
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted Instagram lead %d", lead_id)
    return deleted
