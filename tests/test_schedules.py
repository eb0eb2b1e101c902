"""Tests for webhook schedules and the agent trigger."""

from datetime import datetime, timezone
from unittest.mock import patch, AsyncMock, MagicMock

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from agenthub.core.config import settings
from agenthub.models.schedule_config import ScheduleConfig
from agenthub.services import scheduler as webhook_scheduler


DAILY = {
    "name": "Daily LinkedIn Outreach",
    "cronExpression": "0 9 * * *",
    "webhookUrl": "https://hook.example.com/linkedin",
}


def test_cron_validation():
    assert webhook_scheduler.is_valid_cron("*/5 * * * *")
    assert webhook_scheduler.is_valid_cron("0 9 * * 1")
    assert not webhook_scheduler.is_valid_cron("every day")
    assert not webhook_scheduler.is_valid_cron("61 * * * *")


def test_next_fire_time_is_naive_utc():
    now = datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc)
    fire = webhook_scheduler.next_fire_time("0 9 * * *", now=now)
    assert fire == datetime(2026, 1, 6, 9, 0)


@pytest.mark.asyncio
async def test_create_and_list_schedule(client):
    resp = await client.post("/api/schedules", json=DAILY)
    assert resp.status_code == 201
    schedule = resp.json()
    assert schedule["cronExpression"] == "0 9 * * *"
    assert schedule["isActive"] is True
    assert schedule["runCount"] == 0
    assert schedule["nextRun"] is not None

    resp = await client.get("/api/schedules")
    assert resp.status_code == 200
    assert len(resp.json()) == 1


@pytest.mark.asyncio
async def test_create_schedule_invalid_cron(client):
    resp = await client.post("/api/schedules", json={**DAILY, "cronExpression": "whenever"})
    assert resp.status_code == 400

    resp = await client.get("/api/schedules")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_update_and_delete_schedule(client):
    schedule = (await client.post("/api/schedules", json=DAILY)).json()

    resp = await client.put(f"/api/schedules/{schedule['id']}", json={"isActive": False})
    assert resp.status_code == 200
    assert resp.json()["isActive"] is False
    assert resp.json()["nextRun"] is None
    assert resp.json()["cronExpression"] == "0 9 * * *"

    resp = await client.put(f"/api/schedules/{schedule['id']}", json={"cronExpression": "bad cron"})
    assert resp.status_code == 400

    resp = await client.delete(f"/api/schedules/{schedule['id']}")
    assert resp.status_code == 204
    resp = await client.delete(f"/api/schedules/{schedule['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_run_schedule_success(client):
    schedule = (await client.post("/api/schedules", json=DAILY)).json()

    with patch("agenthub.services.scheduler.post_webhook", new_callable=AsyncMock) as mock_post:
        resp = await client.post(f"/api/schedules/{schedule['id']}/run")

    assert resp.status_code == 200
    assert resp.json() == {"scheduleId": schedule["id"], "success": True}
    url, payload = mock_post.call_args.args
    assert url == "https://hook.example.com/linkedin"
    assert payload["source"] == "scheduler"

    updated = (await client.get("/api/schedules")).json()[0]
    assert updated["runCount"] == 1
    assert updated["lastRun"] is not None

    activities = (await client.get("/api/activities")).json()
    assert activities[0]["type"] == "webhook_success"


@pytest.mark.asyncio
async def test_run_schedule_failure_is_recorded(client):
    schedule = (await client.post("/api/schedules", json=DAILY)).json()

    with patch(
        "agenthub.services.scheduler.post_webhook",
        new_callable=AsyncMock,
        side_effect=httpx.ConnectError("connection refused"),
    ):
        resp = await client.post(f"/api/schedules/{schedule['id']}/run")

    assert resp.status_code == 200
    assert resp.json()["success"] is False

    updated = (await client.get("/api/schedules")).json()[0]
    assert updated["runCount"] == 1

    activities = (await client.get("/api/activities")).json()
    assert activities[0]["type"] == "webhook_error"
    assert "connection refused" in activities[0]["message"]


@pytest.mark.asyncio
async def test_run_unknown_schedule(client):
    resp = await client.post("/api/schedules/123/run")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_execute_webhook_opens_own_session(db):
    session_factory = async_sessionmaker(db.bind, expire_on_commit=False)

    schedule = ScheduleConfig(name="Job", cron_expression="0 * * * *", webhook_url="https://hook.example.com/job")
    db.add(schedule)
    await db.commit()

    with patch("agenthub.services.scheduler.post_webhook", new_callable=AsyncMock):
        assert await webhook_scheduler.execute_webhook(schedule.id, session_factory=session_factory) is True

    assert await webhook_scheduler.execute_webhook(9999, session_factory=session_factory) is False


@pytest.mark.asyncio
async def test_trigger_agent_webhook_not_configured(client):
    with patch.object(settings, "AGENT_WEBHOOK_URL", ""):
        resp = await client.post("/api/trigger-agent-webhook")
    assert resp.status_code == 503


@pytest.mark.asyncio
async def test_trigger_agent_webhook(client):
    response = MagicMock()
    response.json.return_value = {"accepted": True}

    with patch.object(settings, "AGENT_WEBHOOK_URL", "https://hook.example.com/agent"), \
         patch("agenthub.services.scheduler.post_webhook", new_callable=AsyncMock, return_value=response) as mock_post:
        resp = await client.post("/api/trigger-agent-webhook")

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {"accepted": True}}
    assert mock_post.call_args.args[1]["source"] == "dashboard"


@pytest.mark.asyncio
async def test_trigger_agent_webhook_upstream_error(client):
    with patch.object(settings, "AGENT_WEBHOOK_URL", "https://hook.example.com/agent"), \
         patch(
             "agenthub.services.scheduler.post_webhook",
             new_callable=AsyncMock,
             side_effect=httpx.ConnectError("down"),
         ):
        resp = await client.post("/api/trigger-agent-webhook")
    assert resp.status_code == 502


@pytest.mark.asyncio
async def test_default_schedule_created_once(db):
    with patch.object(settings, "AGENT_WEBHOOK_URL", "https://hook.example.com/agent"):
        first = await webhook_scheduler.ensure_default_schedule(db)
        second = await webhook_scheduler.ensure_default_schedule(db)

    assert first is not None
    assert first.cron_expression == settings.DEFAULT_SCHEDULE_CRON
    assert second is None


@pytest.mark.asyncio
async def test_schedule_rejects_unparseable_webhook_url(client):
    resp = await client.post("/api/schedules", json={**DAILY, "webhookUrl": "http://[::1"})
    assert resp.status_code == 422

    resp = await client.post("/api/schedules", json={**DAILY, "webhookUrl": "hook.example.com/no-scheme"})
    assert resp.status_code == 422

    schedule = (await client.post("/api/schedules", json=DAILY)).json()
    resp = await client.put(f"/api/schedules/{schedule['id']}", json={"webhookUrl": "http://[::1"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_run_with_malformed_stored_url_is_recorded(client, db):
    # Rows written before URL validation existed can still hold a bad URL
    schedule = ScheduleConfig(name="Legacy", cron_expression="0 9 * * *", webhook_url="http://[::1")
    db.add(schedule)
    await db.commit()

    resp = await client.post(f"/api/schedules/{schedule.id}/run")
    assert resp.status_code == 200
    assert resp.json() == {"scheduleId": schedule.id, "success": False}

    updated = (await client.get("/api/schedules")).json()[0]
    assert updated["runCount"] == 1
    assert updated["lastRun"] is not None

    activities = (await client.get("/api/activities")).json()
    assert activities[0]["type"] == "webhook_error"


@pytest.mark.asyncio
async def test_execute_webhook_does_not_raise_on_malformed_url(db):
    session_factory = async_sessionmaker(db.bind, expire_on_commit=False)
    schedule = ScheduleConfig(name="Legacy", cron_expression="0 9 * * *", webhook_url="http://[::1")
    db.add(schedule)
    await db.commit()

    assert await webhook_scheduler.execute_webhook(schedule.id, session_factory=session_factory) is False
