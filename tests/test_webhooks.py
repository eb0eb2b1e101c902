"""Tests for inbound lead webhooks and the source adapters."""

import pytest

from agenthub.services.lead_ingest import MissingUsername, adapt_payload


def test_make_adapter_fallbacks():
    lead = adapt_payload({
        "username": "@growth.hacker",
        "biography": "Growth marketing specialist.",
        "followerCount": "9,400",
        "followingCount": 780,
        "id": 98765432,
        "isVerified": "true",
    })
    assert lead.username == "growth.hacker"
    assert lead.full_name == "growth.hacker"
    assert lead.profile_url == "https://instagram.com/growth.hacker"
    assert lead.bio == "Growth marketing specialist."
    assert lead.followers == 9400
    assert lead.following == 780
    assert lead.instagram_id == "98765432"
    assert lead.is_verified is True
    assert lead.tags == []


def test_make_adapter_requires_username():
    with pytest.raises(MissingUsername):
        adapt_payload({"fullName": "Nobody"})
    with pytest.raises(MissingUsername):
        adapt_payload(["not", "an", "object"])


def test_phantombuster_adapter():
    lead = adapt_payload({
        "profileName": "product.designer",
        "fullName": "Olivia White",
        "imgUrl": "https://cdn.example/olivia.jpg",
        "followersCount": 18300,
        "followingCount": 640,
        "query": "ux designers",
    }, source="phantombuster")
    assert lead.username == "product.designer"
    assert lead.profile_picture_url == "https://cdn.example/olivia.jpg"
    assert lead.followers == 18300
    assert lead.tags == ["ux designers"]


def test_unknown_source():
    with pytest.raises(KeyError):
        adapt_payload({"username": "x"}, source="zapier")


@pytest.mark.asyncio
async def test_webhook_creates_warm_lead(client):
    resp = await client.post("/api/webhook/instagram-agent", json={
        "username": "digital.marketer",
        "fullName": "Maria Johnson",
        "followers": 12500,
        "status": "sale_closed",
        "tags": ["marketing", "digital"],
    })
    assert resp.status_code == 201
    data = resp.json()
    assert data["message"] == "Instagram lead created successfully"
    assert data["lead"]["status"] == "warm_lead"
    assert data["lead"]["followers"] == 12500
    assert data["lead"]["tags"] == ["marketing", "digital"]

    resp = await client.get("/api/instagram-leads/next-warm")
    assert resp.json()["username"] == "digital.marketer"


@pytest.mark.asyncio
async def test_webhook_missing_username(client):
    resp = await client.post("/api/webhook/instagram-agent", json={"fullName": "Anonymous"})
    assert resp.status_code == 400
    assert "username" in resp.json()["detail"]

    counts = (await client.get("/api/instagram-leads/counts")).json()
    assert counts["totalCount"] == 0


@pytest.mark.asyncio
async def test_webhook_rejects_non_json(client):
    resp = await client.post(
        "/api/webhook/instagram-agent",
        content=b"username=foo",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_phantombuster_webhook(client):
    resp = await client.post("/api/webhook/instagram-agent/phantombuster", json={
        "username": "startup.ceo",
        "followersCount": 3420,
    })
    assert resp.status_code == 201
    assert resp.json()["lead"]["followers"] == 3420


@pytest.mark.asyncio
async def test_unknown_source_webhook(client):
    resp = await client.post("/api/webhook/instagram-agent/zapier", json={"username": "nope"})
    assert resp.status_code == 404

    counts = (await client.get("/api/instagram-leads/counts")).json()
    assert counts["totalCount"] == 0


@pytest.mark.asyncio
async def test_webhook_ingest_logged_to_activity_feed(client):
    await client.post("/api/webhook/instagram-agent", json={"username": "feed.me"})

    resp = await client.get("/api/activities", params={"limit": 5})
    assert resp.status_code == 200
    activities = resp.json()
    assert activities[0]["type"] == "lead_ingested"
    assert "@feed.me" in activities[0]["message"]
    assert activities[0]["metadata"]["source"] == "make"


@pytest.mark.asyncio
async def test_webhook_rejects_scalar_tags(client):
    resp = await client.post("/api/webhook/instagram-agent", json={"username": "numbers", "tags": 5})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["loc"] == ["tags"]

    resp = await client.post("/api/webhook/instagram-agent", json={"username": "flags", "tags": True})
    assert resp.status_code == 400

    counts = (await client.get("/api/instagram-leads/counts")).json()
    assert counts["totalCount"] == 0


@pytest.mark.asyncio
async def test_create_lead_rejects_scalar_tags(client):
    resp = await client.post("/api/instagram-leads", json={"username": "numbers", "tags": 5})
    assert resp.status_code == 422
