"""Tests for Instagram post endpoints and the post webhook."""

import pytest


POST = {
    "postUrl": "https://www.instagram.com/p/CdE123AbCdE/",
    "postDescription": "Check out our new summer collection! #fashion #summer",
    "engagementStats": {"likes": 243, "comments": 56},
}


@pytest.mark.asyncio
async def test_list_posts_empty(client):
    resp = await client.get("/api/instagram-posts")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_post(client):
    resp = await client.post("/api/instagram-posts", json=POST)
    assert resp.status_code == 201
    post = resp.json()
    assert post["postUrl"] == POST["postUrl"]
    assert post["engagementStats"] == {"likes": 243, "comments": 56}
    assert post["addedToWarmLeads"] is False
    assert post["addedToWarmLeadsDate"] is None
    assert post["postDate"] is not None

    resp = await client.get(f"/api/instagram-posts/{post['id']}")
    assert resp.status_code == 200
    assert resp.json()["postDescription"] == POST["postDescription"]


@pytest.mark.asyncio
async def test_create_post_requires_url(client):
    resp = await client.post("/api/instagram-posts", json={"postDescription": "no link"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_unknown_post(client):
    resp = await client.get("/api/instagram-posts/404")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Instagram post not found"


@pytest.mark.asyncio
async def test_sample_posts(client):
    resp = await client.post("/api/instagram-posts/sample")
    assert resp.status_code == 201
    data = resp.json()
    assert data["message"] == "Created 5 sample Instagram posts"
    assert len(data["posts"]) == 5
    assert data["posts"][2]["engagementStats"]["likes"] == 452

    resp = await client.get("/api/instagram-posts")
    assert len(resp.json()) == 5


@pytest.mark.asyncio
async def test_mark_posts_added_to_warm_leads(client):
    ids = []
    for i in range(3):
        resp = await client.post("/api/instagram-posts", json={**POST, "postUrl": f"https://www.instagram.com/p/{i}/"})
        ids.append(resp.json()["id"])

    resp = await client.post("/api/instagram-posts/mark-added", json={"postIds": [ids[0], ids[1], 9999]})
    assert resp.status_code == 200
    assert resp.json() == {
        "message": "2 Instagram posts marked as added to warm leads",
        "updatedCount": 2,
    }

    resp = await client.get("/api/instagram-posts", params={"onlyUnprocessed": "true"})
    assert [p["id"] for p in resp.json()] == [ids[2]]

    marked = (await client.get(f"/api/instagram-posts/{ids[0]}")).json()
    assert marked["addedToWarmLeads"] is True
    assert marked["addedToWarmLeadsDate"] is not None

    resp = await client.get("/api/instagram-posts")
    assert len(resp.json()) == 3


@pytest.mark.asyncio
async def test_mark_added_rejects_empty_ids(client):
    resp = await client.post("/api/instagram-posts/mark-added", json={"postIds": []})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_update_engagement(client):
    post = (await client.post("/api/instagram-posts", json=POST)).json()

    stats = {"likes": 300, "comments": 70, "shares": 15, "saves": 90}
    resp = await client.put(f"/api/instagram-posts/{post['id']}/engagement", json={"engagementStats": stats})
    assert resp.status_code == 200
    assert resp.json()["engagementStats"] == stats
    assert resp.json()["postUrl"] == POST["postUrl"]

    resp = await client.put(f"/api/instagram-posts/{post['id']}/engagement", json={"engagementStats": "lots"})
    assert resp.status_code == 422

    resp = await client.put("/api/instagram-posts/9999/engagement", json={"engagementStats": stats})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_post(client):
    post = (await client.post("/api/instagram-posts", json=POST)).json()

    resp = await client.delete(f"/api/instagram-posts/{post['id']}")
    assert resp.status_code == 204
    resp = await client.delete(f"/api/instagram-posts/{post['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_post_webhook(client):
    resp = await client.post("/api/webhook/instagram-post", json={
        "postUrl": "https://www.instagram.com/p/ChI789JkLmN/",
        "postDescription": "New product alert!",
        "engagementStats": None,
    })
    assert resp.status_code == 201
    data = resp.json()
    assert data["message"] == "Instagram post received and stored successfully"
    assert data["post"]["engagementStats"] == {}

    activities = (await client.get("/api/activities")).json()
    assert activities[0]["type"] == "post_ingested"
    assert activities[0]["metadata"]["post_id"] == data["post"]["id"]


@pytest.mark.asyncio
async def test_post_webhook_requires_url(client):
    resp = await client.post("/api/webhook/instagram-post", json={"postDescription": "no link"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing required field: postUrl"

    resp = await client.post("/api/webhook/instagram-post", json={
        "postUrl": "https://www.instagram.com/p/x/",
        "engagementStats": [1, 2],
    })
    assert resp.status_code == 400

    resp = await client.get("/api/instagram-posts")
    assert resp.json() == []
