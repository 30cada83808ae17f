"""Tests for /progress, /claim-reward and /reset-progress"""
import asyncio

import pytest
from uuid6 import uuid7

from tests.conftest import register_and_login


@pytest.mark.asyncio
async def test_new_account_starts_at_level_one(client, auth_headers):
    response = await client.get("/progress", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"level": 1, "rewards": []}


@pytest.mark.asyncio
async def test_progress_requires_token(client):
    response = await client.get("/progress")

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_ERROR"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_progress_rejects_invalid_token(client):
    response = await client.get("/progress", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_for_vanished_account_is_not_found(client, app):
    token = app.state.token_authentication.issue_token(uuid7())
    headers = {"Authorization": f"Bearer {token}"}

    assert (await client.get("/progress", headers=headers)).status_code == 404
    assert (await client.post("/claim-reward", json={"level": 1}, headers=headers)).status_code == 404
    assert (await client.post("/reset-progress", headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_claim_reward_unlocks_and_advances(client, auth_headers):
    response = await client.post("/claim-reward", json={"level": 1}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["level"] == 2
    assert data["rewards"] == ["tier-1"]
    assert "claimed" in data["message"]


@pytest.mark.asyncio
async def test_claim_locked_level_is_rejected_and_state_kept(client, auth_headers):
    response = await client.post("/claim-reward", json={"level": 3}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "LEVEL_LOCKED"

    progress = await client.get("/progress", headers=auth_headers)
    assert progress.json() == {"level": 1, "rewards": []}


@pytest.mark.asyncio
async def test_claim_beyond_last_tier_is_locked_for_new_account(client, auth_headers):
    response = await client.post("/claim-reward", json={"level": 11}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "LEVEL_LOCKED"
    progress = await client.get("/progress", headers=auth_headers)
    assert progress.json() == {"level": 1, "rewards": []}


@pytest.mark.asyncio
async def test_out_of_range_claim_for_vanished_account_is_not_found(client, app):
    token = app.state.token_authentication.issue_token(uuid7())
    headers = {"Authorization": f"Bearer {token}"}

    for level in (0, 11):
        response = await client.post("/claim-reward", json={"level": level}, headers=headers)
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_claim_undefined_level_is_invalid(client, auth_headers):
    response = await client.post("/claim-reward", json={"level": 0}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_claim_requires_level_field(client, auth_headers):
    response = await client.post("/claim-reward", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_claim_is_idempotent(client, auth_headers):
    first = await client.post("/claim-reward", json={"level": 1}, headers=auth_headers)
    second = await client.post("/claim-reward", json={"level": 1}, headers=auth_headers)

    assert second.status_code == 200
    assert second.json()["level"] == first.json()["level"] == 2
    assert second.json()["rewards"] == first.json()["rewards"] == ["tier-1"]
    assert "already" in second.json()["message"]


@pytest.mark.asyncio
async def test_reset_clears_everything(client, auth_headers):
    for level in (1, 2, 3):
        await client.post("/claim-reward", json={"level": level}, headers=auth_headers)

    response = await client.post("/reset-progress", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["level"] == 1
    assert response.json()["rewards"] == []
    progress = await client.get("/progress", headers=auth_headers)
    assert progress.json() == {"level": 1, "rewards": []}


@pytest.mark.asyncio
async def test_reset_on_fresh_account(client, auth_headers):
    response = await client.post("/reset-progress", headers=auth_headers)

    assert response.json()["level"] == 1
    assert response.json()["rewards"] == []


@pytest.mark.asyncio
async def test_accounts_do_not_share_progress(client):
    alice = await register_and_login(client, "alice", "pw1")
    bob = await register_and_login(client, "bob", "pw2")

    await client.post("/claim-reward", json={"level": 1}, headers=alice)

    assert (await client.get("/progress", headers=bob)).json() == {"level": 1, "rewards": []}


@pytest.mark.asyncio
async def test_end_to_end_progression(client):
    headers = await register_and_login(client, "alice", "pw1")

    assert (await client.get("/progress", headers=headers)).json() == {"level": 1, "rewards": []}

    claim = await client.post("/claim-reward", json={"level": 1}, headers=headers)
    assert claim.json()["level"] == 2
    assert claim.json()["rewards"] == ["tier-1"]

    locked = await client.post("/claim-reward", json={"level": 3}, headers=headers)
    assert locked.status_code == 400
    assert locked.json()["code"] == "LEVEL_LOCKED"


@pytest.mark.asyncio
async def test_concurrent_claims_unlock_once(client, auth_headers):
    responses = await asyncio.gather(
        client.post("/claim-reward", json={"level": 1}, headers=auth_headers),
        client.post("/claim-reward", json={"level": 1}, headers=auth_headers),
    )

    assert all(response.status_code == 200 for response in responses)
    progress = await client.get("/progress", headers=auth_headers)
    assert progress.json() == {"level": 2, "rewards": ["tier-1"]}
