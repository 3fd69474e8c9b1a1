"""Verifier delegation, host authentication and error shape over HTTP."""

from trackwell.common.digest import digest_text

MAKER = "org:acme-foods"
INSPECTOR = "person:inspector-v"
HASH = digest_text("cold-chain-log")


async def _register(client, headers_for):
    resp = await client.post("/products", json={
        "name": "Oat Milk 1L",
        "batch_number": "B1",
        "origin_location": "Plant 7, Uppsala",
    }, headers=headers_for(MAKER))
    assert resp.status_code == 201


async def _append(client, headers_for, caller):
    return await client.post("/products/0/checkpoints", json={
        "location": "Cold store",
        "checkpoint_type": "quality_check",
        "attestation_hash": HASH,
        "humidity": 40.0,
    }, headers=headers_for(caller))


class TestVerifierDelegation:
    async def test_authorize_append_revoke(self, client, headers_for):
        await _register(client, headers_for)

        resp = await _append(client, headers_for, INSPECTOR)
        assert resp.status_code == 403

        resp = await client.put(
            f"/verifiers/{INSPECTOR}",
            json={"name": "V. Inspector", "role": "quality"},
            headers=headers_for(MAKER),
        )
        assert resp.status_code == 200
        assert resp.json()["organization"] == MAKER
        assert resp.json()["is_active"] is True
        assert resp.json()["authorized_at"] == 1_000

        resp = await _append(client, headers_for, INSPECTOR)
        assert resp.status_code == 201
        assert resp.json()["verified_by"] == INSPECTOR
        assert resp.json()["operator"] == MAKER

        resp = await client.delete(f"/verifiers/{INSPECTOR}", headers=headers_for(MAKER))
        assert resp.status_code == 200
        assert resp.json()["is_active"] is False

        resp = await _append(client, headers_for, INSPECTOR)
        assert resp.status_code == 403
        assert resp.json()["code"] == "UNAUTHORIZED"

        resp = await client.get("/products/0/checkpoints", headers=headers_for())
        assert len(resp.json()) == 2

    async def test_status_and_listing(self, client, headers_for):
        await client.put(f"/verifiers/{INSPECTOR}", json={}, headers=headers_for(MAKER))

        resp = await client.get(f"/verifiers/{MAKER}/{INSPECTOR}", headers=headers_for())
        assert resp.json()["authorized"] is True
        assert resp.json()["entry"]["authorized_by"] == MAKER

        resp = await client.get(f"/verifiers/{MAKER}/person:nobody", headers=headers_for())
        assert resp.status_code == 200
        assert resp.json()["authorized"] is False
        assert resp.json()["entry"] is None

        resp = await client.get(f"/verifiers/{MAKER}", headers=headers_for())
        assert [e["verifier"] for e in resp.json()] == [INSPECTOR]

    async def test_revoke_unknown_verifier(self, client, headers_for):
        resp = await client.delete(f"/verifiers/{INSPECTOR}", headers=headers_for(MAKER))
        assert resp.status_code == 404


class TestHostAuthentication:
    async def test_missing_api_key(self, client):
        resp = await client.get("/products/count")
        assert resp.status_code == 422

    async def test_wrong_api_key(self, client):
        resp = await client.get("/products/count", headers={"X-Trackwell-Api-Key": "nope"})
        assert resp.status_code == 403

    async def test_missing_caller_on_write(self, client, headers_for):
        resp = await client.post("/products", json={
            "name": "Oat Milk 1L",
            "batch_number": "B1",
            "origin_location": "Plant 7, Uppsala",
        }, headers=headers_for())
        assert resp.status_code == 422

    async def test_health_is_open(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestErrorResponses:
    async def test_error_body_shape(self, client, headers_for):
        resp = await client.get("/products/3", headers=headers_for())
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"] == "NotFoundError"
        assert body["code"] == "NOT_FOUND"
        assert "3" in body["detail"]

    async def test_malformed_digest_rejected(self, client, headers_for):
        await _register(client, headers_for)
        resp = await client.post("/products/0/checkpoints", json={
            "location": "Port",
            "checkpoint_type": "shipping",
            "attestation_hash": "not-a-digest",
        }, headers=headers_for(MAKER))
        assert resp.status_code == 422

    async def test_unknown_checkpoint_type_rejected(self, client, headers_for):
        await _register(client, headers_for)
        resp = await client.post("/products/0/checkpoints", json={
            "location": "Port",
            "checkpoint_type": "teleport",
            "attestation_hash": HASH,
        }, headers=headers_for(MAKER))
        assert resp.status_code == 422


class TestEventRoutes:
    async def test_events_listed_and_filtered(self, client, headers_for):
        await _register(client, headers_for)
        await _append(client, headers_for, MAKER)

        resp = await client.get("/products/0/events", headers=headers_for())
        assert [e["event_type"] for e in resp.json()] == [
            "product.registered", "checkpoint.added", "checkpoint.added",
        ]

        resp = await client.get(
            "/products/0/events",
            params={"event_type": "checkpoint.added", "limit": 1},
            headers=headers_for(),
        )
        events = resp.json()
        assert len(events) == 1
        assert events[0]["sequence"] == 1

        resp = await client.get("/products/0/events/verify", headers=headers_for())
        assert resp.json() == {"valid": True, "events_checked": 3, "break_at": None}

    async def test_events_of_unknown_product(self, client, headers_for):
        resp = await client.get("/products/7/events", headers=headers_for())
        assert resp.status_code == 404
        assert resp.json()["code"] == "NOT_FOUND"
        resp = await client.get("/products/7/events/verify", headers=headers_for())
        assert resp.status_code == 404
