import uuid

import pytest

pytestmark = pytest.mark.asyncio


async def test_current_site_falls_back_to_last_used(admin_client, tenant):
    site, _, _ = tenant
    resp = await admin_client.get("/api/v1/websites/current")
    assert resp.status_code == 200
    assert resp.json() == {"siteId": str(site.id)}


async def test_update_current_site_persists(admin_client, tenant, make_site):
    other = await make_site(name="Blue Fund")

    resp = await admin_client.put("/api/v1/websites/current", json={"siteId": str(other.id)})
    assert resp.status_code == 200
    assert resp.json() == {"siteId": str(other.id)}

    resp = await admin_client.get("/api/v1/websites/current")
    assert resp.json() == {"siteId": str(other.id)}


async def test_update_current_site_unknown(admin_client, tenant):
    resp = await admin_client.put("/api/v1/websites/current", json={"siteId": str(uuid.uuid4())})
    assert resp.status_code == 404


async def test_explicit_selection_beats_last_used(admin_client, tenant, make_site):
    other = await make_site(name="Blue Fund")
    resp = await admin_client.get(
        "/api/v1/websites/current", headers={"X-Site-ID": str(other.id)}
    )
    assert resp.json() == {"siteId": str(other.id)}


@pytest.mark.parametrize("header", ["not-a-uuid", str(uuid.uuid4())])
async def test_explicit_selection_must_exist(admin_client, tenant, header):
    resp = await admin_client.get("/api/v1/websites/current", headers={"X-Site-ID": header})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Site not found."


async def test_no_selection_and_no_fallback(client, make_admin, sign_in):
    admin = await make_admin()
    sign_in(realm="admin", subject=admin.id)
    resp = await client.get("/api/v1/websites/current")
    assert resp.json() == {"siteId": None}


async def test_websites_require_admin(client, tenant):
    assert (await client.get("/api/v1/websites")).status_code == 401


async def test_list_and_get_sites(admin_client, tenant, make_site):
    site, _, _ = tenant
    for i in range(3):
        await make_site(name=f"Site {i}")

    first = (await admin_client.get("/api/v1/websites", params={"limit": 2})).json()
    assert len(first["websites"]) == 2
    assert first["nextCursor"] is not None

    rest = (
        await admin_client.get(
            "/api/v1/websites", params={"limit": 2, "cursor": first["nextCursor"]}
        )
    ).json()
    assert len(rest["websites"]) == 2
    assert rest["nextCursor"] is None
    assert rest["websites"][0]["id"] == first["nextCursor"]

    ids = {w["id"] for w in first["websites"] + rest["websites"]}
    assert str(site.id) in ids and len(ids) == 4

    resp = await admin_client.get(f"/api/v1/websites/{site.id}")
    assert resp.json()["name"] == "Green Fund"

    resp = await admin_client.get(f"/api/v1/websites/{uuid.uuid4()}")
    assert resp.status_code == 404


async def test_create_site_duplicate_domain(admin_client, tenant):
    resp = await admin_client.post(
        "/api/v1/websites", json={"name": "Tree Fund", "domain": "Trees.EcoToken.io"}
    )
    assert resp.status_code == 201
    assert resp.json()["domain"] == "trees.ecotoken.io"

    resp = await admin_client.post(
        "/api/v1/websites", json={"name": "Tree Fund 2", "domain": "trees.ecotoken.io"}
    )
    assert resp.status_code == 409
