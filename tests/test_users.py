import pytest

from app.models.role import RoleScope

pytestmark = pytest.mark.asyncio

NEW_USER = {
    "firstName": "Jane",
    "lastName": "Doe",
    "email": "jane@ecotoken.io",
    "username": "janedoe",
    "password": "Abc12345",
    "confirmPassword": "Abc12345",
}


async def test_username_check_needs_no_session(client, tenant):
    site, _, _ = tenant
    resp = await client.get(
        "/api/v1/users/username-check",
        params={"username": "free-name"},
        headers={"X-Site-ID": str(site.id)},
    )
    assert resp.status_code == 200
    assert resp.json() == {"username": "free-name", "available": True}


async def test_username_check_is_tenant_scoped(client, tenant, make_site, make_user):
    site, role, _ = tenant
    other = await make_site(name="Blue Fund")
    await make_user(site, role, username="taken")

    resp = await client.get(
        "/api/v1/users/username-check",
        params={"username": "taken"},
        headers={"X-Site-ID": str(site.id)},
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "CONFLICT"
    assert resp.json()["message"] == "Username is not available."

    resp = await client.get(
        "/api/v1/users/username-check",
        params={"username": "taken"},
        headers={"X-Site-ID": str(other.id)},
    )
    assert resp.status_code == 200


async def test_username_check_resolves_site_from_host(client, make_site):
    # httpx sends Host: test
    await make_site(name="Local", domain="test")
    resp = await client.get("/api/v1/users/username-check", params={"username": "anyone"})
    assert resp.status_code == 200


async def test_username_check_without_site_fails(client):
    resp = await client.get("/api/v1/users/username-check", params={"username": "anyone"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "TENANT_REQUIRED"


async def test_get_all_requires_admin_even_with_user_session(client, tenant, make_user, sign_in):
    site, role, _ = tenant
    user = await make_user(site, role)
    sign_in(realm="user", subject=user.id, site_id=site.id)

    resp = await client.get("/api/v1/users")
    assert resp.status_code == 401
    assert resp.json()["error"] == "UNAUTHORIZED"


async def test_get_all_paginates_with_cursor(admin_client, tenant, make_user):
    site, role, _ = tenant
    users = [await make_user(site, role, username=f"user{i:02d}") for i in range(12)]

    resp = await admin_client.get("/api/v1/users", params={"limit": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert [u["id"] for u in body["users"]] == [u.id for u in users[:10]]
    assert body["nextCursor"] == users[10].id

    resp = await admin_client.get(
        "/api/v1/users", params={"limit": 10, "cursor": body["nextCursor"]}
    )
    body = resp.json()
    assert [u["id"] for u in body["users"]] == [u.id for u in users[10:]]
    assert body.get("nextCursor") is None


async def test_get_all_exact_page_has_no_cursor(admin_client, tenant, make_user):
    site, role, _ = tenant
    for i in range(3):
        await make_user(site, role, username=f"user{i}")

    body = (await admin_client.get("/api/v1/users", params={"limit": 3})).json()
    assert len(body["users"]) == 3
    assert body.get("nextCursor") is None


async def test_get_all_default_limit_is_ten(admin_client, tenant, make_user):
    site, role, _ = tenant
    for i in range(11):
        await make_user(site, role, username=f"user{i:02d}")

    body = (await admin_client.get("/api/v1/users")).json()
    assert len(body["users"]) == 10
    assert body["nextCursor"] is not None


@pytest.mark.parametrize("limit", [0, 101])
async def test_get_all_rejects_out_of_range_limit(admin_client, tenant, limit):
    resp = await admin_client.get("/api/v1/users", params={"limit": limit})
    assert resp.status_code == 422
    assert "limit" in resp.json()["fields"]


async def test_get_all_is_scoped_to_current_site(admin_client, tenant, make_site, make_user):
    site, role, _ = tenant
    other = await make_site(name="Blue Fund")
    mine = await make_user(site, role, username="mine")
    await make_user(other, role, username="theirs")

    body = (await admin_client.get("/api/v1/users")).json()
    assert [u["id"] for u in body["users"]] == [mine.id]


async def test_get_all_filters_by_one_or_many_roles(admin_client, tenant, make_role, make_user):
    site, member, _ = tenant
    editor = await make_role(role="Editor", scope=RoleScope.SITE, sites=[site])
    guest = await make_role(role="Guest", scope=RoleScope.SITE, sites=[site])
    m = await make_user(site, member, username="member1")
    e = await make_user(site, editor, username="editor1")
    g = await make_user(site, guest, username="guest1")

    body = (await admin_client.get("/api/v1/users", params={"role": "Editor"})).json()
    assert [u["id"] for u in body["users"]] == [e.id]

    body = (
        await admin_client.get("/api/v1/users", params=[("role", "Member"), ("role", "Guest")])
    ).json()
    assert [u["id"] for u in body["users"]] == [m.id, g.id]


async def test_create_user(admin_client, tenant):
    site, role, _ = tenant
    resp = await admin_client.post("/api/v1/users", json=NEW_USER)
    assert resp.status_code == 201
    body = resp.json()
    assert body["username"] == "janedoe"
    assert body["siteId"] == str(site.id)
    assert body["roleId"] == str(role.id)
    assert "password" not in body
    assert "confirmPassword" not in body


async def test_create_user_password_mismatch_is_field_error(admin_client, tenant):
    resp = await admin_client.post(
        "/api/v1/users", json={**NEW_USER, "confirmPassword": "Mismatch1"}
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "VALIDATION"
    assert body["fields"]["confirmPassword"] == ["Passwords don't match!"]

    users = (await admin_client.get("/api/v1/users")).json()["users"]
    assert users == []


async def test_create_user_requires_admin(client, tenant):
    resp = await client.post("/api/v1/users", json=NEW_USER)
    assert resp.status_code == 401


async def test_create_user_duplicate_username_conflicts(admin_client, tenant):
    assert (await admin_client.post("/api/v1/users", json=NEW_USER)).status_code == 201

    resp = await admin_client.post(
        "/api/v1/users", json={**NEW_USER, "email": "other@ecotoken.io"}
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "CONFLICT"


async def test_same_username_on_two_sites(admin_client, tenant, make_site):
    site, _, _ = tenant
    other = await make_site(name="Blue Fund")

    assert (await admin_client.post("/api/v1/users", json=NEW_USER)).status_code == 201
    resp = await admin_client.post(
        "/api/v1/users", json=NEW_USER, headers={"X-Site-ID": str(other.id)}
    )
    assert resp.status_code == 201
    assert resp.json()["siteId"] == str(other.id)


async def test_create_user_prefers_site_scoped_role(admin_client, tenant, make_role):
    site, _, _ = tenant
    site_role = await make_role(role="Supporter", scope=RoleScope.SITE, sites=[site])

    resp = await admin_client.post("/api/v1/users", json=NEW_USER)
    assert resp.status_code == 201
    assert resp.json()["roleId"] == str(site_role.id)


async def test_create_user_without_role_is_internal_and_persists_nothing(
    client, make_site, make_admin, sign_in
):
    site = await make_site()
    admin = await make_admin(last_site=site)
    sign_in(realm="admin", subject=admin.id)

    resp = await client.post("/api/v1/users", json=NEW_USER)
    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "error": "INTERNAL",
        "message": "Role not found. Creation process cannot proceed.",
        "timestamp": resp.json()["timestamp"],
    }

    # Ids are assigned from 1, nothing was written
    resp = await client.get("/api/v1/users/1")
    assert resp.status_code == 200
    assert resp.json() is None


async def test_create_user_without_current_site(client, make_role, make_admin, sign_in):
    await make_role()
    admin = await make_admin()
    sign_in(realm="admin", subject=admin.id)

    resp = await client.post("/api/v1/users", json=NEW_USER)
    assert resp.status_code == 400
    assert resp.json()["error"] == "TENANT_REQUIRED"


async def test_get_user_returns_null_when_missing(admin_client, tenant, make_user):
    site, role, _ = tenant
    user = await make_user(site, role)

    resp = await admin_client.get(f"/api/v1/users/{user.id}")
    assert resp.json()["username"] == "jdoe"

    resp = await admin_client.get("/api/v1/users/9999")
    assert resp.status_code == 200
    assert resp.json() is None


async def test_update_user_ignores_blank_fields(admin_client, tenant, make_user):
    site, role, _ = tenant
    user = await make_user(site, role)

    resp = await admin_client.patch(
        f"/api/v1/users/{user.id}",
        json={"firstName": "Janet", "email": "", "username": "", "password": "", "confirmPassword": ""},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["firstName"] == "Janet"
    assert body["email"] == "jdoe@ecotoken.io"
    assert body["username"] == "jdoe"


async def test_update_user_username_conflict(admin_client, tenant, make_user):
    site, role, _ = tenant
    await make_user(site, role, username="first")
    second = await make_user(site, role, username="second")

    resp = await admin_client.patch(f"/api/v1/users/{second.id}", json={"username": "first"})
    assert resp.status_code == 409


async def test_update_unknown_user(admin_client, tenant):
    resp = await admin_client.patch("/api/v1/users/9999", json={"firstName": "X"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "NOT_FOUND"


async def test_update_user_new_password_needs_confirmation(admin_client, tenant, make_user):
    site, role, _ = tenant
    user = await make_user(site, role)

    resp = await admin_client.patch(f"/api/v1/users/{user.id}", json={"password": "NewPass123"})
    assert resp.status_code == 422
    assert resp.json()["fields"]["confirmPassword"] == ["Passwords don't match!"]
