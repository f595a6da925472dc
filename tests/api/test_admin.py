"""Admin routes: role checks, post management, bulk delete and user management."""

import pytest
from httpx import AsyncClient

ADMIN_POSTS = "/api/v1/admin/posts"


@pytest.fixture
async def admin(signup):
    return await signup("Root", "Admin", admin=True)


async def _create(client: AsyncClient, headers: dict, title: str, **fields) -> dict:
    body = {"title": title, "content": "body", "published": True, **fields}
    response = await client.post(ADMIN_POSTS, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_admin_routes_reject_plain_users_and_anonymous(client: AsyncClient, signup) -> None:
    ada = await signup("Ada", "Lovelace")
    assert (await client.get(ADMIN_POSTS)).status_code == 401
    assert (await client.get(ADMIN_POSTS, headers=ada.headers)).status_code == 403
    create = await client.post(
        ADMIN_POSTS, json={"title": "t", "content": "c"}, headers=ada.headers
    )
    assert create.status_code == 403
    assert (await client.get("/api/v1/admin/users", headers=ada.headers)).status_code == 403


async def test_status_filter_is_honoured_for_admins(client: AsyncClient, admin) -> None:
    await _create(client, admin.headers, "live")
    await _create(client, admin.headers, "draft", published=False)

    async def titles(status: str) -> list[str]:
        response = await client.get(ADMIN_POSTS, params={"status": status}, headers=admin.headers)
        return [p["title"] for p in response.json()["items"]]

    assert await titles("unpublished") == ["draft"]
    assert await titles("published") == ["live"]
    assert await titles("all") == ["draft", "live"]


async def test_publish_toggle_moves_post_between_filters(client: AsyncClient, admin) -> None:
    post = await _create(client, admin.headers, "draft", published=False)
    await client.get(ADMIN_POSTS, params={"status": "published"}, headers=admin.headers)

    response = await client.patch(
        f"{ADMIN_POSTS}/{post['id']}/status", json={"published": True}, headers=admin.headers
    )
    listing = await client.get(ADMIN_POSTS, params={"status": "published"}, headers=admin.headers)

    assert response.json()["published"] is True
    assert [p["title"] for p in listing.json()["items"]] == ["draft"]


async def test_create_validation(client: AsyncClient, admin) -> None:
    bad_tags = await client.post(
        ADMIN_POSTS, json={"title": "t", "content": "c", "tags": "a,b"}, headers=admin.headers
    )
    blank_title = await client.post(
        ADMIN_POSTS, json={"title": "  ", "content": "c"}, headers=admin.headers
    )
    assert bad_tags.status_code == 400
    assert bad_tags.json()["details"] == {"field": "tags"}
    assert blank_title.status_code == 400


async def test_update_and_delete(client: AsyncClient, admin) -> None:
    post = await _create(client, admin.headers, "original", tags=["a"])
    url = f"{ADMIN_POSTS}/{post['id']}"

    updated = await client.patch(url, json={"content": "new body"}, headers=admin.headers)
    assert updated.json()["title"] == "original"
    assert updated.json()["content"] == "new body"
    assert updated.json()["tags"] == ["a"]

    assert (await client.delete(url, headers=admin.headers)).status_code == 204
    assert (await client.get(url, headers=admin.headers)).status_code == 404
    assert (await client.delete(url, headers=admin.headers)).status_code == 404
    assert (await client.patch(url, json={"title": "x"}, headers=admin.headers)).status_code == 404


async def test_bulk_delete_listed_posts(client: AsyncClient, admin) -> None:
    posts = [await _create(client, admin.headers, f"p{i}") for i in range(3)]
    await client.get("/api/v1/posts/all", headers=admin.headers)

    response = await client.post(
        f"{ADMIN_POSTS}/bulk-delete",
        json={"postIds": [posts[0]["id"], posts[1]["id"], "missing"]},
        headers=admin.headers,
    )
    remaining = await client.get("/api/v1/posts/all", headers=admin.headers)

    assert response.json() == {"deleted": 2}
    assert [p["title"] for p in remaining.json()] == ["p2"]


async def test_bulk_delete_without_ids_deletes_everything(client: AsyncClient, admin) -> None:
    for i in range(3):
        await _create(client, admin.headers, f"p{i}")
    response = await client.post(f"{ADMIN_POSTS}/bulk-delete", headers=admin.headers)
    listing = await client.get(ADMIN_POSTS, headers=admin.headers)
    assert response.json() == {"deleted": 3}
    assert listing.json()["total"] == 0


async def test_user_list_search_and_pagination(client: AsyncClient, admin, signup) -> None:
    await signup("Ada", "Lovelace")
    await signup("Grace", "Hopper")

    everyone = await client.get("/api/v1/admin/users", headers=admin.headers)
    found = await client.get(
        "/api/v1/admin/users", params={"search": "hop"}, headers=admin.headers
    )
    paged = await client.get(
        "/api/v1/admin/users", params={"page": 2, "limit": 2}, headers=admin.headers
    )

    assert everyone.json()["total"] == 3
    assert [u["lastName"] for u in found.json()["items"]] == ["Hopper"]
    assert len(paged.json()["items"]) == 1


async def test_new_signup_refreshes_cached_user_list(client: AsyncClient, admin, signup) -> None:
    first = await client.get("/api/v1/admin/users", headers=admin.headers)
    await signup("Ada", "Lovelace")
    second = await client.get("/api/v1/admin/users", headers=admin.headers)
    assert (first.json()["total"], second.json()["total"]) == (1, 2)


async def test_delete_user_removes_their_content(client: AsyncClient, admin, signup) -> None:
    ada = await signup("Ada", "Lovelace")
    post = await _create(client, admin.headers, "post")
    await client.post(f"/api/v1/posts/{post['id']}/like", headers=ada.headers)
    await client.post(
        f"/api/v1/posts/{post['id']}/comments", json={"content": "hi"}, headers=ada.headers
    )
    await client.get(f"/api/v1/posts/{post['id']}/comments", headers=admin.headers)

    response = await client.delete(f"/api/v1/admin/users/{ada.user_id}", headers=admin.headers)
    detail = await client.get(f"{ADMIN_POSTS}/{post['id']}", headers=admin.headers)
    thread = await client.get(f"/api/v1/posts/{post['id']}/comments", headers=admin.headers)

    assert response.json()["id"] == ada.user_id
    assert detail.json()["likes"] == 0
    assert thread.json() == []
    missing = await client.delete(f"/api/v1/admin/users/{ada.user_id}", headers=admin.headers)
    assert missing.status_code == 404


async def test_renaming_author_refreshes_embedded_projection(
    client: AsyncClient, admin
) -> None:
    post = await _create(client, admin.headers, "post")
    await client.get(f"{ADMIN_POSTS}/{post['id']}", headers=admin.headers)
    await client.put(
        "/api/v1/users/me/name",
        json={"firstName": "Chief", "lastName": "Editor"},
        headers=admin.headers,
    )
    detail = await client.get(f"{ADMIN_POSTS}/{post['id']}", headers=admin.headers)
    assert detail.json()["author"]["firstName"] == "Chief"
