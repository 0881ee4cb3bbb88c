"""Tier list API tests."""


def test_create_list(client, auth_headers):
    """Test creating a list."""
    response = client.post("/api/v1/lists", headers=auth_headers, json={"title": "My List"})
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "My List"
    assert data["created_at"]
    assert data["updated_at"]


def test_create_list_with_blank_title(client, auth_headers):
    """Test that a whitespace title is rejected by the domain."""
    response = client.post("/api/v1/lists", headers=auth_headers, json={"title": "   "})
    assert response.status_code == 400
    assert response.json()["detail"] == "List title cannot be empty."


def test_create_list_with_long_title(client, auth_headers):
    response = client.post("/api/v1/lists", headers=auth_headers, json={"title": "x" * 101})
    assert response.status_code == 422


def test_new_list_has_default_rows(client, auth_headers, tier_list):
    """Test that a new list gets rows A, B, C and an empty backup row."""
    rows = tier_list["rows"]
    assert [(row["rank"], row["color_hex"], row["order"]) for row in rows] == [
        ("A", "#FFBF7F", 1),
        ("B", "#FFDF7F", 2),
        ("C", "#FFFF7F", 3),
    ]
    assert all(row["images"] == [] for row in rows)
    assert tier_list["backup_row"]["images"] == []
    container_ids = {row["id"] for row in rows} | {tier_list["backup_row"]["id"]}
    assert len(container_ids) == 4


def test_get_lists(client, auth_headers):
    """Test getting all lists, newest first."""
    client.post("/api/v1/lists", headers=auth_headers, json={"title": "First"})
    client.post("/api/v1/lists", headers=auth_headers, json={"title": "Second"})

    response = client.get("/api/v1/lists", headers=auth_headers)
    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Second", "First"]


def test_get_list_not_found(client, auth_headers):
    response = client.get("/api/v1/lists/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "List with ID 9999 not found."


def test_lists_of_other_users_are_hidden(client, auth_headers, tier_list):
    """Test that another user cannot see or change someone else's list."""
    client.post("/api/v1/auth/register", json={"username": "intruder", "password": "secret123"})
    login = client.post(
        "/api/v1/auth/login", json={"username": "intruder", "password": "secret123"}
    )
    other_headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    assert client.get("/api/v1/lists", headers=other_headers).json() == []
    assert client.get(f"/api/v1/lists/{tier_list['id']}", headers=other_headers).status_code == 404
    response = client.put(
        f"/api/v1/lists/{tier_list['id']}", headers=other_headers, json={"title": "Mine now"}
    )
    assert response.status_code == 404
    response = client.delete(f"/api/v1/lists/{tier_list['id']}", headers=other_headers)
    assert response.status_code == 404


def test_rename_list(client, auth_headers, tier_list):
    response = client.put(
        f"/api/v1/lists/{tier_list['id']}", headers=auth_headers, json={"title": "Renamed"}
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"


def test_delete_list_removes_images_and_blobs(client, auth_headers, tier_list, add_image, storage):
    """Test that deleting a list deletes its images and their stored files."""
    first = add_image(tier_list["id"], tier_list["rows"][0]["id"])
    second = add_image(tier_list["id"], tier_list["backup_row"]["id"])

    response = client.delete(f"/api/v1/lists/{tier_list['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert client.get(f"/api/v1/lists/{tier_list['id']}", headers=auth_headers).status_code == 404
    assert sorted(storage.deleted) == sorted([first["storage_key"], second["storage_key"]])


def test_delete_list_survives_storage_failure(client, auth_headers, tier_list, add_image, storage):
    """Test that blob cleanup failures do not undo a committed delete."""
    add_image(tier_list["id"], tier_list["rows"][0]["id"])
    storage.fail_deletes = True

    response = client.delete(f"/api/v1/lists/{tier_list['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert client.get(f"/api/v1/lists/{tier_list['id']}", headers=auth_headers).status_code == 404
