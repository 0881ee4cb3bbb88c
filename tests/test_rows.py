"""Row API tests."""


def get_list(client, auth_headers, list_id):
    response = client.get(f"/api/v1/lists/{list_id}", headers=auth_headers)
    assert response.status_code == 200
    return response.json()


def ranks(data) -> list[tuple[str, int]]:
    return [(row["rank"], row["order"]) for row in data["rows"]]


def test_create_row_appends(client, auth_headers, tier_list):
    response = client.post(
        "/api/v1/rows",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "rank": "D", "color_hex": "#7FFF7F"},
    )
    assert response.status_code == 201
    assert response.json()["order"] == 4
    assert response.json()["images"] == []


def test_create_row_at_position(client, auth_headers, tier_list):
    response = client.post(
        "/api/v1/rows",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "rank": "S", "color_hex": "#FF7F7F", "order": 1},
    )
    assert response.status_code == 201
    data = get_list(client, auth_headers, tier_list["id"])
    assert ranks(data) == [("S", 1), ("A", 2), ("B", 3), ("C", 4)]


def test_create_row_invalid_color(client, auth_headers, tier_list):
    response = client.post(
        "/api/v1/rows",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "rank": "S", "color_hex": "red"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid color format. Use #RRGGBB or #RGB."


def test_create_row_invalid_order(client, auth_headers, tier_list):
    response = client.post(
        "/api/v1/rows",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "rank": "S", "color_hex": "#FFF", "order": 0},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Order value must be greater than or equal to 1."


def test_create_row_in_unknown_list(client, auth_headers):
    response = client.post(
        "/api/v1/rows",
        headers=auth_headers,
        json={"list_id": 9999, "rank": "S", "color_hex": "#FFF"},
    )
    assert response.status_code == 404


def test_update_row_rank_and_color(client, auth_headers, tier_list):
    row_id = tier_list["rows"][0]["id"]

    response = client.put(
        f"/api/v1/rows/{row_id}/rank",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "rank": "S+"},
    )
    assert response.status_code == 200
    assert response.json()["rank"] == "S+"

    response = client.put(
        f"/api/v1/rows/{row_id}/color",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "color_hex": "#000"},
    )
    assert response.status_code == 200
    assert response.json()["color_hex"] == "#000"


def test_update_unknown_row(client, auth_headers, tier_list):
    response = client.put(
        "/api/v1/rows/9999/rank",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "rank": "S"},
    )
    assert response.status_code == 404


def test_update_backup_row_rank_fails(client, auth_headers, tier_list):
    response = client.put(
        f"/api/v1/rows/{tier_list['backup_row']['id']}/rank",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "rank": "S"},
    )
    assert response.status_code == 404


def test_update_row_order(client, auth_headers, tier_list):
    row_c = tier_list["rows"][2]["id"]

    response = client.put(
        f"/api/v1/rows/{row_c}/order",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "order": 1},
    )

    assert response.status_code == 200
    assert response.json()["order"] == 1
    assert ranks(get_list(client, auth_headers, tier_list["id"])) == [
        ("C", 1),
        ("A", 2),
        ("B", 3),
    ]


def test_update_row_order_past_end(client, auth_headers, tier_list):
    response = client.put(
        f"/api/v1/rows/{tier_list['rows'][0]['id']}/order",
        headers=auth_headers,
        json={"list_id": tier_list["id"], "order": 4},
    )
    assert response.status_code == 400


def test_delete_row_moves_images_to_backup_row(
    client, auth_headers, tier_list, add_image, storage
):
    """Test that by default a deleted row's images are appended to the backup row."""
    list_id = tier_list["id"]
    row_a = tier_list["rows"][0]["id"]
    backup_row = tier_list["backup_row"]["id"]
    waiting = add_image(list_id, backup_row)
    first = add_image(list_id, row_a)
    second = add_image(list_id, row_a)

    response = client.delete(
        f"/api/v1/rows/{row_a}", headers=auth_headers, params={"list_id": list_id}
    )

    assert response.status_code == 204
    data = get_list(client, auth_headers, list_id)
    assert ranks(data) == [("B", 1), ("C", 2)]
    images = data["backup_row"]["images"]
    assert [image["id"] for image in images] == [waiting["id"], first["id"], second["id"]]
    assert [image["order"] for image in images] == [1, 2, 3]
    assert all(image["container_id"] == backup_row for image in images)
    assert storage.deleted == []


def test_delete_row_with_images(client, auth_headers, tier_list, add_image, storage):
    """Test that delete_with_images removes the images and their stored files."""
    list_id = tier_list["id"]
    row_b = tier_list["rows"][1]["id"]
    image = add_image(list_id, row_b)

    response = client.delete(
        f"/api/v1/rows/{row_b}",
        headers=auth_headers,
        params={"list_id": list_id, "delete_with_images": "true"},
    )

    assert response.status_code == 204
    data = get_list(client, auth_headers, list_id)
    assert ranks(data) == [("A", 1), ("C", 2)]
    assert data["backup_row"]["images"] == []
    assert storage.deleted == [image["storage_key"]]


def test_delete_last_row_fails(client, auth_headers, tier_list, add_image):
    """Test that the last row cannot be deleted and nothing is changed."""
    list_id = tier_list["id"]
    row_ids = [row["id"] for row in tier_list["rows"]]
    for row_id in row_ids[:2]:
        client.delete(f"/api/v1/rows/{row_id}", headers=auth_headers, params={"list_id": list_id})
    image = add_image(list_id, row_ids[2])

    response = client.delete(
        f"/api/v1/rows/{row_ids[2]}", headers=auth_headers, params={"list_id": list_id}
    )

    assert response.status_code == 400
    data = get_list(client, auth_headers, list_id)
    assert ranks(data) == [("C", 1)]
    assert [i["id"] for i in data["rows"][0]["images"]] == [image["id"]]
    assert data["backup_row"]["images"] == []


def test_delete_backup_row_fails(client, auth_headers, tier_list):
    response = client.delete(
        f"/api/v1/rows/{tier_list['backup_row']['id']}",
        headers=auth_headers,
        params={"list_id": tier_list["id"]},
    )
    assert response.status_code == 404
