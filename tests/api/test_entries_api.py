"""
API tests for diary entries: creation, listing, lookup and deletion.
"""

from tests.conftest import create_entry, register


class TestCreateEntry:
    def test_create_first_entry(self, open_client):
        response = open_client.post(
            "/api/entries",
            json={"userId": "u1", "caption": "Beach", "imageUrl": "http://x/y.jpg"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["userId"] == "u1"
        assert body["caption"] == "Beach"
        assert body["imageUrl"] == "http://x/y.jpg"
        assert body["isShared"] is False
        assert body["shareId"] is None
        assert body["createdAt"]

    def test_defaults_applied(self, open_client):
        response = open_client.post("/api/entries", json={"userId": "u1"})

        assert response.status_code == 201
        body = response.json()
        assert body["caption"] == "My travel memory"
        assert body["imageUrl"] == "https://example.com/placeholder.jpg"
        assert body["location"] is None
        assert body["screenInfo"] == {"width": 0, "height": 0, "orientation": "unknown"}

    def test_caption_text_overrides_caption(self, open_client):
        entry = create_entry(open_client, "u1", caption="Old", captionText="New")

        assert entry["caption"] == "New"

    def test_location_and_screen_info_round_trip(self, open_client):
        entry = create_entry(
            open_client,
            "u1",
            location={"lat": 48.85, "lng": 2.35},
            screenInfo={"width": 390, "height": 844, "orientation": "portrait"}
        )

        fetched = open_client.get(f"/api/entries/{entry['id']}").json()
        assert fetched["location"] == {"lat": 48.85, "lng": 2.35}
        assert fetched["screenInfo"] == {"width": 390, "height": 844, "orientation": "portrait"}

    def test_missing_user_id(self, open_client):
        response = open_client.post("/api/entries", json={"caption": "Beach"})

        assert response.status_code == 400
        assert "message" in response.json()

    def test_blank_user_id(self, open_client):
        response = open_client.post("/api/entries", json={"userId": "   "})

        assert response.status_code == 400

    def test_invalid_location(self, open_client):
        response = open_client.post(
            "/api/entries", json={"userId": "u1", "location": {"lat": 123, "lng": 0}}
        )

        assert response.status_code == 400

    def test_ids_increase(self, open_client):
        first = create_entry(open_client, "u1")
        second = create_entry(open_client, "u1")
        open_client.delete(f"/api/entries/{second['id']}")
        third = create_entry(open_client, "u1")

        assert first["id"] < second["id"] < third["id"]


class TestListEntries:
    def test_lists_newest_first(self, open_client):
        first = create_entry(open_client, "u1", caption="first")
        second = create_entry(open_client, "u1", caption="second")
        create_entry(open_client, "u2", caption="other")

        response = open_client.get("/api/entries", params={"userId": "u1"})

        assert response.status_code == 200
        assert [entry["id"] for entry in response.json()] == [second["id"], first["id"]]

    def test_unknown_owner_gets_empty_list(self, open_client):
        response = open_client.get("/api/entries", params={"userId": "nobody"})

        assert response.status_code == 200
        assert response.json() == []

    def test_user_id_required(self, open_client):
        response = open_client.get("/api/entries")

        assert response.status_code == 400
        assert response.json() == {"message": "User ID is required"}


class TestGetEntry:
    def test_get_by_id(self, open_client):
        entry = create_entry(open_client, "u1")

        response = open_client.get(f"/api/entries/{entry['id']}")

        assert response.status_code == 200
        assert response.json() == entry

    def test_unknown_id(self, open_client):
        response = open_client.get("/api/entries/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Entry not found"}

    def test_non_numeric_id(self, open_client):
        response = open_client.get("/api/entries/abc")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid entry ID"}


class TestDeleteEntry:
    def test_delete_then_lookup(self, open_client):
        entry = create_entry(open_client, "u1")

        response = open_client.delete(f"/api/entries/{entry['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Entry deleted successfully"}

        assert open_client.get(f"/api/entries/{entry['id']}").status_code == 404
        assert open_client.delete(f"/api/entries/{entry['id']}").status_code == 404

    def test_delete_non_numeric_id(self, open_client):
        assert open_client.delete("/api/entries/abc").status_code == 400


class TestOwnership:
    def test_owner_can_delete(self, client):
        user = register(client)
        entry = create_entry(client, user["id"])

        response = client.delete(f"/api/entries/{entry['id']}")

        assert response.status_code == 200

    def test_unauthenticated_delete(self, client):
        user = register(client)
        entry = create_entry(client, user["id"])
        client.post("/api/logout")

        response = client.delete(f"/api/entries/{entry['id']}")

        assert response.status_code == 401
        assert client.get(f"/api/entries/{entry['id']}").status_code == 200

    def test_stranger_cannot_delete(self, client):
        alice = register(client)
        entry = create_entry(client, alice["id"])
        register(client, username="bob", password="secret2")

        response = client.delete(f"/api/entries/{entry['id']}")

        assert response.status_code == 403
        assert client.get(f"/api/entries/{entry['id']}").status_code == 200

    def test_bad_id_checked_before_identity(self, client):
        response = client.delete("/api/entries/abc")

        assert response.status_code == 400

    def test_missing_entry_checked_before_owner(self, client):
        register(client)

        assert client.delete("/api/entries/999").status_code == 404


class TestSqlBackend:
    def test_entry_lifecycle(self, sql_client):
        user = register(sql_client)
        entry = create_entry(sql_client, user["id"], location={"lat": 1.5, "lng": 2.5})

        assert entry["id"] == 1
        listed = sql_client.get("/api/entries", params={"userId": user["id"]}).json()
        assert [item["id"] for item in listed] == [entry["id"]]

        assert sql_client.delete(f"/api/entries/{entry['id']}").status_code == 200
        assert sql_client.get(f"/api/entries/{entry['id']}").status_code == 404

    def test_oversized_id_is_not_found(self, sql_client):
        register(sql_client)
        path = "/api/entries/99999999999999999999999"

        assert sql_client.get(path).status_code == 404
        assert sql_client.delete(path).status_code == 404
        assert sql_client.post(f"{path}/share").status_code == 404
        assert sql_client.post(f"{path}/unshare").status_code == 404

    def test_oversized_id_still_requires_identity(self, sql_client):
        response = sql_client.delete("/api/entries/99999999999999999999999")

        assert response.status_code == 401

    def test_health_reports_sql(self, sql_client):
        assert sql_client.get("/health").json()["storage"] == "sql"
