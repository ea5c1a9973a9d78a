"""
Tour endpoint tests
"""

from conftest import API, bearer, set_role, signup
from natours.domain.enums import UserRole


def _create(client, headers, payload, **overrides):
    response = client.post(f"{API}/tours/", headers=headers, json={**payload, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


class TestTourWrites:
    """Create, update and delete tours"""

    def test_regular_user_cannot_create(self, client, auth_headers, tour_payload):
        response = client.post(f"{API}/tours/", headers=auth_headers, json=tour_payload)
        assert response.status_code == 403
        assert response.json()["status"] == "fail"

    def test_lead_guide_can_create(self, client, db_session, tour_payload):
        body = signup(client, "lead@example.com", name="Lead Guide")
        set_role(db_session, "lead@example.com", UserRole.LEAD_GUIDE)

        tour = _create(client, bearer(body["token"]), tour_payload)
        assert tour["slug"] == "the-sea-explorer"
        assert tour["ratings_quantity"] == 0
        assert tour["ratings_average"] == 4.5
        assert tour["duration_weeks"] == 1

    def test_invalid_discount(self, client, admin_headers, tour_payload):
        response = client.post(
            f"{API}/tours/", headers=admin_headers, json={**tour_payload, "price_discount": 600}
        )
        assert response.status_code == 400

    def test_duplicate_name(self, client, admin_headers, tour_payload):
        _create(client, admin_headers, tour_payload)
        response = client.post(f"{API}/tours/", headers=admin_headers, json=tour_payload)
        assert response.status_code == 409

    def test_update_cannot_touch_ratings(self, client, admin_headers, tour_payload):
        tour = _create(client, admin_headers, tour_payload)

        response = client.patch(
            f"{API}/tours/{tour['id']}",
            headers=admin_headers,
            json={"price": 520, "ratings_average": 1.0, "ratings_quantity": 40}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 520
        assert data["ratings_average"] == 4.5
        assert data["ratings_quantity"] == 0

    def test_delete(self, client, admin_headers, tour_payload):
        tour = _create(client, admin_headers, tour_payload)

        response = client.delete(f"{API}/tours/{tour['id']}", headers=admin_headers)
        assert response.status_code == 204
        assert client.get(f"{API}/tours/{tour['id']}").status_code == 404


class TestTourReads:
    """Public listing and detail"""

    def test_secret_tours_hidden(self, client, admin_headers, tour_payload):
        _create(client, admin_headers, tour_payload)
        secret = _create(
            client, admin_headers, tour_payload, name="The Secret Hideaway", secret_tour=True
        )

        names = [tour["name"] for tour in client.get(f"{API}/tours/").json()]
        assert names == ["The Sea Explorer"]
        assert client.get(f"{API}/tours/{secret['id']}").status_code == 404

    def test_filter_and_sort(self, client, admin_headers, tour_payload):
        _create(client, admin_headers, tour_payload)
        _create(
            client, admin_headers, tour_payload,
            name="The Forest Hiker", difficulty="easy", price=397, price_discount=None
        )
        _create(
            client, admin_headers, tour_payload,
            name="The Snow Adventurer", difficulty="difficult", price=997, price_discount=None
        )

        by_price = client.get(f"{API}/tours/", params={"sort": "-price"}).json()
        assert [tour["price"] for tour in by_price] == [997, 497, 397]

        easy = client.get(f"{API}/tours/", params={"difficulty": "easy"}).json()
        assert [tour["name"] for tour in easy] == ["The Forest Hiker"]

        page = client.get(f"{API}/tours/", params={"sort": "price", "limit": 1, "page": 2}).json()
        assert [tour["name"] for tour in page] == ["The Sea Explorer"]

    def test_bad_query(self, client):
        assert client.get(f"{API}/tours/", params={"difficulty": "extreme"}).status_code == 400
        assert client.get(f"{API}/tours/", params={"sort": "password"}).status_code == 400

    def test_unknown_tour(self, client):
        response = client.get(f"{API}/tours/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404
        assert response.json() == {"status": "fail", "message": "No tour found with that ID"}
