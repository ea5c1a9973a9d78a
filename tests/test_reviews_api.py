"""
Review endpoint tests, including the tour rating summary they maintain
"""

import pytest

from conftest import API, bearer, set_role, signup
from natours.domain.enums import UserRole


@pytest.fixture
def tour(client, admin_headers, tour_payload):
    response = client.post(f"{API}/tours/", headers=admin_headers, json=tour_payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def reviewers(client):
    """Three regular users, by email"""
    return {
        email: bearer(signup(client, email)["token"])
        for email in ("ann@example.com", "ben@example.com", "cat@example.com")
    }


def _review(client, headers, tour_id, rating, text="Amazing experience"):
    return client.post(
        f"{API}/tours/{tour_id}/reviews",
        headers=headers,
        json={"review": text, "rating": rating}
    )


def _summary(client, tour_id):
    data = client.get(f"{API}/tours/{tour_id}").json()
    return data["ratings_quantity"], data["ratings_average"]


class TestCreateReview:
    """Nested and top-level review creation"""

    def test_summary_follows_reviews(self, client, tour, reviewers):
        for headers, rating in zip(reviewers.values(), [4, 5, 3]):
            assert _review(client, headers, tour["id"], rating).status_code == 201

        assert _summary(client, tour["id"]) == (3, 4.0)
        detail = client.get(f"{API}/tours/{tour['id']}").json()
        assert sorted(review["rating"] for review in detail["reviews"]) == [3, 4, 5]

    def test_user_is_taken_from_token(self, client, tour, test_user, auth_headers):
        response = _review(client, auth_headers, tour["id"], 5)
        assert response.status_code == 201
        assert response.json()["user_id"] == test_user["user"]["id"]
        assert response.json()["tour_id"] == tour["id"]

    def test_top_level_route_with_tour_in_body(self, client, tour, auth_headers):
        response = client.post(
            f"{API}/reviews/",
            headers=auth_headers,
            json={"review": "Lovely", "rating": 4, "tour_id": tour["id"]}
        )
        assert response.status_code == 201
        assert _summary(client, tour["id"]) == (1, 4.0)

    def test_top_level_route_without_tour(self, client, auth_headers):
        response = client.post(f"{API}/reviews/", headers=auth_headers, json={"review": "Lovely", "rating": 4})
        assert response.status_code == 400

    def test_second_review_conflicts(self, client, tour, auth_headers):
        assert _review(client, auth_headers, tour["id"], 5).status_code == 201

        response = _review(client, auth_headers, tour["id"], 1)
        assert response.status_code == 409
        assert response.json()["message"] == "You have already reviewed this tour"
        assert _summary(client, tour["id"]) == (1, 5.0)

    @pytest.mark.parametrize("body", [
        {"review": "No rating"},
        {"review": "Too good", "rating": 6},
        {"review": "", "rating": 3},
    ])
    def test_invalid_review(self, client, tour, auth_headers, body):
        response = client.post(f"{API}/tours/{tour['id']}/reviews", headers=auth_headers, json=body)
        assert response.status_code == 400
        assert _summary(client, tour["id"]) == (0, 4.5)

    def test_unknown_tour(self, client, auth_headers):
        response = _review(client, auth_headers, "00000000-0000-0000-0000-000000000000", 4)
        assert response.status_code == 404

    def test_only_role_user_may_review(self, client, db_session, tour):
        body = signup(client, "guide@example.com", name="Tour Guide")
        set_role(db_session, "guide@example.com", UserRole.GUIDE)

        response = _review(client, bearer(body["token"]), tour["id"], 5)
        assert response.status_code == 403


class TestChangeReview:
    """Update and delete"""

    def test_update_recomputes(self, client, tour, reviewers):
        headers = list(reviewers.values())
        first = _review(client, headers[0], tour["id"], 5).json()
        _review(client, headers[1], tour["id"], 3)

        response = client.patch(f"{API}/reviews/{first['id']}", headers=headers[0], json={"rating": 1})
        assert response.status_code == 200
        assert _summary(client, tour["id"]) == (2, 2.0)

    def test_delete_recomputes(self, client, tour, reviewers):
        headers = list(reviewers.values())
        created = [
            _review(client, header, tour["id"], rating).json()
            for header, rating in zip(headers, [4, 5, 3])
        ]

        response = client.delete(f"{API}/reviews/{created[2]['id']}", headers=headers[2])
        assert response.status_code == 204
        assert _summary(client, tour["id"]) == (2, 4.5)

    def test_only_author_or_admin(self, client, tour, reviewers, admin_headers):
        headers = list(reviewers.values())
        review = _review(client, headers[0], tour["id"], 4).json()

        other = client.patch(f"{API}/reviews/{review['id']}", headers=headers[1], json={"rating": 1})
        assert other.status_code == 403

        by_admin = client.delete(f"{API}/reviews/{review['id']}", headers=admin_headers)
        assert by_admin.status_code == 204
        assert _summary(client, tour["id"]) == (0, 4.5)

    def test_missing_review(self, client, auth_headers):
        response = client.delete(
            f"{API}/reviews/00000000-0000-0000-0000-000000000000", headers=auth_headers
        )
        assert response.status_code == 404


class TestReviewReads:

    def test_list_per_tour(self, client, admin_headers, tour_payload, tour, auth_headers):
        other = client.post(
            f"{API}/tours/", headers=admin_headers, json={**tour_payload, "name": "The Forest Hiker"}
        ).json()
        _review(client, auth_headers, tour["id"], 4)
        _review(client, auth_headers, other["id"], 2)

        assert len(client.get(f"{API}/reviews/", headers=auth_headers).json()) == 2
        nested = client.get(f"{API}/tours/{tour['id']}/reviews", headers=auth_headers).json()
        assert [review["rating"] for review in nested] == [4]
        filtered = client.get(f"{API}/reviews/", params={"tour_id": other["id"]}, headers=auth_headers).json()
        assert [review["rating"] for review in filtered] == [2]

    def test_requires_login(self, client):
        assert client.get(f"{API}/reviews/").status_code == 401


class TestCascades:
    """Removing tours or users keeps summaries consistent"""

    def test_deleting_user_recomputes_their_tours(self, client, tour, reviewers, admin_headers):
        for headers, rating in zip(reviewers.values(), [4, 5, 3]):
            _review(client, headers, tour["id"], rating)

        users = client.get(f"{API}/users/", headers=admin_headers).json()
        cat = next(user for user in users if user["email"] == "cat@example.com")

        response = client.delete(f"{API}/users/{cat['id']}", headers=admin_headers)
        assert response.status_code == 204
        assert _summary(client, tour["id"]) == (2, 4.5)

    def test_deleting_tour_removes_its_reviews(self, client, tour, auth_headers, admin_headers):
        review = _review(client, auth_headers, tour["id"], 4).json()

        assert client.delete(f"{API}/tours/{tour['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"{API}/reviews/{review['id']}", headers=auth_headers).status_code == 404
