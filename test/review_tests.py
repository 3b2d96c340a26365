def test_review_booked_flight(client, user_headers, nyc_lax, make_booking):
    make_booking(user_headers, nyc_lax.id)

    response = client.post(
        "/api/reviews",
        json={"flightId": nyc_lax.id, "rating": 4, "comment": "Smooth ride"},
        headers=user_headers,
    )

    assert response.status_code == 200
    review = response.json()
    assert review["rating"] == 4
    assert review["flightId"] == nyc_lax.id

    response = client.get(f"/api/reviews/flight/{nyc_lax.id}")
    assert response.status_code == 200
    assert [(r["comment"], r["reviewer"]) for r in response.json()] == [
        ("Smooth ride", "Test User")
    ]

    response = client.get(f"/api/reviews/{review['id']}")
    assert response.json()["reviewer"] == "Test User"


def test_review_requires_a_booking(client, user_headers, nyc_lax):
    response = client.post(
        "/api/reviews", json={"flightId": nyc_lax.id, "rating": 5}, headers=user_headers
    )

    assert response.status_code == 400
    assert response.json()["message"] == "You can only review flights you have booked."


def test_review_rating_range(client, user_headers, nyc_lax, make_booking):
    make_booking(user_headers, nyc_lax.id)

    for rating in (0, 6):
        response = client.post(
            "/api/reviews",
            json={"flightId": nyc_lax.id, "rating": rating},
            headers=user_headers,
        )
        assert response.status_code == 400


def test_review_unknown_flight(client, user_headers):
    response = client.post(
        "/api/reviews", json={"flightId": 9999, "rating": 3}, headers=user_headers
    )

    assert response.status_code == 404


def test_only_customers_post_reviews(client, owner_headers, nyc_lax):
    response = client.post(
        "/api/reviews", json={"flightId": nyc_lax.id, "rating": 3}, headers=owner_headers
    )

    assert response.status_code == 403


def test_admin_deletes_review(client, admin_headers, user_headers, nyc_lax, make_booking):
    make_booking(user_headers, nyc_lax.id)
    review_id = client.post(
        "/api/reviews", json={"flightId": nyc_lax.id, "rating": 2}, headers=user_headers
    ).json()["id"]

    assert client.delete(f"/api/reviews/{review_id}", headers=user_headers).status_code == 403

    response = client.delete(f"/api/reviews/{review_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Review deleted."

    assert client.get(f"/api/reviews/{review_id}").status_code == 404
    assert client.get("/api/reviews").json() == []
