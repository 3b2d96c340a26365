from sqlmodel import select

from app.db.flights import FlightOwner

from conftest import user_id


def detail_payload(flight_id: int, **overrides) -> dict:
    data = {
        "flightId": flight_id,
        "flightName": "Red Eye",
        "baggageInfo": "1 x 23kg",
        "numberOfSeats": 180,
        "departureTime": "2026-11-20T23:00:00",
        "arrivalTime": "2026-11-21T02:30:00",
        "fare": 199.0,
    }
    data.update(overrides)
    return data


def test_first_detail_creates_owner_record(client, session, owner_headers, nyc_lax):
    response = client.post(
        "/api/flightowner/flight-details", json=detail_payload(nyc_lax.id), headers=owner_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["flightRoute"] == "NYC → LAX"
    assert data["flightPrice"] == 299.99

    owner = session.exec(
        select(FlightOwner).where(FlightOwner.user_id == user_id(session, "owner@example.com"))
    ).one()
    assert owner.airline_name == "Owner One Airlines"
    assert data["flightOwnerId"] == owner.id


def test_list_owner_details(client, session, owner_headers, nyc_lax):
    client.post(
        "/api/flightowner/flight-details", json=detail_payload(nyc_lax.id), headers=owner_headers
    )
    client.post(
        "/api/flightowner/flight-details",
        json=detail_payload(nyc_lax.id + 1, flightName="Morning Hop"),
        headers=owner_headers,
    )
    owner = user_id(session, "owner@example.com")

    response = client.get(f"/api/flightowner/flight-details/{owner}", headers=owner_headers)

    assert response.status_code == 200
    assert [d["flightName"] for d in response.json()] == ["Red Eye", "Morning Hop"]

    other = user_id(session, "owner2@example.com")
    response = client.get(f"/api/flightowner/flight-details/{other}", headers=owner_headers)
    assert response.json() == []


def test_flight_detail_validation(client, owner_headers, nyc_lax):
    for overrides in ({"numberOfSeats": 0}, {"fare": -5}, {"flightName": ""}):
        response = client.post(
            "/api/flightowner/flight-details",
            json=detail_payload(nyc_lax.id, **overrides),
            headers=owner_headers,
        )
        assert response.status_code == 400

    response = client.post(
        "/api/flightowner/flight-details", json=detail_payload(9999), headers=owner_headers
    )
    assert response.status_code == 404


def test_only_the_owner_edits_a_detail(client, admin_headers, owner_headers, owner2_headers, nyc_lax):
    detail_id = client.post(
        "/api/flightowner/flight-details", json=detail_payload(nyc_lax.id), headers=owner_headers
    ).json()["flightDetailId"]

    response = client.put(
        f"/api/flightowner/flight-details/{detail_id}",
        json=detail_payload(nyc_lax.id, fare=249.0),
        headers=owner2_headers,
    )
    assert response.status_code == 403
    assert response.json()["message"] == "You can only manage your own flight details"

    response = client.put(
        f"/api/flightowner/flight-details/{detail_id}",
        json=detail_payload(nyc_lax.id, fare=249.0),
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["fare"] == 249.0

    assert client.delete(
        f"/api/flightowner/flight-details/{detail_id}", headers=owner2_headers
    ).status_code == 403
    response = client.delete(f"/api/flightowner/flight-details/{detail_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Flight detail deleted successfully"

    response = client.delete(f"/api/flightowner/flight-details/{detail_id}", headers=owner_headers)
    assert response.status_code == 404


def test_owner_bookings(client, session, owner_headers, user_headers, nyc_lax, make_booking):
    client.post(
        "/api/flightowner/flight-details", json=detail_payload(nyc_lax.id), headers=owner_headers
    )
    booking_id = make_booking(user_headers, nyc_lax.id)
    make_booking(user_headers, nyc_lax.id + 1, "1A")
    owner = user_id(session, "owner@example.com")

    response = client.get(f"/api/flightowner/bookings/{owner}", headers=owner_headers)

    assert response.status_code == 200
    bookings = response.json()
    assert [b["bookingId"] for b in bookings] == [booking_id]
    assert bookings[0]["flightName"] == "Red Eye"
    assert bookings[0]["user"]["name"] == "Test User"


def test_owner_routes_reject_customers(client, session, user_headers, nyc_lax):
    owner = user_id(session, "owner@example.com")

    assert client.get(f"/api/flightowner/bookings/{owner}", headers=user_headers).status_code == 403
    response = client.post(
        "/api/flightowner/flight-details", json=detail_payload(nyc_lax.id), headers=user_headers
    )
    assert response.status_code == 403
