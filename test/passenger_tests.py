from sqlmodel import select

from app.db.passengers import PassengerDetail


def passenger(**overrides) -> dict:
    data = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "age": 36,
        "gender": "F",
        "nationality": "UK",
    }
    data.update(overrides)
    return data


def test_save_passengers_with_placeholders(client, session, user_headers, nyc_lax, make_booking):
    booking_id = make_booking(user_headers, nyc_lax.id)

    response = client.post(
        "/api/passenger/details",
        json={
            "bookingId": booking_id,
            "passengers": [passenger(), passenger(firstName="Alan", seatNo="8B", passportNumber="P123")],
        },
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "message": "Passenger details saved successfully",
        "bookingId": booking_id,
        "passengerCount": 2,
    }

    rows = session.exec(
        select(PassengerDetail)
        .where(PassengerDetail.booking_id == booking_id)
        .order_by(PassengerDetail.id)
    ).all()
    assert [(r.seat_no, r.passport_number) for r in rows] == [("1A", ""), ("8B", "P123")]


def test_batch_is_rejected_at_first_bad_passenger(client, session, user_headers, nyc_lax, make_booking):
    booking_id = make_booking(user_headers, nyc_lax.id)

    response = client.post(
        "/api/passenger/details",
        json={"bookingId": booking_id, "passengers": [passenger(), passenger(firstName=" ")]},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json() == {
        "message": "Passenger 2: FirstName is required",
        "passengerIndex": 2,
    }
    saved = session.exec(
        select(PassengerDetail).where(PassengerDetail.booking_id == booking_id)
    ).all()
    assert saved == []


def test_passenger_field_checks(client, user_headers, nyc_lax, make_booking):
    booking_id = make_booking(user_headers, nyc_lax.id)
    cases = [
        (passenger(lastName=None), "Passenger 1: LastName is required"),
        (passenger(age=0), "Passenger 1: Invalid age"),
        (passenger(age=121), "Passenger 1: Invalid age"),
        (passenger(gender=""), "Passenger 1: Gender is required"),
        (passenger(nationality=None), "Passenger 1: Nationality is required"),
        (passenger(seatNo="X" * 11), "Passenger 1: SeatNo must be at most 10 characters"),
    ]

    for data, message in cases:
        response = client.post(
            "/api/passenger/details",
            json={"bookingId": booking_id, "passengers": [data]},
            headers=user_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == message


def test_invalid_booking_id_is_not_defaulted(client, user_headers):
    for booking_id in (None, 0, -3):
        response = client.post(
            "/api/passenger/details",
            json={"bookingId": booking_id, "passengers": [passenger()]},
            headers=user_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid BookingId."


def test_empty_batch(client, user_headers, nyc_lax, make_booking):
    booking_id = make_booking(user_headers, nyc_lax.id)

    response = client.post(
        "/api/passenger/details",
        json={"bookingId": booking_id, "passengers": []},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "No passenger data provided."


def test_unknown_booking(client, user_headers):
    response = client.post(
        "/api/passenger/details",
        json={"bookingId": 9999, "passengers": [passenger()]},
        headers=user_headers,
    )

    assert response.status_code == 404


def test_passengers_belong_to_booking_owner(client, user_headers, traveler_headers, nyc_lax, make_booking):
    booking_id = make_booking(user_headers, nyc_lax.id)

    response = client.post(
        "/api/passenger/details",
        json={"bookingId": booking_id, "passengers": [passenger()]},
        headers=traveler_headers,
    )
    assert response.status_code == 403

    response = client.get(f"/api/passenger/booking/{booking_id}", headers=traveler_headers)
    assert response.status_code == 403


def test_list_and_delete_passengers(client, user_headers, nyc_lax, make_booking):
    booking_id = make_booking(user_headers, nyc_lax.id)
    client.post(
        "/api/passenger/details",
        json={"bookingId": booking_id, "passengers": [passenger(), passenger(firstName="Alan")]},
        headers=user_headers,
    )

    response = client.get(f"/api/passenger/booking/{booking_id}", headers=user_headers)
    assert response.status_code == 200
    assert [p["firstName"] for p in response.json()] == ["Ada", "Alan"]

    response = client.delete(f"/api/passenger/booking/{booking_id}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["deletedCount"] == 2

    response = client.get(f"/api/passenger/booking/{booking_id}", headers=user_headers)
    assert response.json() == []


def test_blank_seat_is_kept_as_given(client, session, user_headers, nyc_lax, make_booking):
    booking_id = make_booking(user_headers, nyc_lax.id)

    response = client.post(
        "/api/passenger/details",
        json={"bookingId": booking_id, "passengers": [passenger(seatNo="", passportNumber="")]},
        headers=user_headers,
    )

    assert response.status_code == 200
    row = session.exec(
        select(PassengerDetail).where(PassengerDetail.booking_id == booking_id)
    ).one()
    assert row.seat_no == ""
    assert row.passport_number == ""
