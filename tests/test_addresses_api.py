import pytest
from pymongo.errors import PyMongoError

from app.core.exceptions import ValidationError
from app.services.address_service import parse_combined_address


def test_parse_combined_address():
    assert parse_combined_address("1 Main St, Springfield, IL, USA, 62704") == {
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "country": "USA",
        "postalCode": "62704",
    }


def test_parse_ignores_segments_beyond_five():
    fields = parse_combined_address("1 Main St,Springfield,IL,USA,62704,extra")
    assert fields["postalCode"] == "62704"


@pytest.mark.parametrize("combined", [
    None,
    "",
    "1 Main St, Springfield",
    "1 Main St, , IL, USA, 62704",
    "1 Main St, Springfield, IL, USA,   ",
])
def test_parse_incomplete_address(combined):
    with pytest.raises(ValidationError) as exc_info:
        parse_combined_address(combined)
    assert exc_info.value.message == "Incomplete address"


def test_add_address(client, signup):
    headers = signup()
    response = client.post(
        "/api/addresses/add",
        json={"combinedAddress": "1 Main St, Springfield, IL, USA, 62704"},
        headers=headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Address added successfully"
    address = body["address"]
    assert address["street"] == "1 Main St"
    assert address["city"] == "Springfield"
    assert address["state"] == "IL"
    assert address["country"] == "USA"
    assert address["postalCode"] == "62704"
    assert address["user"] == client.get("/api/users/me", headers=headers).json()["_id"]


def test_add_incomplete_address_stores_nothing(client, signup, repositories):
    headers = signup()
    response = client.post(
        "/api/addresses/add",
        json={"combinedAddress": "1 Main St, Springfield"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Incomplete address"
    assert repositories.addresses.documents == {}


def test_add_without_combined_address(client, signup):
    headers = signup()
    response = client.post("/api/addresses/add", json={}, headers=headers)
    assert response.status_code == 400


def test_add_without_body(client, signup, repositories):
    response = client.post("/api/addresses/add", headers=signup())
    assert response.status_code == 400
    assert response.json()["error"] == "Incomplete address"
    assert repositories.addresses.documents == {}


def test_list_only_returns_own_addresses(client, signup):
    alice = signup()
    bob = signup("bob", "bob@example.com")

    client.post("/api/addresses/add", json={"combinedAddress": "1 A St, Acity, AS, USA, 11111"}, headers=alice)
    client.post("/api/addresses/add", json={"combinedAddress": "2 A St, Acity, AS, USA, 11111"}, headers=alice)
    client.post("/api/addresses/add", json={"combinedAddress": "9 B St, Bcity, BS, USA, 99999"}, headers=bob)

    response = client.get("/api/addresses", headers=alice)
    assert response.status_code == 200
    streets = [a["street"] for a in response.json()]
    assert streets == ["1 A St", "2 A St"]

    bob_id = client.get("/api/users/me", headers=bob).json()["_id"]
    assert all(a["user"] != bob_id for a in response.json())


def test_list_empty(client, signup):
    headers = signup()
    response = client.get("/api/addresses", headers=headers)
    assert response.status_code == 200
    assert response.json() == []


def test_store_failure_is_500(client, signup, repositories):
    headers = signup()
    repositories.addresses.error = PyMongoError("boom")

    response = client.get("/api/addresses", headers=headers)
    assert response.status_code == 500
    assert response.json()["error"] == "Server error"

    response = client.post(
        "/api/addresses/add",
        json={"combinedAddress": "1 Main St, Springfield, IL, USA, 62704"},
        headers=headers,
    )
    assert response.status_code == 500
