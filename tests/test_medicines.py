from sehaty.models.medicine import Medicine

URL = "/api/v1/medicines"


def test_create_medicine_requires_catalog_manager(client, auth_headers, admin_headers):
    payload = {"name": "Panadol", "price": 25.0}

    assert client.post(URL, json=payload, headers=auth_headers).status_code == 403

    response = client.post(URL, json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["name"] == "Panadol"
    assert response.json()["rating"] == 0.0


def test_create_medicine_with_curated_alternatives(client, admin_headers, make_medicine):
    alt = make_medicine("Adol")

    response = client.post(URL, json={"name": "Panadol", "alternatives": [alt.id]}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["alternative_ids"] == [alt.id]


def test_list_returns_live_listings_with_filters(client, make_medicine, stock, db):
    cheap = make_medicine("Adol", description="paracetamol tablets")
    pricey = make_medicine("Augmentin", prescription_required=True)
    hidden = make_medicine("Hidden")
    stock(cheap, price=10.0)
    stock(pricey, price=150.0)
    stock(hidden, is_available=False)

    body = client.get(URL).json()
    assert body["total_medicines"] == 2
    assert {m["name"] for m in body["medicines"]} == {"Adol", "Augmentin"}

    body = client.get(URL, params={"search": "PARACETAMOL"}).json()
    assert [m["name"] for m in body["medicines"]] == ["Adol"]

    body = client.get(URL, params={"prescription_required": "true"}).json()
    assert [m["name"] for m in body["medicines"]] == ["Augmentin"]

    body = client.get(URL, params={"min_price": 50}).json()
    assert [m["pharmacy_info"]["price"] for m in body["medicines"]] == [150.0]


def test_list_paginates(client, make_medicine, stock):
    for i in range(3):
        stock(make_medicine(f"Medicine {i}"))

    body = client.get(URL, params={"page": 2, "limit": 2}).json()

    assert body["current_page"] == 2
    assert body["total_pages"] == 2
    assert body["total_medicines"] == 3
    assert len(body["medicines"]) == 1


def test_search_queries_medicine_records(client, make_medicine):
    make_medicine("Brufen", description="ibuprofen")
    make_medicine("Adol")
    make_medicine("Removed Brufen", is_deleted=True)

    body = client.get(f"{URL}/search", params={"query": "brufen"}).json()

    assert body["total_medicines"] == 1
    assert [m["name"] for m in body["medicines"]] == ["Brufen"]


def test_detail_includes_reviews(client, make_medicine, auth_headers):
    medicine = make_medicine("Adol")
    client.post(f"{URL}/{medicine.id}/reviews", json={"rating": 4, "comment": "ok"}, headers=auth_headers)

    response = client.get(f"{URL}/{medicine.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["medicine"]["id"] == medicine.id
    assert [r["rating"] for r in body["reviews"]] == [4]


def test_review_rating_is_mean(client, make_medicine, auth_headers, other_headers):
    medicine = make_medicine("Adol")

    client.post(f"{URL}/{medicine.id}/reviews", json={"rating": 5}, headers=auth_headers)
    response = client.post(f"{URL}/{medicine.id}/reviews", json={"rating": 2}, headers=other_headers)

    assert response.status_code == 201
    body = client.get(f"{URL}/{medicine.id}").json()["medicine"]
    assert body["rating"] == 3.5
    assert body["total_reviews"] == 2


def test_review_rating_out_of_range(client, make_medicine, auth_headers):
    medicine = make_medicine("Adol")

    response = client.post(f"{URL}/{medicine.id}/reviews", json={"rating": 6}, headers=auth_headers)

    assert response.status_code == 422


def test_update_rejects_unknown_fields(client, make_medicine, admin_headers):
    medicine = make_medicine("Adol")

    response = client.put(f"{URL}/{medicine.id}", json={"rating": 5}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid updates")


def test_update_allowed_fields(client, make_medicine, admin_headers):
    medicine = make_medicine("Adol", price=10.0)

    response = client.put(
        f"{URL}/{medicine.id}", json={"price": 12.0, "manufacturer": "Pharco"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["price"] == 12.0
    assert response.json()["manufacturer"] == "Pharco"


def test_delete_is_soft(client, make_medicine, admin_headers, db):
    medicine = make_medicine("Adol")

    assert client.delete(f"{URL}/{medicine.id}", headers=admin_headers).status_code == 204

    assert client.get(f"{URL}/{medicine.id}").status_code == 404
    db.expire_all()
    assert db.get(Medicine, medicine.id).is_deleted is True


def test_categories_and_ingredients(client, admin_headers, auth_headers):
    assert client.post("/api/v1/categories", json={"name": "Vitamins"}, headers=auth_headers).status_code == 403
    assert client.post("/api/v1/categories", json={"name": "Vitamins"}, headers=admin_headers).status_code == 201
    assert [c["name"] for c in client.get("/api/v1/categories").json()] == ["Vitamins"]

    assert client.post(
        "/api/v1/active-ingredients", json={"name": "Paracetamol"}, headers=admin_headers
    ).status_code == 201
    duplicate = client.post("/api/v1/active-ingredients", json={"name": "paracetamol"}, headers=admin_headers)
    assert duplicate.status_code == 400


def test_pharmacy_listing_upsert(client, admin_headers, make_medicine):
    medicine = make_medicine("Adol")
    pharmacy_id = client.post(
        "/api/v1/pharmacies", json={"name": "Nile Pharmacy"}, headers=admin_headers
    ).json()["id"]

    client.post(
        f"/api/v1/pharmacies/{pharmacy_id}/medicines",
        json={"medicine_id": medicine.id, "price": 9.5, "stock": 4},
        headers=admin_headers,
    )
    response = client.post(
        f"/api/v1/pharmacies/{pharmacy_id}/medicines",
        json={"medicine_id": medicine.id, "price": 8.0, "stock": 7},
        headers=admin_headers,
    )

    assert response.status_code == 200
    listings = client.get(f"/api/v1/pharmacies/{pharmacy_id}/medicines").json()
    assert len(listings) == 1
    assert listings[0]["price"] == 8.0
    assert listings[0]["stock"] == 7
