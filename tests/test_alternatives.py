from sehaty import crud
from sehaty.services.alternatives import MedicineAlternativeResolver


def _url(medicine):
    return f"/api/v1/medicines/{medicine.id}/alternatives"


def test_curated_alternatives_in_stock_are_predefined(client, db, make_medicine, stock, pharmacy):
    brand = make_medicine("Panadol")
    first = make_medicine("Adol")
    second = make_medicine("Tylenol")
    stock(first, quantity=5, price=20.0)
    stock(second, quantity=3, price=22.0)
    crud.medicine.set_alternatives(db, medicine=brand, alternative_ids=[second.id, first.id])

    response = client.get(_url(brand))

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "predefined"
    assert [m["id"] for m in body["alternatives"]] == [second.id, first.id]
    assert body["alternatives"][0]["pharmacy_info"] == {
        "pharmacy_id": pharmacy.id,
        "pharmacy_name": "Central Pharmacy",
        "price": 22.0,
        "stock": 3,
        "discount": 0.0,
        "is_available": True,
    }


def test_curated_alternatives_without_stock_are_dropped(client, db, make_medicine, stock):
    brand = make_medicine("Panadol")
    listed = make_medicine("Adol")
    sold_out = make_medicine("Tylenol")
    stock(listed)
    stock(sold_out, quantity=0)
    crud.medicine.set_alternatives(db, medicine=brand, alternative_ids=[sold_out.id, listed.id])

    body = client.get(_url(brand)).json()

    assert body["source"] == "predefined"
    assert [m["id"] for m in body["alternatives"]] == [listed.id]


def test_ingredient_fallback_when_no_curated_list(client, make_medicine, make_ingredient, stock):
    paracetamol = make_ingredient("Paracetamol")
    brand = make_medicine("Panadol", ingredient=paracetamol)
    generic = make_medicine("Paracetamol Generic", ingredient=paracetamol)
    make_medicine("Brufen", ingredient=make_ingredient("Ibuprofen"))
    stock(generic)

    body = client.get(_url(brand)).json()

    assert body["source"] == "activeIngredient"
    assert [m["id"] for m in body["alternatives"]] == [generic.id]


def test_ingredient_fallback_when_curated_all_out_of_stock(
    client, db, make_medicine, make_ingredient, stock
):
    paracetamol = make_ingredient("Paracetamol")
    brand = make_medicine("Panadol", ingredient=paracetamol)
    curated = make_medicine("Adol", ingredient=paracetamol)
    generic = make_medicine("Paracetamol Generic", ingredient=paracetamol)
    stock(curated, quantity=0)
    stock(generic)
    crud.medicine.set_alternatives(db, medicine=brand, alternative_ids=[curated.id])

    body = client.get(_url(brand)).json()

    assert body["source"] == "activeIngredient"
    assert [m["id"] for m in body["alternatives"]] == [generic.id]


def test_ingredient_matches_skip_unavailable_and_deleted(client, make_medicine, make_ingredient, stock):
    paracetamol = make_ingredient("Paracetamol")
    brand = make_medicine("Panadol", ingredient=paracetamol)
    hidden = make_medicine("Hidden", ingredient=paracetamol, is_available=False)
    removed = make_medicine("Removed", ingredient=paracetamol, is_deleted=True)
    stock(hidden)
    stock(removed)

    body = client.get(_url(brand)).json()

    assert body == {"alternatives": [], "source": "none"}


def test_no_ingredient_and_no_curated_list_is_none(client, make_medicine, stock):
    brand = make_medicine("Mystery Syrup")
    stock(make_medicine("Other Syrup"))

    body = client.get(_url(brand)).json()

    assert body == {"alternatives": [], "source": "none"}


def test_unavailable_listing_is_not_used(client, db, make_medicine, stock):
    brand = make_medicine("Panadol")
    alt = make_medicine("Adol")
    stock(alt, is_available=False)
    crud.medicine.set_alternatives(db, medicine=brand, alternative_ids=[alt.id])

    body = client.get(_url(brand)).json()

    assert body["source"] == "none"


def test_missing_or_deleted_medicine_is_404(client, make_medicine):
    deleted = make_medicine("Withdrawn", is_deleted=True)

    assert client.get(_url(deleted)).status_code == 404
    assert client.get("/api/v1/medicines/424242/alternatives").status_code == 404


def test_set_alternatives_ignores_self_and_duplicates(db, make_medicine):
    brand = make_medicine("Panadol")
    alt = make_medicine("Adol")

    crud.medicine.set_alternatives(db, medicine=brand, alternative_ids=[alt.id, brand.id, alt.id])

    assert brand.alternative_ids == [alt.id]


def test_resolver_returns_tuple(db, make_medicine, stock):
    brand = make_medicine("Panadol")
    alt = make_medicine("Adol")
    stock(alt)
    crud.medicine.set_alternatives(db, medicine=brand, alternative_ids=[alt.id])

    alternatives, source = MedicineAlternativeResolver(db).resolve(brand)

    assert source == "predefined"
    assert alternatives[0].pharmacy_info.pharmacy_name == "Central Pharmacy"
