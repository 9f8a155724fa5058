import uuid


def add_items(client, household_id, items):
    return client.post(
        f"/api/households/{household_id}/pantry/items", json={"items": items}
    )


def test_add_items_and_read_pantry_sorted(client, household):
    response = add_items(
        client,
        household["id"],
        [
            {"name": "Rice", "quantity": 2, "unit": "kg"},
            {"name": " Apples ", "quantity": 6},
        ],
    )

    assert response.status_code == 201
    assert [i["name"] for i in response.json()["items"]] == ["Rice", "Apples"]

    pantry = client.get(f"/api/households/{household['id']}/pantry").json()
    assert [i["name"] for i in pantry["items"]] == ["Apples", "Rice"]
    assert pantry["items"][1]["unit"] == "kg"


def test_quantity_defaults_to_one(client, household):
    response = add_items(client, household["id"], [{"name": "Salt"}])

    assert response.json()["items"][0]["quantity"] == 1


def test_duplicate_name_ignoring_case_rejects_batch(client, household):
    add_items(client, household["id"], [{"name": "Milk", "quantity": 1, "unit": "L"}])

    response = add_items(
        client,
        household["id"],
        [{"name": "Bread"}, {"name": "milk", "quantity": 2, "unit": "L"}],
    )

    assert response.status_code == 409
    assert "milk" in response.json()["message"]
    pantry = client.get(f"/api/households/{household['id']}/pantry").json()
    assert [i["name"] for i in pantry["items"]] == ["Milk"]


def test_duplicate_within_batch_is_rejected(client, household):
    response = add_items(client, household["id"], [{"name": "Eggs"}, {"name": "EGGS"}])

    assert response.status_code == 409


def test_non_positive_quantity_is_rejected(client, household):
    response = add_items(client, household["id"], [{"name": "Flour", "quantity": 0}])

    assert response.status_code == 400


def test_empty_batch_is_rejected(client, household):
    response = add_items(client, household["id"], [])

    assert response.status_code == 400


def test_list_items_by_pantry_id(client, household, pantry):
    add_items(client, household["id"], [{"name": "Oats"}])

    response = client.get(f"/api/pantries/{pantry['id']}/items")

    assert response.status_code == 200
    assert [i["name"] for i in response.json()["data"]] == ["Oats"]


def test_update_item(client, household, pantry):
    item = add_items(client, household["id"], [{"name": "Sugar"}]).json()["items"][0]

    response = client.patch(
        f"/api/pantries/{pantry['id']}/items/{item['id']}",
        json={"quantity": 3.5, "unit": "kg"},
    )

    assert response.status_code == 200
    assert response.json()["quantity"] == 3.5
    assert response.json()["unit"] == "kg"


def test_update_requires_a_field(client, household, pantry):
    item = add_items(client, household["id"], [{"name": "Sugar"}]).json()["items"][0]

    response = client.patch(f"/api/pantries/{pantry['id']}/items/{item['id']}", json={})

    assert response.status_code == 400


def test_delete_item_twice(client, household, pantry):
    item = add_items(client, household["id"], [{"name": "Tea"}]).json()["items"][0]
    url = f"/api/pantries/{pantry['id']}/items/{item['id']}"

    assert client.delete(url).status_code == 204
    assert client.delete(url).status_code == 404


def test_unknown_item_is_not_found(client, pantry):
    response = client.patch(
        f"/api/pantries/{pantry['id']}/items/{uuid.uuid4()}", json={"quantity": 1}
    )

    assert response.status_code == 404


def test_other_household_cannot_see_pantry(client, household, pantry, login, make_user):
    login(make_user("stranger@example.com"))

    assert client.get(f"/api/households/{household['id']}/pantry").status_code == 404
    assert client.get(f"/api/pantries/{pantry['id']}/items").status_code == 404


def test_update_rejects_null_quantity(client, household, pantry):
    item = add_items(client, household["id"], [{"name": "Sugar"}]).json()["items"][0]

    response = client.patch(
        f"/api/pantries/{pantry['id']}/items/{item['id']}", json={"quantity": None}
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "quantity"
