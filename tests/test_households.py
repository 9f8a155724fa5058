import uuid


def test_create_household_makes_caller_owner(client, login, owner):
    login(owner)

    response = client.post("/api/households", json={"name": "  Smith Family  "})

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Smith Family"
    assert body["memberCount"] == 1
    assert response.headers["Location"] == f"/api/households/{body['id']}"

    listing = client.get("/api/households").json()
    assert [h["id"] for h in listing["data"]] == [body["id"]]
    assert listing["ownedHouseholdId"] == body["id"]


def test_create_household_provisions_pantry_and_shopping_list(client, household):
    pantry = client.get(f"/api/households/{household['id']}/pantry")
    shopping_list = client.get(f"/api/households/{household['id']}/shopping-list")

    assert pantry.status_code == 200
    assert pantry.json()["items"] == []
    assert shopping_list.status_code == 200
    assert shopping_list.json()["householdId"] == household["id"]


def test_owner_cannot_create_second_household(client, household):
    response = client.post("/api/households", json={"name": "Another Place"})

    assert response.status_code == 409
    assert response.json()["error"] == "Conflict"


def test_create_household_rejects_short_name(client, login, owner):
    login(owner)

    response = client.post("/api/households", json={"name": " ab "})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["details"][0]["field"] == "name"


def test_list_households_empty_for_new_user(client, login, make_user):
    login(make_user("lonely@example.com"))

    response = client.get("/api/households")

    assert response.status_code == 200
    assert response.json() == {"data": [], "ownedHouseholdId": None}


def test_requests_without_session_are_unauthorized(client):
    response = client.get("/api/households")

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


def test_get_household_includes_members(client, household, owner, make_user, join_household):
    member = make_user("member@example.com")
    join_household(owner, household["id"], member)

    response = client.get(f"/api/households/{household['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["ownerId"] == str(owner.id)
    assert [m["email"] for m in body["members"]] == [
        "owner@example.com",
        "member@example.com",
    ]


def test_non_member_sees_not_found(client, household, login, make_user):
    login(make_user("stranger@example.com"))

    response = client.get(f"/api/households/{household['id']}")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "message": "Household not found"}


def test_unknown_household_is_not_found(client, household):
    response = client.get(f"/api/households/{uuid.uuid4()}")

    assert response.status_code == 404


def test_malformed_household_id_is_bad_request(client, household):
    response = client.get("/api/households/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "household_id"


def test_owner_can_rename_household(client, household):
    response = client.patch(
        f"/api/households/{household['id']}", json={"name": "Renamed Home"}
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed Home"


def test_member_cannot_rename_household(client, household, owner, make_user, join_household):
    member = make_user("member@example.com")
    join_household(owner, household["id"], member)

    response = client.patch(
        f"/api/households/{household['id']}", json={"name": "Hijacked"}
    )

    assert response.status_code == 403


def test_delete_household_blocked_while_members_remain(
    client, household, owner, make_user, join_household, login
):
    join_household(owner, household["id"], make_user("member@example.com"))
    login(owner)

    response = client.delete(f"/api/households/{household['id']}")

    assert response.status_code == 409


def test_owner_alone_can_delete_household(client, household):
    response = client.delete(f"/api/households/{household['id']}")

    assert response.status_code == 204
    assert client.get(f"/api/households/{household['id']}").status_code == 404
    assert client.get("/api/households").json()["data"] == []


def test_member_creating_household_leaves_previous_one(
    client, household, owner, make_user, join_household
):
    member = make_user("member@example.com")
    join_household(owner, household["id"], member)

    response = client.post("/api/households", json={"name": "My Own Place"})

    assert response.status_code == 201
    assert client.get(f"/api/households/{household['id']}").status_code == 404
    listing = client.get("/api/households").json()
    assert listing["ownedHouseholdId"] == response.json()["id"]


def test_list_members_reports_roles(client, household, owner, make_user, join_household):
    join_household(owner, household["id"], make_user("member@example.com"))

    response = client.get(f"/api/households/{household['id']}/members")

    assert response.status_code == 200
    roles = {m["email"]: m["role"] for m in response.json()["data"]}
    assert roles == {"owner@example.com": "owner", "member@example.com": "member"}
