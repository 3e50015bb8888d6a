PREFIX = "/api/v1/link-guardian-child"
AP_PREFIX = "/api/v1/link-authorized-person-child"


def assert_problem(response, status, error_type, detail):
    assert response.status_code == status
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["type"] == error_type
    assert body["status"] == status
    assert body["detail"] == detail
    return body


def test_root_is_alive(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()


def test_create_link_and_check_existence(client, alice, bob):
    response = client.post(PREFIX, json={"guardian_id": bob.id, "child_id": alice.id, "relationship": "Parent"})

    assert response.status_code == 200
    assert response.json() == {"guardian_id": bob.id, "child_id": alice.id, "relationship": "Parent"}
    assert client.get(f"{PREFIX}/guardian/{bob.id}/child/{alice.id}").json() is True
    assert client.get(f"{PREFIX}/guardian/{alice.id + 1}/child/{alice.id}").json() is False


def test_create_duplicate_link_conflicts(client, alice, bob):
    payload = {"guardian_id": bob.id, "child_id": alice.id, "relationship": "Parent"}
    client.post(PREFIX, json=payload)

    response = client.post(PREFIX, json=payload)

    body = assert_problem(response, 409, "ConflictError", "Ce lien existe déjà entre ce responsable et cet enfant.")
    assert body["title"] == "Conflit détecté"
    assert body["instance"] == f"POST {PREFIX}"


def test_list_for_unknown_child(client):
    response = client.get(f"{PREFIX}/child/999")

    body = assert_problem(response, 404, "NotFoundError", "L'enfant spécifié n'existe pas.")
    assert body["title"] == "Ressource introuvable"
    assert body["instance"] == f"GET {PREFIX}/child/999"


def test_list_by_child_and_by_guardian(client, alice, bob):
    assert client.get(f"{PREFIX}/child/{alice.id}").json() == []
    client.post(PREFIX, json={"guardian_id": bob.id, "child_id": alice.id, "relationship": "Mère"})

    by_child = client.get(f"{PREFIX}/child/{alice.id}")
    by_guardian = client.get(f"{PREFIX}/guardian/{bob.id}")

    assert by_child.status_code == 200
    assert by_child.json() == [{"guardian_id": bob.id, "child_id": alice.id, "relationship": "Mère"}]
    assert by_guardian.json() == by_child.json()


def test_update_link(client, alice, bob):
    client.post(PREFIX, json={"guardian_id": bob.id, "child_id": alice.id, "relationship": "Parent"})

    response = client.put(PREFIX, json={"guardian_id": bob.id, "child_id": alice.id, "relationship": "Père"})

    assert response.status_code == 204
    assert client.get(f"{PREFIX}/child/{alice.id}").json()[0]["relationship"] == "Père"


def test_update_missing_link(client, alice, bob):
    response = client.put(PREFIX, json={"guardian_id": bob.id, "child_id": alice.id, "relationship": "Père"})

    assert_problem(response, 404, "NotFoundError", "Aucun lien Responsable / Enfant trouvé à mettre à jour.")


def test_delete_link(client, alice, bob):
    client.post(PREFIX, json={"guardian_id": bob.id, "child_id": alice.id})

    response = client.delete(f"{PREFIX}/guardian/{bob.id}/child/{alice.id}")

    assert response.status_code == 204
    assert client.get(f"{PREFIX}/guardian/{bob.id}/child/{alice.id}").json() is False
    again = client.delete(f"{PREFIX}/guardian/{bob.id}/child/{alice.id}")
    assert_problem(again, 404, "NotFoundError", "Aucun lien Responsable / Enfant trouvé à supprimer.")


def test_create_link_rejects_invalid_body(client):
    response = client.post(PREFIX, json={"guardian_id": "x", "child_id": 1})
    assert response.status_code == 422


def test_authorized_person_link_unknown_endpoints(client, carol):
    response = client.post(AP_PREFIX, json={"authorized_person_id": 999, "child_id": 999})
    assert_problem(response, 404, "NotFoundError", "La personne autorisée spécifiée n'existe pas.")

    response = client.post(AP_PREFIX, json={"authorized_person_id": carol.id, "child_id": 999})
    assert_problem(response, 404, "NotFoundError", "L'enfant spécifié n'existe pas.")


def test_authorized_person_link_lifecycle(client, alice, carol):
    created = client.post(AP_PREFIX, json={
        "authorized_person_id": carol.id, "child_id": alice.id, "relationship": "Tante",
    })
    assert created.status_code == 200
    assert created.json()["emergency_contact"] is False

    updated = client.put(AP_PREFIX, json={
        "authorized_person_id": carol.id, "child_id": alice.id,
        "relationship": "Tante", "emergency_contact": True, "comment": "Clé du portail",
    })
    assert updated.status_code == 204

    links = client.get(f"{AP_PREFIX}/authorized-person/{carol.id}").json()
    assert links == [{
        "authorized_person_id": carol.id, "child_id": alice.id,
        "relationship": "Tante", "emergency_contact": True, "comment": "Clé du portail",
    }]
    assert client.get(f"{AP_PREFIX}/authorized-person/{carol.id}/child/{alice.id}").json() is True

    assert client.delete(f"{AP_PREFIX}/authorized-person/{carol.id}/child/{alice.id}").status_code == 204
    assert client.get(f"{AP_PREFIX}/child/{alice.id}").json() == []


def test_unhandled_error_is_problem(client, store, alice, bob):
    async def broken(*args):
        raise RuntimeError("connection lost")

    store.guardian_child_repo.list_by_left = broken

    response = client.get(f"{PREFIX}/child/{alice.id}")

    body = assert_problem(response, 500, "RuntimeError", "connection lost")
    assert body["title"] == "Erreur interne du serveur"
