import pytest

DUE = "2030-06-01T09:00:00"


def headers(auth_data):
    return {"Authorization": f"Bearer {auth_data['token']}"}


def create(client, auth, title="Tâche", priority=1, description=None, due_date=DUE):
    payload = {"title": title, "dueDate": due_date, "priority": priority}
    if description is not None:
        payload["description"] = description
    response = client.post("/tasks", headers=headers(auth), json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def alice(make_user):
    return make_user("alice", "alice@x.com")


@pytest.fixture
def bob(make_user):
    return make_user("bob", "bob@x.com")


# ========== TEST CREATE TASK ==========
def test_create_task_success(client, alice):
    """Tester la création réussie d'une tâche"""
    response = client.post(
        "/tasks",
        headers=headers(alice),
        json={"title": "Ma première tâche", "description": "Détails", "dueDate": DUE, "priority": 2}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Task created successfully"
    data = body["data"]
    assert data["title"] == "Ma première tâche"
    assert data["description"] == "Détails"
    assert data["dueDate"] == DUE
    assert data["priority"] == 2
    assert data["status"] == 0
    assert data["createdAt"]
    assert data["updatedAt"] is None
    assert "userId" not in data


def test_create_task_ignores_client_status(client, alice):
    """Une nouvelle tâche est toujours Pending"""
    response = client.post(
        "/tasks",
        headers=headers(alice),
        json={"title": "T", "dueDate": DUE, "priority": 0, "status": 1}
    )
    assert response.status_code == 201
    assert response.json()["data"]["status"] == 0


@pytest.mark.parametrize("payload", [
    {"dueDate": DUE, "priority": 1},
    {"title": "", "dueDate": DUE, "priority": 1},
    {"title": "x" * 201, "dueDate": DUE, "priority": 1},
    {"title": "T", "priority": 1},
    {"title": "T", "dueDate": DUE},
    {"title": "T", "dueDate": DUE, "priority": 5},
    {"title": "T", "dueDate": DUE, "priority": 1, "description": "d" * 1001},
])
def test_create_task_validation(client, alice, payload):
    response = client.post("/tasks", headers=headers(alice), json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"]


def test_create_task_missing_token(client):
    """Tester la création sans token"""
    response = client.post("/tasks", json={"title": "T", "dueDate": DUE, "priority": 1})
    assert response.status_code == 401


def test_due_date_with_offset_stored_as_utc(client, alice):
    """Une date avec fuseau est convertie en UTC"""
    task = create(client, alice, due_date="2030-06-01T09:00:00+02:00")
    assert task["dueDate"] == "2030-06-01T07:00:00"

    response = client.put(f"/tasks/{task['id']}", headers=headers(alice), json={"dueDate": "2031-01-01T00:00:00-05:00"})
    assert response.json()["data"]["dueDate"] == "2031-01-01T05:00:00"


# ========== TEST GET / LIST ==========
def test_get_task_success(client, alice):
    task = create(client, alice, title="A lire")
    response = client.get(f"/tasks/{task['id']}", headers=headers(alice))
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "A lire"


def test_get_task_not_found(client, alice):
    response = client.get("/tasks/9999", headers=headers(alice))
    assert response.status_code == 404
    assert response.json()["message"] == "Task not found"


def test_list_tasks_empty(client, alice):
    """Tester la liste vide des tâches"""
    response = client.get("/tasks", headers=headers(alice))
    assert response.status_code == 200
    assert response.json()["data"] == []


def test_list_tasks_newest_first(client, alice):
    """Tester la liste des tâches, plus récente en premier"""
    for title in ["Tâche 1", "Tâche 2", "Tâche 3"]:
        create(client, alice, title=title)

    response = client.get("/tasks", headers=headers(alice))
    titles = [t["title"] for t in response.json()["data"]]
    assert titles == ["Tâche 3", "Tâche 2", "Tâche 1"]


# ========== TEST FILTER ==========
def test_filter_pagination_and_total(client, alice, bob):
    """status=Pending, priority=High, pageSize=1, page 2 => la 2e plus récente"""
    create(client, alice, title="High 1", priority=2)
    create(client, alice, title="High 2", priority=2)
    create(client, alice, title="Medium", priority=1)
    done = create(client, alice, title="High done", priority=2)
    create(client, alice, title="High 3", priority=2)
    client.put(f"/tasks/{done['id']}", headers=headers(alice), json={"status": 1})
    # les tâches de bob ne doivent pas compter
    create(client, bob, title="Bob high", priority=2)
    create(client, bob, title="Bob high 2", priority=2)

    response = client.get(
        "/tasks/filter?status=0&priority=2&pageSize=1&pageNumber=2",
        headers=headers(alice),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert [t["title"] for t in data["tasks"]] == ["High 2"]
    assert data["totalCount"] == 3
    assert data["pageNumber"] == 2
    assert data["pageSize"] == 1
    assert data["totalPages"] == 3


def test_filter_defaults(client, alice):
    for i in range(12):
        create(client, alice, title=f"T{i}")

    response = client.get("/tasks/filter", headers=headers(alice))
    data = response.json()["data"]
    assert len(data["tasks"]) == 10
    assert data["totalCount"] == 12
    assert data["pageNumber"] == 1
    assert data["pageSize"] == 10
    assert data["totalPages"] == 2


def test_filter_by_status_only(client, alice):
    """Tester le filtrage par statut"""
    t1 = create(client, alice, title="Done 1")
    create(client, alice, title="Todo")
    t2 = create(client, alice, title="Done 2")
    for task in (t1, t2):
        client.put(f"/tasks/{task['id']}", headers=headers(alice), json={"status": 1})

    response = client.get("/tasks/filter?status=1", headers=headers(alice))
    data = response.json()["data"]
    assert data["totalCount"] == 2
    assert all(t["status"] == 1 for t in data["tasks"])


def test_filter_by_priority_only(client, alice):
    """Tester le filtrage par priorité"""
    create(client, alice, title="Low", priority=0)
    create(client, alice, title="High 1", priority=2)
    create(client, alice, title="High 2", priority=2)

    response = client.get("/tasks/filter?priority=2", headers=headers(alice))
    data = response.json()["data"]
    assert data["totalCount"] == 2
    assert all(t["priority"] == 2 for t in data["tasks"])


def test_filter_empty_result(client, alice):
    response = client.get("/tasks/filter", headers=headers(alice))
    data = response.json()["data"]
    assert data["tasks"] == []
    assert data["totalCount"] == 0
    assert data["totalPages"] == 0


@pytest.mark.parametrize("query", ["pageNumber=0", "pageSize=0", "status=3", "priority=-1", "pageSize=abc"])
def test_filter_invalid_query(client, alice, query):
    response = client.get(f"/tasks/filter?{query}", headers=headers(alice))
    assert response.status_code == 400


def test_filter_huge_page_values_rejected(client, alice):
    response = client.get("/tasks/filter?pageNumber=100000000000&pageSize=100000000000", headers=headers(alice))
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_filter_largest_page_is_empty(client, alice):
    """Page très lointaine mais valide : liste vide, pas d'erreur"""
    create(client, alice)
    response = client.get(f"/tasks/filter?pageNumber={2**31}&pageSize={2**31}", headers=headers(alice))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["tasks"] == []
    assert data["totalCount"] == 1
    assert data["totalPages"] == 1


# ========== TEST UPDATE ==========
def test_update_status_only_keeps_other_fields(client, alice):
    """Seul le statut change, updatedAt est renseigné"""
    task = create(client, alice, title="Originale", description="Desc", priority=1)

    response = client.put(f"/tasks/{task['id']}", headers=headers(alice), json={"status": 1})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Task updated successfully"
    updated = body["data"]
    assert updated["status"] == 1
    assert updated["title"] == "Originale"
    assert updated["description"] == "Desc"
    assert updated["dueDate"] == task["dueDate"]
    assert updated["priority"] == 1
    assert updated["createdAt"] == task["createdAt"]
    assert updated["updatedAt"] is not None


def test_update_several_fields(client, alice):
    """Tester la modification d'une tâche"""
    task = create(client, alice, title="Tâche originale", priority=0)
    response = client.put(
        f"/tasks/{task['id']}",
        headers=headers(alice),
        json={"title": "Tâche modifiée", "priority": 2, "dueDate": "2031-01-01T00:00:00"}
    )
    data = response.json()["data"]
    assert data["title"] == "Tâche modifiée"
    assert data["priority"] == 2
    assert data["dueDate"] == "2031-01-01T00:00:00"


def test_update_can_clear_description(client, alice):
    task = create(client, alice, description="A effacer")
    response = client.put(f"/tasks/{task['id']}", headers=headers(alice), json={"description": None})
    assert response.json()["data"]["description"] is None


def test_update_status_back_to_pending(client, alice):
    task = create(client, alice)
    client.put(f"/tasks/{task['id']}", headers=headers(alice), json={"status": 1})
    response = client.put(f"/tasks/{task['id']}", headers=headers(alice), json={"status": 0})
    assert response.json()["data"]["status"] == 0


def test_update_empty_title_rejected(client, alice):
    task = create(client, alice)
    response = client.put(f"/tasks/{task['id']}", headers=headers(alice), json={"title": ""})
    assert response.status_code == 400


def test_update_not_found(client, alice):
    response = client.put("/tasks/9999", headers=headers(alice), json={"status": 1})
    assert response.status_code == 404


# ========== TEST DELETE ==========
def test_delete_twice(client, alice):
    """Première suppression OK, la seconde => 404"""
    task = create(client, alice, title="À supprimer")

    first = client.delete(f"/tasks/{task['id']}", headers=headers(alice))
    assert first.status_code == 200
    assert first.json()["message"] == "Task deleted successfully"

    second = client.delete(f"/tasks/{task['id']}", headers=headers(alice))
    assert second.status_code == 404

    list_response = client.get("/tasks", headers=headers(alice))
    assert list_response.json()["data"] == []


# ========== ISOLATION ENTRE UTILISATEURS ==========
def test_tasks_are_private(client, alice, bob):
    """Une tâche d'alice est invisible pour bob, quelle que soit l'opération"""
    task = create(client, alice, title="Privée", priority=2)
    url = f"/tasks/{task['id']}"

    assert client.get(url, headers=headers(bob)).status_code == 404
    assert client.get("/tasks", headers=headers(bob)).json()["data"] == []
    filtered = client.get("/tasks/filter?priority=2", headers=headers(bob)).json()["data"]
    assert filtered["tasks"] == []
    assert filtered["totalCount"] == 0
    assert client.put(url, headers=headers(bob), json={"title": "Hacked"}).status_code == 404
    assert client.delete(url, headers=headers(bob)).status_code == 404

    # même signal que pour une tâche inexistante
    assert client.get(url, headers=headers(bob)).json() == client.get("/tasks/9999", headers=headers(bob)).json()

    # toujours intacte et visible pour alice
    response = client.get(url, headers=headers(alice))
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Privée"
    assert len(client.get("/tasks", headers=headers(alice)).json()["data"]) == 1
    assert client.get("/tasks/filter?priority=2", headers=headers(alice)).json()["data"]["totalCount"] == 1


# ========== SCENARIO COMPLET ==========
def test_end_to_end_scenario(client):
    register = client.post("/auth/register", json={
        "username": "alice", "email": "alice@x.com", "password": "Secret1!"
    })
    assert register.status_code == 201

    login = client.post("/auth/login", json={"usernameOrEmail": "alice", "password": "Secret1!"})
    assert login.status_code == 200
    auth = {"Authorization": f"Bearer {login.json()['data']['token']}"}

    created = client.post("/tasks", headers=auth, json={"title": "T", "dueDate": DUE, "priority": 1})
    assert created.status_code == 201
    task_id = created.json()["data"]["id"]

    fetched = client.get(f"/tasks/{task_id}", headers=auth).json()["data"]
    assert fetched["status"] == 0

    updated = client.put(f"/tasks/{task_id}", headers=auth, json={"status": 1})
    assert updated.status_code == 200

    fetched = client.get(f"/tasks/{task_id}", headers=auth).json()["data"]
    assert fetched["status"] == 1
    assert fetched["updatedAt"] is not None

    assert client.delete(f"/tasks/{task_id}", headers=auth).status_code == 200
    assert client.get(f"/tasks/{task_id}", headers=auth).status_code == 404
