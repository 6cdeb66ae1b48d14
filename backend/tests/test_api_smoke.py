from fastapi.testclient import TestClient

from reflection.core.config import Settings
from reflection.main import create_app

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


def get_client():
    # Use in-memory sqlite for tests
    app = create_app(Settings(database_url="sqlite+pysqlite:///:memory:"))
    return TestClient(app)


def add_goal(client, title, year=2024, headers=ALICE):
    r = client.post("/goals/", json={"title": title, "year": year}, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_root_ok():
    client = get_client()
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()


def test_requires_user_header():
    client = get_client()
    r = client.get("/goals/", params={"year": 2024})
    assert r.status_code == 422


def test_goal_and_check_in_flow():
    client = get_client()
    goal = add_goal(client, "Run a marathon")
    assert goal["order"] == 1

    lr = client.get("/goals/", params={"year": 2024}, headers=ALICE)
    assert [g["title"] for g in lr.json()] == ["Run a marathon"]

    path = f"/check-ins/{goal['id']}/2024/10"
    ur = client.put(path, json={"reflection": "good progress", "progress_rating": 4}, headers=ALICE)
    assert ur.status_code == 200, ur.text
    assert ur.json()["progress_rating"] == 4

    wr = client.get("/check-ins/week", params={"year": 2024, "week": 10}, headers=ALICE)
    week = wr.json()
    assert week["completion_percent"] == 100
    assert week["week_range"] == "Mar 4 – Mar 10, 2024"
    assert week["reflection_prompt"].startswith("What happened this week")
    assert week["rating_labels"]["4"] == "Doing well"
    assert len(week["rating_labels"]) == 5

    assert client.delete(path, headers=ALICE).json() == {"ok": True, "deleted": True}
    gr = client.get(path, headers=ALICE)
    assert gr.status_code == 404
    assert gr.json()["code"] == "not_found"


def test_validation_errors_map_to_422():
    client = get_client()
    r = client.post("/goals/", json={"title": "  ", "year": 2024}, headers=ALICE)
    assert r.status_code == 422
    assert r.json()["code"] == "validation_error"

    goal = add_goal(client, "Goal")
    r = client.put(f"/check-ins/{goal['id']}/2024/60", json={"reflection": "x"}, headers=ALICE)
    assert r.status_code == 422


def test_years_outside_calendar_range_map_to_422():
    client = get_client()
    for year in (0, 9999):
        r = client.get("/check-ins/week", params={"year": year, "week": 1}, headers=ALICE)
        assert r.status_code == 422
        r = client.get("/goals/", params={"year": year}, headers=ALICE)
        assert r.status_code == 422
        r = client.post("/goals/", json={"title": "Far off", "year": year}, headers=ALICE)
        assert r.status_code == 422

    goal = add_goal(client, "Goal")
    r = client.put(f"/check-ins/{goal['id']}/0/1", json={"reflection": "x"}, headers=ALICE)
    assert r.status_code == 422
    r = client.put(f"/check-ins/{goal['id']}/9999/1", json={"reflection": "x"}, headers=ALICE)
    assert r.status_code == 422


def test_other_users_goal_is_hidden():
    client = get_client()
    goal = add_goal(client, "Private")
    r = client.patch(f"/goals/{goal['id']}", json={"title": "hacked"}, headers=BOB)
    assert r.status_code == 404
    r = client.put(f"/check-ins/{goal['id']}/2024/1", json={"reflection": "x"}, headers=BOB)
    assert r.status_code == 404


def test_reorder_and_delete():
    client = get_client()
    a = add_goal(client, "A")
    b = add_goal(client, "B")
    c = add_goal(client, "C")

    r = client.put("/goals/order", json={"goal_ids": [c["id"], a["id"], b["id"]]}, headers=ALICE)
    assert r.status_code == 200, r.text
    assert [(g["title"], g["order"]) for g in r.json()] == [("C", 0), ("A", 1), ("B", 2)]

    r = client.put("/goals/order", json={"goal_ids": [a["id"]]}, headers=ALICE)
    assert r.status_code == 422

    client.put(f"/check-ins/{a['id']}/2024/2", json={"reflection": "x"}, headers=ALICE)
    r = client.delete(f"/goals/{a['id']}", headers=ALICE)
    assert r.json() == {"ok": True, "deleted_check_ins": 1}
    assert client.get("/check-ins/", headers=ALICE).json() == []


def test_sharing_flow():
    client = get_client()
    client.post("/profiles/", json={"uid": "alice", "email": "alice@example.com", "display_name": "Alice"})
    client.post("/profiles/", json={"uid": "bob", "email": "Bob@Example.com", "display_name": "Bob"})
    goal = add_goal(client, "Shared goal")
    client.put(f"/check-ins/{goal['id']}/2024/5", json={"reflection": "week five", "progress_rating": 3}, headers=ALICE)

    r = client.post("/shares/", json={"goal_id": goal["id"], "recipient_email": "bob@example.com"}, headers=ALICE)
    result = r.json()
    assert result["success"] is True
    assert result["share"]["owner_name"] == "Alice"

    again = client.post("/shares/", json={"goal_id": goal["id"], "recipient_email": "bob@example.com"}, headers=ALICE)
    assert again.json()["error_code"] == "conflict"

    me = client.post("/shares/", json={"goal_id": goal["id"], "recipient_email": "alice@example.com"}, headers=ALICE)
    assert me.json()["error_code"] == "validation_error"

    received = client.get("/shares/received", headers=BOB).json()
    assert [g["title"] for g in received] == ["Shared goal"]
    assert received[0]["owner_name"] == "Alice"

    cis = client.get(f"/shares/received/{goal['id']}/check-ins", headers=BOB).json()
    assert [c["reflection"] for c in cis] == ["week five"]
    assert client.get(f"/shares/received/{goal['id']}/check-ins", headers={"X-User-Id": "carol"}).status_code == 404

    share_id = result["share"]["id"]
    assert client.delete(f"/shares/{share_id}", headers=BOB).status_code == 404
    assert client.delete(f"/shares/{share_id}", headers=ALICE).status_code == 200
    assert client.get(f"/shares/goal/{goal['id']}", headers=ALICE).json() == []


def test_profile_lookup():
    client = get_client()
    client.post("/profiles/", json={"uid": "alice", "email": "alice@example.com"})
    assert client.get("/profiles/lookup", params={"email": "ALICE@example.com"}).json()["uid"] == "alice"
    assert client.get("/profiles/lookup", params={"email": "x@example.com"}).status_code == 404
    dup = client.post("/profiles/", json={"uid": "alice", "email": "alice@example.com"})
    assert dup.status_code == 409


def test_calendar_and_overview():
    client = get_client()
    cal = client.get("/calendar/2025").json()
    assert cal["current_week"] >= 1
    assert cal["current_year"] >= 2025
    assert cal["weeks_in_year"] == 52
    assert cal["weeks"][0]["range_tiny"] == "12/30-1/5"
    assert cal["weeks"][0]["start"] == "2024-12-30"
    assert sum(s["week_count"] for s in cal["month_spans"]) == 52

    goal = add_goal(client, "Goal", year=2025)
    client.put(f"/check-ins/{goal['id']}/2025/3", json={"reflection": "", "progress_rating": 5}, headers=ALICE)
    ov = client.get("/calendar/2025/overview", headers=ALICE).json()
    row = ov["goals"][0]
    assert row["average_rating"] == 5.0
    assert row["weeks"][2] == {"week_number": 3, "checked_in": True, "has_reflection": False, "progress_rating": 5}
