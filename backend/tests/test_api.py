def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "OK", "message": "Server is running"}


# ============== Auth ==============

def test_signup_signin_and_me(client, signup):
    user_id, headers = signup("Asha", "asha@example.com")

    r = client.get("/api/auth/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == user_id
    assert r.json()["email"] == "asha@example.com"

    r = client.post("/api/auth/signin", json={"email": "ASHA@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["token_type"] == "bearer"

    r = client.post("/api/auth/signin", json={"email": "asha@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


def test_duplicate_signup_conflicts(client, signup):
    signup("Asha", "asha@example.com")
    r = client.post(
        "/api/auth/signup",
        json={"name": "Again", "email": "asha@example.com", "password": "secret123"},
    )
    assert r.status_code == 409


def test_legacy_token_header_is_accepted(client, signup):
    _, headers = signup("Asha", "asha@example.com")
    token = headers["Authorization"].split(" ", 1)[1]

    r = client.get("/api/auth/me", headers={"x-auth-token": token})
    assert r.status_code == 200


def test_protected_routes_require_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/steps/today").status_code == 401
    r = client.get("/api/workouts", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401


def test_google_signin(client):
    r = client.post("/api/auth/google", json={"email": "fed@example.com", "name": "Fed", "idToken": "g-1"})
    assert r.status_code == 200
    first_id = r.json()["user"]["id"]

    r = client.post("/api/auth/google", json={"email": "fed@example.com", "idToken": "g-2"})
    assert r.json()["user"]["id"] == first_id


# ============== Steps ==============

def test_steps_never_decrease(client, signup):
    _, headers = signup("Asha", "asha@example.com")

    r = client.post("/api/steps", json={"steps": 500, "date": "2024-01-10"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["steps"] == 500

    r = client.post("/api/steps", json={"steps": 300, "date": "2024-01-10", "source": "Watch"}, headers=headers)
    assert r.json()["steps"] == 500
    assert r.json()["source"] == "Watch"

    r = client.get("/api/steps/history", params={"startDate": "2024-01-10", "endDate": "2024-01-10"}, headers=headers)
    assert r.status_code == 200
    assert [d["steps"] for d in r.json()] == [500]


def test_negative_steps_rejected(client, signup):
    _, headers = signup("Asha", "asha@example.com")
    r = client.post("/api/steps", json={"steps": -1}, headers=headers)
    assert r.status_code == 400
    assert r.json()["field"] == "steps"


def test_today_and_summary(client, signup):
    _, headers = signup("Asha", "asha@example.com")

    r = client.get("/api/steps/today", headers=headers)
    assert r.status_code == 200
    assert r.json()["steps"] == 0
    assert r.json()["id"] is None

    client.post("/api/steps", json={"steps": 4200}, headers=headers)
    assert client.get("/api/steps/today", headers=headers).json()["steps"] == 4200

    summary = client.get("/api/steps/summary", params={"days": 7}, headers=headers).json()
    assert summary["total_steps"] == 4200
    assert summary["days_recorded"] == 1


# ============== Workouts ==============

def test_log_and_list_workouts(client, signup):
    _, headers = signup("Asha", "asha@example.com")
    body = {
        "workout_type": "Running",
        "start_time": "2024-01-10T06:30:00Z",
        "duration_seconds": 1799.6,
        "calories": 300,
        "met": 9.8,
    }
    r = client.post("/api/workouts", json=body, headers=headers)
    assert r.status_code == 201
    assert r.json()["duration_seconds"] == 1800

    r = client.get("/api/workouts", headers=headers)
    assert [w["workout_type"] for w in r.json()] == ["Running"]


def test_bad_workout_names_field(client, signup):
    _, headers = signup("Asha", "asha@example.com")
    body = {
        "workout_type": "Running",
        "start_time": "2024-01-10T06:30:00Z",
        "duration_seconds": 600,
        "calories": -5,
    }
    r = client.post("/api/workouts", json=body, headers=headers)
    assert r.status_code == 400
    assert r.json()["field"] == "calories"


# ============== Communities ==============

def test_private_community_flow(client, signup):
    asha_id, asha = signup("Asha", "asha@example.com")
    ben_id, ben = signup("Ben", "ben@example.com")
    _, cy = signup("Cy", "cy@example.com")

    r = client.post("/api/community/create", json={"name": "Runners", "is_public": False}, headers=asha)
    assert r.status_code == 201
    community = r.json()
    code = community["join_code"]
    assert len(code) == 6
    assert community["is_owner"] is True

    r = client.post("/api/community/join-with-code", json={"join_code": code.lower()}, headers=ben)
    assert r.status_code == 200
    assert r.json()["join_code"] is None
    assert r.json()["member_count"] == 2

    r = client.post("/api/community/messages", json={"community_id": community["id"], "message": "hello"}, headers=ben)
    assert r.status_code == 201
    assert r.json()["user_name"] == "Ben"

    r = client.get("/api/community/messages", params={"communityId": community["id"]}, headers=asha)
    assert r.status_code == 200
    assert r.json()[0]["message"] == "hello"

    r = client.get("/api/community/messages", params={"communityId": community["id"]}, headers=cy)
    assert r.status_code == 403

    r = client.post("/api/community/leave", json={"community_id": community["id"]}, headers=asha)
    assert r.status_code == 403

    r = client.post(
        "/api/community/transfer-owner",
        json={"community_id": community["id"], "new_owner_id": ben_id},
        headers=asha,
    )
    assert r.status_code == 200
    assert r.json()["success"] is True

    r = client.delete(f"/api/community/delete/{community['id']}", headers=asha)
    assert r.status_code == 403

    r = client.delete(f"/api/community/delete/{community['id']}", headers=ben)
    assert r.status_code == 200

    r = client.get("/api/community/messages", params={"communityId": community["id"]}, headers=ben)
    assert r.status_code == 404
    assert client.get("/api/community/my-communities", headers=asha).json() == []
    assert asha_id != ben_id


def test_public_community_listing_and_join(client, signup):
    _, asha = signup("Asha", "asha@example.com")
    _, ben = signup("Ben", "ben@example.com")

    public = client.post("/api/community/create", json={"name": "Walkers"}, headers=asha).json()
    private = client.post("/api/community/create", json={"name": "Secret", "is_public": False}, headers=asha).json()

    listed = client.get("/api/community/list", headers=ben).json()
    assert [c["id"] for c in listed] == [public["id"]]

    r = client.post(f"/api/community/{private['id']}/join", headers=ben)
    assert r.status_code == 403

    r = client.post(f"/api/community/{public['id']}/join", headers=ben)
    assert r.status_code == 200
    assert r.json()["is_member"] is True

    mine = client.get("/api/community/my-communities", headers=ben).json()
    assert [c["id"] for c in mine] == [public["id"]]

    r = client.post("/api/community/join-with-code", json={"join_code": "NOPE22"}, headers=ben)
    assert r.status_code == 404


def test_community_bodies_accept_client_field_names(client, signup):
    _, asha = signup("Asha", "asha@example.com")
    ben_id, ben = signup("Ben", "ben@example.com")

    r = client.post("/api/community/create", json={"name": "Runners", "isPublic": False}, headers=asha)
    assert r.status_code == 201
    community = r.json()
    assert community["is_public"] is False
    assert len(community["join_code"]) == 6
    assert client.get("/api/community/list", headers=ben).json() == []

    r = client.post("/api/community/join-with-code", json={"joinCode": community["join_code"]}, headers=ben)
    assert r.status_code == 200

    r = client.post("/api/community/messages", json={"communityId": community["id"], "message": "hi"}, headers=ben)
    assert r.status_code == 201

    r = client.post(
        "/api/community/transfer-owner",
        json={"communityId": community["id"], "newOwnerId": ben_id},
        headers=asha,
    )
    assert r.status_code == 200

    r = client.post("/api/community/leave", json={"communityId": community["id"]}, headers=asha)
    assert r.status_code == 200
    assert client.get("/api/community/my-communities", headers=asha).json() == []
