from models.analytics import AnalyticsEvent
from models.grade_sessions import GradeSession


def test_health(client):
    for path in ("/health", "/api/health"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.json()["status"] == "OK"
        assert "X-Latency-Ms" in resp.headers

    resp = client.get("/health", headers={"X-Request-Id": "req-1"})
    assert resp.headers["X-Request-Id"] == "req-1"


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == {"code": "NOT_FOUND", "message": "Route not found"}


# ==========================================================
# 커리큘럼 조회
# ==========================================================
def test_list_levels(client):
    resp = client.get("/api/curriculum/levels")
    assert resp.status_code == 200
    levels = resp.json()["data"]
    assert levels[0]["level_id"] == "test_level"
    assert [t["track_id"] for t in levels[0]["tracks"]] == ["sci", "lit"]


def test_read_track(client):
    resp = client.get("/api/curriculum/levels/test_level/tracks/sci")
    data = resp.json()["data"]
    assert data["subjects"] == [
        {"name": "math", "coefficient": 3},
        {"name": "physics", "coefficient": 2},
        {"name": "french", "coefficient": 1},
    ]
    assert data["total_coefficient"] == 6


def test_unknown_track_is_404(client):
    resp = client.get("/api/curriculum/levels/test_level/tracks/nope")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "UNKNOWN_TRACK"

    resp = client.get("/api/curriculum/levels/nope/tracks")
    assert resp.status_code == 404


def test_exam_types(client):
    resp = client.get("/api/curriculum/exam-types")
    assert [e["exam_type_id"] for e in resp.json()["data"]] == ["national"]


# ==========================================================
# 미리보기 (저장 없음)
# ==========================================================
def test_preview(client):
    resp = client.post("/api/grades/preview", json={
        "level": "test_level", "track": "sci",
        "grades": {"math": 12, "physics": "9", "french": "15", "music": 20, "bad": 25},
    })
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["average"] == 11.5
    assert data["status"] == "pass"
    assert data["status_label"] == "ناجح"
    assert data["total_subjects"] == 3
    assert data["weak_subjects"] == [{"subject": "physics", "grade": 9.0, "coefficient": 2}]


def test_preview_drops_huge_integer_grade(client):
    resp = client.post("/api/grades/preview", json={
        "level": "test_level", "track": "sci",
        "grades": {"math": 12, "physics": 10**400},
    })
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["average"] == 12
    assert data["total_subjects"] == 1


def test_preview_without_grades_is_zero(client):
    resp = client.post("/api/grades/preview", json={"level": "test_level", "track": "sci", "grades": {}})
    data = resp.json()["data"]
    assert data["average"] == 0
    assert data["status"] == "fail"


def test_preview_requires_grades_object(client):
    resp = client.post("/api/grades/preview", json={"level": "test_level", "track": "sci", "grades": [1, 2]})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_preview_unknown_track(client):
    resp = client.post("/api/grades/preview", json={"level": "test_level", "track": "x", "grades": {}})
    assert resp.status_code == 404


# ==========================================================
# 세션 / 저장 / 결과
# ==========================================================
def test_init_session(client, db_session):
    resp = client.post("/api/session/init", json={"level": "test_level", "track": "sci", "exam_type": "national"},
                       headers={"User-Agent": "pytest-agent"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["session_id"]
    assert data["total_coefficient"] == 6
    assert [s["name"] for s in data["subjects"]] == ["math", "physics", "french"]

    record = db_session.query(GradeSession).filter_by(session_id=data["session_id"]).one()
    assert record.exam_type == "national"
    assert record.user_agent == "pytest-agent"
    assert db_session.query(AnalyticsEvent).filter_by(event="session_created").count() == 1


def test_init_session_rejects_unknown_values(client):
    assert client.post("/api/session/init", json={"level": "x", "track": "sci"}).status_code == 404
    resp = client.post("/api/session/init", json={"level": "test_level", "track": "sci", "exam_type": "weekly"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "UNKNOWN_EXAM_TYPE"


def test_save_requires_session_id(client):
    resp = client.post("/api/grades/save", json={"level": "test_level", "track": "sci", "grades": {}})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "SESSION_REQUIRED"


def test_save_rejects_overlong_session_id(client, db_session):
    body = {"level": "test_level", "track": "sci", "grades": {"math": 12}}
    resp = client.post("/api/grades/save", json=body, headers={"X-Session-Id": "s" * 65})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_SESSION_ID"

    resp = client.post("/api/grades/save", json={**body, "session_id": "s" * 65})
    assert resp.status_code == 400
    assert db_session.query(GradeSession).count() == 0

    assert client.post("/api/grades/save", json=body, headers={"X-Session-Id": "s" * 64}).status_code == 200


def test_save_and_read_results(client, session_id, db_session):
    resp = client.post(
        "/api/grades/save",
        json={"level": "test_level", "track": "sci", "grades": {"math": 12, "physics": 9, "french": 40}},
        headers={"X-Session-Id": session_id},
    )
    assert resp.status_code == 200
    # french(40) 제외 → (36 + 18) / 5 = 10.8
    assert resp.json()["data"] == {"average": 10.8, "status": "pass", "total_subjects": 2}

    record = db_session.query(GradeSession).filter_by(session_id=session_id).one()
    assert record.grades == {"math": 12.0, "physics": 9.0}
    assert record.average == 10.8

    resp = client.get(f"/api/results/{session_id}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["average"] == 10.8
    assert data["status"] == "pass"
    assert data["level"] == "مستوى تجريبي"
    assert data["grades"] == {"math": 12.0, "physics": 9.0}
    assert data["weak_subjects"] == [{"subject": "physics", "grade": 9.0, "coefficient": 2}]
    assert data["total_subjects"] == 2
    assert data["last_updated"]


def test_save_with_body_session_id_upserts(client, db_session):
    resp = client.post("/api/grades/save", json={
        "session_id": "fresh-session", "level": "test_level", "track": "lit",
        "grades": {"arabic": 9.5, "history": 9.5},
    })
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "conditional"
    record = db_session.query(GradeSession).filter_by(session_id="fresh-session").one()
    assert record.track == "lit"


def test_results_conditional_and_fail(client, session_id):
    headers = {"X-Session-Id": session_id}
    client.post("/api/grades/save", headers=headers,
                json={"level": "test_level", "track": "sci", "grades": {"math": 9, "physics": 10, "french": 11}})
    # (27 + 20 + 11) / 6 = 9.666.. → 9.67
    data = client.get(f"/api/results/{session_id}").json()["data"]
    assert data["average"] == 9.67
    assert data["status"] == "conditional"
    assert data["status_label"] == "مقبول بشروط"

    client.post("/api/grades/save", headers=headers,
                json={"level": "test_level", "track": "sci", "grades": {"math": 5}})
    data = client.get(f"/api/results/{session_id}").json()["data"]
    assert data["status"] == "fail"
    assert data["status_label"] == "راسب"


def test_results_unknown_session(client):
    resp = client.get("/api/results/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "SESSION_NOT_FOUND"
