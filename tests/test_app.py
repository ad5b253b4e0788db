from sortviz import app as app_module
from sortviz.app import app, SESSIONS
from sortviz.engine import RecordingSink


class TagFailingSink(RecordingSink):
    def tag(self, positions, state):
        raise ConnectionError("renderer went away")


def current_session(client):
    with client.session_transaction() as sess:
        return SESSIONS[sess["sid"]]


def test_index_renders_bars_and_controls(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert 'id="bar-0"' in body
    assert 'id="bar-49"' in body
    assert 'id="algorithm-select"' in body
    assert "Ready to sort" in body


def test_state_is_per_browser(client):
    state = client.get("/api/state").get_json()
    assert state["size"] == 50
    assert state["algorithm"] == "bubble"
    assert state["speed"] == "medium"
    assert state["busy"] is False
    assert len(SESSIONS) == 1
    assert client.get("/api/state").get_json()["values"] == state["values"]


def test_generate_array(client):
    res = client.post("/api/array/generate", json={"size": 10, "seed": 1})
    assert res.status_code == 200
    data = res.get_json()
    assert data["size"] == 10
    assert len(data["values"]) == 10
    assert all(10 <= v <= 359 for v in data["values"])
    assert 'id="bar-9"' in data["svg"]
    assert data["status"] == "Ready to sort"


def test_generate_array_rejects_bad_sizes(client):
    for size in (0, 500, "ten", True):
        res = client.post("/api/array/generate", json={"size": size})
        assert res.status_code == 400
        assert "error" in res.get_json()
    assert client.get("/api/state").get_json()["size"] == 50


def test_select_algorithm(client):
    res = client.post("/api/config/algo", json={"algo_key": "quick"})
    assert res.status_code == 200
    assert res.get_json()["algo_key"] == "quick"
    assert "Quick Sort" in res.get_json()["info"]

    res = client.post("/api/config/algo", json={"algo_key": "bogo"})
    assert res.status_code == 400
    assert client.get("/api/state").get_json()["algorithm"] == "quick"


def test_change_speed(client):
    res = client.post("/api/config/speed", json={"speed": "fast"})
    assert res.get_json() == {"speed": "fast", "delay_ms": 50.0}

    res = client.post("/api/config/speed", json={"delay_ms": 75})
    assert res.get_json() == {"speed": None, "delay_ms": 75.0}

    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400
    assert client.post("/api/config/speed", json={"delay_ms": -1}).status_code == 400


def test_sort_returns_trace_and_metrics(client):
    client.post("/api/array/generate", json={"size": 12, "seed": 4})
    client.post("/api/config/algo", json={"algo_key": "merge"})

    res = client.post("/api/sort")
    assert res.status_code == 200
    data = res.get_json()

    assert data["completed"] is True
    assert data["status"] == "Sorting completed!"
    assert data["values"] == sorted(data["initial"])
    assert data["delay_ms"] == 100.0
    assert data["metrics"]["algo_key"] == "merge"
    assert data["metrics"]["size"] == 12
    assert {e["kind"] for e in data["events"]} == {"tag", "value", "sleep"}
    assert data["events"][-2:] == [
        {"kind": "tag", "positions": [11], "state": "sorted"},
        {"kind": "sleep", "duration_ms": 50.0},
    ]

    state = client.get("/api/state").get_json()
    assert state["status"] == "Sorting completed!"
    assert state["values"] == data["values"]


def test_regenerate_after_sort_resets_status(client):
    client.post("/api/array/generate", json={"size": 5})
    client.post("/api/sort")
    data = client.post("/api/array/generate", json={}).get_json()
    assert data["size"] == 5
    assert data["status"] == "Ready to sort"


def test_busy_session_returns_conflict(client):
    client.get("/")
    sort_session = current_session(client)
    sort_session.guard._lock.acquire()
    try:
        assert client.post("/api/array/generate", json={"size": 10}).status_code == 409
        assert client.post("/api/config/algo", json={"algo_key": "merge"}).status_code == 409
        assert client.post("/api/sort").status_code == 409
        assert client.post("/api/config/speed", json={"speed": "slow"}).status_code == 200
        assert client.get("/api/state").get_json()["busy"] is True
    finally:
        sort_session.guard._lock.release()
    assert sort_session.size == 50
    assert sort_session.algorithm == "bubble"


def test_index_locks_controls_while_busy(client):
    client.get("/")
    sort_session = current_session(client)
    assert '<select id="algorithm-select" >' in client.get("/").get_data(as_text=True)

    sort_session.guard._lock.acquire()
    try:
        body = client.get("/").get_data(as_text=True)
    finally:
        sort_session.guard._lock.release()
    assert '<select id="algorithm-select" disabled>' in body
    assert 'id="generate-array" class="btn-secondary" disabled>' in body
    assert 'id="array-size" min="1" max="100" value="50" disabled>' in body


def test_index_after_completed_sort_shows_sorted_bars(client):
    client.post("/api/array/generate", json={"size": 6, "seed": 2})
    assert 'data-state="sorted"' not in client.get("/").get_data(as_text=True)

    client.post("/api/sort")
    body = client.get("/").get_data(as_text=True)
    assert body.count('data-state="sorted"') == 6


def test_sort_interrupted_by_renderer(client, monkeypatch):
    client.post("/api/array/generate", json={"size": 8, "seed": 3})
    assert client.post("/api/sort").get_json()["completed"] is True

    # a second run after a completed one must not report the old metrics
    monkeypatch.setattr(app_module, "RecordingSink", TagFailingSink)
    res = client.post("/api/sort")
    assert res.status_code == 200
    data = res.get_json()
    assert data["completed"] is False
    assert data["status"] == "Sorting interrupted"
    assert data["metrics"] is None
    assert "Sort the array to see metrics" in data["metrics_html"]
    assert data["values"] == data["initial"]

    state = client.get("/api/state").get_json()
    assert state["status"] == "Sorting interrupted"
    assert state["metrics"] is None
    assert state["busy"] is False


def test_zero_delay_sort_keeps_wait_ratios(client):
    client.post("/api/array/generate", json={"size": 4, "seed": 7})
    client.post("/api/config/algo", json={"algo_key": "selection"})
    client.post("/api/config/speed", json={"delay_ms": 0})

    data = client.post("/api/sort").get_json()
    sleeps = [e["duration_ms"] for e in data["events"] if e["kind"] == "sleep"]

    assert data["completed"] is True
    assert data["delay_ms"] == 100.0
    assert set(sleeps) == {100.0, 50.0}
    assert data["metrics"]["animation_ms"] == 0.0
    assert client.get("/api/state").get_json()["delay_ms"] == 0.0


def test_cookieless_clients_do_not_grow_sessions_unbounded(client, monkeypatch):
    monkeypatch.setattr(app_module, "MAX_SESSIONS", 5)
    for _ in range(30):
        app.test_client().get("/api/state")
    assert len(SESSIONS) == 5


def test_recently_used_session_survives_eviction(client, monkeypatch):
    monkeypatch.setattr(app_module, "MAX_SESSIONS", 3)
    client.post("/api/array/generate", json={"size": 7})
    for _ in range(10):
        app.test_client().get("/api/state")
        client.get("/api/state")
    assert client.get("/api/state").get_json()["size"] == 7
    assert len(SESSIONS) == 3


def test_busy_sessions_are_not_evicted(client, monkeypatch):
    monkeypatch.setattr(app_module, "MAX_SESSIONS", 2)
    client.get("/")
    sort_session = current_session(client)
    sort_session.guard._lock.acquire()
    try:
        for _ in range(5):
            app.test_client().get("/api/state")
        assert sort_session in SESSIONS.values()
    finally:
        sort_session.guard._lock.release()
