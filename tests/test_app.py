from cafe_pos.shared.database.models import Worker


def test_root_lists_endpoints(client):
    data = client.get("/").json()

    assert data["endpoints"]["ventas"] == "/api/v1/sales"


def test_health(client, settings):
    data = client.get("/health").json()

    assert data["status"] == "healthy"
    assert data["version"] == settings.version


def test_api_connectivity_check(client):
    data = client.get("/api/v1/test").json()

    assert data["success"] is True


def test_startup_seeds_system_worker(db, settings):
    worker = db.get(Worker, settings.default_worker_id)

    assert worker is not None
    assert worker.name == "Sistema"
    assert worker.is_active is True


def test_each_app_owns_its_engine(settings, tmp_path):
    from cafe_pos.main import create_app

    other = create_app(settings.model_copy(update={"database_url": f"sqlite:///{tmp_path / 'other.db'}"}))
    first = create_app(settings)

    assert other.state.engine is not first.state.engine
    other.state.engine.dispose()
    first.state.engine.dispose()


def test_cors_allows_only_configured_origins(settings):
    from fastapi.testclient import TestClient
    from cafe_pos.main import create_app

    app = create_app(settings.model_copy(update={"cors_origins": ["http://caja.local"]}))

    with TestClient(app) as client:
        allowed = client.get("/health", headers={"Origin": "http://caja.local"})
        other = client.get("/health", headers={"Origin": "http://otro.example"})

    assert allowed.headers["access-control-allow-origin"] == "http://caja.local"
    assert "access-control-allow-origin" not in other.headers


def test_default_cors_allows_any_origin(client, settings):
    response = client.get("/health", headers={"Origin": "http://caja.local"})

    assert settings.cors_origins == ["*"]
    assert response.headers["access-control-allow-origin"] == "*"


def test_responses_carry_process_time(client):
    response = client.get("/health")

    assert float(response.headers["x-process-time-ms"]) >= 0
