from fastapi import APIRouter
from fastapi.testclient import TestClient

from common.config import ServiceConfig
from common.service import create_service_app


def _config(database_url: str) -> ServiceConfig:
    return ServiceConfig(
        service_name="demo-api",
        port=5000,
        database_url=database_url,
        db_pool_size=2,
        table_name="demo",
        allowed_origins=["http://frontend.test"],
    )


def test_app_owns_client_for_its_lifetime(tmp_path):
    app = create_service_app(
        config=_config(f"sqlite:///{tmp_path / 'demo.db'}"),
        title="Demo",
        version="0.0.1",
        routers=[],
    )
    assert app.state.db is None

    with TestClient(app) as client:
        assert app.state.db is not None
        assert client.get("/db/health").json() == {"ok": True}

    assert app.state.db is None


def test_injected_client_is_left_open(broken_db):
    app = create_service_app(
        config=_config("sqlite://"), title="Demo", version="0.0.1", routers=[], db=broken_db
    )
    with TestClient(app):
        pass
    assert app.state.db is broken_db


def test_routers_and_cors_are_mounted(broken_db):
    router = APIRouter()

    @router.get("/ping")
    def ping():
        return {"pong": True}

    app = create_service_app(
        config=_config("sqlite://"), title="Demo", version="0.0.1", routers=[router], db=broken_db
    )
    with TestClient(app) as client:
        resp = client.get("/ping", headers={"Origin": "http://frontend.test"})
        assert resp.json() == {"pong": True}
        assert resp.headers["access-control-allow-origin"] == "http://frontend.test"
        assert client.get("/health").json() == {"status": "ok", "service": "demo-api"}
