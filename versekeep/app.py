from fastapi import FastAPI

from versekeep.database import SessionLocal
from versekeep.routers import annotations, progress, reading
from versekeep.services.container import Services
from versekeep.services.kv_store import SqlKeyValueStore


def create_app(services: Services | None = None) -> FastAPI:
    app = FastAPI(title="Versekeep", version="0.1.0")
    app.state.services = services or Services(SqlKeyValueStore(SessionLocal))
    app.include_router(progress.router)
    app.include_router(reading.router)
    app.include_router(annotations.router)
    return app


app = create_app()
