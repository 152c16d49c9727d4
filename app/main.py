from __future__ import annotations

from fastapi import FastAPI


def create_app() -> FastAPI:
    app = FastAPI(title="FlightQuery API", version="0.1.0")

    @app.get("/healthz")
    def healthz() -> dict:
        return {"status": "ok"}

    from app.routes import flights, history, query  # noqa: WPS433

    app.include_router(query.router)
    app.include_router(flights.router)
    app.include_router(history.router)
    return app


app = create_app()
