from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from lostfound_chat.infrastructure.db.session import AsyncSessionLocal

router = APIRouter(tags=["health"])

# Ready means the database answers and both tables the store reads exist.
_READINESS_QUERIES = {
    "postgres": "SELECT 1",
    "messages": "SELECT 1 FROM messages LIMIT 1",
    "users": "SELECT 1 FROM users LIMIT 1",
}


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz() -> JSONResponse:
    errors: list[str] = []
    try:
        async with AsyncSessionLocal() as session:
            for name, query in _READINESS_QUERIES.items():
                try:
                    await session.execute(text(query))
                except Exception as exc:  # noqa: BLE001
                    errors.append(f"{name}: {exc}")
                    await session.rollback()
    except Exception as exc:  # noqa: BLE001
        errors.append(f"postgres: {exc}")

    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors},
        )
    return JSONResponse(content={"status": "ready"})
