# tests/test_health.py
from typing import Any

from fastapi import status

from threadboard.schemas import ErrorResponse


def test_health_responds(client: Any) -> None:
    """The liveness endpoint answers without authentication."""
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


def test_root_describes_api(client: Any) -> None:
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["docs"] == "/docs"


def test_errors_share_one_envelope(client: Any) -> None:
    """Domain and request-validation failures both parse as ErrorResponse."""
    missing = client.get("/api/v1/threads/missing")
    malformed = client.post("/api/v1/auth/signup", json={})

    for r in (missing, malformed):
        body = ErrorResponse.model_validate(r.json())
        assert body.model_dump() == r.json()
    assert ErrorResponse.model_validate(missing.json()).error.kind == "NotFound"
    assert ErrorResponse.model_validate(malformed.json()).error.kind == "ValidationError"
