from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from mot_history.errors import MotApiError
from mot_service.logging_config import configure_logging, correlation_id, get_app_version, get_correlation_id
from mot_service.mot_client import MotLookupClient
from mot_service.schemas import ErrorResponse, HealthResponse, LookupSummaryResponse, MotRequest
from mot_service.settings import ServiceSettings


# ── App Factory ─────────────────────────────────────────────────────

def create_app(
    settings: ServiceSettings | None = None,
    mot_client: MotLookupClient | None = None,
) -> FastAPI:
    settings = settings or ServiceSettings()
    configure_logging(level=settings.log_level, fmt=settings.log_format)

    if mot_client is None:
        mot_client = MotLookupClient(
            api_key_provider=lambda: settings.mot_api_key,
            base_url=settings.mot_api_base_url,
            timeout_seconds=settings.mot_api_timeout_seconds,
        )

    app = FastAPI(title="MOT History Lookup API", version=get_app_version())

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next: Any) -> Response:
        correlation_id.set(request.headers.get("X-Correlation-ID", ""))
        cid = get_correlation_id()
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = cid
        return response

    @app.exception_handler(MotApiError)
    async def mot_api_error_handler(_: Request, exc: MotApiError) -> JSONResponse:
        body = ErrorResponse(**exc.to_dict())
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    # ── MOT Lookup ──────────────────────────────────────────────────

    @app.get(
        "/mot/{registration_number}",
        response_model=LookupSummaryResponse,
        responses={code: {"model": ErrorResponse} for code in (400, 401, 404, 500)},
    )
    async def get_mot(registration_number: str) -> LookupSummaryResponse:
        try:
            req = MotRequest(registration_number=registration_number.strip())
        except ValidationError as exc:
            raise MotApiError.invalid_input() from exc

        summary = await mot_client.lookup(req.registration_number)
        return LookupSummaryResponse(**summary.to_dict())

    # ── Health ──────────────────────────────────────────────────────

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    return app


app = create_app()
