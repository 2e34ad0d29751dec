"""REST API adapter."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from covergap.errors import GapAnalysisInputError
from covergap.server.wire import ServiceBundle

logger = logging.getLogger(__name__)


class GapAnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Collection shapes are checked by analyze_gaps, not by request parsing.
    requirements: Optional[Any] = None
    test_cases: Optional[Any] = Field(default=None, alias="testCases")
    compliance_frameworks: Optional[Any] = Field(default=None, alias="complianceFrameworks")


def create_app(services: ServiceBundle) -> FastAPI:
    app = FastAPI(title="covergap (REST)")

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(422, f"Invalid request body: {exc.errors()}")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Gap analysis request failed")
        return _error(500, str(exc))

    @app.get("/healthz")
    def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/gap-analysis", response_model=None)
    def gap_analysis(payload: GapAnalysisRequest) -> Union[Dict[str, Any], JSONResponse]:
        if payload.requirements is None or payload.test_cases is None:
            return _error(400, "Requirements and test cases are required")
        try:
            report = services.analyze_gaps(
                payload.requirements,
                payload.test_cases,
                payload.compliance_frameworks,
            )
        except GapAnalysisInputError as exc:
            logger.info("Rejected gap analysis request: %s", exc)
            return _error(422, str(exc))
        return {"success": True, "analysis": report.to_payload()}

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})
