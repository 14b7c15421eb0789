"""
wordcalc — FastAPI Server
==========================

HTTP wrapper around the expression evaluator.

Endpoints:
    POST /evaluate          Evaluate an expression
    POST /evaluate/file     Upload a text file holding one expression
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, UploadFile
from pydantic import BaseModel, Field

from wordcalc import __version__
from wordcalc.config import Settings
from wordcalc.exceptions import CalculatorError
from wordcalc.models import EvaluationReport
from wordcalc.pipeline import ExpressionPipeline

load_dotenv()


# ─── Application Lifespan ───────────────────────────────────────────

_pipeline: ExpressionPipeline | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings once on startup; each request still gets fresh parse state."""
    global _pipeline  # noqa: PLW0603
    _pipeline = ExpressionPipeline(Settings.from_env())
    yield
    _pipeline = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="wordcalc API",
    description=(
        "Evaluates arithmetic over numbers and English number-words "
        "with exact decimal arithmetic."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class EvaluateRequest(BaseModel):
    """Request body for the /evaluate endpoint."""

    expression: str = Field(
        ...,
        min_length=1,
        max_length=10_000,
        description="The expression to evaluate.",
        json_schema_extra={"example": "two hundred three plus (4 * 2)"},
    )


class EvaluateResponse(BaseModel):
    expression: str
    result: str = Field(description="Culture-invariant general representation")
    postfix: list[str]


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: dict = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    version: str


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_pipeline() -> ExpressionPipeline:
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialised")
    return _pipeline


def _run(pipeline: ExpressionPipeline, expression: str) -> EvaluationReport:
    """Evaluate, turning calculator errors into a structured 422."""
    try:
        return pipeline.run(expression)
    except CalculatorError as e:
        error = ErrorDetail(code=e.code, message=str(e), details=e.details)
        raise HTTPException(status_code=422, detail=error.model_dump()) from e


def _build_response(report: EvaluationReport) -> EvaluateResponse:
    return EvaluateResponse(
        expression=report.expression,
        result=report.formatted,
        postfix=report.postfix,
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/evaluate",
    summary="Evaluate an expression",
    tags=["Evaluation"],
    responses={
        422: {"description": "Expression could not be evaluated"},
        503: {"description": "Pipeline not yet initialised"},
    },
)
def evaluate_expression(request: EvaluateRequest) -> EvaluateResponse:
    """Evaluate one expression such as `2 + 3 * 4` or `two plus three`."""
    pipeline = _get_pipeline()
    return _build_response(_run(pipeline, request.expression))


@app.post(
    "/evaluate/file",
    summary="Evaluate an expression from an uploaded text file",
    tags=["Evaluation"],
    responses={
        413: {"description": "File too large (max 64 KB)"},
        400: {"description": "File is not valid UTF-8 text"},
        422: {"description": "Empty file or expression could not be evaluated"},
        503: {"description": "Pipeline not yet initialised"},
    },
)
async def evaluate_expression_file(file: UploadFile) -> EvaluateResponse:
    """Upload a `.txt` file whose whole content is one expression."""
    if file.size and file.size > 65_536:
        raise HTTPException(status_code=413, detail="File too large (max 64 KB)")

    content = await file.read()
    try:
        expression = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded text")

    if not expression.strip():
        raise HTTPException(status_code=422, detail="File is empty")

    pipeline = _get_pipeline()
    report = await asyncio.to_thread(_run, pipeline, expression)
    return _build_response(report)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def health_check() -> HealthResponse:
    _get_pipeline()
    return HealthResponse(status="healthy", version=__version__)
