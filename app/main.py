"""FastAPI entry point. Logs every visit, exposes POST /api/check (message
classification), GET /health, and serves the static site from PUBLIC_DIR
with an index.html fallback for unknown paths."""

import os
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse

from app.models import CheckRequest, CheckResponse, HealthResponse
from app.detector import classifier
from app.advice import build_advice
from app.visits import visit_logger

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

PORT: int = int(os.getenv("PORT", "3000"))
HOST: str = os.getenv("HOST", "0.0.0.0")
PUBLIC_DIR: Path = Path(
    os.getenv("PUBLIC_DIR", str(Path(__file__).resolve().parent.parent / "public"))
)

app = FastAPI(
    title="Scam Guard",
    description="Chat message scam heuristics and scam-awareness site",
    version="1.0.0",
)


@app.on_event("startup")
async def _on_startup() -> None:
    logger.info(f"Scam info web listening on http://localhost:{PORT}/")


@app.middleware("http")
async def _log_visit(request: Request, call_next):
    await run_in_threadpool(visit_logger.record, request)
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error(f"422 VALIDATION ERROR | {request.url.path} | {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_errors(exc), "message": "Invalid request payload."},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw exception objects pydantic attaches."""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse()


@app.post("/api/check", response_model=CheckResponse)
async def check_message(request: CheckRequest) -> CheckResponse:
    """Classify one chat message and return the verdict with safety advice."""
    verdict = classifier.classify(request.text)
    logger.info(
        f"CHECK  score={verdict.score}  suspicious={verdict.suspicious}  "
        f"reasons={len(verdict.reasons)}  urls={len(verdict.urls)}"
    )
    return CheckResponse(
        suspicious=verdict.suspicious,
        reasons=verdict.reasons,
        urls=verdict.urls,
        score=verdict.score,
        riskLabel=classifier.risk_label(verdict.score) if verdict.suspicious else None,
        advice=build_advice(verdict.reasons) if verdict.suspicious else [],
    )


@app.get("/{full_path:path}")
async def serve_static(full_path: str) -> FileResponse:
    """Serve a file from the public directory, or index.html for anything else."""
    root = PUBLIC_DIR.resolve()
    candidate = (root / full_path).resolve()
    if full_path and candidate.is_file() and root in candidate.parents:
        return FileResponse(candidate)
    return FileResponse(root / "index.html")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
