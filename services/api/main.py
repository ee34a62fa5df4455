import logging
import re
from typing import Any, Literal, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from core.review_engine.engine import ReviewAnalyzer
from services.api import config
from services.api.storage import AnalysisStore, build_store

config.setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Code Review Assistant API")

store = build_store(config.STORAGE_BACKEND, config.REDIS_URL)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class AnalyzeRequest(BaseModel):
    code: str = Field(min_length=1)
    language: Literal["javascript", "python", "typescript", "java"]


def get_store() -> AnalysisStore:
    return store


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Leading integer of ``raw``; ``"12abc"`` -> 12, ``"abc"`` -> None."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Malformed request to %s: %s", request.url.path, exc.errors())
    return _error("Invalid request body", 500)


@app.get("/health")
def health(analyses: AnalysisStore = Depends(get_store)):
    return {"status": "ok", "storage": analyses.backend}


@app.post("/api/analyze")
def analyze(payload: Any = Body(None), analyses: AnalysisStore = Depends(get_store)):
    try:
        req = AnalyzeRequest.model_validate(payload)
        result = ReviewAnalyzer(req.language).analyze(req.code)
        saved = analyses.create(code=req.code, language=req.language, result=result)
    except ValidationError as exc:
        message = _validation_message(exc)
        logger.warning("Analysis request rejected: %s", message)
        return _error(message, 500)
    except Exception as exc:
        logger.exception("Analysis error")
        return _error(str(exc) or "Failed to analyze code", 500)

    logger.info("Stored analysis %d (score=%d)", saved.id, result.quality_score)
    return {"id": saved.id, **result.to_dict()}


@app.get("/api/analysis/{analysis_id}")
def get_analysis(analysis_id: str, analyses: AnalysisStore = Depends(get_store)):
    try:
        parsed = parse_int(analysis_id)
        analysis = analyses.get_by_id(parsed) if parsed is not None else None
    except Exception:
        logger.exception("Get analysis error")
        return _error("Failed to retrieve analysis", 500)

    if analysis is None:
        return _error("Analysis not found", 404)
    return analysis.to_dict()


@app.get("/api/analyses/recent")
def recent_analyses(limit: Optional[str] = None, analyses: AnalysisStore = Depends(get_store)):
    try:
        count = parse_int(limit) or config.DEFAULT_RECENT_LIMIT
        return [a.to_dict() for a in analyses.list_recent(count)]
    except Exception:
        logger.exception("Get recent analyses error")
        return _error("Failed to retrieve recent analyses", 500)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
