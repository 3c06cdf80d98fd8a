import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quizgrader.api.v1.evaluate import router as evaluate_router
from quizgrader.application.exceptions import UnsupportedOperationError
from quizgrader.core.config import settings

logger = logging.getLogger(__name__)


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("question_id", "reason", "score", "total_questions", "evaluated", "skipped"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Quiz Answer Grader", version="1.0.0")

app.include_router(evaluate_router, prefix="/api", tags=["evaluation"])


@app.exception_handler(UnsupportedOperationError)
async def unsupported_operation_handler(request: Request, exc: UnsupportedOperationError) -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method Not Allowed"})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed submission", extra={"reason": str(exc.errors()[:1])})
    return JSONResponse(status_code=400, content={"error": "Invalid input: User answers are required."})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
