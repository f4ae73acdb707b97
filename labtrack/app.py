# --- imports (top of labtrack/app.py) ---
import json
import logging
import os
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Resolve paths early so env vars are available before importing the app modules
BASE_DIR = Path(__file__).resolve().parent
ENV_PATH = BASE_DIR / ".env"

load_dotenv(ENV_PATH)

from slowapi.errors import RateLimitExceeded

from labtrack.db.session import is_configured
from labtrack.middleware.tracing import TRACE_ID_CTX_VAR, TracingMiddleware
from labtrack.models import init_db
from labtrack.routes import (
    analysis_routes,
    audit_routes,
    auth_routes,
    benchmark_routes,
    biomarker_routes,
    client_routes,
    settings_routes,
)
from labtrack.utils.exceptions import register_exception_handlers
from labtrack.utils.rate_limit import limiter, rate_limit_handler

CORS_ORIGINS = [
    o.strip()
    for o in (os.getenv("CORS_ORIGINS") or "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if o.strip()
]


# --- logging setup ---
class JsonFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        payload = {
            "timestamp": datetime.utcnow().isoformat(timespec="seconds") + "Z",
            "level": record.levelname,
            "function": record.funcName,
            "message": record.getMessage(),
            "trace_id": TRACE_ID_CTX_VAR.get() or None,
        }
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging() -> logging.Logger:
    logger = logging.getLogger("labtrack")
    logger.setLevel(logging.INFO)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    return logger


logger = configure_logging()

# --- app & router setup ---
app = FastAPI(title="LabTrack Backend", version="0.1.0")

app.add_middleware(TracingMiddleware)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
register_exception_handlers(app)


@app.on_event("startup")
def _init_db():
    if not is_configured():
        logger.warning({"function": "startup", "status": "database_not_configured"})
        return
    init_db()


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_routes.router)
app.include_router(settings_routes.router)
app.include_router(client_routes.router)
app.include_router(analysis_routes.router)
app.include_router(benchmark_routes.router)
app.include_router(biomarker_routes.router)
app.include_router(audit_routes.router)


@app.get("/api/health")
def health():
    return {"status": "ok", "database": "configured" if is_configured() else "not_configured"}
