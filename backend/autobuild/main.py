import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from autobuild.database import init_db
from autobuild.logging_config import setup_logging
from autobuild.routes import auto_build

APP_NAME = "Auto-Build Schedule Engine API"

setup_logging()

app = FastAPI(title=APP_NAME)

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    _cors_origins.extend(o.strip() for o in _extra.split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auto_build.router, prefix="/api", tags=["auto-build"])


@app.on_event("startup")
def on_startup():
    init_db()


@app.get("/api/health")
def health_check():
    return {"app_name": APP_NAME, "status": "healthy"}
