"""
Assignment Docs API — Main Application
FastAPI application that generates assignments with an LLM, publishes them as
formatted Google Docs, shares them with a classroom and emails students on approval.
"""

from dotenv import load_dotenv
load_dotenv()

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from database.database import Base, engine
from database import models  # noqa: F401  (registers tables on Base)
from routers import assignments, classrooms

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)s  %(message)s")
log = logging.getLogger(__name__)

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create tables."""
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Assignment Docs API",
    description="AI assignment generation, Google Docs publishing and classroom sharing",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(assignments.router, prefix="/api")
app.include_router(classrooms.router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    log.error(f"Request {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"error": "Request failed", "details": str(exc)})


@app.get("/")
def read_root():
    return {"status": "Online"}
