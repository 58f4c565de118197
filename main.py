#main.py
from pathlib import Path
from dotenv import load_dotenv
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import settings
from api.catalog import router as catalog_router
from api.jobs import router as jobs_router
from api.project import router as project_router
from core.errors import SuggesterError
from telemetry.logging import configure_logging

configure_logging(settings.SERVICE_NAME, settings.LOG_LEVEL)

app = FastAPI(title="Internship Project Suggester")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # dev only
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router)
app.include_router(jobs_router)
app.include_router(project_router)


@app.exception_handler(SuggesterError)
async def suggester_error_handler(request: Request, exc: SuggesterError):
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request body", "details": str(exc.errors())}, status_code=400)


@app.get("/")
def health():
    return {"status": "ok"}
