import logging

from fastapi import FastAPI, Request  # type: ignore
from fastapi.middleware.cors import CORSMiddleware  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore

from autodiag.config import CORS_ORIGINS, LOG_LEVEL
from autodiag.errors import DatastoreError
from autodiag.routers import ai_analysis, components, diagnostics

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="Vehicle Self-Diagnosis API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(diagnostics.router)
app.include_router(ai_analysis.router)
app.include_router(components.router)


@app.exception_handler(DatastoreError)
async def datastore_error_handler(request: Request, exc: DatastoreError):
    log.error("Datastore error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": "Datastore unavailable"})


@app.get("/")
async def health():
    return {"status": "ok"}
