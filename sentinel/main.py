import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables at the very beginning
load_dotenv()

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from sentinel.api import scan, system  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    if os.getenv("GEMINI_API_KEY"):
        logger.info("[STARTUP] Gemini credentials found")
    else:
        # Not fatal here: every scan will fail until the key is provided.
        logger.error("[STARTUP] GEMINI_API_KEY is not set. Scans will fail.")
    yield
    logger.info("[SHUTDOWN] Sentinel stopped")


app = FastAPI(title="Sentinel Forensic Piracy Scanner API", lifespan=lifespan)


# ---- Global Exception Handler for CORS ----
# HTTP errors (413 oversized upload, 409 scan in progress) must carry CORS
# headers so the front end can read the JSON body.
@app.exception_handler(StarletteHTTPException)
async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException):
    headers = getattr(exc, "headers", None)
    if headers is None:
        headers = {}

    headers["Access-Control-Allow-Origin"] = "*"
    headers["Access-Control-Allow-Credentials"] = "true"
    headers["Access-Control-Allow-Methods"] = "*"
    headers["Access-Control-Allow-Headers"] = "*"

    response_data = {"detail": exc.detail}
    logger.info(f"[ERROR HANDLER] Returning {exc.status_code} to client. Body: {response_data}")

    return JSONResponse(
        status_code=exc.status_code,
        content=response_data,
        headers=headers
    )


# ---- CORS ----
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(scan.router)
