from dotenv import load_dotenv

# Load env vars before any other imports to ensure they are available
load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import config
from app.routes import api

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("uvicorn")

app = FastAPI(
    title=config.APP_NAME,
    description="AI-powered writing utilities: detection, paraphrasing, grammar, summaries, plagiarism, "
                "humanizing, citations and translation.",
    version=config.APP_VERSION,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    client = request.client.host if request.client else "unknown"
    logger.info(f"Incoming request: {request.method} {request.url} from {client}")
    response = await call_next(request)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Missing or malformed fields are client errors, reported as 400.
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "body"
    return JSONResponse(
        status_code=400,
        content={"detail": f"Invalid request: {field} - {first.get('msg', 'invalid value')}"},
    )


# Include API Routes
app.include_router(api.router)


@app.get("/")
async def root():
    return {"message": f"Welcome to the {config.APP_NAME}"}
