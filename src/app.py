import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.config.config_loader import get_config
from src.exceptions import register_exception_handlers
from src.api import auth, fields, messaging, records

# --- Logging Setup ---
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO,
    # Ensure logs are in a format that Cloud Logging can parse
    datefmt='%Y-%m-%dT%H:%M:%S'
)

# Set higher logging level for noisy libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

# Create a logger for our application
logger = logging.getLogger(__name__)


# --- FastAPI Lifespan Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events for the FastAPI app."""
    logger.info("FastAPI application starting up...")
    try:
        logger.info("Loading application configuration via singleton...")
        app_settings = get_config()
        logger.info(f"Using spreadsheet {app_settings.google_sheet_id}. SMS enabled: {app_settings.sms_enabled}")
    except Exception as e:
        logger.critical(f"Application startup failed: {e}", exc_info=True)
        raise RuntimeError(f"Application startup failed: {e}") from e
    logger.info("FastAPI startup complete.")
    yield # Application runs here
    logger.info("FastAPI application shutting down...")


# --- FastAPI App Instance ---
app = FastAPI(
    title="Clinic Health Tracker API",
    description="Patient demographics, vitals and reminders stored in a Google Sheet",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(records.router)
app.include_router(fields.router)
app.include_router(auth.router)
app.include_router(messaging.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Medical Back API is running!"


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# --- Main execution for local testing (using uvicorn) ---
# In production uvicorn is started via the container command:
#   uvicorn src.app:app --host 0.0.0.0 --port $PORT
if __name__ == "__main__":
    import uvicorn
    logger.info("Starting Uvicorn server for local development...")
    uvicorn.run(app, host="0.0.0.0", port=get_config().port)
