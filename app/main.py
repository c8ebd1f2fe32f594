import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.config import get_settings
from app.database import engine
from app.errors import register_exception_handlers
from app.utils.timestamps import utcnow

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("SpeedballHub API starting (environment=%s, port=%s)", settings.environment, settings.port)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="SpeedballHub Backend",
    description="Players, speedball tests and test results for the club admin dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS (the session cookie needs credentials, so "*" is only sensible in development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.get("/health")
async def health_check():
    return {"status": "OK", "timestamp": utcnow().isoformat()}


# Import and include routers after app is created
from app.api.router import api_router
app.include_router(api_router, prefix="/api")
