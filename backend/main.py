from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from logging_config import setup_logging
from models import ErrorResponse
from osint import build_registry
from routes import health_router, enrich_router, plugins_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    app.state.registry = build_registry()
    logger.info("Plugins: %s", ", ".join(app.state.registry.names()))
    print(f"""
+======================================================+
|                                                      |
|   NEXUS ENRICHMENT BACKEND                           |
|   v{settings.VERSION:<10}                                        |
|                                                      |
|   Environment: {settings.ENVIRONMENT:<15}                       |
|   Plugins: {len(app.state.registry):<4}                                      |
|                                                      |
+======================================================+
    """)
    yield
    print("\n[NEXUS] Shutdown.\n")


app = FastAPI(
    title="NEXUS API",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled %s on %s", type(exc).__name__, request.url.path)
    return JSONResponse(status_code=500, content=ErrorResponse(error="Internal error").model_dump())


app.include_router(health_router, prefix="/api")
app.include_router(enrich_router, prefix="/api")
app.include_router(plugins_router, prefix="/api")


@app.get("/")
async def root():
    return {"name": "NEXUS API", "version": settings.VERSION, "status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=True)
