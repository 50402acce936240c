"""
Absoluta Store Functions

Payment endpoints behind the storefront: Mercado Pago preference creation
and the payment notification webhook. Also serves the catalog document.
"""

import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables
load_dotenv()

from .core.config import get_settings
from .core.dependencies import close_payment_client
from .routes import preference_router, webhook_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Absoluta Store functions starting up...")
    logger.info(f"Mercado Pago: {'configured' if settings.payments_configured else 'NOT configured'}")
    logger.info(f"Site URL: {settings.site_url or 'not set'}")
    yield
    logger.info("Absoluta Store functions shutting down...")
    await close_payment_client()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Payment functions for the Absoluta Store storefront",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"error": ..., "details": ...}"""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": str(exc.detail)}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": details},
    )


# Catalog document
data_dir = os.path.join(os.path.dirname(__file__), "data")

if os.path.exists(data_dir):
    app.mount("/data", StaticFiles(directory=data_dir), name="data")

# Include API routers
app.include_router(preference_router)
app.include_router(webhook_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "absoluta-functions",
        "payments_configured": settings.payments_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "absoluta.functions.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
