"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.gateway import gateway
from app.routers import auth, branch_products, branches, categories, images, products, slugs

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    await gateway.connect()
    yield
    # Shutdown
    await gateway.disconnect()


app = FastAPI(
    title="Catalog Admin Console API",
    description="Admin console backend for the retail catalog",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(branches.router)
app.include_router(branch_products.router)
app.include_router(images.router)
app.include_router(slugs.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "Catalog Admin Console API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
