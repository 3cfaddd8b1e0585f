"""FastAPI application entry point"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.config import settings
from .api.v1.endpoints import patterns, sitemaps

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
    URL Pattern Analyzer Service

    This service groups large collections of URLs into generalized patterns,
    showing which parts of a site's URL space are fixed routes and which vary.

    ## Workflow

    1. **Analyze URLs** - POST /api/v1/patterns/analyze with a list of URLs
    2. **Or collect from a sitemap** - POST /api/v1/sitemaps/analyze with a domain or sitemap URL

    ## Features

    - Scheme and domain are never generalized
    - Tenant-style subdomains are collapsed, distinct sites are kept apart
    - Recurring path segments stay literal, one-off identifiers are masked
    - Patterns ranked by family size and nested by parent
    """,
    debug=settings.debug
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(patterns.router, prefix=settings.api_prefix)
app.include_router(sitemaps.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.api_title,
        "version": settings.api_version,
        "status": "operational",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.api_title
    }
