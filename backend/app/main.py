"""
Assessment Report Service — FastAPI Application

This is the entry point for the backend. It:
1. Creates the FastAPI app instance
2. Configures CORS (so the admin console can talk to us)
3. Registers route handlers
4. Sets up startup/shutdown lifecycle events

Run with:
    uvicorn app.main:app --reload --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routers import reports


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic.

    Code before 'yield' runs on startup.
    Code after 'yield' runs on shutdown.
    """
    # --- Startup ---
    print(f"🚀 Starting Assessment Report Service ({settings.APP_ENV})...")

    yield  # App is running, handling requests

    # --- Shutdown ---
    print("👋 Shutting down...")


app = FastAPI(
    title="Assessment Report Service",
    description="Card-based report layout, pagination and PDF rendering for assessment results",
    version="1.0.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
# The admin console runs on a different origin; browsers block its calls
# to this API unless the origin is allowed here.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports.router)


# --- Health Check Endpoints ---

@app.get("/", tags=["health"])
async def root():
    """Root endpoint — confirms the API is alive."""
    return {
        "service": "Assessment Report Service",
        "status": "running",
        "version": "1.0.0",
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check — verifies the PDF font metrics load.

    Layout depends on nothing external except font metrics, so that's the
    one thing worth probing.
    """
    from reportlab.pdfbase.pdfmetrics import stringWidth

    try:
        stringWidth("health", settings.REPORT_FONT, 8)
        fonts = "loaded"
    except Exception as e:
        fonts = f"error: {str(e)}"

    return {
        "status": "healthy" if fonts == "loaded" else "degraded",
        "fonts": fonts,
        "environment": settings.APP_ENV,
    }
