from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from leadhub.api.v1.router import api_router
from leadhub.core.config import settings
from leadhub.core.database import get_db
from leadhub.core.seed import seed_defaults
from leadhub.services.catalog import list_active_services
from leadhub.services.landing import get_variant, render_landing
from contextlib import asynccontextmanager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup: seed service catalog and manager profile
    await seed_defaults()
    yield


app = FastAPI(
    title="LeadHub API",
    description="Lead capture, chat assistant and live lead dashboard for home-service contractors",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


async def _landing(slug: str, db: AsyncSession) -> str:
    config = get_variant(slug)
    if config is None:
        raise HTTPException(status_code=404, detail="Page not found")
    catalog = [service.name for service in await list_active_services(db)]
    return render_landing(config, catalog)


@app.get("/", response_class=HTMLResponse)
async def landing_page(db: AsyncSession = Depends(get_db)):
    """Serve the default marketing landing page."""
    return await _landing(settings.DEFAULT_LANDING_VARIANT, db)


@app.get("/l/{slug}", response_class=HTMLResponse)
async def landing_variant(slug: str, db: AsyncSession = Depends(get_db)):
    """Serve a landing page variant."""
    return await _landing(slug, db)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "leadhub", "version": "0.1.0"}


@app.get("/dashboard")
async def dashboard_redirect():
    return RedirectResponse(url="/api/v1/dashboard/")
