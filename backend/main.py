import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from db.database import store
from db.seed import seed_demo_data
from routers.blend_components import router as blend_components_router
from routers.blends import router as blends_router
from routers.capacity import router as capacity_router
from routers.commodities import router as commodities_router
from routers.counter_parties import router as counter_parties_router
from routers.dashboard import router as dashboard_router
from routers.locations import router as locations_router
from routers.templates import router as templates_router
from routers.uoms import router as uoms_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_demo_data and not len(store.uoms):
        seed_demo_data(store)
    yield


app = FastAPI(
    title="Blend Catalog API",
    description="API for managing commodity, blend, location and capacity reference data",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


# Reference data
app.include_router(uoms_router, prefix="/uoms", tags=["uoms"])
app.include_router(commodities_router, prefix="/commodities", tags=["commodities"])
app.include_router(locations_router, prefix="/locations", tags=["locations"])
app.include_router(counter_parties_router, prefix="/counter-parties", tags=["counter-parties"])

# Blending
app.include_router(blends_router, prefix="/blends", tags=["blends"])
app.include_router(blend_components_router, prefix="/blend-components", tags=["blend-components"])
app.include_router(capacity_router, prefix="/capacity", tags=["capacity"])

# Import templates and dashboard
app.include_router(templates_router, prefix="/templates", tags=["templates"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
