# main.py
# Application entry point

"""
Hazard Curve Service
====================
REST API for estimating seismic hazard curves at arbitrary points from a
grid of precomputed curves.

For a latitude/longitude and a model selection (edition, region, vs30,
spectral period) the service finds the enclosing grid cell and
interpolates its curves: pass-through on a node, linear along a grid
line, bilinear inside a cell.

Run with:
    uvicorn main:app --reload --port 8000
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import API_TITLE, API_VERSION, DATA_DIR, DEFAULT_REGION, LOG_LEVEL, MOUNT_PATH
from errors import HazardCurveError
from models import ServiceStatus
from services.curve_store import HazardCurveStore
from services.hazard_curve import HazardCurveService
from routes import hazard_curve

logger = logging.getLogger(__name__)


# Create the app
app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    description="Interpolates seismic hazard curves from a precomputed grid.",
    docs_url="/docs"
)

# Allow frontend to call us
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup():
    """Load the curve store when the app starts."""
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Starting %s v%s", API_TITLE, API_VERSION)

    start = time.time()
    store = HazardCurveStore.from_parquet(DATA_DIR)

    # Wire up the routes with dependencies
    hazard_curve.set_dependencies(HazardCurveService(store))

    logger.info("Ready in %.1fs", time.time() - start)


@app.exception_handler(HazardCurveError)
async def hazard_curve_error(request: Request, exc: HazardCurveError):
    """Answer with the error's status and the message as data."""
    if exc.status >= 500:
        logger.error("url=%s", request.url, exc_info=exc)
    else:
        logger.info("url=%s %s: %s", request.url, exc.status, exc)

    return JSONResponse(
        status_code=exc.status,
        content={
            "data": str(exc) or "internal server error",
            "metadata": hazard_curve.response_metadata(request, False).model_dump(),
        },
    )


# Mount the routers
app.include_router(hazard_curve.router)


# Root endpoint
@app.get("/", tags=["System"])
async def root():
    """API overview."""
    return {
        "service": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "hazard_curve": [
                f"GET {MOUNT_PATH}/curve.json?latitude=&longitude=&edition=&region=&spectralPeriod=&vs30="
            ]
        }
    }


@app.get("/status", tags=["System"], response_model=ServiceStatus)
async def status():
    """Check if the service is ready."""
    ready = hazard_curve.service is not None
    summary = hazard_curve.service.store.summary() if ready else {}
    return ServiceStatus(
        status="ok" if ready else "starting",
        store_ready=ready,
        regions_loaded=summary.get("regions", 0),
        datasets_loaded=summary.get("datasets", 0),
        curves_loaded=summary.get("curves", 0),
        default_region=DEFAULT_REGION,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
