import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from config import settings
from api.v1.router import api_router
from core.plan_calc import InvalidProfile
from services.db import dispose_engine, init_models

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_LOG = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    await init_models()
    _LOG.info("NutriPlan API ready (env=%s)", settings.env_name)
    yield
    await dispose_engine()


app = FastAPI(title="NutriPlan API", version="1.0.0", lifespan=lifespan)

# CORS (mobile client; lock down per deployment)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(InvalidProfile)
async def invalid_profile_handler(_: Request, exc: InvalidProfile) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})


@app.get("/health", tags=["meta"])
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.env_name}
