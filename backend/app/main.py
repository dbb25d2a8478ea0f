import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Your configuration and DB
from app.config import settings
from app.core.db import init_db, close_db
from app.core.log_setup import setup_logging
from app.api.error_handlers import register_error_handlers

from app.api.v1.routers import auth, users, notifications

setup_logging(settings.log_level)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

@app.on_event("startup")
async def on_startup():
    await init_db()
    logger.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(notifications.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
