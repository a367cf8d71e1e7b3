from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pawsocial.config import settings
from pawsocial.database import Base, engine
from pawsocial.logging_config import setup_logging

# Import models so SQLAlchemy registers tables
from pawsocial import models  # noqa: F401

# Routers
from pawsocial.routers import (
    activity_router,
    blocks_router,
    follows_router,
    privacy_router,
    visibility_router,
)

# -----------------------
# LOGGING
# -----------------------
setup_logging(settings.LOG_LEVEL)

# -----------------------
# CREATE APP
# -----------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Relationship and visibility resolution for the Pawsocial pet network.",
    version="1.0.0",
)

# -----------------------
# CORS
# -----------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # allow all during development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------
# DATABASE TABLES
# -----------------------
Base.metadata.create_all(bind=engine)

# -----------------------
# ROUTES
# -----------------------
app.include_router(follows_router.router)
app.include_router(blocks_router.router)
app.include_router(privacy_router.router)
app.include_router(visibility_router.router)
app.include_router(activity_router.router)

# -----------------------
# HEALTH CHECK
# -----------------------
@app.get("/")
def root():
    return {"message": "Pawsocial visibility API is running!"}
