import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from walkmate.api.users import router as users_router
from walkmate.api.walks import router as walks_router
from walkmate.db import Base, engine, get_db
from walkmate.models.user import User  # noqa: F401  (import ensures table is registered)
from walkmate.models.walk import Walk  # noqa: F401
from walkmate.core.config import settings
from walkmate.core.errors import StoreFailure, register_exception_handlers
from walkmate.core.logging_config import setup_logging
from walkmate.core.time_utils import utc_now
from walkmate import store


setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="WalkMate")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Create DB tables (users, walks) on startup
Base.metadata.create_all(bind=engine)

app.include_router(users_router)
app.include_router(walks_router)


@app.get("/")
def root():
    return {"message": "WalkMate backend is running"}


@app.get("/health")
def health(db: Session = Depends(get_db)):
    """Database round trip; 500 when the store cannot be reached."""
    try:
        count = store.count_users(db)
    except StoreFailure as exc:
        logger.error("health check failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "dbConnection": "failed",
                "error": str(exc),
                "timestamp": utc_now().isoformat(),
            },
        )
    return {
        "status": "ok",
        "dbConnection": "successful",
        "userCount": count,
        "timestamp": utc_now().isoformat(),
    }
