import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

import config
from api import audits, catalog
from database import get_db, init_db
from models import Audit

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize database on startup
    init_db()
    logger.info("Database ready at %s", config.DATABASE_URL)
    yield


app = FastAPI(title="Audit Advisor API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(audits.router, prefix="/api/audits", tags=["audits"])
app.include_router(catalog.router, prefix="/api", tags=["recommendations"])


@app.get("/api/health")
def api_health(db: Session = Depends(get_db)):
    try:
        count = db.query(Audit).count()
        return {"status": "healthy", "database": "connected", "total_audits": count}
    except Exception as e:
        logger.error("Health check failed: %s", e)
        return {"status": "unhealthy", "database": "error", "error": str(e)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
