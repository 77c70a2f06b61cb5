from fastapi import FastAPI
from app.routes import store, product, staff, business_hours, taxi_stand, user, audit_log
from app.database import engine, Base
from app.errors import register_error_handlers
from app import config
import logging
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

# Import all models to ensure they are registered with SQLAlchemy
from app.db import models  # noqa: F401

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Step 1: Initialize DB models/tables
# Only create tables automatically in dev, not production
if config.ENV != "production":
    logger.info("Development mode: creating tables if they don't exist")
    Base.metadata.create_all(bind=engine)

    # Seed the database with initial data
    from app.init_db import seed
    seed()
    logger.info("Database seeded")

# Step 2: Initialize FastAPI app
app = FastAPI(
    title="Marketplace Admin Backend",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

logging.getLogger("uvicorn.access").setLevel(logging.INFO)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Step 3: Include routes
# Sub-resources under /api/v1/stores go before the store router so that
# /stores/{store_id} does not capture /stores/products and friends.
app.include_router(product.router)
app.include_router(staff.router)
app.include_router(business_hours.router)
app.include_router(store.router)
app.include_router(taxi_stand.router)
app.include_router(user.router)
app.include_router(audit_log.router)

@app.get("/health")
def health():
    """Health check endpoint for Docker health checks"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "database": "disconnected", "error": str(e)}
