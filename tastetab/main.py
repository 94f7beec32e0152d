# File: tastetab/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from tastetab import database
from tastetab.api import auth, bills, dashboard, items, payments, reports
from tastetab.core.config import settings
from tastetab.core.errors import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The only failure allowed to stop the process: no database at startup.
    try:
        database.ping(database.db)
        database.ensure_indexes(database.db)
    except PyMongoError as e:
        logger.critical(f"MongoDB connection failed: {e}")
        raise SystemExit(1)
    yield
    database.client.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Menu, billing and payment services for the TasteTab point of sale.",
    version=settings.VERSION,
    lifespan=lifespan,
)


# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- Include Routers ---
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(items.router, prefix="/dashboard", tags=["menu"])
app.include_router(items.public_router, prefix="/api", tags=["menu"])
app.include_router(bills.router, prefix="/api/bill", tags=["bills"])
app.include_router(reports.router, prefix="/api/bill", tags=["reports"])
app.include_router(dashboard.router, prefix="/api", tags=["dashboard"])
app.include_router(payments.router)


# --- Root Endpoint ---
@app.get("/")
def read_root():
    return {"status": "Server is running..."}


def run():
    import uvicorn

    uvicorn.run("tastetab.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
