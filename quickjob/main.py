import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ✅ Import All API Routes
from quickjob.api.routes import (
    admin,
    applications,
    auth,
    billing,
    candidate_posts,
    chat,
    conversations,
    functions,
    health,
    jobs,
    notifications,
    realtime,
    users,
)
from quickjob.core.config import LOG_LEVEL, RUN_MIGRATIONS
from quickjob.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL)
    if RUN_MIGRATIONS:
        from quickjob.db.migrate import run_migrations
        run_migrations()
    else:
        from quickjob.db.init_db import init_db
        init_db()
    logger.info("QuickJob CI API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="QuickJob CI", lifespan=lifespan)

# ✅ CORS: the web frontend and the payment callback run on other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type", "x-paystack-signature", "x-cron-secret"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(candidate_posts.router)
app.include_router(notifications.router)
app.include_router(conversations.router)
app.include_router(admin.router)
app.include_router(billing.router)
app.include_router(billing.functions_router)
app.include_router(functions.router)
app.include_router(chat.router)
app.include_router(realtime.router)
app.include_router(health.router)


@app.get("/")
def root():
    return {"status": "QuickJob CI API running"}
