import sys
import os
import logging
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from config.database import SessionLocal
from config.settings import settings
from database.init_db import init_db
from api.reports.reports_service import build_report_store
from api.detection.image_classifier import RandomImageClassifier

handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
root_logger = logging.getLogger()
root_logger.handlers.clear()
root_logger.addHandler(handler)
root_logger.setLevel(settings.LOG_LEVEL)

logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.STORAGE_BACKEND != "memory":
        try:
            init_db()
        except SQLAlchemyError as e:
            # the fallback store keeps the app usable without a database
            logger.warning("⚠️ Database setup failed, continuing without it: %s", e)

    app.state.report_store = build_report_store(settings, SessionLocal)
    app.state.classifier = RandomImageClassifier(
        delay_seconds=settings.CLASSIFIER_DELAY_SECONDS,
        trash_probability=settings.CLASSIFIER_TRASH_PROBABILITY,
    )
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
# CORS: use our parsed list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Content-Type"],
)

#load all routes
def load_routes(directory: Path):
    import importlib.util
    routers = []
    for item in sorted(directory.rglob("*_routes.py")):
        spec = importlib.util.spec_from_file_location(item.stem, str(item))
        module = importlib.util.module_from_spec(spec)
        sys.modules[item.stem] = module
        spec.loader.exec_module(module)
        if hasattr(module, "router"):
            routers.append(module.router)
    return routers

for router in load_routes(Path(__file__).parent / "api"):
    app.include_router(router, prefix="/api")

@app.get("/health")
def health_check():
    return {"status": "ok"}

@app.get("/")
def home():
    return {"message": f"Welcome to {settings.APP_NAME}"}

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", settings.PORT or 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
