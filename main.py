import sys
import os
import logging
from pathlib import Path
from typing import Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from config.database import Database, database_from_settings
from config.logging_config import setup_logging
from config.settings import settings
from middlewares.edge_gate_middleware import EdgeGateMiddleware
from utils.errors import AppError, validation_message

logger = logging.getLogger(__name__)


#load all routes
def load_routes(directory: Path):
    import importlib.util
    routers = []
    for item in sorted(directory.rglob("*_routes.py")):
        module = sys.modules.get(item.stem)
        if module is None:
            spec = importlib.util.spec_from_file_location(item.stem, str(item))
            module = importlib.util.module_from_spec(spec)
            sys.modules[item.stem] = module
            spec.loader.exec_module(module)
        if hasattr(module, "router"):
            routers.append(module.router)
    return routers


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = validation_message(exc.errors())
    return JSONResponse(status_code=400, content={"success": False, "message": message})


def create_app(database: Optional[Database] = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    database = database or database_from_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        reaper = None
        if settings.TOKEN_REAPER_ENABLED:
            from helpers.token_reaper import start_token_reaper
            reaper = start_token_reaper(database, settings.TOKEN_REAPER_INTERVAL_SECONDS)
        yield
        if reaper is not None:
            reaper.shutdown(wait=False)
        database.dispose()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.database = database

    # CORS: use our parsed list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
    )
    #middlewares
    app.add_middleware(EdgeGateMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    for router in load_routes(Path(__file__).parent / "api"):
        app.include_router(router, prefix="/api")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/")
    def home():
        return {"message": f"Welcome to {settings.APP_NAME}"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", settings.PORT or 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
