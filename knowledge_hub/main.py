import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from knowledge_hub.api.http import (
    health_router, auth_router, users_router, documents_router, search_router, ai_router
)
from knowledge_hub.core.config import settings
from knowledge_hub.core.db import engine
from knowledge_hub.core.errors import KnowledgeHubError, StoreFailure
from knowledge_hub.core.logging import setup_logging
from knowledge_hub.domains.ai.gateway import create_gateway

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Шлюз к Gemini один на всё приложение
    app.state.ai_gateway = create_gateway(
        settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.ai_timeout_seconds
    )
    yield
    await engine.dispose()


app = FastAPI(
    title="Knowledge Hub",
    description="Командная база знаний с AI-аннотацией документов",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnowledgeHubError)
async def handle_domain_error(request: Request, exc: KnowledgeHubError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in error["loc"][1:]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


@app.exception_handler(SQLAlchemyError)
async def handle_store_failure(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store failure on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=StoreFailure.status_code,
        content={"message": StoreFailure.default_message}
    )


# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(documents_router)
app.include_router(search_router)
app.include_router(ai_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Knowledge Hub API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
