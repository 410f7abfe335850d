from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cronograma.api.routes import (
    activity,
    careers,
    classrooms,
    conflicts,
    courses,
    groups,
    health,
    modules,
    schedule,
    teachers,
)
from cronograma.core.config import get_settings
from cronograma.core.exceptions import AppError
from cronograma.core.logging import configure_logging
from cronograma.core.middleware import RequestLoggingMiddleware, RequestSizeLimitMiddleware
from cronograma.db.bootstrap import ensure_runtime_schema
from cronograma.db.session import engine

settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_runtime_schema(engine)
    yield


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(teachers.router, prefix=f"{settings.api_prefix}/teachers", tags=["teachers"])
app.include_router(classrooms.router, prefix=f"{settings.api_prefix}/classrooms", tags=["classrooms"])
app.include_router(modules.router, prefix=f"{settings.api_prefix}/modules", tags=["modules"])
app.include_router(careers.router, prefix=f"{settings.api_prefix}/careers", tags=["careers"])
app.include_router(groups.router, prefix=f"{settings.api_prefix}/groups", tags=["groups"])
app.include_router(courses.router, prefix=f"{settings.api_prefix}/courses", tags=["courses"])
app.include_router(schedule.router, prefix=f"{settings.api_prefix}/schedule", tags=["schedule"])
app.include_router(conflicts.router, prefix=f"{settings.api_prefix}/conflicts", tags=["conflicts"])
app.include_router(activity.router, prefix=f"{settings.api_prefix}/activity", tags=["activity"])
