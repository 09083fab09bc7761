from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from iqra.config import settings
from iqra.db import init_all_databases


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_all_databases(settings.data_dir)
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title="Iqra Practice Backend", version="0.1.0", lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from iqra.routers import health, patterns, quiz, review

    application.include_router(health.router)
    application.include_router(
        review.router, prefix="/review", tags=["review"]
    )
    application.include_router(
        quiz.router, prefix="/quiz", tags=["quiz"]
    )
    application.include_router(
        patterns.router, prefix="/patterns", tags=["patterns"]
    )

    return application


app = create_app()
