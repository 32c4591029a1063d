"""
API package.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ...application.learning import LearningScheduler
from ...application.prediction_service import DelayPredictionService
from .routes import knowledge_base, predictions


def create_app(service: DelayPredictionService, scheduler: Optional[LearningScheduler] = None) -> FastAPI:
    """
    Builds the API around an already constructed service.
    The scheduler, when given, runs for the lifetime of the app.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if scheduler is not None:
            await scheduler.start()
        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.stop()

    app = FastAPI(title="Delay Risk API", lifespan=lifespan)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = service
    app.state.scheduler = scheduler

    app.include_router(predictions.router, tags=["predictions"])
    app.include_router(knowledge_base.router, tags=["knowledge-base"])
    return app
