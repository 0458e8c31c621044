"""
ScamCheck HTTP API.

Thin request handling around ``AnalysisDispatcher``: parse the body,
run the analysis, map the two hard failures to status codes.
"""

import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from scamcheck import __version__
from scamcheck.analysis import AnalysisDispatcher, AnalysisRequest
from scamcheck.config import ScamCheckSettings, get_settings
from scamcheck.exceptions import InvalidRequest, UpstreamError
from scamcheck.llm.schemas import NormalizedAnalysis
from scamcheck.observability import log_context, setup_logging

SERVICE_ERROR_MESSAGE = "The analysis service is currently unavailable. Please try again later."


class DetectScamRequest(BaseModel):
    """Request body of ``POST /api/detect-scam``."""

    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = None
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
    audio_base64: Optional[str] = Field(default=None, alias="audioBase64")
    image_mime_type: Optional[str] = Field(default=None, alias="imageMimeType")
    audio_mime_type: Optional[str] = Field(default=None, alias="audioMimeType")

    def to_analysis_request(self) -> AnalysisRequest:
        mime_types = {}
        if self.image_mime_type:
            mime_types["image_mime_type"] = self.image_mime_type
        if self.audio_mime_type:
            mime_types["audio_mime_type"] = self.audio_mime_type
        return AnalysisRequest(
            text=self.content,
            image=self.image_base64,
            audio=self.audio_base64,
            **mime_types,
        )


def create_app(
    dispatcher: Optional[AnalysisDispatcher] = None,
    settings: Optional[ScamCheckSettings] = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        dispatcher: Dispatcher to serve requests with; built from settings
            on startup when omitted
        settings: Settings used to build the dispatcher

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.dispatcher is None:
            app.state.dispatcher = AnalysisDispatcher.from_settings(settings or get_settings())
        yield
        await app.state.dispatcher.close()

    app = FastAPI(
        title="ScamCheck API",
        description="Scam risk assessment for text, images and audio",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        with log_context(request_id=request_id):
            logger.info(f"Request {request_id}: {request.method} {request.url.path}")
            response = await call_next(request)
            logger.info(f"Response {request_id}: {response.status_code}")
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(InvalidRequest)
    async def invalid_request_handler(request: Request, exc: InvalidRequest):
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        logger.error(f"Upstream failure ({type(exc).__name__}, status {exc.status_code}): {exc.message}")
        return JSONResponse(status_code=500, content={"message": SERVICE_ERROR_MESSAGE})

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.post(
        "/api/detect-scam",
        response_model=NormalizedAnalysis,
        response_model_exclude_none=True,
    )
    async def detect_scam(
        body: DetectScamRequest,
        dispatcher: AnalysisDispatcher = Depends(get_dispatcher),
    ):
        """Analyze text, an image, or an audio clip for scam risk."""
        return await dispatcher.analyze(body.to_analysis_request())

    return app


def get_dispatcher(request: Request) -> AnalysisDispatcher:
    """Dispatcher for the running app, built on first use if startup was skipped."""
    if request.app.state.dispatcher is None:
        request.app.state.dispatcher = AnalysisDispatcher.from_settings(get_settings())
    return request.app.state.dispatcher


app = create_app()


def main():
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    setup_logging(
        level=settings.observability.log_level,
        json_output=settings.observability.json_logs,
        environment=settings.environment,
    )
    logger.info(f"Starting ScamCheck API on {settings.host}:{settings.port} ({settings.environment})")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
