"""FastAPI application exposing the chat gateway over HTTP."""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..gateway import ChatGateway, GatewayError, ValidationError
from ..history import create_history_store
from ..llm import create_completion_service
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    message: Any = Field(default=None, description="User's latest message")
    history: list[dict[str, Any]] | None = Field(
        default=None,
        description="Last turns kept by the client; accepted but not used for the prompt",
    )


class ChatResponse(BaseModel):
    reply: str


def build_gateway(settings: Settings) -> ChatGateway:
    """Create the gateway from settings.

    Raises:
        RuntimeError: If no API key is configured
    """
    if not settings.google_api_key:
        raise RuntimeError("GOOGLE_API_KEY not set. Please configure it in environment or .env")

    store = create_history_store("json", path=settings.history_path)
    completion = create_completion_service(
        "gemini",
        api_key=settings.google_api_key,
        model=settings.gemini_model,
    )
    logger.info(
        "Gateway ready: model=%s history=%s",
        settings.gemini_model,
        settings.history_path,
    )
    return ChatGateway(store, completion)


def create_app(gateway: ChatGateway | None = None, settings: Settings | None = None) -> FastAPI:
    """Create the HTTP application.

    Args:
        gateway: Gateway to serve; built from settings at startup when None
        settings: Settings used when building the gateway

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.gateway is None
        if owned:
            app.state.gateway = build_gateway(settings or get_settings())
        try:
            yield
        finally:
            if owned:
                await app.state.gateway.completion.close()
                app.state.gateway = None

    app = FastAPI(title="gemchat", version="0.1.0", lifespan=lifespan)
    app.state.gateway = gateway

    # Any frontend may call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed chat request: %s", exc.errors())
        return JSONResponse(
            status_code=ValidationError.status_code,
            content={"error": ValidationError.public_message},
        )

    @app.post("/api/chat", response_model=ChatResponse)
    async def chat(req: ChatRequest, request: Request) -> ChatResponse:
        gateway: ChatGateway = request.app.state.gateway
        logger.info(
            "Incoming chat: message_len=%s client_history_turns=%s",
            len(req.message) if isinstance(req.message, str) else None,
            len(req.history or []),
        )
        reply = await gateway.handle_chat(req.message)
        return ChatResponse(reply=reply)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def run_server(host: str = "127.0.0.1", port: int = 5000, log_level: str = "info") -> None:
    """Run the HTTP server with uvicorn."""
    import uvicorn

    app = create_app()
    logger.info("Server running on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower(), log_config=None)
