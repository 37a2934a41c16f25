"""FastAPI server exposing the Shopify order webhook."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from drop_orders import __version__
from drop_orders.config import WEBHOOK_PATH
from drop_orders.db.datastore import Datastore, SqlDatastore
from drop_orders.mailer import build_mailer
from drop_orders.mailer.protocol import Mailer
from drop_orders.utils.logger import get_logger
from drop_orders.webhook.processor import OrderWebhookProcessor, WebhookSettings

logger = get_logger("drop_orders.webhook.server")

# create_app(mailer=...) left unset: build the configured mailer. Explicit None: no notifications.
_DEFAULT_MAILER: Any = object()

CORS_ALLOW_HEADERS = [
    "authorization",
    "x-client-info",
    "apikey",
    "content-type",
    "x-shopify-topic",
    "x-shopify-hmac-sha256",
    "x-shopify-shop-domain",
]
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}


def _setup_processor(app: FastAPI) -> None:
    """Build default datastore/mailer for whatever was not injected."""
    if getattr(app.state, "processor", None) is not None:
        return
    datastore = getattr(app.state, "datastore", None)
    if datastore is None:
        datastore = SqlDatastore()
        logger.info("webhook.lifespan.datastore_created")
    mailer = getattr(app.state, "mailer", _DEFAULT_MAILER)
    if mailer is None:
        logger.info("webhook.lifespan.notifications_disabled")
    elif mailer is _DEFAULT_MAILER:
        mailer = None
        try:
            mailer = build_mailer()
        except ValueError as e:
            # notifications are best effort; run without them
            logger.error("webhook.lifespan.mailer_unavailable", error=str(e))
    settings = getattr(app.state, "settings", None) or WebhookSettings()
    if not settings.secret:
        if settings.dev_mode:
            logger.warning("webhook.lifespan.no_secret_dev_mode")
        else:
            logger.error("webhook.lifespan.no_secret", detail="all deliveries will be rejected")
    app.state.processor = OrderWebhookProcessor(datastore=datastore, mailer=mailer, settings=settings)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    _setup_processor(app)
    yield
    logger.info("webhook.lifespan.shutdown")


def create_app(
    datastore: Datastore | None = None,
    mailer: Mailer | None = _DEFAULT_MAILER,
    settings: WebhookSettings | None = None,
) -> FastAPI:
    """
    Create FastAPI app. If datastore is passed, the processor is built immediately (tests
    and embedding); otherwise the lifespan builds a SqlDatastore. Without a mailer argument
    the configured mailer is built; mailer=None turns operator notifications off.
    """
    app = FastAPI(
        title="Drop Orders Webhook",
        version=__version__,
        lifespan=_lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=CORS_ALLOW_HEADERS,
    )
    app.state.processor = None
    app.state.datastore = datastore
    app.state.mailer = mailer
    app.state.settings = settings
    if datastore is not None:
        _setup_processor(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.options(WEBHOOK_PATH)
    async def order_webhook_preflight() -> Response:
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.post(WEBHOOK_PATH, response_model=None)
    async def order_webhook(request: Request) -> JSONResponse:
        # Raw bytes: the HMAC covers the body exactly as sent
        raw_body = await request.body()
        processor: OrderWebhookProcessor | None = request.app.state.processor
        if processor is None:
            logger.error("webhook.order.no_processor")
            return JSONResponse(
                status_code=503,
                content={"error": "Service not ready"},
                headers=CORS_HEADERS,
            )
        result = await processor.handle(
            raw_body,
            topic=request.headers.get("x-shopify-topic"),
            signature=request.headers.get("x-shopify-hmac-sha256"),
            shop_domain=request.headers.get("x-shopify-shop-domain"),
        )
        content: dict[str, Any] = result.body
        return JSONResponse(status_code=result.status_code, content=content, headers=CORS_HEADERS)

    return app
