"""FastAPI application entry point."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from otp_service.api.router import router as otp_router
from otp_service.config import Settings, settings as default_settings
from otp_service.core.issuer import ChallengeIssuer
from otp_service.core.otp_store import Clock, OTPStore
from otp_service.core.rate_limiter import SlidingWindowRateLimiter
from otp_service.errors import OTPServiceError, RateLimited
from otp_service.gateways.base import EmailGateway, SMSGateway
from otp_service.gateways.console import ConsoleEmailGateway, ConsoleSMSGateway
from otp_service.gateways.smtp_email import SMTPEmailGateway
from otp_service.gateways.twilio_sms import TwilioSMSGateway

logging.basicConfig(
    level=logging.DEBUG if default_settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


def build_sms_gateway(cfg: Settings) -> SMSGateway:
    """Twilio when credentials are configured, otherwise log-only."""
    if not cfg.twilio_account_sid:
        logger.warning("TWILIO_ACCOUNT_SID not set — SMS codes will only be logged")
        return ConsoleSMSGateway()
    return TwilioSMSGateway(
        account_sid=cfg.twilio_account_sid,
        auth_token=cfg.twilio_auth_token,
        from_number=cfg.twilio_phone_number,
        base_url=cfg.twilio_api_base_url,
        timeout=cfg.delivery_timeout_seconds,
    )


def build_email_gateway(cfg: Settings) -> EmailGateway:
    """SMTP when credentials are configured, otherwise log-only."""
    if not cfg.smtp_username:
        logger.warning("SMTP_USERNAME not set — email codes will only be logged")
        return ConsoleEmailGateway()
    return SMTPEmailGateway(
        hostname=cfg.smtp_host,
        port=cfg.smtp_port,
        sender=cfg.sender_address,
        username=cfg.smtp_username,
        password=cfg.smtp_password,
        timeout=cfg.delivery_timeout_seconds,
    )


async def _sweep_forever(app: FastAPI, interval: float) -> None:
    """Periodically drop expired challenges."""
    while True:
        await asyncio.sleep(interval)
        app.state.otp_store.purge_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hook."""
    cfg: Settings = app.state.settings
    logger.info("Starting %s OTP service …", cfg.app_name)

    sweeper = None
    if cfg.sweep_interval_seconds > 0:
        sweeper = asyncio.create_task(_sweep_forever(app, cfg.sweep_interval_seconds))
        logger.info("Expiry sweeper running every %ss", cfg.sweep_interval_seconds)

    yield

    if sweeper is not None:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
    logger.info("Shutting down %s OTP service …", cfg.app_name)


async def _handle_service_error(request: Request, exc: OTPServiceError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimited) and exc.retry_after is not None:
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=exc.status_code, content={"error": exc.message}, headers=headers
    )


async def _handle_invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected malformed body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(
    settings: Settings | None = None,
    *,
    store: OTPStore | None = None,
    sms_gateway: SMSGateway | None = None,
    email_gateway: EmailGateway | None = None,
    rate_limiter: SlidingWindowRateLimiter | None = None,
    clock: Clock = time.time,
) -> FastAPI:
    """Build the application, wiring components into ``app.state``.

    Any component not supplied is constructed from *settings*; tests pass
    fakes and a manual clock instead.
    """
    cfg = settings or default_settings
    store = store or OTPStore(clock=clock)

    app = FastAPI(
        title=f"{cfg.app_name} OTP Service",
        description="Issues and verifies one-time passcodes over SMS and email",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.otp_store = store
    app.state.rate_limiter = rate_limiter or SlidingWindowRateLimiter(
        max_requests=cfg.rate_limit_max_requests,
        window_seconds=cfg.rate_limit_window_seconds,
    )
    app.state.issuer = ChallengeIssuer(
        store,
        sms_gateway or build_sms_gateway(cfg),
        email_gateway or build_email_gateway(cfg),
        app_name=cfg.app_name,
        ttl_seconds=cfg.otp_ttl_seconds,
        delivery_timeout=cfg.delivery_timeout_seconds,
    )

    app.add_exception_handler(OTPServiceError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_invalid_body)
    app.include_router(otp_router)

    @app.get("/health")
    async def health_check():
        """Simple liveness probe."""
        return {
            "status": "healthy",
            "app": cfg.app_name,
            "pending_challenges": app.state.otp_store.pending_count,
        }

    return app


app = create_app()
