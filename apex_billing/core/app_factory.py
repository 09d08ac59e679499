from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .container import ApplicationContainer, build_container
from .logging import configure_logging
from ..infrastructure.billing.stripe_gateway import StripeGateway
from ..infrastructure.identity.supabase_tokens import SupabaseTokenResolver
from ..infrastructure.repositories.client_repository import SupabaseClientRepository
from ..presentation.api.errors import register_exception_handlers
from ..presentation.api.routers import checkout as checkout_router
from ..presentation.api.routers import stripe_webhook as stripe_webhook_router
from ..presentation.api.routers import subscription as subscription_router
from ..presentation.api.routers import tiers as tiers_router

logger = logging.getLogger(__name__)


def create_application(container: Optional[ApplicationContainer] = None) -> FastAPI:
    """Build the ASGI app.

    A prepared ``container`` replaces the Stripe and Supabase clients that
    are otherwise constructed from the environment at startup.
    """
    settings = container.settings if container is not None else Settings()

    app = FastAPI(title="Apex Operations Billing", lifespan=_create_lifespan(settings, container))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins if settings else ["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(checkout_router.router)
    app.include_router(stripe_webhook_router.router)
    app.include_router(subscription_router.router)
    app.include_router(tiers_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def _create_lifespan(settings: Optional[Settings], prepared: Optional[ApplicationContainer]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        if prepared is not None:
            app.state.container = prepared  # type: ignore[attr-defined]
            yield
            return

        client_repository = SupabaseClientRepository(
            base_url=settings.supabase_url,
            service_role_key=settings.supabase_service_role_key,
            timeout=settings.supabase_timeout_seconds,
        )
        billing_provider = StripeGateway(
            secret_key=settings.stripe_secret_key,
            webhook_secret=settings.stripe_webhook_secret,
            api_version=settings.stripe_api_version,
        )
        identity_resolver = SupabaseTokenResolver(settings.supabase_jwt_secret)

        app.state.container = build_container(  # type: ignore[attr-defined]
            settings,
            client_repository=client_repository,
            billing_provider=billing_provider,
            identity_resolver=identity_resolver,
        )
        logger.info("Billing service started (Stripe API %s)", settings.stripe_api_version)

        try:
            yield
        finally:
            client_repository.close()

    return lifespan
