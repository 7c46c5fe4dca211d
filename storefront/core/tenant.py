# storefront/core/tenant.py
from __future__ import annotations
from typing import Iterable
from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send
from storefront.core.config import Settings, get_settings
from storefront.core.logging import tenant_var

import logging
logger = logging.getLogger(__name__)

TENANT_HEADER = "x-company-domain"

# Paths served without a tenant (same spirit as an edge matcher)
DEFAULT_EXCLUDED_PREFIXES = ("/health", "/docs", "/redoc", "/openapi.json", "/static", "/favicon.ico")


def resolve_tenant(host_header: str, settings: Settings | None = None) -> str:
    """
    Map an inbound Host header to a tenant identifier.
    - strips ':port'
    - takes the label before the first '.'
    - 'localhost' or the dev alias -> DEFAULT_TENANT
    - the secondary alias -> SECONDARY_TENANT
    - anything else is used verbatim (never raises)
    """
    settings = settings or get_settings()
    hostname = (host_header or "").split(":")[0]
    label = hostname.split(".")[0]

    if label == "localhost" or (settings.TENANT_DEV_ALIAS and settings.TENANT_DEV_ALIAS in label):
        return settings.DEFAULT_TENANT
    if settings.TENANT_SECONDARY_ALIAS and settings.TENANT_SECONDARY_ALIAS in label:
        return settings.SECONDARY_TENANT
    return label


class TenantMiddleware:
    """
    Resolves the tenant once per HTTP request and propagates it:
      - request header `x-company-domain` (overwritten if the client sent one)
      - scope["state"]["tenant"] for handlers and dependencies
      - `tenant_var` for log records, reset when the request ends
    """

    def __init__(self, app: ASGIApp, excluded_prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES):
        self.app = app
        self.excluded_prefixes = tuple(excluded_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "").startswith(self.excluded_prefixes):
            await self.app(scope, receive, send)
            return

        host = ""
        for name, value in scope.get("headers", []):
            if name == b"host":
                host = value.decode("latin-1")
                break

        tenant = resolve_tenant(host)
        logger.debug("tenant resolved host=%s tenant=%s", host, tenant)

        headers = [(k, v) for k, v in scope.get("headers", []) if k != TENANT_HEADER.encode()]
        headers.append((TENANT_HEADER.encode(), tenant.encode("latin-1")))
        scope = dict(scope)
        scope["headers"] = headers
        scope["state"] = {**scope.get("state", {}), "tenant": tenant}

        token = tenant_var.set(tenant)
        try:
            await self.app(scope, receive, send)
        finally:
            tenant_var.reset(token)


def get_tenant(request: Request) -> str:
    """Dependency: the tenant resolved by TenantMiddleware (falls back to resolving the Host header)."""
    tenant = getattr(request.state, "tenant", None)
    if tenant is None:
        tenant = request.headers.get(TENANT_HEADER) or resolve_tenant(request.headers.get("host", ""))
    return tenant
