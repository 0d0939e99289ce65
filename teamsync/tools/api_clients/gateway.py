"""Entity gateway: one access point for all remote resources"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ...config.settings import ServiceConfig
from .team_service import TeamServiceClient
from .project_service import ProjectServiceClient
from .organisation_service import OrganisationServiceClient
from .member_service import MemberServiceClient

logger = logging.getLogger(__name__)


@dataclass
class EntityGateway:
    """Groups the per-entity clients used by the engine.

    ``teams``, ``projects``, ``organisations`` and ``members`` are either the
    HTTP clients or their in-memory stand-ins from ``stub_services``.
    """
    teams: Any
    projects: Any
    organisations: Any
    members: Any
    http_client: Optional[httpx.AsyncClient] = None

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()


def build_http_gateway(config: ServiceConfig,
                       transport: Optional[httpx.AsyncBaseTransport] = None) -> EntityGateway:
    """Create a gateway whose clients share one ``httpx.AsyncClient``"""
    client = httpx.AsyncClient(timeout=config.timeout, transport=transport)
    kwargs = dict(base_url=config.url, api_key=config.api_key or None, client=client)
    return EntityGateway(
        teams=TeamServiceClient(**kwargs),
        projects=ProjectServiceClient(**kwargs),
        organisations=OrganisationServiceClient(**kwargs),
        members=MemberServiceClient(**kwargs),
        http_client=client,
    )


def build_gateway(config: ServiceConfig, latency: float = 0.0) -> EntityGateway:
    """Stub gateway in local mode, HTTP gateway otherwise"""
    if config.use_stub:
        from ..stub_services import get_stub_gateway
        logger.debug("Using stub entity services")
        return get_stub_gateway(latency=latency)

    logger.debug(f"Using remote entity services at {config.url}")
    return build_http_gateway(config)
