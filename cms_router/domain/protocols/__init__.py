"""Domain protocols (ports).

Usage:
    from cms_router.domain.protocols import ContentEngine, LoggerProtocol
"""

from cms_router.domain.protocols.content_engine_protocol import (
    ContentEngine,
    EndpointDefinition,
    EndpointResult,
    EngineConfig,
)
from cms_router.domain.protocols.logger_protocol import LoggerProtocol

__all__ = [
    "ContentEngine",
    "EndpointDefinition",
    "EndpointResult",
    "EngineConfig",
    "LoggerProtocol",
]
