"""Wiring for a bridge process.

Provides the settings singleton and builds a processor from a loader.
"""

import logging
from functools import lru_cache

from stepbridge.application.processor import Processor
from stepbridge.domain.catalog import Catalog
from stepbridge.domain.coercion import ArgumentCoercer
from stepbridge.domain.protocols import StepLoader
from stepbridge.shared.config import Settings
from stepbridge.shared.logging_config import configure_logging

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Get bridge settings (singleton).

    Cached because settings read the environment and ``.env`` file and
    should be reused for the whole run.

    Returns:
        Bridge settings
    """
    return Settings()


def create_processor(
    loader: StepLoader,
    settings: Settings | None = None,
    coercer: ArgumentCoercer | None = None,
    setup_logging: bool = False,
) -> Processor:
    """Load the catalog once and build a processor around it.

    Args:
        loader: Source of step definitions for this run
        settings: Bridge settings (default: ``get_settings()``)
        coercer: Argument coercer with any extra converters registered
        setup_logging: Configure the root logger from ``settings.log_level``
            (for processes that have not configured logging themselves)

    Returns:
        Processor ready to serve requests

    Raises:
        StepDefinitionError: If the loader yields an invalid or duplicate
            step definition
    """
    if settings is None:
        settings = get_settings()
    if setup_logging:
        configure_logging(settings.log_level)

    catalog = Catalog.from_loader(loader)
    logger.info(f"Processor ready: {catalog!r}")
    return Processor(catalog, coercer=coercer, settings=settings)
