"""Construction of the objects a command needs.

Commands call ``create_service`` to get an OverlapService whose session
has already been restored from the local store.
"""

from __future__ import annotations

import logging

from taxaoverlap.app import OverlapService, OverlapSession
from taxaoverlap.cli.common.context import CliContext
from taxaoverlap.config import Settings, get_config, reload_config
from taxaoverlap.services import RequestsTransport, SQLiteKeyValueStore, TMDBClient
from taxaoverlap.services.transport import HttpTransport
from taxaoverlap.shared.logging import setup_structured_logger

logger = logging.getLogger(__name__)


def load_cli_settings(context: CliContext) -> Settings:
    """Settings for this invocation, honouring --config."""
    if context.config_path:
        return reload_config(context.config_path)
    return get_config()


def setup_cli_logging(context: CliContext, settings: Settings) -> None:
    """Configure the package logger from the context and settings."""
    setup_structured_logger(
        "taxaoverlap",
        level=context.get_effective_log_level(settings.logging.level),
        log_file=settings.logging.file,
        use_rich_console=settings.logging.console_output,
    )


def create_service(
    settings: Settings,
    transport: HttpTransport | None = None,
) -> OverlapService:
    """Build an OverlapService with its session restored from disk.

    Args:
        settings: Loaded settings
        transport: HTTP transport, a RequestsTransport when omitted

    Returns:
        Ready-to-use service
    """
    tmdb_settings = settings.api.tmdb
    store = SQLiteKeyValueStore(settings.storage.path)
    client = TMDBClient(
        tmdb_settings,
        transport or RequestsTransport(timeout=tmdb_settings.timeout),
    )
    session = OverlapSession(language=tmdb_settings.default_language)
    service = OverlapService(
        session,
        client,
        store,
        max_age_ms=settings.cache.max_age_ms,
    )
    service.load_saved_state()
    logger.debug("Session restored from %s", settings.storage.path)
    return service
