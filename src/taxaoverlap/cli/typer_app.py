"""
TAXA-overlap Typer CLI Application

Command-line front end of the overlap workflow: manage the TMDB
credential, keep the TAXA reference pool, search titles and check which
cast members of a title also appeared in TAXA.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console

from taxaoverlap.app import OverlapService
from taxaoverlap.cli.common.context import CliContext, LogLevel, get_cli_context, set_cli_context
from taxaoverlap.cli.common.error_decorator import handle_cli_errors
from taxaoverlap.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    media_kind_option,
    sort_mode_option,
    version_option,
)
from taxaoverlap.cli.common.setup import create_service, load_cli_settings, setup_cli_logging
from taxaoverlap.cli.json_formatter import format_json_output
from taxaoverlap.cli.renderers import (
    format_saved_at,
    render_credential,
    render_matches,
    render_pool_status,
    render_search_results,
)
from taxaoverlap.config import Settings
from taxaoverlap.services.pool_cache import is_fresh
from taxaoverlap.shared.constants import Application, UserMessages
from taxaoverlap.shared.errors import CliError, ErrorCode, ErrorContext
from taxaoverlap.shared.models import MediaKind, SortMode

app = typer.Typer(
    name=Application.NAME,
    help="Find the cast members of a movie or series who also appeared in TAXA (via TMDB).",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
auth_app = typer.Typer(help="Show, save or clear the TMDB credential.", no_args_is_help=True)
pool_app = typer.Typer(help="Inspect or refresh the TAXA reference pool.", no_args_is_help=True)
app.add_typer(auth_app, name="auth")
app.add_typer(pool_app, name="pool")


def _console() -> Console:
    return Console()


def _prepare() -> tuple[OverlapService, Settings]:
    """Load settings, configure logging and restore the session."""
    context = get_cli_context()
    settings = load_cli_settings(context)
    setup_cli_logging(context, settings)
    return create_service(settings), settings


def _emit_json(command: str, data: object, warnings: list[str] | None = None) -> None:
    typer.echo(format_json_output(True, command, data, warnings=warnings).decode("utf-8"))


def _json_enabled() -> bool:
    return get_cli_context().is_json_output_enabled()


@app.callback()
def main(
    log_level: Annotated[Optional[LogLevel], log_level_option] = None,
    json_output: Annotated[bool, json_output_option] = False,
    config: Annotated[Optional[str], config_option] = None,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Process the global options before any command runs."""
    set_cli_context(
        CliContext(
            log_level=log_level,
            json_output=json_output,
            config_path=config,
        )
    )


# Credential


@auth_app.command("show")
@handle_cli_errors("auth show")
def auth_show(
    reveal: Annotated[bool, typer.Option("--reveal", help="Show the full credential.")] = False,
) -> None:
    """Show the saved credential (masked unless --reveal) and its type."""
    service, _ = _prepare()
    session = service.session
    credential = session.classified_credential

    if _json_enabled():
        _emit_json(
            "auth show",
            {
                "kind": credential.kind.value,
                "label": credential.kind.label,
                "display": session.credential if reveal else credential.masked_display,
            },
        )
        return

    render_credential(_console(), credential, session.credential, reveal=reveal)


@auth_app.command("set")
@handle_cli_errors("auth set")
def auth_set(
    credential: Annotated[str, typer.Argument(help="TMDB v4 Bearer token or v3 api_key.")],
) -> None:
    """Save a TMDB credential."""
    service, _ = _prepare()
    service.set_credential(credential)
    if not service.save_credential():
        raise CliError(
            ErrorCode.NO_CREDENTIAL,
            "The credential is empty.",
            ErrorContext(operation="auth_set"),
            command="auth set",
        )
    classified = service.session.classified_credential

    if _json_enabled():
        _emit_json(
            "auth set",
            {"kind": classified.kind.value, "display": classified.masked_display},
        )
        return

    _console().print(f"{UserMessages.CREDENTIAL_SAVED} ({classified.kind.label})")


@auth_app.command("clear")
@handle_cli_errors("auth clear")
def auth_clear() -> None:
    """Remove the saved credential."""
    service, _ = _prepare()
    service.clear_credential()

    if _json_enabled():
        _emit_json("auth clear", {"cleared": True})
        return

    _console().print(UserMessages.CREDENTIAL_CLEARED)


# Reference pool


@pool_app.command("status")
@handle_cli_errors("pool status")
def pool_status() -> None:
    """Show size, age and freshness of the cached TAXA pool."""
    service, settings = _prepare()
    pool = service.session.pool
    fresh = is_fresh(
        pool.meta,
        settings.cache.max_age_ms,
        pool_present=pool.is_loaded,
    )

    if _json_enabled():
        _emit_json(
            "pool status",
            {
                "reference_title_id": settings.api.tmdb.reference_title_id,
                "loaded": pool.is_loaded,
                "people": pool.size,
                "saved_at": pool.meta.saved_at if pool.meta else None,
                "language": pool.meta.language if pool.meta else None,
                "fresh": fresh,
            },
        )
        return

    render_pool_status(
        _console(),
        pool,
        fresh=fresh,
        reference_title_id=settings.api.tmdb.reference_title_id,
    )


@pool_app.command("refresh")
@handle_cli_errors("pool refresh")
def pool_refresh(
    force: Annotated[
        bool,
        typer.Option(
            "--force/--no-force",
            help="Refetch even when the cached pool is still fresh.",
        ),
    ] = True,
) -> None:
    """Fetch the TAXA cast from TMDB and cache it."""
    service, _ = _prepare()
    fetched = service.refresh_pool(force=force)
    pool = service.session.pool

    if _json_enabled():
        _emit_json(
            "pool refresh",
            {
                "fetched": fetched,
                "people": pool.size,
                "saved_at": pool.meta.saved_at if pool.meta else None,
            },
        )
        return

    message = UserMessages.POOL_REFRESHED if fetched else UserMessages.POOL_FRESH
    _console().print(message.format(count=pool.size))
    if pool.meta is not None:
        _console().print(f"Saved {format_saved_at(pool.meta.saved_at)} ({pool.meta.language})")


# Search and check


@app.command("search")
@handle_cli_errors("search")
def search_command(
    query: Annotated[str, typer.Argument(help="Title to search for.")],
    media_kind: Annotated[MediaKind, media_kind_option] = MediaKind.SERIES,
) -> None:
    """Search TMDB for a series or movie."""
    service, settings = _prepare()
    service.set_media_kind(media_kind)
    results = service.search(query)

    if _json_enabled():
        _emit_json(
            "search",
            {"query": query, "media_kind": media_kind, "results": results},
        )
        return

    render_search_results(
        _console(),
        results,
        media_kind,
        query,
        settings.api.tmdb.image_base_url,
    )


@app.command("check")
@handle_cli_errors("check")
def check_command(
    title_id: Annotated[int, typer.Argument(help="TMDB id of the series or movie.")],
    media_kind: Annotated[MediaKind, media_kind_option] = MediaKind.SERIES,
    sort_mode: Annotated[SortMode, sort_mode_option] = SortMode.REFERENCE,
) -> None:
    """List the cast members of a title who also appeared in TAXA."""
    service, settings = _prepare()
    service.set_media_kind(media_kind)
    service.change_sort_mode(sort_mode)
    matches = service.check_title(title_id)

    if _json_enabled():
        _emit_json(
            "check",
            {
                "title_id": title_id,
                "media_kind": media_kind,
                "sort_mode": sort_mode,
                "overlap_free": not matches,
                "matches": matches,
            },
        )
        return

    render_matches(
        _console(),
        service.session.selected,
        matches,
        media_kind,
        settings.api.tmdb.image_base_url,
    )


# Session


@app.command("logout")
@handle_cli_errors("logout")
def logout_command() -> None:
    """Remove the saved credential and the cached TAXA pool."""
    service, _ = _prepare()
    service.logout()

    if _json_enabled():
        _emit_json("logout", {"logged_out": True})
        return

    _console().print(UserMessages.LOGGED_OUT)


@app.command("language")
@handle_cli_errors("language")
def language_command(
    code: Annotated[Optional[str], typer.Argument(help="Language code, e.g. da-DK.")] = None,
) -> None:
    """Show or set the language used for titles and character names."""
    service, settings = _prepare()
    supported = settings.api.tmdb.supported_languages

    if code is not None:
        if code not in supported:
            raise CliError(
                ErrorCode.CONFIG_ERROR,
                f"Unsupported language '{code}'. Choose one of: {', '.join(supported)}",
                ErrorContext(operation="set_language", additional_data={"language": code}),
                command="language",
            )
        service.set_language(code)

    language = service.session.language
    if _json_enabled():
        _emit_json("language", {"language": language, "supported": supported})
        return

    _console().print(f"Language: [bold]{language}[/bold]")


if __name__ == "__main__":
    app()
