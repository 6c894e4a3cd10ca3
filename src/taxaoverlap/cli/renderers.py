"""Rich rendering of command results."""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taxaoverlap.app.session import PoolSnapshot
from taxaoverlap.services.credentials import ClassifiedCredential
from taxaoverlap.services.images import image_url
from taxaoverlap.shared.constants import ImageSize, Ranking, UserMessages
from taxaoverlap.shared.models import MatchEntry, MediaKind, Role, TitleSummary


def format_saved_at(saved_at_ms: int | None) -> str:
    """Render epoch milliseconds as a UTC timestamp."""
    if saved_at_ms is None:
        return "-"
    moment = datetime.fromtimestamp(saved_at_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def _roles(roles: tuple[Role, ...]) -> str:
    return "\n".join(escape(role.label()) for role in roles) or "-"


def render_credential(
    console: Console,
    credential: ClassifiedCredential,
    raw: str,
    *,
    reveal: bool = False,
) -> None:
    shown = (raw or UserMessages.CREDENTIAL_NOT_SAVED) if reveal else credential.masked_display
    console.print(f"Credential: [bold]{escape(shown)}[/bold]")
    console.print(f"Type: {credential.kind.label}")


def render_pool_status(
    console: Console,
    pool: PoolSnapshot,
    *,
    fresh: bool,
    reference_title_id: int,
) -> None:
    table = Table(title="TAXA pool", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Reference title", str(reference_title_id))
    table.add_row("People", str(pool.size) if pool.is_loaded else UserMessages.POOL_EMPTY)
    table.add_row("Saved", format_saved_at(pool.meta.saved_at if pool.meta else None))
    table.add_row("Language", pool.meta.language if pool.meta else "-")
    table.add_row("Fresh", "yes" if fresh else "no")
    console.print(table)


def render_search_results(
    console: Console,
    results: list[TitleSummary],
    media_kind: MediaKind,
    query: str,
    image_base_url: str,
) -> None:
    if not results:
        console.print(UserMessages.NO_RESULTS.format(query=escape(query)))
        return

    table = Table(title=f"Search: {escape(query)}")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Year")
    if media_kind is MediaKind.SERIES:
        table.add_column("Episodes", justify="right")
    table.add_column("Poster", style="dim")

    for result in results:
        row = [str(result.id), escape(result.title), result.year or "-"]
        if media_kind is MediaKind.SERIES:
            row.append(str(result.number_of_episodes) if result.number_of_episodes else "-")
        row.append(image_url(result.poster_path, ImageSize.POSTER, image_base_url) or "-")
        table.add_row(*row)
    console.print(table)


def render_matches(
    console: Console,
    title: TitleSummary | None,
    matches: list[MatchEntry],
    media_kind: MediaKind,
    image_base_url: str,
) -> None:
    heading = escape(title.title) if title is not None and title.title else "title"
    if not matches:
        console.print(f"[green]{UserMessages.OVERLAP_FREE}[/green]")
        return

    table = Table(title=f"TAXA overlap: {heading} ({len(matches)})")
    table.add_column("Name", style="bold")
    table.add_column("Here")
    if media_kind is MediaKind.SERIES:
        table.add_column("Eps here", justify="right")
    else:
        table.add_column("Billing", justify="right")
    table.add_column("In TAXA")
    table.add_column("Eps in TAXA", justify="right")
    table.add_column("Profile", style="dim")

    for match in matches:
        if media_kind is MediaKind.SERIES:
            here_stat = str(match.here_episodes)
        else:
            known = match.here_order not in (None, Ranking.UNKNOWN_ORDER)
            here_stat = str(match.here_order) if known else "-"
        table.add_row(
            escape(match.name),
            _roles(match.here_roles),
            here_stat,
            _roles(match.reference_roles),
            str(match.reference_episodes),
            image_url(match.image_path, ImageSize.PROFILE, image_base_url) or "-",
        )
    console.print(table)
