"""Tango CLI: deck management and interactive review sessions."""

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any

import typer

from tango.application.config import AppConfig, resolve_config
from tango.application.factory import get_clock, get_deck_store, get_learning_service
from tango.application.learning.mastery import describe_time_until_review
from tango.application.learning.stats import summarize_deck
from tango.domain.learning.models import Card, Deck
from tango.domain.learning.ports import DeckStore, DeckStoreError

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="tango: spaced-repetition flashcards for programming terms.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage tango configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."),
    ] = 0,
    deck_dir: Annotated[
        Path | None, typer.Option(help="Directory holding deck files. Defaults to config.")
    ] = None,
):
    """Global settings for tango."""
    ctx.ensure_object(dict)
    # Each -v raises the configured level by one step
    ctx.obj["verbose"] = 1 + verbose if verbose else None
    ctx.obj["deck_dir"] = deck_dir


def _resolve(ctx: typer.Context, **overrides: Any) -> AppConfig:
    obj = ctx.obj or {}
    config = resolve_config(
        {"deck_dir": obj.get("deck_dir"), "verbose": obj.get("verbose"), **overrides}
    )
    _apply_verbosity(config.verbose)
    return config


def _apply_verbosity(verbose: int) -> None:
    """0 = warnings only, 1 = info, 2 or more = debug."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.getLogger("tango").setLevel(level)


def _load_deck_or_exit(store: DeckStore, name: str) -> Deck:
    try:
        return store.load_deck(name)
    except DeckStoreError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1)


def _save_deck_or_exit(store: DeckStore, deck: Deck) -> None:
    try:
        store.save_deck(deck)
    except DeckStoreError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1)


def _find_card_or_exit(deck: Deck, term: str) -> Card:
    card = deck.find_card(term)
    if card is None:
        typer.secho(f"No card {term!r} in {deck.name}.", fg="red", err=True)
        raise typer.Exit(1)
    return card


# ---------------------------------------------------------------------------
# Deck commands
# ---------------------------------------------------------------------------


@app.command("decks")
def list_decks(ctx: typer.Context):
    """List available decks."""
    store = get_deck_store(_resolve(ctx))
    names = store.list_decks()
    if not names:
        typer.secho("No decks found.", fg="yellow")
        return
    for name in names:
        typer.echo(name)


@app.command()
def add(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name. Created if missing.")],
    term: Annotated[str, typer.Argument(help="Term shown on the front of the card.")],
    definition: Annotated[str, typer.Argument(help="Definition shown on the back.")],
):
    """Add a card to a deck."""
    store = get_deck_store(_resolve(ctx))
    target = _load_deck_or_exit(store, deck) if store.has_deck(deck) else Deck(name=deck)
    card = target.add_card(term, definition)
    _save_deck_or_exit(store, target)
    typer.secho(f"Added {card.term!r} to {target.name} ({len(target.cards)} cards).", fg="green")


@app.command()
def edit(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    term: Annotated[str, typer.Argument(help="Current term of the card to edit.")],
    new_term: Annotated[str | None, typer.Option("--term", help="Replacement term.")] = None,
    definition: Annotated[
        str | None, typer.Option("--definition", help="Replacement definition.")
    ] = None,
):
    """Change a card's term or definition. Learning progress is kept."""
    if new_term is None and definition is None:
        typer.secho("Nothing to change. Pass --term and/or --definition.", fg="yellow")
        raise typer.Exit(2)

    store = get_deck_store(_resolve(ctx))
    target = _load_deck_or_exit(store, deck)
    card = _find_card_or_exit(target, term)
    target.update_card(card.id, term=new_term, definition=definition)
    _save_deck_or_exit(store, target)
    typer.secho(f"Updated {card.term!r} in {target.name}.", fg="green")


@app.command()
def remove(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    term: Annotated[str, typer.Argument(help="Term of the card to remove.")],
):
    """Remove a card from a deck."""
    store = get_deck_store(_resolve(ctx))
    target = _load_deck_or_exit(store, deck)
    card = _find_card_or_exit(target, term)
    target.remove_card(card.id)
    _save_deck_or_exit(store, target)
    typer.secho(f"Removed {card.term!r} from {target.name} ({len(target.cards)} cards).", fg="green")


@app.command("delete-deck")
def delete_deck(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Bypass confirmation for destructive actions.")
    ] = False,
):
    """Delete a deck and all of its cards."""
    store = get_deck_store(_resolve(ctx))
    if not force and not typer.confirm(f"Delete deck {deck!r} and all its cards?", default=False):
        typer.echo("Aborted.")
        raise typer.Exit(1)
    try:
        store.delete_deck(deck)
    except DeckStoreError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1)
    typer.secho(f"Deleted deck {deck}.", fg="green")


@app.command()
def due(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
):
    """Show each card's understanding level and when it is next due."""
    store = get_deck_store(_resolve(ctx))
    target = _load_deck_or_exit(store, deck)
    now = get_clock().now()

    # Never-reviewed cards first, then soonest due
    ordered = sorted(
        target.cards,
        key=lambda c: (c.next_review_at is not None, c.next_review_at or now),
    )
    for card in ordered:
        typer.echo(
            f"{card.term:<30} {card.level.display_name:<10} "
            f"{describe_time_until_review(card, now):<16} reviews: {card.review_count}"
        )


@app.command()
def stats(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Summarize learning progress for a deck."""
    store = get_deck_store(_resolve(ctx))
    target = _load_deck_or_exit(store, deck)
    summary = summarize_deck(target.cards, get_clock().now())

    if json_output:
        typer.echo(json.dumps(asdict(summary), indent=2))
        return

    typer.echo(
        f"Cards: {summary.total_cards}  Due: {summary.due_cards}  Reviews: {summary.total_reviews}"
    )
    for name, count in summary.by_level.items():
        typer.echo(f"  {name:<10} {count}")


@app.command()
def review(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    max_questions: Annotated[
        int | None, typer.Option("--max", min=0, help="Maximum cards in this session.")
    ] = None,
    seed: Annotated[int | None, typer.Option(help="Seed for reproducible card order.")] = None,
):
    """[bold green]Review[/bold green] a deck: reveal each card and grade yourself."""
    config = _resolve(ctx, max_questions=max_questions, seed=seed)
    store = get_deck_store(config)
    target = _load_deck_or_exit(store, deck)

    service = get_learning_service(config, clock=get_clock())
    service.start_session()
    cards = service.select_cards(target.cards)

    if not cards:
        service.end_session()
        typer.secho("No cards to review.", fg="yellow")
        return

    for index, card in enumerate(cards, start=1):
        typer.secho(f"\n[{index}/{len(cards)}] {card.term}", bold=True)
        typer.prompt("Press Enter to reveal", default="", show_default=False)
        typer.echo(card.definition)

        known = typer.confirm("Did you know it?", default=False)
        service.answer(card, known)

        # A failed save should not end the session
        try:
            store.save_deck(target)
        except DeckStoreError as e:
            logger.error(f"Failed to save progress: {e}")
            typer.secho(f"Could not save progress: {e}", fg="yellow", err=True)

    summary = service.end_session()
    typer.secho(
        f"\nSession complete: {summary.correct}/{summary.answered} correct "
        f"({summary.understanding_rate}%).",
        fg="green",
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _resolve(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
