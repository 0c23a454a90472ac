"""CLI command implementations"""

from datetime import datetime
from typing import Annotated, Optional

import typer
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from sluggable.config import Settings, load_config
from sluggable.crud.database import init_db, make_engine, session_scope
from sluggable.crud.models import Article, Page
from sluggable.errors import InvalidOption, SlugAttemptsExhausted
from sluggable.normalize import normalize
from sluggable.options import SlugOptions, guard_against_invalid_options
from sluggable.record import Record
from sluggable.source import resolve_source


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _engine(settings: Settings) -> Engine:
    engine = make_engine(settings.db_url)
    init_db(engine)
    return engine


def _commit(session: Session) -> None:
    """Commit, reporting slug failures and unique-index violations as CLI errors."""
    try:
        session.commit()
    except (InvalidOption, SlugAttemptsExhausted) as e:
        session.rollback()
        _fail("Could not assign slug", e)
    except IntegrityError as e:
        # Another writer took the slug between the uniqueness check and the insert.
        session.rollback()
        _fail("Slug already taken, retry the command", e.orig)


def _find_article(session: Session, slug: str) -> Article:
    row = session.exec(
        select(Article).where(Article.slug == slug).where(Article.deleted_at.is_(None))
    ).first()
    if row is None:
        _fail(f"No article with slug '{slug}'")
    return row


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def preview_cmd(
    text: Annotated[str, typer.Argument(help="Source text to turn into a slug")],
    max_length: Annotated[Optional[int], typer.Option("--max-length", help="Truncate source to N characters")] = None,
    separator: Annotated[Optional[str], typer.Option("--separator", help="Word separator")] = None,
    ):
    """Print the slug TEXT would produce, without touching the database."""
    settings = _settings(overrides={"maximum_length": max_length, "separator": separator})
    options = SlugOptions.from_settings(settings).generate_slugs_from("text")
    guard_against_invalid_options(options)
    typer.echo(normalize(resolve_source(Record(fields={"text": text}), options), options.separator))


def add_cmd(
    title: Annotated[str, typer.Argument(help="Title to derive the slug from")],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Custom slug to keep instead of generating one")] = None,
    page: Annotated[bool, typer.Option("--page", help="Store a page instead of an article")] = False,
    section: Annotated[Optional[str], typer.Option("--section", help="Page section (required with --page)")] = None,
    ):
    """Store a new article (or page) and print its slug."""
    if page and not section:
        _fail("--section is required with --page")
    settings = _settings()
    engine = _engine(settings)

    with session_scope(engine, settings) as session:
        row = Page(section=section, title=title, slug=slug) if page else Article(title=title, slug=slug)
        session.add(row)
        _commit(session)
        typer.echo(row.slug)


def rename_cmd(
    slug: Annotated[str, typer.Argument(help="Slug of the article to retitle")],
    title: Annotated[str, typer.Argument(help="New title")],
    ):
    """Change an article's title and print its regenerated slug."""
    settings = _settings()
    engine = _engine(settings)

    with session_scope(engine, settings) as session:
        row = _find_article(session, slug)
        row.title = title
        session.add(row)
        _commit(session)
        typer.echo(row.slug)


def delete_cmd(
    slug: Annotated[str, typer.Argument(help="Slug of the article to soft-delete")],
    ):
    """Soft-delete an article. Its slug stays reserved."""
    settings = _settings()
    engine = _engine(settings)

    with session_scope(engine, settings) as session:
        row = _find_article(session, slug)
        row.deleted_at = datetime.now()
        session.add(row)
        _commit(session)
    typer.echo(f"Deleted: {slug}")


def list_cmd(
    with_deleted: Annotated[bool, typer.Option("--with-deleted", help="Include soft-deleted articles")] = False,
    ):
    """List stored article slugs in insertion order."""
    engine = _engine(_settings())

    with Session(engine) as session:
        stmt = select(Article).order_by(Article.id)
        if not with_deleted:
            stmt = stmt.where(Article.deleted_at.is_(None))
        rows = session.exec(stmt).all()
        lines = [f"{a.slug}  (deleted)" if a.trashed else a.slug for a in rows]

    if not lines:
        typer.echo("No articles found.")
        raise typer.Exit(1)
    for line in lines:
        typer.echo(line)
