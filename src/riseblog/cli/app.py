"""Command line interface for inspecting a site's blog content."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from riseblog.config import BlogConfig
from riseblog.core.dates import format_date
from riseblog.core.types import BlogFilters, Locale, Post
from riseblog.exceptions import ConfigurationError, InvalidInputError
from riseblog.library import BlogLibrary
from riseblog.logging_setup import configure_logging, console

app = typer.Typer(name="riseblog", help="Query the bilingual blog collection of a site.", no_args_is_help=True)

LocaleOption = Annotated[Locale, typer.Option("--locale", "-l", help="Locale of the collection.")]


def _library(ctx: typer.Context) -> BlogLibrary:
    return ctx.obj


def _posts_table(title: str, posts: list[Post], locale: Locale) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Slug", style="green")
    table.add_column("Title")
    table.add_column("Tags", style="yellow")
    table.add_column("Author", style="blue")
    table.add_column("Min", justify="right", style="dim")
    for post in posts:
        table.add_row(
            format_date(post.date, locale),
            escape(post.slug),
            escape(post.title + (" (draft)" if post.draft else "")),
            escape(", ".join(post.tags or ())),
            escape(post.author.name) if post.author else "",
            str(post.reading_time),
        )
    return table


@app.callback()
def main(
    ctx: typer.Context,
    site_root: Annotated[
        Path | None,
        typer.Option("--site-root", help="Site directory holding .riseblog.toml and the content."),
    ] = None,
    development: Annotated[bool, typer.Option("--development", help="Include draft posts.")] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL. Overrides RISEBLOG_LOG_LEVEL."),
    ] = None,
) -> None:
    try:
        configure_logging(log_level)
    except ConfigurationError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc
    try:
        config = BlogConfig.load(site_root)
    except ConfigurationError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc
    if development:
        config.content.development = True
    ctx.obj = BlogLibrary.from_config(config)


@app.command()
def posts(
    ctx: typer.Context,
    locale: LocaleOption = Locale.EN,
    search: Annotated[str | None, typer.Option(help="Text to find in title, excerpt or tags.")] = None,
    tag: Annotated[str | None, typer.Option(help="Tag display name.")] = None,
    tag_slug: Annotated[str | None, typer.Option("--tag-slug", help="Tag slug.")] = None,
    month: Annotated[str | None, typer.Option(help="Month in YYYY-MM format.")] = None,
    author: Annotated[str | None, typer.Option(help="Author slug.")] = None,
    page: Annotated[int, typer.Option(min=1)] = 1,
    page_size: Annotated[int | None, typer.Option("--page-size", min=1)] = None,
) -> None:
    """List posts, optionally filtered and paginated."""
    library = _library(ctx)
    filters = BlogFilters(search=search, tag=tag, tag_slug=tag_slug, date=month, author=author)
    try:
        result = library.filtered_posts(locale, filters, page=page, page_size=page_size)
    except InvalidInputError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc

    console.print(_posts_table(f"Posts ({locale.value})", result.posts, locale))
    console.print(f"Page {page} of {result.total_pages} ({result.total} posts)")


@app.command()
def show(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Locale slug of the post.")],
    locale: LocaleOption = Locale.EN,
    as_json: Annotated[bool, typer.Option("--json", help="Print the post as JSON.")] = False,
) -> None:
    """Show one post."""
    post = _library(ctx).get_post(slug, locale)
    if post is None:
        console.print(f"[red]No post '{escape(slug)}' in {locale.value}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(post.model_dump_json(exclude={"content"}))
        return

    console.print(f"[bold]{escape(post.title)}[/bold]")
    console.print(f"{format_date(post.date, locale)} · {post.reading_time} min · {escape(post.slug)}")
    if post.author:
        console.print(f"Author: {escape(post.author.name)}")
    if post.tags:
        console.print(f"Tags: {escape(', '.join(post.tags))}")
    if post.excerpt:
        console.print(f"\n{escape(post.excerpt)}")


@app.command()
def tags(ctx: typer.Context, locale: LocaleOption = Locale.EN) -> None:
    """Show tag usage counts."""
    table = Table(title=f"Tags ({locale.value})")
    table.add_column("Tag", style="yellow")
    table.add_column("Posts", justify="right")
    for entry in _library(ctx).all_tags(locale):
        table.add_row(escape(entry.tag), str(entry.count))
    console.print(table)


@app.command()
def archive(ctx: typer.Context, locale: LocaleOption = Locale.EN) -> None:
    """Show post counts per month."""
    table = Table(title=f"Archive ({locale.value})")
    table.add_column("Month", style="cyan")
    table.add_column("Label")
    table.add_column("Posts", justify="right")
    for bucket in _library(ctx).archive_dates(locale):
        table.add_row(bucket.key, bucket.label, str(bucket.count))
    console.print(table)


@app.command()
def related(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Locale slug of the post.")],
    locale: LocaleOption = Locale.EN,
    limit: Annotated[int | None, typer.Option(min=0)] = None,
) -> None:
    """List posts related to a post by shared tags."""
    posts = _library(ctx).related_posts(slug, locale, limit)
    console.print(_posts_table(f"Related to {escape(slug)}", posts, locale))


@app.command()
def adjacent(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Locale slug of the post.")],
    locale: LocaleOption = Locale.EN,
) -> None:
    """Show the newer and older neighbours of a post."""
    neighbours = _library(ctx).adjacent_posts(slug, locale)
    console.print(f"Previous: {escape(neighbours.previous.slug) if neighbours.previous else '-'}")
    console.print(f"Next: {escape(neighbours.next.slug) if neighbours.next else '-'}")


@app.command()
def translate(
    ctx: typer.Context,
    directory_slug: Annotated[str, typer.Argument(help="Directory name of the post.")],
    target: Annotated[Locale, typer.Option("--to", help="Target locale.")] = Locale.SK,
) -> None:
    """Print the slug of a post in another locale."""
    slug = _library(ctx).translated_slug(directory_slug, target)
    if slug is None:
        console.print(f"[yellow]'{escape(directory_slug)}' is not translated to {target.value}[/yellow]")
        raise typer.Exit(code=1)
    console.print(escape(slug))


@app.command()
def author(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Author slug.")],
    locale: LocaleOption = Locale.EN,
    as_json: Annotated[bool, typer.Option("--json", help="Print the author as JSON.")] = False,
) -> None:
    """Show an author and their posts."""
    page = _library(ctx).author_page(slug, locale)
    if page is None:
        console.print(f"[red]Unknown author '{escape(slug)}'[/red]")
        raise typer.Exit(code=1)

    if as_json:
        payload = page.author.model_dump() | {"posts": [post.slug for post in page.posts]}
        console.print_json(json.dumps(payload, ensure_ascii=False))
        return

    console.print(f"[bold]{escape(page.author.name)}[/bold]")
    if page.author.role:
        console.print(escape(page.author.role))
    if page.author.bio:
        console.print(f"\n{escape(page.author.bio)}")
    console.print(_posts_table(f"Posts by {escape(page.author.name)}", page.posts, locale))
