"""Main CLI entry point for the review feed."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from config.settings import settings
from config.logging_config import setup_logging

# Initialize
app = typer.Typer(
    name="review-feed",
    help="Load a paginated review list, fetch its images and lay out its rows.",
    add_completion=False,
)
console = Console()


@app.callback()
def callback():
    """Review Feed - paginated reviews with cached images and row layout."""
    pass


def _make_fetcher(url: Optional[str], file: Optional[Path], latency: bool):
    from review_feed.fetchers import FileReviewFetcher, HttpReviewFetcher

    url = url or settings.reviews_url
    if url:
        return HttpReviewFetcher(url)
    return FileReviewFetcher(file, latency=None if latency else (0.0, 0.0))


async def _load(fetcher, max_pages: Optional[int], limit: Optional[int]):
    """Load pages until exhausted, failed or *max_pages* reached, then wait for images."""
    from review_feed.state import ReviewListState

    machine = ReviewListState(fetcher, limit=limit)
    pages = 0
    while max_pages is None or pages < max_pages:
        task = machine.request_next_page()
        if task is None:
            break
        await task
        pages += 1
        if machine.state.has_error:
            break
    await machine.wait_idle()
    return machine


@app.command()
def browse(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Reviews endpoint (overrides the local file)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Local JSON response file"),
    width: float = typer.Option(375.0, "--width", "-w", help="Row width to lay out for"),
    max_pages: Optional[int] = typer.Option(None, "--pages", "-p", help="Maximum pages to load"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
    expand_all: bool = typer.Option(False, "--expand-all", help="Lay out every review fully expanded"),
    latency: bool = typer.Option(True, "--latency/--no-latency", help="Simulate network delay for file sources"),
):
    """
    Load reviews and print each row with its computed height.

    Examples:
        review-feed browse --file data/getReviews.response.json --width 320
        review-feed browse --url https://example.com/reviews --pages 2
    """
    setup_logging()

    asyncio.run(_browse(url, file, width, max_pages, limit, expand_all, latency))


async def _browse(
    url: Optional[str],
    file: Optional[Path],
    width: float,
    max_pages: Optional[int],
    limit: Optional[int],
    expand_all: bool,
    latency: bool,
):
    """Async browse implementation."""
    from review_feed.models.items import ReviewDisplayItem

    console.print(f"\n[bold blue]Review Feed[/bold blue] - width {width:g}")
    console.print("=" * 50)

    async with _make_fetcher(url, file, latency) as fetcher:
        machine = await _load(fetcher, max_pages, limit)

    state = machine.state
    if state.has_error:
        console.print("[yellow]Warning:[/yellow] the last page failed to load")

    if expand_all:
        for item in state.review_items:
            machine.expand(item.id)
        state = machine.state

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Author")
    table.add_column("Rating")
    table.add_column("Photos", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("More")

    for index, item in enumerate(state.items, 1):
        height = machine.height(item, width)
        if isinstance(item, ReviewDisplayItem):
            row = machine.layout.layout_review(item, width)
            table.add_row(
                str(index),
                item.full_name.text,
                "★" * item.rating,
                str(item.photo_count),
                f"{height:.1f}",
                "✓" if row.has_show_more else "",
            )
        else:
            table.add_row(str(index), f"[bold]{item.text.text}[/bold]", "", "", f"{height:.1f}", "")

    console.print(table)
    stats = machine.cache.get_stats()
    console.print(
        f"[green]✓[/green] {len(state.review_items)} reviews, offset {state.offset}, "
        f"cache {stats['size']}/{machine.cache.capacity} (hits {stats['hits']}, misses {stats['misses']})"
    )


@app.command()
def layout(
    index: int = typer.Argument(1, help="1-based review number"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Local JSON response file"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Reviews endpoint"),
    width: float = typer.Option(375.0, "--width", "-w", help="Row width"),
    expand: bool = typer.Option(False, "--expand", help="Lay out with unlimited text lines"),
    rating_image: Optional[Path] = typer.Option(None, "--rating-image", help="Save the review's star row as an image"),
):
    """Print the frames computed for one review row."""
    setup_logging(level="WARNING", log_to_file=False)

    asyncio.run(_layout(index, file, url, width, expand, rating_image))


async def _layout(
    index: int,
    file: Optional[Path],
    url: Optional[str],
    width: float,
    expand: bool,
    rating_image: Optional[Path],
):
    async with _make_fetcher(url, file, latency=False) as fetcher:
        machine = await _load(fetcher, max_pages=None, limit=None)

    reviews = machine.state.review_items
    if not 1 <= index <= len(reviews):
        console.print(f"[red]Error:[/red] review {index} out of range (1-{len(reviews)})")
        raise typer.Exit(1)

    item = reviews[index - 1]
    if expand:
        machine.expand(item.id)
        item = machine.state.find(item.id)

    row = machine.layout.layout_review(item, width)

    table = Table(show_header=True, header_style="bold magenta", title=item.full_name.text)
    table.add_column("Element", style="cyan")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("w", justify="right")
    table.add_column("h", justify="right")

    frames = [("avatar", row.avatar), ("username", row.username), ("rating", row.rating)]
    frames += [(f"photo {n}", rect) for n, rect in enumerate(row.photos, 1)]
    frames += [("text", row.text)]
    if row.show_more:
        frames.append(("show more", row.show_more))
    frames.append(("created", row.created))

    for name, rect in frames:
        table.add_row(name, f"{rect.x:.1f}", f"{rect.y:.1f}", f"{rect.width:.1f}", f"{rect.height:.1f}")

    console.print(table)
    console.print(f"Row height: [bold]{row.height:.1f}[/bold]")

    if rating_image:
        from review_feed.rendering import RatingRenderer

        RatingRenderer().rating_image(item.rating).save(rating_image)
        console.print(f"[green]✓[/green] Rating saved to {rating_image}")


@app.command()
def info():
    """Show configuration."""
    console.print("\n[bold blue]Review Feed Configuration[/bold blue]")
    console.print("=" * 50)

    table = Table(show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug", str(settings.debug))
    table.add_row("Reviews URL", settings.reviews_url or "-")
    table.add_row("Response File", str(settings.resolve_path(settings.response_file)))
    table.add_row("Page Limit", str(settings.page_limit))
    table.add_row("Cache Capacity", str(settings.asset_cache_capacity))
    table.add_row("Max Concurrent", str(settings.max_concurrent_requests))
    table.add_row("Simulated Latency", f"{settings.simulated_latency_min}-{settings.simulated_latency_max}s")
    table.add_row("Timeout", f"{settings.request_timeout}s")
    table.add_row("Max Retries", str(settings.max_retries))
    table.add_row("Font", settings.font_path or "Pillow default")

    console.print(table)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
