"""
blogapi CLI

Usage:
    blogapi serve               - Start the API server
    blogapi seed                - Seed the admin account and sample posts
    blogapi posts [--search q]  - List posts from a running server
"""
import asyncio
import os
import sys

import click
import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from blogapi import __version__

# Load environment variables
load_dotenv()

console = Console()

API_BASE = os.getenv("API_BASE_URL", "http://localhost:8000")


@click.group()
@click.version_option(version=__version__, prog_name="blogapi")
def main():
    """blogapi - personal blog backend."""


@main.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=8000, help="Port to run server on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Start the FastAPI server."""
    import uvicorn

    console.print(f"[green]Starting blogapi on {host}:{port}[/green]")
    uvicorn.run("blogapi.main:app", host=host, port=port, reload=reload)


@main.command()
def seed():
    """Create tables, then seed the admin account and sample posts if absent."""
    from blogapi.config import get_settings
    from blogapi.database import close_db, get_session, init_db
    from blogapi.seed import seed_database

    settings = get_settings()

    async def _run():
        await init_db()
        try:
            async with get_session() as session:
                await seed_database(session, settings)
        finally:
            await close_db()

    asyncio.run(_run())
    console.print("[green]✓ Seeding complete[/green]")


@main.command()
@click.option("--search", default=None, help="Match title or tags")
@click.option("--size", default=20, help="Number of posts to show")
@click.option("--published", is_flag=True, help="Only published posts")
def posts(search: str | None, size: int, published: bool):
    """List posts from a running server."""
    params = {"size": size, "publicOnly": str(published).lower()}
    if search:
        params["search"] = search

    try:
        response = httpx.get(f"{API_BASE}/api/blogs", params=params, timeout=5.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Could not list posts: {e}[/red]")
        sys.exit(1)

    data = response.json()
    table = Table(title=f"Posts ({data['total']} total)")
    table.add_column("ID", justify="right")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Published")
    table.add_column("Created")

    for item in data["items"]:
        table.add_row(
            str(item["id"]),
            item["slug"],
            item["title"],
            "yes" if item["published"] else "no",
            item["created_at"][:10],
        )

    console.print(table)


if __name__ == "__main__":
    main()
