"""
Gym API CLI.

Command-line interface for common operations: run the server, create the
schema, load demo data and check a running API.
"""

import sys
import time
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="gym",
    help="Gym Management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(None, help="Port (defaults to REST_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn
    from shared.config.settings import settings

    port = port or settings.rest_api_port
    console.print(f"[blue]Starting REST API on {host}:{port}[/blue]")
    uvicorn.run("rest_api.main:app", host=host, port=port, reload=reload)


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create all tables."""
    from rest_api.models import Base
    from shared.infrastructure.db import engine

    try:
        Base.metadata.create_all(bind=engine)
        console.print("[green]✓ Tables created[/green]")
    except Exception as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Seed even in production"),
):
    """Seed database with demo data."""
    from rest_api.models import Base
    from rest_api.seed import seed_demo_data
    from shared.config.settings import settings
    from shared.infrastructure.db import engine, get_db_context

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    try:
        Base.metadata.create_all(bind=engine)
        with get_db_context() as db:
            inserted = seed_demo_data(db)
    except Exception as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(1)

    if inserted:
        console.print("[green]✓ Demo data loaded[/green]")
    else:
        console.print("[yellow]Demo data already present, nothing to do[/yellow]")


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:3000", help="Base URL of the API"),
):
    """Check the health endpoints of a running API."""
    import httpx

    checks = [
        ("Health", "/api/health"),
        ("Database", "/api/health/detailed"),
        ("Readiness", "/api/ready"),
        ("Liveness", "/api/alive"),
    ]

    table = Table(title="Service Health")
    table.add_column("Check", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    failed = False
    with httpx.Client(base_url=url, timeout=5.0) as client:
        for name, path in checks:
            start = time.perf_counter()
            try:
                response = client.get(path)
            except httpx.HTTPError as e:
                table.add_row(name, f"✗ {type(e).__name__}", "-")
                failed = True
                continue
            elapsed = (time.perf_counter() - start) * 1000
            if response.status_code == 200:
                table.add_row(name, "✓ Healthy", f"{elapsed:.0f}ms")
            else:
                table.add_row(name, f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
                failed = True

    console.print(table)
    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
