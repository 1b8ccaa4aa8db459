"""Command-line interface for the meme creator."""

from pathlib import Path
from typing import Optional

import typer

from ..config.config import settings
from ..exceptions import MemeCreatorError
from ..utils.logging import get_logger

# Initialize Typer app
app = typer.Typer(help="Caption template images and publish them as memes")

logger = get_logger(__name__)


@app.command()
def render(
    template: Path = typer.Argument(..., exists=True, dir_okay=False, help="PNG or JPEG template"),
    top: str = typer.Option("", "--top", "-t", help="Top caption"),
    bottom: str = typer.Option("", "--bottom", "-b", help="Bottom caption"),
    output: Path = typer.Option(Path("meme.png"), "--output", "-o", help="Output PNG path"),
    font: Optional[Path] = typer.Option(None, "--font", help="Font file to use instead of the embedded one"),
) -> None:
    """Render a meme from a local template file without touching any store."""
    from ..pipeline import render_template_bytes
    from ..rendering import default_font_bytes, load_face
    from ..system_setup import build_layout

    try:
        face = load_face(default_font_bytes(str(font) if font else settings.font_path))
        data = render_template_bytes(
            face, template.read_bytes(), top, bottom, build_layout(settings)
        )
    except MemeCreatorError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    output.write_bytes(data)
    typer.echo(f"Meme saved to {output}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("meme_creator.api.main:app", host=host, port=port, reload=reload)


@app.command()
def worker() -> None:
    """Consume render jobs from the Redis queue until interrupted."""
    from ..pipeline import run_render_job
    from ..system_setup import build_pipeline, shutdown_pipeline

    if settings.dispatcher_backend != "redis":
        typer.echo("Error: the worker needs DISPATCHER_BACKEND=redis", err=True)
        raise typer.Exit(code=1)

    deps = build_pipeline(settings)
    try:
        deps.dispatcher.run_forever(lambda job: run_render_job(deps, job))
    except KeyboardInterrupt:
        logger.info("worker_stopped")
    finally:
        shutdown_pipeline(deps)


@app.command("init-db")
def init_db_command() -> None:
    """Create the database tables."""
    from ..database.connection import create_db_engine, init_db

    init_db(create_db_engine(settings.database_url))
    typer.echo("Database initialized")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
