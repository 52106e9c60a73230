"""CLI command: zyracss serve -- run the HTTP API."""

from __future__ import annotations

import click


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=5000, type=int, help="Port to bind to")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
@click.option("--sweep/--no-sweep", default=True, help="Periodically sweep stale cache entries")
def serve(host: str, port: int, debug: bool, sweep: bool) -> None:
    """Start the zyracss web server."""
    from zyracss.config import EngineConfig
    from zyracss.engine import Engine
    from zyracss.web.app import create_app

    engine = Engine(EngineConfig(start_sweeper=sweep))
    app = create_app(engine=engine)
    click.echo(f"Starting zyracss on {host}:{port}")
    try:
        app.run(host=host, port=port, debug=debug)
    finally:
        engine.shutdown()
