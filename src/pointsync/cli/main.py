"""pointsync CLI — run the sync server, inspect its configuration.

Usage:
    pointsync serve                              # Listen on 0.0.0.0:8080, WebSocket at /ws
    pointsync serve --port 9000 --static-dir web # Also host the client app at /
    pointsync config                             # Print effective settings
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Optional

import click
import structlog
import uvicorn
from pydantic import ValidationError

from pointsync import __version__

if TYPE_CHECKING:
    from pointsync.config import Settings

logger = structlog.get_logger()


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _settings(**overrides) -> Settings:
    """Settings from the environment, with CLI flags that were given on top."""
    # pointsync.config validates the environment on import; keep that inside the try
    try:
        from pointsync.config import Settings

        return Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        click.secho(f"Invalid configuration:\n{e}", fg="red", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="pointsync")
def main():
    """pointsync — real-time shared point collection server."""


# ---------------------------------------------------------------------------
# pointsync serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", help="Interface to bind (default 0.0.0.0)")
@click.option("--port", "-p", type=int, help="Port to listen on (default 8080)")
@click.option("--ws-path", help="WebSocket route (default /ws)")
@click.option(
    "--static-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with the client app, served at /",
)
@click.option("--log-level", help="uvicorn log level (default info)")
def serve(host: Optional[str], port: Optional[int], ws_path: Optional[str],
          static_dir: Optional[str], log_level: Optional[str]):
    """Run the sync server until interrupted."""
    from pointsync.main import create_app

    cfg = _settings(
        host=host,
        port=port,
        ws_path=ws_path,
        static_dir=static_dir,
        log_level=log_level,
    )
    app = create_app(cfg)

    logger.info("pointsync.listening", host=cfg.host, port=cfg.port, ws_path=cfg.ws_path)
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=cfg.log_level)


# ---------------------------------------------------------------------------
# pointsync config
# ---------------------------------------------------------------------------


@main.command()
def config():
    """Print the effective settings (environment + defaults)."""
    click.echo(_pretty_json(_settings().model_dump()))


if __name__ == "__main__":
    main()
