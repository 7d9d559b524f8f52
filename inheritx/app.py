"""Application factory and command-line entry point for the HTTP server."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import Optional

from flask import Flask

from inheritx.db import DEFAULT_DATABASE, Pool, run_migrations
from inheritx.web import (
    activity_controller,
    claim_controller,
    kyc_controller,
    notification_controller,
    withdrawal_controller,
)
from inheritx.web.activity_controller import POOL_KEY

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


def create_app(pool: Pool) -> Flask:
    """Build the application with every route, serving data from the pool."""
    app = Flask(__name__)
    app.extensions[POOL_KEY] = pool
    for blueprint in (
        activity_controller.create_blueprint(),
        kyc_controller.create_blueprint(),
        withdrawal_controller.create_blueprint(),
        notification_controller.create_blueprint(),
        claim_controller.create_blueprint(),
    ):
        app.register_blueprint(blueprint)
    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Prepare the database and serve the API."""
    parser = argparse.ArgumentParser(description="Run the API server.")
    parser.add_argument("--database", default=DEFAULT_DATABASE, help="SQLite database file")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    pool = Pool(args.database)
    with pool.get() as conn:
        run_migrations(conn)

    print(f"Starting server at http://localhost:{args.port}")
    create_app(pool).run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()