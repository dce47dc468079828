"""Command-line entry point for the Caja desktop client."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and dispatch to the requested workflow."""

    parser = argparse.ArgumentParser(
        prog="caja-desktop",
        description="Run the Proyecto Caja desktop client or check the backend.",
    )
    parser.add_argument(
        "--api-url",
        help="Backend base URL (overrides CAJA_API_BASE_URL and config.json).",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Call the backend /health endpoint and exit.",
    )
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))

    args = parser.parse_args(None if argv is None else list(argv))

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if args.api_url:
        os.environ["CAJA_API_BASE_URL"] = args.api_url

    if args.check:
        from .services import repository
        from .services.api_client import APIError

        try:
            print(repository.health())
        except APIError as exc:
            print(f"Backend unreachable: {exc.message}")
            return 1
        finally:
            repository.shutdown()
        return 0

    from .app import run_app

    return run_app()


if __name__ == "__main__":
    raise SystemExit(main())
