#!/usr/bin/env python3
"""Programmatic binary build example.

This demonstrates using the operation object directly:

* load settings from `.env`
* stream a local archive into a binary build
* print the name of the build the server started

The build config name is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from buildconfig_operations import BuildConfigOperations, BuildClientError, TimeoutUnit
from buildconfig_operations.config import ClientSettings
from buildconfig_operations.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start a binary build (programmatic example).")
    parser.add_argument("--build-config", required=True, help="Build config name")
    parser.add_argument("--archive", required=True, help="Archive to upload as build input")
    parser.add_argument("--message", default="", help="Commit message recorded on the build")
    parser.add_argument(
        "--timeout-minutes",
        type=float,
        default=5.0,
        help="Upload read/write timeout in minutes",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ClientSettings()
    configure_logging(settings.log_level)

    ops = BuildConfigOperations.from_settings(settings).with_name(args.build_config)

    try:
        build = (
            ops.instantiate_binary()
            .with_message(args.message)
            .with_timeout(args.timeout_minutes, TimeoutUnit.MINUTES)
            .from_file(args.archive)
        )
    except BuildClientError as exc:
        print(str(exc))
        return 1

    print(f"Started build {build.metadata.name} in {build.metadata.namespace}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
