"""CLI entrypoint: start, trigger and delete BuildConfig builds."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from buildconfig_operations import __version__
from buildconfig_operations.config import ClientSettings
from buildconfig_operations.errors import BuildClientError, ConfigurationError
from buildconfig_operations.logging import configure_logging
from buildconfig_operations.models import BuildRequest, ObjectMeta, WebHookTrigger
from buildconfig_operations.operations import BuildConfigOperations

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildconfig",
        description="Start, trigger and clean up builds of an OpenShift BuildConfig",
    )
    parser.add_argument(
        "--version", action="version", version=f"buildconfig-operations {__version__}"
    )
    parser.add_argument(
        "-n",
        "--namespace",
        default=None,
        help="Namespace of the build config (defaults to OPENSHIFT_NAMESPACE)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    instantiate = subparsers.add_parser(
        "instantiate", help="Start a new build from the build config's own source"
    )
    instantiate.add_argument("name", help="Build config name")

    start_binary = subparsers.add_parser(
        "start-binary",
        help="Start a binary build, streaming a file (or stdin) as the build input",
    )
    start_binary.add_argument("name", help="Build config name")
    start_binary.add_argument(
        "--from-file",
        default=None,
        help="File to upload; reads stdin when omitted",
    )
    start_binary.add_argument("--message", default=None, help="Commit message")
    start_binary.add_argument("--author-name", default=None, help="Revision author name")
    start_binary.add_argument("--author-email", default=None, help="Revision author email")
    start_binary.add_argument("--committer-name", default=None, help="Revision committer name")
    start_binary.add_argument(
        "--committer-email", default=None, help="Revision committer email"
    )
    start_binary.add_argument("--commit", default=None, help="Revision commit hash")
    start_binary.add_argument(
        "--as-file",
        default=None,
        help="Name the server stores the upload under (instead of extracting an archive)",
    )
    start_binary.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Read/write timeout for the upload in milliseconds",
    )

    trigger = subparsers.add_parser("trigger", help="Fire a webhook trigger")
    trigger.add_argument("name", help="Build config name")
    trigger.add_argument("--secret", required=True, help="Webhook secret")
    trigger.add_argument(
        "--type",
        dest="trigger_type",
        default="generic",
        help="Webhook type, e.g. generic | github | gitlab",
    )

    delete = subparsers.add_parser(
        "delete", help="Delete the build config and every build it spawned"
    )
    delete.add_argument("name", help="Build config name")

    return parser


def _binary_chain(ops: BuildConfigOperations, args: argparse.Namespace) -> BuildConfigOperations:
    chain = ops.instantiate_binary()
    if args.message is not None:
        chain = chain.with_message(args.message)
    if args.author_name is not None:
        chain = chain.with_author_name(args.author_name)
    if args.author_email is not None:
        chain = chain.with_author_email(args.author_email)
    if args.committer_name is not None:
        chain = chain.with_committer_name(args.committer_name)
    if args.committer_email is not None:
        chain = chain.with_committer_email(args.committer_email)
    if args.commit is not None:
        chain = chain.with_commit(args.commit)
    if args.as_file is not None:
        chain = chain.as_file(args.as_file)
    if args.timeout_ms is not None:
        chain = chain.with_timeout_in_millis(args.timeout_ms)
    return chain


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ClientSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    ops = BuildConfigOperations.from_settings(settings).with_name(args.name)
    if args.namespace:
        ops = ops.in_namespace(args.namespace)

    try:
        if args.command == "instantiate":
            request = BuildRequest(metadata=ObjectMeta(name=args.name))
            build = ops.instantiate(request)
            print(f"Started build {build.metadata.name}")
            return 0

        if args.command == "start-binary":
            chain = _binary_chain(ops, args)
            if args.from_file:
                build = chain.from_file(Path(args.from_file))
            else:
                build = chain.from_stream(sys.stdin.buffer)
            print(f"Started build {build.metadata.name}")
            return 0

        if args.command == "trigger":
            ops.with_secret(args.secret).with_type(args.trigger_type).trigger(
                WebHookTrigger(secret=args.secret)
            )
            print(f"Triggered build config {args.name}")
            return 0

        if args.command == "delete":
            if not ops.delete():
                print(f"Build config {args.name} not found", file=sys.stderr)
                return 3
            print(f"Deleted build config {args.name} and its builds")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except ConfigurationError as e:
        logger.error(str(e))
        print(str(e), file=sys.stderr)
        return 2

    except BuildClientError:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
