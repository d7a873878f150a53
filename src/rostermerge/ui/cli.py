# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from rostermerge.app import merge_students
from rostermerge.config import configure_logging
from rostermerge.domain.merge import (
    Actor,
    AuthorizationError,
    ConflictRetryableError,
    InvalidOperationError,
    NotFoundError,
)
from rostermerge.domain.model import Role

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_RETRYABLE = 3
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Consolidate duplicate student identities")
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge = subparsers.add_parser(
        "merge",
        help="Merge an unclaimed student into a claimed one",
    )
    merge.add_argument("source_id", type=str, help="Unclaimed student to merge and delete")
    merge.add_argument("target_id", type=str, help="Claimed student that survives the merge")
    merge.add_argument(
        "--actor-id",
        type=str,
        help="Id of the user performing the merge",
    )
    merge.add_argument(
        "--actor-role",
        type=str,
        choices=[role.value for role in Role],
        help="Role of the user performing the merge",
    )
    merge.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-relation details",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _build_actor(args: argparse.Namespace) -> Actor | None:
    if args.actor_id is None and args.actor_role is None:
        return None
    if args.actor_id is None or args.actor_role is None:
        raise ValueError("--actor-id and --actor-role must be given together")
    return Actor(id=_parse_uuid(args.actor_id), role=Role(args.actor_role))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        source_id = _parse_uuid(parsed_args.source_id)
        target_id = _parse_uuid(parsed_args.target_id)
        actor = _build_actor(parsed_args)
    except ValueError as exc:
        log.error("CLI validation error: %s", exc)  # noqa: TRY400
        sys.exit(EXIT_USAGE)

    try:
        report = merge_students(source_id, target_id, actor=actor)
    except (AuthorizationError, NotFoundError, InvalidOperationError) as exc:
        log.error("Merge rejected: %s", exc)  # noqa: TRY400
        sys.exit(EXIT_USAGE)
    except ConflictRetryableError as exc:
        log.warning("Merge hit a concurrent write, retry it: %s", exc)
        sys.exit(EXIT_RETRYABLE)
    except Exception:
        log.exception("Fatal error during merge")
        sys.exit(EXIT_FAILURE)

    print(json.dumps(report.to_payload(), indent=2))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C); an open merge transaction rolls back on the way out."""
    log.warning("Interrupted by user (Ctrl+C), merge rolled back")
    sys.exit(EXIT_INTERRUPTED)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
