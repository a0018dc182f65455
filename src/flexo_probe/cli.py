"""``flexo-probe`` command: run one session and print its results as JSON lines."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from .errors import ConfigurationError, ProbeError
from .logging import LOG_FORMATS, configure_logging, get_logger
from .models import ChunkPattern, ConnectionAddress, Custom, HttpGetResult, RequestSpec, SessionSpec
from .session import SessionDriver
from .settings import ProbeSettings

logger = get_logger(__name__)

EXIT_TIMEOUT = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flexo-probe",
        description="Send GET requests over one connection and report status, "
        "length, cache origin and body SHA-256.",
    )
    parser.add_argument("host")
    parser.add_argument("port", type=int)
    parser.add_argument("paths", nargs="*", metavar="PATH", default=["/"])
    parser.add_argument("--chunk-size", type=int, help="bytes per request write")
    parser.add_argument("--wait", type=float, default=0.0, help="seconds between writes")
    parser.add_argument("--timeout", type=float, help="session timeout in seconds")
    parser.add_argument(
        "--header-file",
        type=Path,
        help="send this file verbatim as the request header instead of generating one",
    )
    parser.add_argument("--log-format", choices=LOG_FORMATS)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def result_to_dict(result: HttpGetResult) -> dict:
    body = result.body
    return {
        "status_code": result.header.status_code,
        "content_length": result.header.content_length,
        "cached": result.header.cached,
        "sha256": body.hexdigest if body else None,
        "size": body.size if body else 0,
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return the process exit code.

    Returns:
        ``0`` on success, ``2`` if the session timed out, the error's
        ``exit_code`` for ``ProbeError`` subclasses, ``130`` on
        ``KeyboardInterrupt``.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.header_file and len(args.paths) > 1:
        parser.error("--header-file sends a single request; give at most one PATH")
    if args.wait and args.chunk_size is None:
        parser.error("--wait requires --chunk-size")

    try:
        settings = ProbeSettings.from_environment()
    except ProbeError as e:
        # Logging is not configured yet
        print(f"flexo-probe: {e}", file=sys.stderr)
        return e.exit_code

    configure_logging(
        log_format=args.log_format or settings.log_format,
        verbose=args.verbose or settings.verbose,
    )

    try:
        address = ConnectionAddress(args.host, args.port)
        if args.header_file:
            try:
                header = args.header_file.read_bytes()
            except OSError as e:
                raise ConfigurationError(f"Cannot read header file: {e}") from e
            requests = [RequestSpec(args.paths[0], Custom(header))]
        else:
            requests = [RequestSpec(path) for path in args.paths]
        session = SessionSpec(
            connection=address,
            requests=requests,
            timeout=args.timeout if args.timeout is not None else settings.timeout,
        )
        pattern = None
        if args.chunk_size is not None:
            pattern = ChunkPattern(chunk_size=args.chunk_size, wait_interval=args.wait)

        results = SessionDriver(session, pattern, settings.max_header_size).run()
    except KeyboardInterrupt:
        logger.info("probe_interrupted")
        return EXIT_INTERRUPTED
    except ProbeError as e:
        logger.error("probe_failed", error=str(e), exit_code=e.exit_code)
        return e.exit_code

    if results is None:
        return EXIT_TIMEOUT

    for result in results:
        print(json.dumps(result_to_dict(result)))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
