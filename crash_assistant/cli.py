"""
Crash Assistant CLI - Thin entrypoint standing in for the drop area.

Commands:
- status PATH...        Show what would be used for symbolication
- symbolicate PATH...   Run symbolicatecrash and save the result
- readiness             Check the Xcode toolchain
- serve                 Run the HTTP service

Design Principles:
==================
- CLI is a dispatcher only
- Paths are offered to the session exactly like dropped files
- No retry logic
- Diagnostics go to stderr, results to stdout

Exit Codes:
===========
- 0: Success
- 1: Cannot symbolicate (toolchain missing or no crash log)
- 2: symbolicatecrash produced no output
- 3: Output could not be saved
- 4: Usage or system error
"""

import argparse
import json
import os
import sys
from typing import List, NoReturn, Optional

from . import __version__
from .config import AssistantSettings, load_settings
from .execution.dispatch import QueueDispatcher
from .logging_utils import configure_logging
from .readiness import format_readiness_terminal, generate_readiness_report
from .session import SymbolicationSession


def _load_settings(args: argparse.Namespace) -> AssistantSettings:
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(4)
    configure_logging(args.log_level or settings.log_level)
    return settings


def _submit(session: SymbolicationSession, paths: List[str]) -> None:
    for path in paths:
        if not os.path.exists(path):
            print(f"WARNING: Not found, ignored: {path}", file=sys.stderr)
            continue
        if not session.submit_file(path):
            print(f"WARNING: Unsupported file, ignored: {path}", file=sys.stderr)


def _print_status(session: SymbolicationSession) -> None:
    display = session.display()
    print(f"symbolicatecrash: {display.symbolicatecrash}")
    print(f"app:              {display.app}")
    print(f"dsym:             {display.dsym}")
    print(f"crash:            {display.crash}")
    print(f"can clear:        {'yes' if session.can_clear() else 'no'}")
    print(f"can run:          {'yes' if session.can_invoke() else 'no'}")


def cmd_status(args: argparse.Namespace) -> NoReturn:
    """
    Resolve the given paths and print the slot display.

    Exit codes:
        0: Always, unless configuration is invalid
    """
    settings = _load_settings(args)
    session = SymbolicationSession.create(settings)
    _submit(session, args.paths)

    if args.json:
        payload = {
            "display": session.display().model_dump(),
            "paths": session.state.to_dict(),
            "can_clear": session.can_clear(),
            "can_run": session.can_invoke(),
            "suggested_output_name": session.suggested_output_name(),
        }
        print(json.dumps(payload, indent=2))
    else:
        _print_status(session)
    session.close()
    sys.exit(0)


def _resolve_destination(session: SymbolicationSession, output: Optional[str]) -> str:
    if output is None:
        return session.suggested_output_path()
    if os.path.isdir(output):
        return os.path.join(output, session.suggested_output_name())
    return output


def cmd_symbolicate(args: argparse.Namespace) -> NoReturn:
    """
    Resolve paths, run symbolicatecrash, save the output.

    Exit codes:
        0: Saved (or printed with --stdout)
        1: Cannot run (no symbolicatecrash or no crash log)
        2: symbolicatecrash produced no output
        3: Save failed
    """
    settings = _load_settings(args)
    dispatcher = QueueDispatcher()
    session = SymbolicationSession.create(settings, dispatcher)
    _submit(session, args.paths)

    if not session.can_invoke():
        _print_status(session)
        print("✗ Cannot symbolicate: symbolicatecrash and a crash log are required", file=sys.stderr)
        session.close()
        sys.exit(1)

    if args.dry_run:
        command = [session.tool_locator.tool_path] + session.invoker.build_arguments()
        for name, value in session.invoker.build_environment().items():
            print(f"{name}={value}")
        print(" ".join(command))
        session.close()
        sys.exit(0)

    outcome = {}

    def on_done(output: Optional[str]) -> None:
        outcome["output"] = output

    if session.invoke(on_done):
        dispatcher.drain()
    session.close()

    output = outcome.get("output")
    if output is None:
        print("✗ symbolicatecrash produced no output", file=sys.stderr)
        sys.exit(2)

    if args.stdout:
        sys.stdout.write(output)
        sys.exit(0)

    destination = _resolve_destination(session, args.output)
    if not session.save_output(output, destination):
        print(f"✗ Could not save: {destination}", file=sys.stderr)
        sys.exit(3)

    print(f"✓ Saved: {destination}")
    sys.exit(0)


def cmd_readiness(args: argparse.Namespace) -> NoReturn:
    """
    Print the readiness report.

    Exit codes:
        0: Ready
        1: A blocking check failed
    """
    settings = _load_settings(args)
    session = SymbolicationSession.create(settings)
    report = generate_readiness_report(session.tool_locator, settings)
    session.close()

    if args.json:
        print(report.to_json())
    else:
        print(format_readiness_terminal(report))
    sys.exit(0 if report.ready else 1)


def cmd_serve(args: argparse.Namespace) -> NoReturn:
    """Run the HTTP service until interrupted."""
    settings = _load_settings(args)

    import uvicorn

    from .api.main import create_app

    uvicorn.run(create_app(settings), host=args.host, port=args.port)
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='crash-assistant',
        description='Symbolicate crash logs with Xcode\'s symbolicatecrash',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: CRASH_ASSISTANT_LOG_LEVEL or INFO)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    # Status command
    parser_status = subparsers.add_parser(
        'status',
        help='Show which app, dSYM and crash log the given files resolve to'
    )
    parser_status.add_argument('paths', nargs='*', help='.xcarchive, .xccrashpoint, .app, .dSYM or .crash')
    parser_status.add_argument('--json', action='store_true', help='Print JSON')
    parser_status.set_defaults(func=cmd_status)

    # Symbolicate command
    parser_symbolicate = subparsers.add_parser(
        'symbolicate',
        help='Run symbolicatecrash and save the result'
    )
    parser_symbolicate.add_argument('paths', nargs='+', help='.xcarchive, .xccrashpoint, .app, .dSYM or .crash')
    parser_symbolicate.add_argument(
        '-o', '--output',
        default=None,
        help='Output file or directory (default: <crash>.symbolicated.<ext> next to the crash log)'
    )
    parser_symbolicate.add_argument('--stdout', action='store_true', help='Print the result instead of saving it')
    parser_symbolicate.add_argument('--dry-run', action='store_true', help='Print the command without running it')
    parser_symbolicate.set_defaults(func=cmd_symbolicate)

    # Readiness command
    parser_readiness = subparsers.add_parser('readiness', help='Check the Xcode toolchain')
    parser_readiness.add_argument('--json', action='store_true', help='Print JSON')
    parser_readiness.set_defaults(func=cmd_readiness)

    # Serve command
    parser_serve = subparsers.add_parser('serve', help='Run the HTTP service')
    parser_serve.add_argument('--host', default='127.0.0.1', help='Bind address (default: 127.0.0.1)')
    parser_serve.add_argument('--port', type=int, default=8086, help='Port (default: 8086)')
    parser_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    Main CLI entrypoint.

    Parses arguments and dispatches to subcommands.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(4)


if __name__ == '__main__':
    main()
