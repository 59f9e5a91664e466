"""
CLI entry point for the toolpath-mesh command.

Imports a G-code file and prints a summary of the extrusion runs found.
"""

import argparse
import json
import logging
import sys

from toolpath_mesh.config import COMMAND_LETTER, LOG_LEVEL_DEFAULT, TRACE, TRACE_ENABLED, resolve_log_level
from toolpath_mesh.gcode.interpreter import GcodeInterpreter
from toolpath_mesh.gcode.parser import parse_line
from toolpath_mesh.importer import GcodeImporter
from toolpath_mesh.utils.errors import InputUnavailableError

logger = logging.getLogger("toolpath_mesh.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toolpath-mesh", description="Import a G-code toolpath as line-segment meshes"
    )
    parser.add_argument("path", help="G-code file to import")
    parser.add_argument("--json", action="store_true", help="Print the scene summary as JSON")
    parser.add_argument(
        "--trace", action="store_true", help="Print each G command with its move classification"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Import even if the file extension is not recognized",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Enable quiet logging (WARNING level)")
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set specific log level",
    )
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        return resolve_log_level(args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    if TRACE_ENABLED:
        return TRACE
    return resolve_log_level(LOG_LEVEL_DEFAULT)


def _print_summary(summary: dict) -> None:
    print(f"root: {summary['root']}  meshes: {len(summary['meshes'])}")
    for mesh in summary["meshes"]:
        lo, hi = mesh["bounds"]
        lo_s = ", ".join(f"{v:.3f}" for v in lo)
        hi_s = ", ".join(f"{v:.3f}" for v in hi)
        print(
            f"  mesh {mesh['name']}: {mesh['vertices']} vertices, {mesh['faces']} segments, "
            f"length {mesh['length']:.3f}, bounds [{lo_s}] - [{hi_s}]"
        )


def _print_trace(text: str) -> None:
    """Print the classification and absolute position of each G command"""
    interpreter = GcodeInterpreter()
    for lineno, line in enumerate(text.splitlines(), 1):
        letter, _, _ = parse_line(line)
        if letter != COMMAND_LETTER:
            continue
        move = interpreter.interpret_line(line)
        position = ", ".join(f"{v:.3f}" for v in interpreter.state.absolute_position())
        print(f"{lineno:>6}: {move.name:<9} [{position}]  {line.strip()}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    importer = GcodeImporter()
    if not args.force and not importer.can_read(args.path):
        logger.error(f"Not a G-code file (expected .gcode): {args.path}")
        return 2

    try:
        text = importer.read_source(args.path)
    except InputUnavailableError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.trace:
        _print_trace(text)

    scene = importer.read_text(text)

    summary = scene.summary()
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        _print_summary(summary)
    return 0


def main_entry():
    """Entry point for the toolpath-mesh command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
