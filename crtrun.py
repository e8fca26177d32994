#!/usr/bin/env python3
"""
crtrun — run a CRT machine program and print what the screen shows

Usage:
    python crtrun.py <program.txt> [--profile crt|debug] [--width N] [--height N]
                                   [--signal] [--trace] [--log-dir DIR] [--verbose]

Examples:
    python crtrun.py examples/example_program.txt
    python crtrun.py examples/example_program.txt --signal
    python crtrun.py prog.txt --profile debug --trace
    cat prog.txt | python crtrun.py -
"""

import argparse
import logging
import os
import sys

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from crtsim import __version__
from crtsim.config import DISPLAY_PROFILES, geometry_for
from crtsim.instructions import ProgramError, parse_program
from crtsim.log_setup import setup_logging, teardown_logging
from crtsim.machine import ExhaustedProgram, VirtualMachine
from crtsim.screen import Screen
from crtsim.signal_strength import total_signal_strength


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crtrun",
        description="Cycle-accurate CRT machine simulator",
        epilog="Profiles: " + ", ".join(
            f"{name} ({p['width']}x{p['height']})" for name, p in DISPLAY_PROFILES.items()
        ),
    )
    parser.add_argument("input", help="Program file, one instruction per line ('-' for stdin)")
    parser.add_argument("--profile", default="crt", choices=list(DISPLAY_PROFILES.keys()),
                        help="Display geometry profile (default: crt)")
    parser.add_argument("--width", type=int, default=None,
                        help="Override raster width in pixels")
    parser.add_argument("--height", type=int, default=None,
                        help="Override raster height in pixels")
    parser.add_argument("--signal", action="store_true",
                        help="Also print the signal strength checksum")
    parser.add_argument("--trace", action="store_true",
                        help="Log every machine cycle to the console")
    parser.add_argument("--log-dir", default=None,
                        help="Also write a full DEBUG log file into this directory")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print run details to stderr")
    parser.add_argument("--version", action="version",
                        version=f"crtrun {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Handlers are attached per run so --trace and --log-dir apply to every call
    logger = logging.getLogger("crtsim")
    existing = list(logger.handlers)
    for handler in existing:
        logger.removeHandler(handler)
    log = setup_logging(
        "crtsim",
        console_level=logging.DEBUG if args.trace else logging.WARNING,
        log_dir=args.log_dir,
    )
    try:
        return _run(args, log)
    finally:
        teardown_logging(log)
        for handler in existing:
            log.addHandler(handler)


def _run(args, log: logging.Logger) -> int:
    # Read input
    try:
        if args.input == "-":
            source = sys.stdin.read()
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                source = f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        geometry = geometry_for(args.profile, args.width, args.height)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        program = parse_program(source)

        if args.verbose:
            print(f"[crtrun] Input:    {args.input}", file=sys.stderr)
            print(f"[crtrun] Program:  {len(program)} instructions", file=sys.stderr)
            print(f"[crtrun] Geometry: {geometry.width}x{geometry.height}", file=sys.stderr)

        machine = VirtualMachine(program)
        screen = Screen(machine, geometry)
        screen.refresh()
        log.info("Program finished after %d cycles, X=%d",
                 machine.cycle_count() - 1, machine.read_register())

        sys.stdout.write(screen.render())

        if args.signal:
            print(f"Signal strength: {total_signal_strength(program)}")

        if args.verbose:
            print(f"[crtrun] Cycles:   {machine.cycle_count() - 1}", file=sys.stderr)
            print(f"[crtrun] Final X:  {machine.read_register()}", file=sys.stderr)
            print(f"[crtrun] Lit:      {screen.lit_count()} pixels", file=sys.stderr)

    except ProgramError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1
    except ExhaustedProgram as e:
        log.exception("Machine cycled past the end of its program")
        print(f"Internal error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        log.exception("Unexpected failure")
        print(f"Internal error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
