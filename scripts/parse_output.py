#!/usr/bin/env python3
"""Parse captured mago output and print the diagnostics as JSON.

    mago lint --reporting-format json src/Foo.php 2>&1 | python scripts/parse_output.py --file src/Foo.php
    python scripts/parse_output.py --input mago.out --workspace /srv/app --command analyze
"""
import argparse
import json
import sys

from mago_diagnostics.core.containers import build_diagnostics_service
from mago_diagnostics.core.logging import setup_logging


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--input", help="file holding the captured output (default: stdin)")
    target = ap.add_mutually_exclusive_group(required=True)
    target.add_argument("--file", help="single-file mode: the file mago was run on")
    target.add_argument("--workspace", help="project mode: root relative paths resolve against")
    ap.add_argument("--tool", default="mago")
    ap.add_argument("--command", default="lint", choices=["lint", "analyze"])
    return ap


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(sys.stderr)

    if args.input:
        with open(args.input, "r", encoding="utf-8", errors="replace") as f:
            output = f.read()
    else:
        output = sys.stdin.read()

    service = build_diagnostics_service()
    if args.file:
        result = service.check_file(args.tool, output, args.file, args.command)
    else:
        result = service.check_project(args.tool, output, args.workspace, args.command)

    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.outcome in ("issues_found", "no_issues") else 1


if __name__ == "__main__":
    sys.exit(main())
