"""Command line interface: compile a job directory into <job>.pyz and <job>.sh."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from mrpack.core.errors import PackagerError, UsageError
from mrpack.core.packager import build_report, compile_job, validate

USAGE = """Usage: {prog} [OPTION]... JOBDIR OUTPUTDIR

Options:
     --debug  : Build debug version of package (with internal counters etc).
  -h/--help   : Display this help screen.
  -i PATH     : PATH of directory to package with the archive (can be repeated).
  -t TIMEZONE : Name of the TIMEZONE to force in generated scripts.
                If not given, the timezone of this machine is used.
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser(prog: str) -> argparse.ArgumentParser:
    parser = _Parser(prog=prog, add_help=False)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("-h", "--help", action="store_true", dest="help")
    parser.add_argument("-i", action="append", default=[], dest="include_paths", metavar="PATH")
    parser.add_argument("-t", dest="timezone", metavar="TIMEZONE")
    parser.add_argument("paths", nargs="*", metavar="PATH")
    return parser


def parse_args(argv: Optional[List[str]] = None, prog: str = "compile") -> argparse.Namespace:
    """Parse CLI arguments; raises UsageError on help or fewer than two paths.

    The last two positionals are JOBDIR and OUTPUTDIR; any before them are ignored.
    """
    args = build_parser(prog).parse_intermixed_args(argv)
    if args.help:
        raise UsageError("help requested")
    if len(args.paths) < 2:
        raise UsageError("JOBDIR and OUTPUTDIR are required")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Build the archive and launcher; returns the process exit code.

    Outputs:
        Prints the generated paths on success.

    Failure modes:
        Usage errors print the synopsis and return 1; input errors return 1;
        a host that cannot write archives returns 2.
    """
    prog = os.path.basename(sys.argv[0]) if argv is None else "compile"
    try:
        args = parse_args(argv, prog)
        job_dir, output_dir = args.paths[-2:]
        config = validate(
            job_dir,
            output_dir,
            include_paths=args.include_paths,
            timezone=args.timezone,
            debug=args.debug,
        )
        result = compile_job(config)
    except UsageError as exc:
        print(USAGE.format(prog=prog))
        return exc.exit_code
    except PackagerError as exc:
        print(f"{exc}\n", file=sys.stderr)
        return exc.exit_code

    print(build_report(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
