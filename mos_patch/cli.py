# mos_patch/cli.py
from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .core import (
    CredentialProvider, MosPatchError, Options, Transport,
    catalog_path, make_session, parse_pairs, run, setup_logging,
)
from .core.options import KNOWN_KEYS
from .ui import ConsoleLineSource, RichReporter, console

USAGE = (
    "patch=<patch_number_1>[,<patch_number_n>]* [platform=<plcode_1>[,<plcode_n>]*] "
    "[reset=yes] [regexp=<regular_expression>] [download=all] [stagedir=<dir>] "
    "[MOSUser=<username>] [MOSPass=<password>] [silent=yes] [debug=yes]"
)


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(
        description="Download patches from My Oracle Support",
        usage=f"%(prog)s [--verbose] {USAGE}",
    )
    ap.add_argument("params", nargs="*", metavar="key=value",
                    help="options in key=value form; order is irrelevant")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging for core/network")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if not args.params:
        console.print("[red]ERROR:[/] At least one parameter needs to be specified!")
        console.print(f"USAGE: mos-patch {USAGE}", markup=False)
        return 1

    params = parse_pairs(args.params)
    reporter = RichReporter(console)
    for key in params:
        if key not in KNOWN_KEYS:
            reporter.warning(f"Ignoring unknown parameter {key!r}")

    source = ConsoleLineSource(console)
    try:
        options = Options.from_mapping(params)
        provider = CredentialProvider(options.username, options.password, source)
        transport = Transport(make_session(provider))
        return run(options, transport, source, reporter, catalog_path())
    except KeyboardInterrupt:
        reporter.close()
        console.print("\n[yellow]Interrupted by user.[/]")
        return 130
    except (MosPatchError, OSError) as e:
        reporter.close()
        console.print(f"[red]ERROR:[/] {e}", highlight=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())
