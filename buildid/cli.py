"""buildid CLI — reproducible build identifiers from git."""

import argparse
import dataclasses
import logging
import shlex
import sys


def _options(args: argparse.Namespace):
    from .config import options_from_env

    opts = options_from_env()
    overrides = {}
    if args.dir is not None:
        overrides["directory"] = args.dir
    if getattr(args, "describe", None) is not None:
        overrides["describe_flags"] = tuple(shlex.split(args.describe))
    if getattr(args, "semver", False):
        overrides["semantic_versioning"] = True
    if getattr(args, "no_fallback", False):
        overrides["fallback_to_commit_sha"] = False
    return dataclasses.replace(opts, **overrides)


def cmd_show(args: argparse.Namespace) -> None:
    from .errors import BuildIdError
    from .resolver import resolve, resolve_async

    opts = _options(args)
    try:
        if args.use_async:
            import asyncio

            build_id = asyncio.run(resolve_async(opts))
        else:
            build_id = resolve(opts)
    except BuildIdError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(build_id)


def cmd_root(args: argparse.Namespace) -> None:
    from .locator import locate

    opts = _options(args)
    print(locate(opts.start_directory()))


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        prog="buildid",
        description="buildid — reproducible build identifiers from git",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Log git invocations and repository lookup to stderr",
    )
    sub = parser.add_subparsers(dest="command")

    # --- show ---
    show = sub.add_parser("show", help="Print the build identifier")
    show.add_argument("--dir", default=None, help="Directory inside the repository")
    show.add_argument(
        "--describe", default=None,
        help='Flags for `git describe`, e.g. --describe="--tags --always"',
    )
    show.add_argument(
        "--semver", action="store_true",
        help="Use <tag>.<commits since tag>-g<short hash>",
    )
    show.add_argument(
        "--no-fallback", action="store_true",
        help="Fail instead of falling back to the commit hash",
    )
    show.add_argument(
        "--async", dest="use_async", action="store_true",
        help="Resolve through the asyncio implementation",
    )
    show.set_defaults(func=cmd_show)

    # --- root ---
    root = sub.add_parser("root", help="Print the located repository root")
    root.add_argument("--dir", default=None, help="Directory to start from")
    root.set_defaults(func=cmd_root)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s:%(name)s:%(message)s")

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(2)

    args.func(args)


if __name__ == "__main__":
    main()
