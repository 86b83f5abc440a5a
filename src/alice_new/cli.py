"""Command line interface for generating Alice handlers."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .builder import RequestBuilder, build_option_parser
from .config import ALICE_VERSION, log_level
from .errors import AliceNewError, NoPathGivenError
from .generator import ProjectGenerator

VERSION_FLAGS = ("-v", "--version")

EPILOG = """\
examples:
  alice-new-handler my_handler
      creates ./alice_my_handler with the Alice.Handlers.MyHandler module
  alice-new-handler . --name custom --module Custom
      writes the project into the current directory

afterwards:
  cd alice_my_handler
  mix deps.get
  mix test

Register the handler in the mix.exs file of your bot:
  mod: {Alice, [Alice.Handlers.MyHandler]}
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alice-new-handler",
        description=f"Creates a new Alice v{ALICE_VERSION} handler",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[build_option_parser()],
    )
    parser.add_argument("-v", "--version", action="store_true", help="Print the Alice version and exit")
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    builder: RequestBuilder | None = None,
    generator: ProjectGenerator | None = None,
) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    if len(args) == 1 and args[0] in VERSION_FLAGS:
        print(f"Alice v{ALICE_VERSION}")
        return 0

    logging.basicConfig(level=log_level(), format="%(levelname)s %(name)s: %(message)s")

    builder = builder or RequestBuilder()
    generator = generator or ProjectGenerator()
    try:
        request = builder.parse(args)
        written = generator.generate(request)
    except NoPathGivenError:
        build_parser().print_help()
        return 0
    except AliceNewError as exc:
        print(f"** {exc}", file=sys.stderr)
        return 1

    for path in written:
        print(f"* creating {path.relative_to(request.target_path)}")

    print()
    print(f"Your Alice handler {request.handler_module} was created.")
    if not request.in_place:
        print(f"  cd {request.target_path}")
    print("  mix deps.get")
    print("  mix test")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
