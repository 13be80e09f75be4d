"""
cli.py

Responsibility: CLI entrypoint for create-package.

Run inside the package directory:

    create-package            # interactive
    create-package --silent   # no prompts, defaults everywhere

Exit codes: 0 on completion (or when the user declines to write `package.json`),
1 when input cannot be read or a git / GitHub / configuration step fails.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from create_package import __version__
from create_package.config import ConfigError, load_config
from create_package.github_client import GitHubError
from create_package.initializer import run
from create_package.log import setup_logging
from create_package.prompt import Aborted, PromptError
from create_package.vcs import VcsError

log = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def init_cmd(args: argparse.Namespace) -> int:
    try:
        config = load_config()
    except ConfigError as e:
        log.error("%s", e)
        return 1
    setup_logging(config.log_level)

    if not Path(config.template).is_dir():
        raise CLIError(f"Template directory not found: {config.template}")

    run(Path.cwd(), config=config, interactive=not args.silent)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="create-package",
        description="Fill in package.json, copy boilerplate and set up git/GitHub for a new package",
    )
    p.add_argument("-s", "--silent", action="store_true", help="Do not prompt; accept every default")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(func=init_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging()
    try:
        return int(args.func(args))
    except Aborted:
        log.info("Aborted.")
        return 0
    except PromptError as e:
        log.error("%s", e)
        return 1
    except (CLIError, VcsError, GitHubError) as e:
        log.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
