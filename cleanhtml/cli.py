#!/usr/bin/env python3
# /// script
# requires-python = "==3.12.9"
# dependencies = ["beautifulsoup4", "html5lib", "click", "servicelayer"]
# ///

"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

Format docstrings according to PEP 287
File: cli.py
"""

import json
import logging
import os

import click
from servicelayer.logs import configure_logging

from cleanhtml.errors import PolicyConflict
from cleanhtml.policy import DEFAULT_POLICY, Policy
from cleanhtml.sanitize import Sanitizer
from cleanhtml.text import clean_text

log = logging.getLogger(__name__)

POLICY_ENV = "CLEANHTML_POLICY"
MAX_INPUT = int(os.environ.get("CLEANHTML_MAX_INPUT", "10000000"))


def load_policy(path: str | None) -> Policy:
    """
    Load a JSON policy file.

    :param path: Policy file; falls back to ``$CLEANHTML_POLICY``.
    :returns: The validated policy, or the default policy when no file is
              configured.
    :raises click.BadParameter: When the file is unreadable, not JSON, or
        describes an invalid policy.
    """
    path = path or os.environ.get(POLICY_ENV)
    if not path:
        return DEFAULT_POLICY

    log.debug(f"Loading policy from {path}")
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, ValueError) as e:
        raise click.BadParameter(f"cannot read policy {path}: {e}", param_hint="--policy") from e
    try:
        return Policy.from_dict(raw)
    except PolicyConflict as e:
        raise click.BadParameter(str(e), param_hint="--policy") from e


def read_input(stream) -> str:
    text = stream.read(MAX_INPUT + 1)
    if len(text) > MAX_INPUT:
        raise click.UsageError(f"input is longer than {MAX_INPUT} characters (see CLEANHTML_MAX_INPUT)")
    return text


@click.group()
@click.option("--debug", is_flag=True, help="Log at DEBUG level (logs go to stdout; use --output).")
def cli(debug: bool) -> None:
    """
    Root Click command group for the cleanhtml CLI.

    This initializes logging via ``servicelayer.logs.configure_logging()``
    at INFO, or DEBUG with ``--debug``.
    """
    configure_logging(level=logging.DEBUG if debug else logging.INFO)


@cli.command("clean")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--policy", "policy_path", type=click.Path(dir_okay=False), help="JSON policy file.")
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-", help="Write here.")
def clean_command(source, policy_path: str | None, output) -> None:
    """
    Sanitize HTML from SOURCE (default: stdin).

    :param source: Input stream.
    :param policy_path: Optional JSON policy file.
    :param output: Output stream.
    """
    sanitizer = Sanitizer(load_policy(policy_path))
    text = read_input(source)
    log.debug(f"Cleaning {len(text)} characters from {source.name}")
    output.write(sanitizer.clean(text))


@cli.command("clean-text")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-", help="Write here.")
def clean_text_command(source, output) -> None:
    """
    Escape SOURCE (default: stdin) as plain HTML text.
    """
    output.write(clean_text(read_input(source)))


@cli.command("policy")
@click.option("--policy", "policy_path", type=click.Path(dir_okay=False), help="JSON policy file.")
def policy_command(policy_path: str | None) -> None:
    """
    Validate a policy and print it as JSON.

    Without ``--policy`` (or ``$CLEANHTML_POLICY``) the default policy is
    printed, which makes a convenient starting point for a custom one.
    """
    policy = load_policy(policy_path)
    click.echo(json.dumps(policy.to_dict(), indent=2, sort_keys=True))


if __name__ == "__main__":
    cli()
