"""Utilities for validating storefront settings files and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Sequence
from urllib.parse import urlparse

from .settings import (
    DEFAULTS_FILE,
    ConfigurationError,
    StorefrontSettings,
    load_settings,
)

PLACEHOLDER_SECRET = "change-me-in-production"


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_origins(origins: Sequence[str]) -> list[str]:
    errors: list[str] = []

    for origin in origins:
        parsed = urlparse(origin)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            errors.append(_format_scope("allowed_origins", f"invalid origin '{origin}'"))
        elif parsed.path not in {"", "/"}:
            errors.append(
                _format_scope("allowed_origins", f"origin '{origin}' must not include a path")
            )

    duplicates = [value for value, count in Counter(origins).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope("allowed_origins", f"duplicate origins detected: {sorted(duplicates)}")
        )

    return errors


def validate_settings(
    settings: StorefrontSettings, *, allow_placeholder_secret: bool = False
) -> list[str]:
    """Return human-readable issues found in ``settings``."""

    errors: list[str] = []

    if not allow_placeholder_secret and settings.secret_key == PLACEHOLDER_SECRET:
        errors.append(_format_scope("secret_key", "placeholder secret must be replaced"))

    if settings.token_ttl_seconds < 60:
        errors.append(_format_scope("token_ttl_seconds", "tokens should live at least a minute"))

    errors.extend(_validate_origins(settings.allowed_origins))

    pagination = settings.pagination
    if pagination.page_size > pagination.latest_products:
        errors.append(
            _format_scope(
                "pagination",
                "page_size should not exceed the latest_products listing size",
            )
        )

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate storefront settings files.")
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Settings files to validate (defaults to the bundled defaults.yaml)",
    )
    parser.add_argument(
        "--allow-placeholder-secret",
        action="store_true",
        help="Do not flag the placeholder secret key (useful for local development)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    files = args.files or [DEFAULTS_FILE]

    exit_code = 0

    for path in files:
        try:
            settings = load_settings(path, environ={})
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{path.name}] failed to load settings: {error}")
            exit_code = 1
            continue

        issues = validate_settings(
            settings, allow_placeholder_secret=args.allow_placeholder_secret
        )
        if issues:
            exit_code = 1
            print(f"[{path.name}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{path.name}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
