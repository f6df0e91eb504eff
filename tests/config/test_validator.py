from pathlib import Path

import pytest

from storefront.backend.config.settings import load_settings
from storefront.backend.config.validator import (
    PLACEHOLDER_SECRET,
    main,
    validate_settings,
)


def test_bundled_defaults_are_valid_for_local_development() -> None:
    settings = load_settings(environ={})

    assert settings.secret_key == PLACEHOLDER_SECRET
    assert validate_settings(settings, allow_placeholder_secret=True) == []


def test_validator_flags_placeholder_secret() -> None:
    errors = validate_settings(load_settings(environ={}))

    assert any(error.startswith("secret_key") for error in errors)


def test_validator_flags_invalid_origins() -> None:
    settings = load_settings(environ={}).model_copy(
        update={
            "allowed_origins": (
                "ftp://files.test",
                "https://shop.test/app",
                "https://ok.test",
                "https://ok.test",
            )
        }
    )

    errors = validate_settings(settings, allow_placeholder_secret=True)

    assert any("invalid origin 'ftp://files.test'" in error for error in errors)
    assert any("must not include a path" in error for error in errors)
    assert any("duplicate origins" in error for error in errors)


def test_validator_flags_short_ttl_and_oversized_pages() -> None:
    settings = load_settings(environ={})
    pagination = settings.pagination.model_copy(update={"page_size": 50})
    broken = settings.model_copy(update={"token_ttl_seconds": 30, "pagination": pagination})

    errors = validate_settings(broken, allow_placeholder_secret=True)

    assert any(error.startswith("token_ttl_seconds") for error in errors)
    assert any(error.startswith("pagination") for error in errors)


def test_main_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--allow-placeholder-secret"]) == 0
    assert "[defaults.yaml] OK" in capsys.readouterr().out


def test_main_reports_issues_and_load_failures(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text("secret_key: ''\n", encoding="utf-8")

    exit_code = main([str(broken), str(tmp_path / "missing.yaml")])

    output = capsys.readouterr().out
    assert exit_code == 1
    assert "[broken.yaml] failed to load settings" in output
    assert "[missing.yaml] failed to load settings" in output
