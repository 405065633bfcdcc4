from __future__ import annotations

from pathlib import Path

import pytest

from passentry.core.settings import DEFAULT_SECRET_FIELDS, DEFAULT_USERNAME_FIELDS, ParserSettings

EXAMPLE_CONFIG = Path(__file__).resolve().parents[1] / "config" / "parser.example.yml"


def test_defaults():
    settings = ParserSettings()
    assert settings.username_fields == DEFAULT_USERNAME_FIELDS
    assert settings.secret_fields == DEFAULT_SECRET_FIELDS
    assert settings.default_digits == 6
    assert settings.default_period == 30


def test_example_config_matches_defaults():
    assert ParserSettings.from_file(EXAMPLE_CONFIG) == ParserSettings()


def test_from_file_normalises_field_names(tmp_path):
    path = tmp_path / "parser.yml"
    path.write_text("username_fields:\n  - 'Login:'\n  - ' USER '\n  - login\nsecret_fields: [TOTP]\ndefault_period: 60\n")
    settings = ParserSettings.from_file(path)
    assert settings.username_fields == ("login", "user")
    assert settings.secret_fields == ("totp",)
    assert settings.default_period == 60


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "parser.yml"
    path.write_text("")
    assert ParserSettings.from_file(path) == ParserSettings()


@pytest.mark.parametrize(
    "content",
    [
        "username_fields: ['user name']\n",
        "username_fields: []\n",
        "secret_fields: [':']\n",
        "default_digits: 5\n",
        "default_period: 0\n",
        "- just\n- a list\n",
        "username_fields: [unterminated\n",
    ],
)
def test_invalid_settings_raise_value_error(tmp_path, content):
    path = tmp_path / "parser.yml"
    path.write_text(content)
    with pytest.raises(ValueError):
        ParserSettings.from_file(path)
