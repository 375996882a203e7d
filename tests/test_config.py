"""Tests for configuration management."""

import json

import pytest
from typer.testing import CliRunner

from shelfcheck.cli import app
from shelfcheck.config import (
    ShelfcheckConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    update_config,
)


def test_default_config():
    config = ShelfcheckConfig()
    assert config.similarity.isbn_weight == 0.4
    assert config.similarity.title_weight == 0.3
    assert config.similarity.author_weight == 0.2
    assert config.similarity.publisher_weight == 0.1
    assert config.similarity.min_score == 0.3
    assert "edition" in config.similarity.edition_keywords
    assert config.cli.limit == 10
    assert config.cli.output_format == "table"


def test_config_path_prefers_xdg(isolated_home):
    assert get_config_path() == isolated_home / ".shelfcheck" / "config.json"

    (isolated_home / ".config").mkdir()
    assert get_config_path() == isolated_home / ".config" / "shelfcheck" / "config.json"


def test_load_missing_config_returns_defaults():
    assert load_config() == ShelfcheckConfig()


def test_save_and_load(isolated_home):
    config = ShelfcheckConfig()
    config.similarity.min_score = 0.45
    config.cli.output_format = "json"

    path = save_config(config)

    assert path.exists()
    assert json.loads(path.read_text())["similarity"]["min_score"] == 0.45
    assert load_config() == config


def test_corrupt_config_falls_back_to_defaults():
    path = get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text("{not json")
    assert load_config() == ShelfcheckConfig()


@pytest.mark.parametrize("content", ["[]", '"x"', "3", '{"similarity": []}', '{"cli": null}'])
def test_non_object_config_falls_back_to_defaults(content):
    path = get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text(content)
    assert load_config() == ShelfcheckConfig()


def test_non_object_config_does_not_break_cli():
    path = get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text("[]")

    result = CliRunner().invoke(app, ["about"])
    assert result.exit_code == 0


def test_unknown_keys_fall_back_to_defaults():
    path = get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"similarity": {"fuzziness": 3}}))
    assert load_config() == ShelfcheckConfig()


def test_ensure_config_exists():
    path = ensure_config_exists()
    assert path.exists()
    assert load_config() == ShelfcheckConfig()


def test_update_config_only_changes_given_fields():
    update_config(min_score=0.5, cli_limit=3)

    config = load_config()
    assert config.similarity.min_score == 0.5
    assert config.cli.limit == 3
    assert config.similarity.isbn_weight == 0.4
    assert config.cli.output_format == "table"


def test_update_config_rejects_bad_threshold():
    with pytest.raises(ValueError, match="min_score"):
        update_config(min_score=1.5)
