"""
Tests for the notegraph-migrate command line
"""

import os
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from notegraph.database.cli import PROJECT_DIR, get_alembic_config, main


def test_alembic_config_points_at_project_scripts():
    config = get_alembic_config()

    assert Path(config.config_file_name) == PROJECT_DIR / "alembic.ini"
    assert Path(config.get_main_option("script_location")) == PROJECT_DIR / "alembic"


def test_alembic_config_from_environment(tmp_path, monkeypatch):
    ini = tmp_path / "alembic.ini"
    ini.write_text("[alembic]\nscript_location = alembic\n")
    monkeypatch.setenv("NOTEGRAPH_ALEMBIC_INI", str(ini))

    config = get_alembic_config()

    assert config.get_main_option("script_location") == str(tmp_path / "alembic")


def test_upgrade_runs_alembic_with_database_url():
    runner = CliRunner()

    with patch("notegraph.database.cli.configure_logging"), patch(
        "notegraph.database.cli.command.upgrade"
    ) as upgrade:
        result = runner.invoke(main, ["--database-url", "sqlite:///x.db", "upgrade"])

    assert result.exit_code == 0, result.output
    assert upgrade.call_args.args[1] == "head"
    assert os.environ["NOTEGRAPH_DATABASE_URL"] == "sqlite:///x.db"


def test_failed_command_exits_nonzero():
    runner = CliRunner()

    with patch("notegraph.database.cli.configure_logging"), patch(
        "notegraph.database.cli.command.downgrade", side_effect=RuntimeError("no such revision")
    ):
        result = runner.invoke(main, ["downgrade", "base"])

    assert result.exit_code == 1
    assert "no such revision" in result.output
