"""Tests for the migration command line script."""

import importlib.util
from pathlib import Path

import pytest

from betterauth import migrations

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "migrate.py"


@pytest.fixture
def migrate_script():
    """Load scripts/migrate.py as a module."""
    spec = importlib.util.spec_from_file_location("migrate_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def calls(monkeypatch):
    """Record migration commands instead of running them."""
    recorded = []
    monkeypatch.setattr(migrations, "upgrade", lambda rev="head": recorded.append(("up", rev)))
    monkeypatch.setattr(
        migrations, "downgrade", lambda rev="base": recorded.append(("down", rev))
    )
    monkeypatch.setattr(migrations, "current", lambda: "001")
    return recorded


def test_defaults_to_upgrade_head(migrate_script, calls):
    """Test running without arguments upgrades to head."""
    assert migrate_script.main([]) == 0
    assert calls == [("up", "head")]


def test_downgrade_to_revision(migrate_script, calls):
    """Test downgrade passes the target revision through."""
    assert migrate_script.main(["downgrade", "base"]) == 0
    assert calls == [("down", "base")]


def test_current(migrate_script, calls, capsys):
    """Test current prints the database revision."""
    assert migrate_script.main(["current"]) == 0
    assert capsys.readouterr().out.strip() == "001"


def test_unknown_command_prints_usage(migrate_script, calls, capsys):
    """Test unknown commands exit with usage."""
    assert migrate_script.main(["sideways"]) == 2
    assert "Usage" in capsys.readouterr().out
    assert calls == []


def test_failure_is_reported(migrate_script, monkeypatch, capsys):
    """Test a failing migration returns a non-zero status."""

    def boom(rev="head"):
        raise RuntimeError("connection refused")

    monkeypatch.setattr(migrations, "upgrade", boom)

    assert migrate_script.main(["upgrade"]) == 1
    assert "connection refused" in capsys.readouterr().err
