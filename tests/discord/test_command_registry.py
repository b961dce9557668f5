"""Tests for register_all: slash command module registry.

Invariants:
    - All MODULES register onto the shared CommandTree in order
    - Allow/deny lists skip modules without failing
    - Missing or broken required modules fail closed (RuntimeError)
    - Missing optional modules are reported, not raised
"""

import logging

import discord
import pytest
from discord import app_commands

from echobot.config import settings
from echobot.discord.commands import MODULES, register_all


# -- Helpers -------------------------------------------------------------------


def _tree():
    client = discord.Client(intents=discord.Intents.none())
    return client, app_commands.CommandTree(client)


def _names(tree):
    return sorted(c.name for c in tree.get_commands())


# ==============================================================================
# Registration
# ==============================================================================


def test_registers_every_module():
    client, tree = _tree()

    results = register_all(client, tree)

    assert results == {name: "registered" for name in MODULES}
    assert _names(tree) == ["chat", "ping", "status"]


def test_deny_list_skips_optional_module(monkeypatch):
    monkeypatch.setattr(settings, "commands_deny_raw", "chat")
    client, tree = _tree()

    results = register_all(client, tree)

    assert results["chat"] == "skipped (allow/deny)"
    assert _names(tree) == ["ping", "status"]


def test_allow_list_wins_over_deny_list(monkeypatch):
    monkeypatch.setattr(settings, "commands_allow_raw", "core, ping")
    monkeypatch.setattr(settings, "commands_deny_raw", "core")
    client, tree = _tree()

    register_all(client, tree)

    assert _names(tree) == ["ping", "status"]


# ==============================================================================
# Fail-closed behavior
# ==============================================================================


def test_missing_optional_module_is_reported():
    client, tree = _tree()

    results = register_all(client, tree, modules=("core", "does_not_exist"), required=("core",))

    assert results["core"] == "registered"
    assert results["does_not_exist"].startswith("failed (No module named")


def test_missing_required_module_raises():
    client, tree = _tree()

    with pytest.raises(RuntimeError, match="does_not_exist"):
        register_all(client, tree, modules=("core", "does_not_exist"), required=("does_not_exist",))


def test_module_without_register_is_fatal_when_required():
    client, tree = _tree()

    # shared.py is a helper module with no register()
    with pytest.raises(RuntimeError, match="shared: malformed"):
        register_all(client, tree, modules=("shared",), required=("shared",))


def test_register_failure_is_fatal_when_required():
    client, tree = _tree()
    register_all(client, tree, modules=("core",), required=())

    # registering the same command name twice raises inside discord.py
    with pytest.raises(RuntimeError, match=r"core: failed \(Command .* already registered"):
        register_all(client, tree, modules=("core",), required=("core",))


def test_required_module_disabled_by_deny_list_is_not_fatal(monkeypatch):
    monkeypatch.setattr(settings, "commands_deny_raw", "ping")
    client, tree = _tree()

    results = register_all(client, tree)

    assert results["ping"] == "skipped (allow/deny)"
    assert _names(tree) == ["chat", "status"]


def test_failing_optional_module_logs_one_error(caplog):
    client, tree = _tree()
    register_all(client, tree, modules=("chat",), required=())

    with caplog.at_level(logging.INFO, logger="echobot.discord.commands"):
        results = register_all(client, tree, modules=("core", "chat"), required=("core",))

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert results["core"] == "registered"
    assert results["chat"].startswith("failed")
    assert len(errors) == 1
    assert "chat" in errors[0].getMessage()
