from __future__ import annotations

import pytest

from repocli import gitlab
from repocli.errors import UnsupportedCommand
from repocli.models import CommandInvocation, NativePlan, ProviderContext
from repocli.registry import RegistryBuilder, any_of, exact, glob, pattern, verb_only

CTX = ProviderContext("gitlab", cli_tool="glab")


def _inv(*argv: str) -> CommandInvocation:
    return CommandInvocation.from_argv(list(argv), stdin_available=False)


def _noop(inv, ctx):
    return NativePlan(())


def test_every_claimed_pair_selects_its_descriptor():
    registry = gitlab.build_registry(CTX)
    for name in registry.names():
        if name in ("passthrough", "version"):
            continue
        verb, sub = name.split(" ")
        assert registry.find(verb, sub).name == name
    assert registry.find("--version", "").name == "version"


def test_label_create_aliases():
    registry = gitlab.build_registry(CTX)
    for sub in ("create", "add", "new"):
        assert registry.find("label", sub).name == "label create"


def test_passthrough_is_registered_last():
    names = gitlab.build_registry(CTX).names()
    assert names[-1] == "passthrough"
    assert names[0] == "auth status"


def test_empty_argv_is_unsupported():
    registry = gitlab.build_registry(CTX)
    with pytest.raises(UnsupportedCommand, match="<empty>") as exc:
        registry.dispatch(_inv())
    assert exc.value.exit_code == 64


def test_unknown_subcommand_of_claimed_verb_is_unsupported():
    registry = gitlab.build_registry(CTX)
    with pytest.raises(UnsupportedCommand, match="'issue transfer'"):
        registry.dispatch(_inv("issue", "transfer", "1"))


def test_sub_issue_create_is_unsupported_with_hint():
    registry = gitlab.build_registry(CTX)
    with pytest.raises(UnsupportedCommand) as exc:
        registry.dispatch(_inv("sub-issue", "create", "--parent", "1"))
    assert "sub-issue create" in str(exc.value)
    assert "for gitlab" in str(exc.value)
    assert exc.value.hint and "GitLab" in exc.value.hint


def test_unclaimed_verb_passes_through_unless_strict():
    assert gitlab.build_registry(CTX).dispatch(_inv("mr", "list")).name == "passthrough"
    strict = ProviderContext("gitlab", cli_tool="glab", strict=True)
    registry = gitlab.build_registry(strict)
    assert "passthrough" not in registry.names()
    with pytest.raises(UnsupportedCommand, match="'mr list'"):
        registry.dispatch(_inv("mr", "list"))


def test_first_match_wins():
    registry = (
        RegistryBuilder("test")
        .add("specific", exact("issue", "view"), _noop)
        .add("broad", verb_only("issue"), _noop)
        .build()
    )
    assert registry.find("issue", "view").name == "specific"
    assert registry.find("issue", "list").name == "broad"
    assert len(registry) == 2


def test_duplicate_names_rejected():
    builder = RegistryBuilder().add("a", exact("x"), _noop)
    with pytest.raises(ValueError):
        builder.add("a", exact("y"), _noop)


def test_predicate_factories():
    assert exact("auth", "status")("auth", "status")
    assert not exact("auth", "status")("auth", "login")
    assert any_of("issue", "create", "new")("issue", "new")
    assert pattern(r"label (create|add)")("label", "add")
    assert not pattern(r"label (create|add)")("label", "added")
    assert glob("issue *")("issue", "edit")
    assert verb_only("repo")("repo", "")


def test_from_argv_splits_verb_and_subcommand():
    inv = _inv("issue", "view", "1", "--json", "title")
    assert (inv.verb, inv.subcommand, inv.args) == ("issue", "view", ("1", "--json", "title"))
    flagged = _inv("issue", "--help")
    assert (flagged.verb, flagged.subcommand, flagged.args) == ("issue", "", ("--help",))
    assert flagged.argv == ["issue", "--help"]
