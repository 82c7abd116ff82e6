"""GitLab provider: ``gh`` command vocabulary translated onto ``glab``.

Each ``_cmd_*`` function takes the parsed ``gh`` invocation and returns a
:class:`~repocli.models.NativePlan`. Commands asked for ``--json`` run
``glab ... --output json`` with stdout captured, and the plan's postprocess
maps the GitLab payload back into ``gh`` field names before printing.

Registration order in :func:`build_registry` is significant: specific
handlers first, explicitly unsupported verbs are simply never claimed, and the
unknown-verb passthrough comes last (omitted in strict mode).
"""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Sequence
from typing import Any, TextIO

from .errors import TranslationError
from .executor import render_json
from .fields import (
    ISSUE_FIELD_MAP,
    LABEL_FIELD_MAP,
    REPO_FIELD_MAP,
    Direction,
    FieldMapper,
    parse_json,
)
from .instance import resolve_instance
from .logging import get_logger
from .models import CommandInvocation, NativeInvocation, NativePlan, ProviderContext
from .params import (
    REPO_FLAG,
    STDIN_SENTINEL,
    ParsedArgs,
    flag,
    materialize_stdin,
    normalize_color,
    parse_flags,
    read_body_source,
    repeat_flag,
    require,
    split_csv,
    switch,
)
from .registry import (
    CapabilityRegistry,
    RegistryBuilder,
    any_of,
    exact,
    glob,
    pattern,
)

PROVIDER = "gitlab"
CLAIMED_VERBS = frozenset({"auth", "issue", "repo", "label"})
UNSUPPORTED_HINTS = {
    "sub-issue": (
        "sub-issue operations are not directly supported in GitLab; "
        "use 'repocli issue create' with issue relationships instead"
    ),
    "extension": "GitLab CLI doesn't use extensions",
}

ISSUE_URL = re.compile(r"https?://\S+?/-/issues/(\d+)")
# GitLab caps --per-page at 100
PAGE_SIZE = 100
GH_LIST_LIMIT = 30

# ``--json`` field names each command can produce
ISSUE_JSON_FIELDS = frozenset(
    {
        "assignees", "author", "body", "closed", "closedAt", "createdAt", "id",
        "labels", "milestone", "number", "state", "title", "updatedAt", "url",
    }
)
CREATED_JSON_FIELDS = frozenset({"number", "url"})
REPO_JSON_FIELDS = frozenset(
    {
        "createdAt", "defaultBranchRef", "description", "forkCount", "id", "isPrivate",
        "name", "nameWithOwner", "owner", "pushedAt", "sshUrl", "stargazerCount", "url",
        "visibility",
    }
)
LABEL_JSON_FIELDS = frozenset({"color", "createdAt", "description", "id", "isDefault", "name"})

_ISSUES = FieldMapper(ISSUE_FIELD_MAP)
_REPOS = FieldMapper(REPO_FIELD_MAP)
_LABELS = FieldMapper(LABEL_FIELD_MAP)

JSON_FLAGS = (flag("--json"), flag("--jq", "-q"))


def _stdin(inv: CommandInvocation) -> TextIO:
    if not inv.stdin_available:
        raise TranslationError("--body-file", "- needs content piped on stdin")
    return sys.stdin


def _native(
    ctx: ProviderContext,
    *args: str,
    capture: bool = False,
    temp_files: Sequence[Any] = (),
    page_size: int = 0,
    max_items: int | None = None,
) -> NativeInvocation:
    return NativeInvocation(
        executable=ctx.executable,
        args=tuple(args),
        env=resolve_instance(ctx.instance_url).env,
        capture=capture,
        temp_files=tuple(temp_files),
        page_size=page_size,
        max_items=max_items,
    )


def _repo(parsed: ParsedArgs) -> list[str]:
    repo = parsed.last("--repo")
    return ["--repo", repo] if repo else []


def _issue_ref(value: str) -> str:
    """Accept ``42``, ``#42`` or an issue URL like ``gh`` does."""
    match = ISSUE_URL.search(value)
    ref = match.group(1) if match else value.lstrip("#")
    if not ref.isdigit():
        raise TranslationError("<number>", f"must be an issue number or URL, got '{value}'")
    return ref


def _json_request(parsed: ParsedArgs, known: frozenset[str]) -> tuple[list[str], str | None]:
    fields = split_csv(parsed.all("--json"))
    query = parsed.last("--jq")
    if query and not fields:
        raise TranslationError("--jq", "requires --json")
    unknown = [name for name in fields if name not in known]
    if unknown:
        raise TranslationError(
            "--json",
            f"unknown field(s): {', '.join(unknown)}",
            hint="Available fields:\n" + "\n".join(sorted(known)),
        )
    return fields, query


def _limit(parsed: ParsedArgs, default: int = GH_LIST_LIMIT) -> int:
    raw = parsed.last("--limit")
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise TranslationError("--limit", f"must be a number, got '{raw}'") from exc
    if value < 1:
        raise TranslationError("--limit", "must be greater than 0")
    return value


def _choice(parsed: ParsedArgs, name: str, allowed: Sequence[str], default: str) -> str:
    value = parsed.last(name) or default
    if value not in allowed:
        raise TranslationError(name, f"must be one of: {', '.join(allowed)}")
    return value


def _description_args(
    flag_name: str, value: str, inv: CommandInvocation, temp_files: list[Any]
) -> list[str]:
    if flag_name == "--body":
        return ["--description", value]
    if value == STDIN_SENTINEL:
        path = materialize_stdin(_stdin(inv))
        temp_files.append(path)
        return ["--description-file", str(path)]
    return ["--description-file", value]


def _message_from(parsed: ParsedArgs, inv: CommandInvocation) -> str:
    body = parsed.last("--body")
    body_file = parsed.last("--body-file")
    if body is not None and body_file is not None:
        raise TranslationError("--body-file", "cannot be combined with --body")
    if body_file is not None:
        stdin = _stdin(inv) if body_file == STDIN_SENTINEL else None
        body = read_body_source(body_file, stdin)
    if body is None:
        raise TranslationError("--body-file", "or --body is required")
    if not body.strip():
        raise TranslationError("--body", "must not be empty")
    return body


def _dropped(parsed: ParsedArgs, *names: str) -> None:
    for name in names:
        if parsed.has(name):
            get_logger().debug(f"dropping {name}: no glab equivalent")


# --- output shaping -----------------------------------------------------------

_STATES = {"opened": "OPEN", "open": "OPEN", "closed": "CLOSED", "locked": "CLOSED"}


def shape_issue(raw: dict[str, Any]) -> dict[str, Any]:
    """glab issue JSON -> ``gh issue view --json`` vocabulary."""
    issue = _ISSUES.map(raw, Direction.TARGET_TO_GITHUB)
    state = issue.get("state")
    if isinstance(state, str):
        issue["state"] = _STATES.get(state.lower(), state.upper())
        issue["closed"] = issue["state"] == "CLOSED"
    labels = issue.get("labels")
    if isinstance(labels, list):
        issue["labels"] = [{"name": lbl} if isinstance(lbl, str) else lbl for lbl in labels]
    milestone = issue.get("milestone")
    if isinstance(milestone, dict):
        issue["milestone"] = {
            "number": milestone.get("iid"),
            "title": milestone.get("title"),
            "description": milestone.get("description") or "",
            "dueOn": milestone.get("due_date"),
        }
    return issue


def shape_repo(raw: dict[str, Any]) -> dict[str, Any]:
    repo = _REPOS.map(raw, Direction.TARGET_TO_GITHUB)
    full = repo.get("nameWithOwner")
    if isinstance(full, str) and "/" in full:
        owner, _, name = full.rpartition("/")
        repo["owner"] = {"login": owner}
        repo["name"] = raw.get("path", name)
    visibility = repo.get("visibility")
    if isinstance(visibility, str):
        repo["visibility"] = visibility.upper()
        repo["isPrivate"] = visibility.lower() == "private"
    return repo


def shape_label(raw: dict[str, Any]) -> dict[str, Any]:
    label = _LABELS.map(raw, Direction.TARGET_TO_GITHUB)
    color = label.get("color")
    if isinstance(color, str):
        label["color"] = color.lstrip("#")
    if label.get("description") is None:
        label["description"] = ""
    return label


def _objects(payload: str) -> list[dict[str, Any]]:
    data = parse_json(payload) if payload.strip() else []
    items = data if isinstance(data, list) else [data]
    return [item for item in items if isinstance(item, dict)]


def _issue_output(fields: list[str], query: str | None) -> Callable[[str], str]:
    def _render(payload: str) -> str:
        issue = parse_json(payload)
        if not isinstance(issue, dict):
            issue = {}
        return render_json(shape_issue(issue), fields, query)

    return _render


def _issue_list_output(fields: list[str], query: str | None, limit: int) -> Callable[[str], str]:
    def _render(payload: str) -> str:
        issues = [shape_issue(item) for item in _objects(payload)][:limit]
        return render_json(issues, fields, query)

    return _render


def _created_output(fields: list[str], query: str | None) -> Callable[[str], str]:
    def _render(payload: str) -> str:
        match = ISSUE_URL.search(payload)
        if match is None:
            return payload
        url = match.group(0)
        if fields:
            return render_json({"number": int(match.group(1)), "url": url}, fields, query)
        return url + "\n"

    return _render


# --- auth / version -----------------------------------------------------------


def _cmd_auth_status(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(inv.args, [flag("--hostname", "-h"), switch("--show-token", "-t")])
    args = ["auth", "status"]
    if parsed.last("--hostname"):
        args += ["--hostname", parsed.last("--hostname") or ""]
    if parsed.has("--show-token"):
        args.append("--show-token")
    return NativePlan.single(_native(ctx, *args))


def _cmd_auth_login(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [
            flag("--hostname", "-h"),
            flag("--git-protocol", "-p"),
            switch("--with-token"),
            switch("--web", "-w"),
        ],
    )
    args = ["auth", "login"]
    if parsed.last("--hostname"):
        args += ["--hostname", parsed.last("--hostname") or ""]
    if parsed.last("--git-protocol"):
        args += ["--git-protocol", parsed.last("--git-protocol") or ""]
    if parsed.has("--with-token"):
        args.append("--stdin")
    _dropped(parsed, "--web")
    return NativePlan.single(_native(ctx, *args))


def _cmd_version(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    return NativePlan.single(_native(ctx, "version"))


# --- issues -------------------------------------------------------------------


def _cmd_issue_view(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [*JSON_FLAGS, switch("--web", "-w"), switch("--comments", "-c"), REPO_FLAG],
    )
    number = _issue_ref(parsed.positional(0, "<number>"))
    fields, query = _json_request(parsed, ISSUE_JSON_FIELDS)
    base = ["issue", "view", number]
    if parsed.has("--web"):
        return NativePlan.single(_native(ctx, *base, "--web", *_repo(parsed)))
    if fields:
        return NativePlan.single(
            _native(ctx, *base, "--output", "json", *_repo(parsed), capture=True),
            _issue_output(fields, query),
        )
    extra = ["--comments"] if parsed.has("--comments") else []
    return NativePlan.single(_native(ctx, *base, *extra, *_repo(parsed)))


def _cmd_issue_create(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [
            flag("--title", "-t"),
            flag("--body", "-b"),
            flag("--body-file", "-F"),
            flag("--label", "-l"),
            flag("--assignee", "-a"),
            flag("--milestone", "-m"),
            switch("--web", "-w"),
            *JSON_FLAGS,
            REPO_FLAG,
        ],
    )
    fields, query = _json_request(parsed, CREATED_JSON_FIELDS)
    if parsed.has("--web"):
        args = ["issue", "create", "--web"]
        if parsed.last("--title"):
            args += ["--title", parsed.last("--title") or ""]
        return NativePlan.single(_native(ctx, *args, *_repo(parsed)))

    title = require(parsed.last("--title"), "--title")
    if parsed.has("--body") and parsed.has("--body-file"):
        raise TranslationError("--body-file", "cannot be combined with --body")
    temp_files: list[Any] = []
    args = ["issue", "create", "--title", title]
    for name in ("--body", "--body-file"):
        value = parsed.last(name)
        if value is not None:
            args += _description_args(name, value, inv, temp_files)
    args += repeat_flag("--label", split_csv(parsed.all("--label")))
    assignees = split_csv(parsed.all("--assignee"))
    if assignees:
        args += ["--assignee", ",".join(assignees)]
    if parsed.last("--milestone"):
        args += ["--milestone", parsed.last("--milestone") or ""]
    args += ["--yes", *_repo(parsed)]
    return NativePlan.single(
        _native(ctx, *args, capture=True, temp_files=temp_files),
        _created_output(fields, query),
    )


def _cmd_issue_edit(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [
            flag("--title", "-t"),
            flag("--body", "-b"),
            flag("--body-file", "-F"),
            flag("--add-label"),
            flag("--remove-label"),
            flag("--add-assignee"),
            flag("--milestone", "-m"),
            REPO_FLAG,
        ],
    )
    number = _issue_ref(parsed.positional(0, "<number>"))
    if parsed.has("--body") and parsed.has("--body-file"):
        raise TranslationError("--body-file", "cannot be combined with --body")
    temp_files: list[Any] = []
    changes: list[str] = []
    # Emit in the caller's order so repeated flags keep their sequence.
    for name, value in parsed.flags:
        if value is None or name == "--repo":
            continue
        if name == "--title":
            changes += ["--title", value]
        elif name in ("--body", "--body-file"):
            changes += _description_args(name, value, inv, temp_files)
        elif name in ("--add-label", "--remove-label"):
            changes += repeat_flag(name, split_csv([value]))
        elif name == "--add-assignee":
            changes += repeat_flag("--assignee", split_csv([value]))
        elif name == "--milestone":
            changes += ["--milestone", value]
    if not changes:
        raise TranslationError("issue edit", "needs at least one change flag")
    return NativePlan.single(
        _native(ctx, "issue", "edit", number, *changes, *_repo(parsed), temp_files=temp_files)
    )


def _cmd_issue_comment(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(inv.args, [flag("--body", "-b"), flag("--body-file", "-F"), REPO_FLAG])
    number = _issue_ref(parsed.positional(0, "<number>"))
    message = _message_from(parsed, inv)
    return NativePlan.single(
        _native(ctx, "issue", "note", number, "--message", message, *_repo(parsed))
    )


def _state_change(inv: CommandInvocation, ctx: ProviderContext, action: str) -> NativePlan:
    specs = [flag("--comment", "-c"), REPO_FLAG]
    if action == "close":
        specs.append(flag("--reason", "-r"))
    parsed = parse_flags(inv.args, specs)
    number = _issue_ref(parsed.positional(0, "<number>"))
    steps: list[NativeInvocation] = []
    comment = parsed.last("--comment")
    if comment:
        steps.append(
            _native(
                ctx, "issue", "note", number, "--message", comment, *_repo(parsed), capture=True
            )
        )
    _dropped(parsed, "--reason")
    steps.append(_native(ctx, "issue", action, number, *_repo(parsed)))
    return NativePlan(tuple(steps))


def _cmd_issue_close(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    return _state_change(inv, ctx, "close")


def _cmd_issue_reopen(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    return _state_change(inv, ctx, "reopen")


def _cmd_issue_list(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [
            flag("--label", "-l"),
            flag("--assignee", "-a"),
            flag("--author", "-A"),
            flag("--state", "-s"),
            flag("--search", "-S"),
            flag("--limit", "-L"),
            flag("--milestone", "-m"),
            switch("--web", "-w"),
            *JSON_FLAGS,
            REPO_FLAG,
        ],
    )
    fields, query = _json_request(parsed, ISSUE_JSON_FIELDS)
    limit = _limit(parsed)
    state = _choice(parsed, "--state", ("open", "closed", "all"), "open")
    args = ["issue", "list"]
    labels = split_csv(parsed.all("--label"))
    if labels:
        args += ["--label", ",".join(labels)]
    for name in ("--assignee", "--author", "--search", "--milestone"):
        if parsed.last(name):
            args += [name, parsed.last(name) or ""]
    if state == "closed":
        args.append("--closed")
    elif state == "all":
        args.append("--all")
    repo = _repo(parsed)
    if parsed.has("--web"):
        return NativePlan.single(_native(ctx, *args, "--per-page", str(limit), "--web", *repo))
    if fields:
        return NativePlan.single(
            _native(
                ctx,
                *args,
                "--output",
                "json",
                *repo,
                capture=True,
                page_size=min(limit, PAGE_SIZE),
                max_items=limit,
            ),
            _issue_list_output(fields, query, limit),
        )
    if limit > PAGE_SIZE:
        raise TranslationError("--limit", f"above {PAGE_SIZE} requires --json on GitLab")
    return NativePlan.single(_native(ctx, *args, "--per-page", str(limit), *repo))


# --- repository ---------------------------------------------------------------


def _cmd_repo_view(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(inv.args, [*JSON_FLAGS, switch("--web", "-w"), flag("--branch", "-b")])
    fields, query = _json_request(parsed, REPO_JSON_FIELDS)
    args = ["repo", "view", *parsed.positionals[:1]]
    if parsed.last("--branch"):
        args += ["--branch", parsed.last("--branch") or ""]
    if parsed.has("--web"):
        return NativePlan.single(_native(ctx, *args, "--web"))
    if fields:

        def _render(payload: str) -> str:
            repo = parse_json(payload)
            return render_json(shape_repo(repo if isinstance(repo, dict) else {}), fields, query)

        return NativePlan.single(_native(ctx, *args, "--output", "json", capture=True), _render)
    return NativePlan.single(_native(ctx, *args))


# --- labels -------------------------------------------------------------------


def _label_attrs(parsed: ParsedArgs) -> list[str]:
    args: list[str] = []
    if parsed.last("--color"):
        args += ["--color", normalize_color(parsed.last("--color") or "")]
    if parsed.last("--description") is not None:
        args += ["--description", parsed.last("--description") or ""]
    return args


def _label_listing(ctx: ProviderContext, repo: list[str]) -> NativeInvocation:
    return _native(
        ctx, "label", "list", "--output", "json", *repo, capture=True, page_size=PAGE_SIZE
    )


def _label_names(payload: str) -> set[str]:
    return {str(lbl.get("name")) for lbl in map(shape_label, _objects(payload))}


def _upsert_label(
    ctx: ProviderContext,
    name: str,
    attrs: list[str],
    target: list[str],
    existing: set[str],
    force: bool,
    capture: bool,
) -> NativeInvocation | None:
    """Create ``name``, or edit it in place when it exists and ``force`` is set."""
    if name not in existing:
        return _native(ctx, "label", "create", "--name", name, *attrs, *target, capture=capture)
    if force and attrs:
        return _native(ctx, "label", "edit", "--name", name, *attrs, *target, capture=capture)
    return None


def _cmd_label_create(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [flag("--color", "-c"), flag("--description", "-d"), switch("--force", "-f"), REPO_FLAG],
    )
    name = parsed.positional(0, "<name>")
    attrs = _label_attrs(parsed)
    target = _repo(parsed)
    if not parsed.has("--force"):
        return NativePlan.single(_native(ctx, "label", "create", "--name", name, *attrs, *target))

    def _expand(outputs: list[str]) -> list[NativeInvocation]:
        step = _upsert_label(
            ctx, name, attrs, target, _label_names(outputs[0]), force=True, capture=False
        )
        return [step] if step is not None else []

    return NativePlan((_label_listing(ctx, target),), expand=_expand)


def _cmd_label_list(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [
            *JSON_FLAGS,
            flag("--limit", "-L"),
            flag("--search", "-S"),
            flag("--sort"),
            flag("--order"),
            switch("--web", "-w"),
            REPO_FLAG,
        ],
    )
    if parsed.has("--web"):
        return NativePlan.single(_native(ctx, "label", "list", "--web", *_repo(parsed)))
    fields, query = _json_request(parsed, LABEL_JSON_FIELDS)
    limit = _limit(parsed)
    sort = _choice(parsed, "--sort", ("created", "name"), "created")
    order = _choice(parsed, "--order", ("asc", "desc"), "asc")
    search = (parsed.last("--search") or "").lower()

    def _render(payload: str) -> str:
        labels = [shape_label(item) for item in _objects(payload)]
        if search:
            labels = [
                lbl
                for lbl in labels
                if search in str(lbl.get("name", "")).lower()
                or search in str(lbl.get("description", "")).lower()
            ]
        key = "name" if sort == "name" else "createdAt"
        labels.sort(key=lambda lbl: str(lbl.get(key) or ""), reverse=order == "desc")
        labels = labels[:limit]
        if fields:
            return render_json(labels, fields, query)
        return "".join(
            f"{lbl.get('name', '')}\t{lbl.get('description', '')}\t#{lbl.get('color', '')}\n"
            for lbl in labels
        )

    return NativePlan.single(_label_listing(ctx, _repo(parsed)), _render)


def _cmd_label_edit(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(
        inv.args,
        [flag("--name", "-n"), flag("--color", "-c"), flag("--description", "-d"), REPO_FLAG],
    )
    name = parsed.positional(0, "<name>")
    changes = _label_attrs(parsed)
    if parsed.last("--name"):
        changes = ["--new-name", parsed.last("--name") or "", *changes]
    if not changes:
        raise TranslationError("label edit", "needs at least one of --name, --color, --description")
    return NativePlan.single(
        _native(ctx, "label", "edit", "--name", name, *changes, *_repo(parsed))
    )


def _cmd_label_delete(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(inv.args, [switch("--yes"), REPO_FLAG])
    name = parsed.positional(0, "<name>")
    return NativePlan.single(_native(ctx, "label", "delete", name, *_repo(parsed)))


def _cmd_label_clone(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    parsed = parse_flags(inv.args, [switch("--force", "-f"), REPO_FLAG])
    source = parsed.positional(0, "<source-repository>")
    force = parsed.has("--force")
    target = _repo(parsed)
    summary: dict[str, int] = {}

    def _expand(outputs: list[str]) -> list[NativeInvocation]:
        existing = _label_names(outputs[0])
        steps: list[NativeInvocation] = []
        for lbl in map(shape_label, _objects(outputs[1])):
            name = str(lbl.get("name") or "")
            if not name:
                continue
            attrs = ["--description", lbl["description"]]
            if lbl.get("color"):
                attrs = ["--color", f"#{lbl['color']}", *attrs]
            step = _upsert_label(ctx, name, attrs, target, existing, force, capture=True)
            if step is not None:
                steps.append(step)
        summary["count"] = len(steps)
        return steps

    def _render(_: str) -> str:
        destination = target[1] if target else "the current repository"
        return f"✓ Cloned {summary.get('count', 0)} labels from {source} to {destination}\n"

    return NativePlan(
        (_label_listing(ctx, target), _label_listing(ctx, ["--repo", source])),
        postprocess=_render,
        expand=_expand,
    )


# --- passthrough --------------------------------------------------------------


def _passthrough_predicate(verb: str, subcommand: str) -> bool:
    return (
        bool(verb)
        and not verb.startswith("-")
        and verb not in CLAIMED_VERBS
        and verb not in UNSUPPORTED_HINTS
    )


def _cmd_passthrough(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    get_logger().debug(f"passing through unknown command to {ctx.cli_tool}: {inv.label}")
    return NativePlan.single(_native(ctx, *inv.argv))


def build_registry(ctx: ProviderContext) -> CapabilityRegistry:
    builder = (
        RegistryBuilder(PROVIDER)
        .add("auth status", exact("auth", "status"), _cmd_auth_status)
        .add("auth login", exact("auth", "login"), _cmd_auth_login)
        .add("version", exact("--version"), _cmd_version)
        .add("issue view", pattern(r"issue view"), _cmd_issue_view)
        .add("issue create", any_of("issue", "create"), _cmd_issue_create)
        .add("issue edit", glob("issue edit"), _cmd_issue_edit)
        .add("issue comment", exact("issue", "comment"), _cmd_issue_comment)
        .add("issue close", exact("issue", "close"), _cmd_issue_close)
        .add("issue reopen", exact("issue", "reopen"), _cmd_issue_reopen)
        .add("issue list", exact("issue", "list"), _cmd_issue_list)
        .add("repo view", exact("repo", "view"), _cmd_repo_view)
        .add("label create", pattern(r"label (create|add|new)"), _cmd_label_create)
        .add("label list", exact("label", "list"), _cmd_label_list)
        .add("label edit", exact("label", "edit"), _cmd_label_edit)
        .add("label delete", exact("label", "delete"), _cmd_label_delete)
        .add("label clone", exact("label", "clone"), _cmd_label_clone)
    )
    for verb, text in UNSUPPORTED_HINTS.items():
        builder.hint(verb, text)
    if not ctx.strict:
        builder.add("passthrough", _passthrough_predicate, _cmd_passthrough)
    return builder.build()


__all__ = ["build_registry", "shape_issue", "shape_label", "shape_repo"]
