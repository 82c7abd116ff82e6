from __future__ import annotations

import io

import pytest

from repocli.errors import TranslationError
from repocli.params import (
    REPO_FLAG,
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

SPECS = [flag("--title", "-t"), flag("--label", "-l"), switch("--web", "-w"), REPO_FLAG]


def test_parse_flags_keeps_order_and_aliases():
    parsed = parse_flags(
        ["7", "-t", "T", "--label", "a,b", "-l=c", "--web", "-R", "g/p"], SPECS
    )
    assert parsed.positionals == ["7"]
    assert parsed.flags == [
        ("--title", "T"),
        ("--label", "a,b"),
        ("--label", "c"),
        ("--web", None),
        ("--repo", "g/p"),
    ]
    assert parsed.all("--label") == ["a,b", "c"]
    assert parsed.last("--title") == "T"
    assert parsed.has("--web")


def test_parse_flags_rejects_unknown_flag():
    with pytest.raises(TranslationError) as exc:
        parse_flags(["--nope"], SPECS)
    assert exc.value.flag == "--nope"
    assert "not supported" in exc.value.message


def test_parse_flags_missing_value():
    with pytest.raises(TranslationError, match="--title requires a value"):
        parse_flags(["--title"], SPECS)


def test_switch_with_value_rejected():
    with pytest.raises(TranslationError):
        parse_flags(["--web=yes"], SPECS)


def test_double_dash_and_stdin_sentinel_are_positionals():
    parsed = parse_flags(["-", "--", "--title"], SPECS)
    assert parsed.positionals == ["-", "--title"]
    assert parsed.flags == []


def test_positional_missing_names_label():
    parsed = parse_flags([], SPECS)
    with pytest.raises(TranslationError, match="<number>"):
        parsed.positional(0, "<number>")


def test_require():
    assert require("x", "--title") == "x"
    with pytest.raises(TranslationError, match="--title is required"):
        require("  ", "--title")


def test_split_and_repeat():
    values = split_csv(["a, b", "", "c,"])
    assert values == ["a", "b", "c"]
    assert repeat_flag("--label", values) == ["--label", "a", "--label", "b", "--label", "c"]


def test_read_body_source(tmp_path):
    assert read_body_source("-", io.StringIO("from stdin")) == "from stdin"
    body = tmp_path / "body.md"
    body.write_text("from file", encoding="utf-8")
    assert read_body_source(str(body)) == "from file"
    with pytest.raises(TranslationError, match="--body-file"):
        read_body_source(str(tmp_path / "missing.md"))


def test_materialize_stdin():
    path = materialize_stdin(io.StringIO("desc"))
    try:
        assert path.read_text(encoding="utf-8") == "desc"
        assert path.name.startswith("repocli-body-")
    finally:
        path.unlink()


def _binary_stdin() -> io.TextIOWrapper:
    return io.TextIOWrapper(io.BytesIO(b"\xff\xfe bad"), encoding="utf-8")


def test_body_that_is_not_utf8_is_a_usage_error(tmp_path):
    body = tmp_path / "body.bin"
    body.write_bytes(b"\xff\xfe bad")
    with pytest.raises(TranslationError, match="--body-file is not valid UTF-8"):
        read_body_source(str(body))
    with pytest.raises(TranslationError, match="--body-file is not valid UTF-8"):
        read_body_source("-", _binary_stdin())
    with pytest.raises(TranslationError, match="--body-file is not valid UTF-8"):
        materialize_stdin(_binary_stdin())


@pytest.mark.parametrize(
    ("value", "expected"),
    [("ff0000", "#ff0000"), ("0F0", "#0F0"), ("#abcdef", "#abcdef"), ("red", "red")],
)
def test_normalize_color(value, expected):
    assert normalize_color(value) == expected
