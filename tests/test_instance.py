from __future__ import annotations

import pytest

from repocli.errors import ConfigError
from repocli.instance import extract_host, resolve_instance


@pytest.mark.parametrize(
    ("url", "host"),
    [
        ("https://user@Git.Example.com:8443/group?x=1", "git.example.com:8443"),
        ("http://gitlab.internal/", "gitlab.internal"),
        ("gitlab.example.com", "gitlab.example.com"),
    ],
)
def test_extract_host(url, host):
    assert extract_host(url) == host


@pytest.mark.parametrize("url", ["ftp://gitlab.example.com", "https:///group", "https://host:port/"])
def test_extract_host_rejects(url):
    with pytest.raises(ConfigError):
        extract_host(url)


def test_default_host_has_no_override():
    assert resolve_instance(None).hostname == "gitlab.com"
    assert resolve_instance("  ").is_default
    assert resolve_instance("https://gitlab.com/group").env == {}


def test_self_hosted_sets_gitlab_host():
    target = resolve_instance("https://gitlab.example.com:8443")
    assert target.hostname == "gitlab.example.com:8443"
    assert target.env == {"GITLAB_HOST": "gitlab.example.com:8443"}
    assert not target.is_default


def test_custom_host_variable():
    target = resolve_instance("https://ghe.example.com", default_host="github.com", host_env="GH_HOST")
    assert target.env == {"GH_HOST": "ghe.example.com"}
