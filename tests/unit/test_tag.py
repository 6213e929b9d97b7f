"""Tests for Tag."""

from pathlib import Path

import pytest

from gitwrap.errors import TagError
from gitwrap.gateway.shell.fake import FakeShell
from gitwrap.repository import Repository
from gitwrap.tag import Tag, parse_tag_names


def test_tags_compare_by_name() -> None:
    repo = Repository(Path("/repo"), shell=FakeShell())

    assert Tag(repo, "v1.0") == Tag(Repository(Path("/other"), shell=FakeShell()), "v1.0")
    assert sorted([Tag(repo, "v2.0"), Tag(repo, "v1.0")]) == [Tag(repo, "v1.0"), Tag(repo, "v2.0")]


@pytest.mark.parametrize("name", ["", "  v1.0", "v1.0\n"])
def test_invalid_tag_names_are_rejected(name: str) -> None:
    with pytest.raises(TagError):
        Tag(Repository(Path("/repo"), shell=FakeShell()), name)


def test_exists_queries_tag_listing() -> None:
    shell = FakeShell(outputs={("git", "tag"): "v1.0\nv2.0\n"})
    repo = Repository(Path("/repo"), shell=shell)

    assert Tag(repo, "v2.0").exists() is True
    assert Tag(repo, "v3.0").exists() is False


def test_delete_runs_tag_d() -> None:
    shell = FakeShell()
    repo = Repository(Path("/repo"), shell=shell)

    assert Tag(repo, "v1.0").delete() is True
    assert shell.commands == [("git", "tag", "-d", "v1.0")]


def test_parse_tag_names() -> None:
    assert parse_tag_names("tag_a\ntag_b\n\ntag_c\n") == ["tag_a", "tag_b", "tag_c"]
