"""Unit tests for instantiatebinary query rendering."""

from __future__ import annotations

from buildconfig_operations.context import ParameterContext
from buildconfig_operations.query import build_query, instantiate_binary_url


def test_commit_parameter_is_emitted_even_without_message() -> None:
    assert build_query(ParameterContext()) == "commit="


def test_empty_message_renders_empty_commit_value() -> None:
    assert build_query(ParameterContext(message="")) == "commit="


def test_message_author_and_as_file() -> None:
    context = ParameterContext(message="m1", author_name="a", as_file="f.tar")

    assert build_query(context) == "commit=m1&revision.authorName=a&asFile=f.tar"


def test_full_query_order() -> None:
    context = ParameterContext(
        message="msg",
        author_name="an",
        author_email="ae",
        committer_name="cn",
        committer_email="ce",
        commit="sha",
        as_file="out.bin",
    )

    assert build_query(context) == (
        "commit=msg"
        "&revision.authorName=an"
        "&revision.authorEmail=ae"
        "&revision.committerName=cn"
        "&revision.committerEmail=ce"
        "&revision.commit=sha"
        "&asFile=out.bin"
    )


def test_empty_revision_fields_are_omitted() -> None:
    context = ParameterContext(author_name="", commit="", as_file="")

    assert build_query(context) == "commit="


def test_commit_hash_is_not_used_as_commit_parameter() -> None:
    assert build_query(ParameterContext(commit="abc123")) == "commit=&revision.commit=abc123"


def test_values_are_not_escaped() -> None:
    assert build_query(ParameterContext(message="a&b=c")) == "commit=a&b=c"


def test_instantiate_binary_url_joins_action() -> None:
    url = instantiate_binary_url("https://api/x/buildconfigs/bc/", ParameterContext(message="m"))

    assert url == "https://api/x/buildconfigs/bc/instantiatebinary?commit=m"
