"""Query string rendering for binary build instantiation.

Values are appended verbatim. A value containing ``&`` or ``=`` produces a
malformed query; escaping is the caller's responsibility.
"""

from __future__ import annotations

from buildconfig_operations.context import ParameterContext
from buildconfig_operations.transport import join_url

INSTANTIATE_BINARY = "instantiatebinary"

# (query parameter, context attribute) in emission order.
_REVISION_PARAMS: tuple[tuple[str, str], ...] = (
    ("revision.authorName", "author_name"),
    ("revision.authorEmail", "author_email"),
    ("revision.committerName", "committer_name"),
    ("revision.committerEmail", "committer_email"),
    ("revision.commit", "commit"),
)


def build_query(context: ParameterContext) -> str:
    """Render ``context`` as the instantiatebinary query string (without ``?``).

    ``commit`` always comes first and carries the commit *message*; the git
    revision hash travels as ``revision.commit``.
    """

    parts = [f"commit={context.message or ''}"]

    for param, attr in _REVISION_PARAMS:
        value = getattr(context, attr)
        if value:
            parts.append(f"{param}={value}")

    if context.as_file:
        parts.append(f"asFile={context.as_file}")

    return "&".join(parts)


def instantiate_binary_url(resource_url: str, context: ParameterContext) -> str:
    return f"{join_url(resource_url, INSTANTIATE_BINARY)}?{build_query(context)}"
