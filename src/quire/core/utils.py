"""Identifier helpers shared by the loader and the route projector."""

import re
from pathlib import PurePath, PurePosixPath

_WHITESPACE = re.compile(r"\s+")
_SEGMENT = re.compile(r"[a-z0-9][a-z0-9._~-]*")


def derive_id(relative_path: PurePath) -> str:
    """Derive a record identifier from its path inside the collection directory.

    The extension is dropped, the result is lower-cased and path separators are
    kept as route segments. A trailing ``index`` segment collapses into its
    directory so ``talks/api-design/index.md`` and ``talks/api-design.md`` both
    map to ``api-design``.

    Examples:
        >>> derive_id(PurePosixPath("Hello-World.md"))
        'hello-world'
        >>> derive_id(PurePosixPath("2024/launch/index.mdx"))
        '2024/launch'
        >>> derive_id(PurePosixPath("my post.md"))
        'my-post'

    """
    parts = [*PurePosixPath(relative_path.as_posix()).with_suffix("").parts]
    if len(parts) > 1 and parts[-1].lower() == "index":
        parts.pop()
    return normalize_slug("/".join(parts))


def normalize_slug(value: str) -> str:
    """Lower-case a slug, trim its slashes and hyphenate whitespace in each segment."""
    segments = [_WHITESPACE.sub("-", segment.strip()) for segment in value.strip("/").split("/")]
    return "/".join(segment for segment in segments if segment).lower()


def is_url_safe(slug: str) -> bool:
    """Whether every segment of a normalized slug is a plain URL path segment.

    Segments must start with a letter or digit, which rules out ``.`` and
    ``..`` as well as hidden names.

    Examples:
        >>> is_url_safe("2024/launch-week")
        True
        >>> is_url_safe("../escape")
        False

    """
    return bool(slug) and all(_SEGMENT.fullmatch(segment) for segment in slug.split("/"))
