"""Concurrency token wire format.

Hey future me - the version travels over HTTP as an ETag-style quoted integer: ``"3"``.
The write service only ever sees the plain int. Quoting/unquoting lives HERE so both the
ETag/If-None-Match (read) and If-Match (update) paths use the exact same rules.
"""

import re

from songcatalog.domain.errors import VersionInvalid

# Exactly one quoted, non-negative integer. No weak validators (W/"1"), no lists, no
# surrounding whitespace.
_VERSION_TOKEN = re.compile(r'"(\d+)"')


def parse_version_token(token: str | None) -> int | VersionInvalid:
    """Parse a quoted-integer concurrency token.

    Args:
        token: Raw header value, e.g. ``'"0"'``

    Returns:
        The version number, or ``VersionInvalid`` if the token is missing or malformed
    """
    if token is None:
        return VersionInvalid(version=None)
    match = _VERSION_TOKEN.fullmatch(token)
    if match is None:
        return VersionInvalid(version=token)
    return int(match.group(1))


def format_version_token(version: int) -> str:
    """Render a version number as ETag value (``3`` -> ``'"3"'``)."""
    return f'"{version}"'
