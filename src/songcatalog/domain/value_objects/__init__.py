"""Domain value objects."""

from songcatalog.domain.value_objects.version_token import (
    format_version_token,
    parse_version_token,
)

__all__ = ["format_version_token", "parse_version_token"]
