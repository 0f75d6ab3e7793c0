"""Runtime identifier (RID) parsing and platform compatibility checks.

A RID such as ``win10-x64`` or ``linux-musl-arm64`` is read as three tokens:

- platform  -- the leading alphabetic run (``win``, ``linux``, ``osx``)
- qualifier -- whatever sits between the platform and the last hyphen
               (``10``, ``.10.12``, ``-musl``); may be empty
- arch      -- the token after the last hyphen (``x64``, ``arm64``)

A tag is compatible with the current machine when its platform and
architecture tokens equal the machine's; the qualifier is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RuntimeIdentifier:
    platform: str
    qualifier: str
    architecture: str


def parse_runtime_identifier(tag: str) -> RuntimeIdentifier | None:
    """Split a RID into tokens, or return ``None`` when it is malformed."""
    os_part, sep, architecture = tag.strip().rpartition("-")
    if not sep or not os_part or not architecture:
        return None

    end = 0
    while end < len(os_part) and os_part[end].isalpha():
        end += 1
    platform = os_part[:end]
    if not platform:
        return None

    qualifier = os_part[end:]
    # The platform is the whole leading alphabetic run, so "windows" is its own
    # platform and never equals "win". After it only a version (digits, dots)
    # or a hyphenated suffix may follow.
    if qualifier and not (qualifier[0].isdigit() or qualifier[0] in ".-"):
        return None

    return RuntimeIdentifier(platform=platform, qualifier=qualifier, architecture=architecture)


class RuntimeIdentifierMatcher:
    """Decides whether a library's runtime tag applies to this machine."""

    def __init__(self, platform_identifier: str, processor_architecture: str) -> None:
        self.platform_identifier = platform_identifier
        self.processor_architecture = processor_architecture

    def compatible(self, tag: str | None) -> bool:
        if tag is None or not tag.strip():
            return True
        rid = parse_runtime_identifier(tag)
        if rid is None:
            return False
        return (
            rid.platform == self.platform_identifier
            and rid.architecture == self.processor_architecture
        )

    def __repr__(self) -> str:
        return (
            f"RuntimeIdentifierMatcher(platform={self.platform_identifier!r}, "
            f"arch={self.processor_architecture!r})"
        )
