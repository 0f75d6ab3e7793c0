"""Managed (runtime) assembly selection for a single library.

Unlike native libraries, only one runtime-assembly group is used per
library: the group whose tag equals the current runtime identifier, else the
runtime-agnostic group, else nothing at all.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import dnfile
import pefile

from scriptdeps.errors import AssemblyIdentityError
from scriptdeps.runtime.models import AssemblyIdentity, AssetGroup, RuntimeAssembly, RuntimeLibrary
from scriptdeps.runtime.paths import (
    AssetNotFound,
    ResolvedAsset,
    is_placeholder,
    join_library_path,
    resolve_asset_path,
)

logger = logging.getLogger(__name__)

IdentityReader = Callable[[Path], AssemblyIdentity]


def _heap_value(item: object) -> object:
    # dnfile wraps heap entries (HeapItemString/HeapItemBinary) in newer releases.
    return getattr(item, "value", item)


def _as_text(item: object) -> str:
    value = _heap_value(item)
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def public_key_token(public_key: bytes) -> str | None:
    """Return the hex public key token for a strong-name public key blob."""
    if not public_key:
        return None
    if len(public_key) == 8:
        return public_key.hex()
    return hashlib.sha1(public_key).digest()[-8:][::-1].hex()


def read_assembly_identity(path: Path) -> AssemblyIdentity:
    """Read name, version, culture and key token from an assembly on disk.

    Raises:
        AssemblyIdentityError: If ``path`` is not a managed PE image.
    """
    try:
        pe = dnfile.dnPE(str(path))
    except (OSError, pefile.PEFormatError) as exc:
        raise AssemblyIdentityError(f"Cannot read assembly metadata from {path}: {exc}") from exc

    try:
        net = pe.net
        table = net.mdtables.Assembly if net is not None and net.mdtables is not None else None
        if table is None or not table.rows:
            raise AssemblyIdentityError(f"{path} is not a managed assembly (no Assembly metadata)")
        row = table.rows[0]
        version = f"{row.MajorVersion}.{row.MinorVersion}.{row.BuildNumber}.{row.RevisionNumber}"
        public_key = _heap_value(row.PublicKey)
        return AssemblyIdentity(
            name=_as_text(row.Name),
            version=version,
            culture=_as_text(row.Culture),
            public_key_token=public_key_token(public_key if isinstance(public_key, bytes) else b""),
        )
    finally:
        pe.close()


def select_runtime_assembly_group(
    library: RuntimeLibrary,
    runtime_identifier: str,
) -> AssetGroup | None:
    """Pick the best runtime-assembly group for ``runtime_identifier``.

    Exact tag match wins, then the first runtime-agnostic group. Ties go to
    declaration order.
    """
    for group in library.runtime_assembly_groups:
        if group.runtime == runtime_identifier:
            return group
    for group in library.runtime_assembly_groups:
        if group.is_runtime_agnostic:
            return group
    return None


class ManagedAssemblySelector:
    """Resolves the managed assemblies of a library for one runtime identifier."""

    def __init__(
        self,
        runtime_identifier: str,
        identity_reader: IdentityReader = read_assembly_identity,
    ) -> None:
        self.runtime_identifier = runtime_identifier
        self._read_identity = identity_reader

    def select(
        self,
        library: RuntimeLibrary,
        roots: Sequence[Path],
    ) -> tuple[RuntimeAssembly, ...] | AssetNotFound:
        group = select_runtime_assembly_group(library, self.runtime_identifier)
        if group is None:
            logger.debug("No runtime assembly group for %s on %s", library.name, self.runtime_identifier)
            return ()

        assemblies: list[RuntimeAssembly] = []
        for asset_path in group.asset_paths:
            relative_path = join_library_path(library.path, asset_path)
            if is_placeholder(relative_path):
                continue
            outcome = resolve_asset_path(relative_path, roots)
            if isinstance(outcome, AssetNotFound):
                return outcome
            assemblies.append(self._to_runtime_assembly(library, outcome))
        return tuple(assemblies)

    def _to_runtime_assembly(self, library: RuntimeLibrary, resolved: ResolvedAsset) -> RuntimeAssembly:
        logger.debug("Resolved runtime library %s located at %s", library.name, resolved.path)
        return RuntimeAssembly(identity=self._read_identity(resolved.path), path=resolved.path)
