"""scriptdeps - runtime dependency resolution for script hosts.

Given a dependency graph materialised by a package restore step, works out
which managed assemblies, native libraries and bundled script files a
script host has to load on this machine.
"""

from __future__ import annotations

__version__ = "0.4.0"

__all__ = ["__version__"]
