"""
Writer module.

Path resolution, atomic writes and the per-unit conflict policy.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .file_writer import FileWriter
from .paths import resolve_package_path, resolve_unit_path

__all__ = [
    "AtomicWriter",
    "FileWriter",
    "resolve_package_path",
    "resolve_unit_path",
]
