"""BuildManifest domain object describing the static asset build output.

The manifest lists the top-level entries of the directory uploaded to the
static assets bucket. Each entry becomes one CloudFront cache behavior, so
only the top level matters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from ..constants import INDEX_DOCUMENT, NEXTJS_BUILD_DIR, NEXTJS_STATIC_DIR


@dataclass(frozen=True)
class ManifestEntry:
    """A top-level file or directory in the static build output.

    Attributes:
        name: Entry name relative to the static directory
        is_directory: Whether the entry is a directory
    """

    name: str
    is_directory: bool = False

    @property
    def path_pattern(self) -> str:
        """Unprefixed path pattern matching this entry (``name/*`` for directories)."""
        return f"{self.name}/*" if self.is_directory else self.name


@dataclass(frozen=True)
class BuildManifest:
    """Read-only listing of the static build output."""

    entries: Tuple[ManifestEntry, ...] = ()

    @classmethod
    def from_listing(cls, names: Iterable[str]) -> "BuildManifest":
        """Build a manifest from names, where a trailing ``/`` marks a directory."""
        entries = []
        for name in names:
            if name.endswith("/"):
                entries.append(ManifestEntry(name.rstrip("/"), is_directory=True))
            else:
                entries.append(ManifestEntry(name))
        return cls(tuple(entries))

    @classmethod
    def from_directory(cls, path: Union[str, os.PathLike]) -> "BuildManifest":
        """Read the top-level entries of ``path``, sorted by name."""
        with os.scandir(path) as listing:
            entries = [ManifestEntry(entry.name, is_directory=entry.is_dir()) for entry in listing]
        return cls(tuple(sorted(entries, key=lambda entry: entry.name)))

    @classmethod
    def from_nextjs_build(cls, nextjs_path: Union[str, os.PathLike]) -> "BuildManifest":
        """Read the static assets directory of an OpenNext build."""
        return cls.from_directory(Path(nextjs_path) / NEXTJS_BUILD_DIR / NEXTJS_STATIC_DIR)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(entry.name for entry in self.entries)

    @property
    def has_index_document(self) -> bool:
        """True when CloudFront can serve the site root from a static ``index.html``."""
        return any(entry.name == INDEX_DOCUMENT and not entry.is_directory for entry in self.entries)

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
