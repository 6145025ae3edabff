"""Listing / object / executable paths derived from a source file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildArtifacts:
    """Files produced by assembling and linking one source file.

    All three are siblings of the source with only the extension changed.
    """

    source: str
    listing: str
    obj: str
    executable: str

    @classmethod
    def from_source(cls, source: str) -> BuildArtifacts:
        stem, _ext = os.path.splitext(source)
        return cls(
            source=source,
            listing=stem + ".lst",
            obj=stem + ".obj",
            executable=stem + ".exe",
        )

    @property
    def executable_name(self) -> str:
        """File name of the target, as the process list shows it."""
        return os.path.basename(self.executable)

    @property
    def paths(self) -> tuple[str, str, str]:
        return (self.listing, self.obj, self.executable)

    def remove(self) -> list[str]:
        """Delete the three artifacts. Returns the paths actually removed.

        Missing files and deletion errors are logged, never raised.
        """
        removed = []
        for path in self.paths:
            logger.debug(f"Deleting file {path}")
            try:
                os.remove(path)
            except FileNotFoundError:
                logger.debug(f"{path} does not exist")
            except OSError as e:
                logger.error(f"Failed to delete {path}: {e}")
            else:
                removed.append(path)
        return removed

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "listing": self.listing,
            "object": self.obj,
            "executable": self.executable,
        }
