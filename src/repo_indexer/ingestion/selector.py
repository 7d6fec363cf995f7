"""Decide which files under a source tree get indexed."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from repo_indexer.errors import FileSystemError

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        ".vscode",
        "dist",
        "build",
        "coverage",
        "logs",
        "tmp",
        "temp",
    }
)

DEFAULT_ALLOWED_EXTENSIONS = frozenset(
    {
        ".ts",
        ".tsx",
        ".js",
        ".jsx",
        ".md",
        ".tf",  # Terraform
        ".tfvars",  # Terraform variable files
        ".hcl",  # HashiCorp Configuration Language
        ".pkr.hcl",  # Packer
        ".Dockerfile",
        ".dockerignore",
        ".yml",
        ".yaml",
    }
)


class SelectionConfig(BaseModel):
    """Immutable deny-list of directory names and allow-list of extensions.

    Attributes
    ----------
    ignored_dirs:
        Directory names pruned at any depth.
    allowed_extensions:
        Case-sensitive file-name suffixes. A file matches when its name ends
        with one of them, so compound suffixes (``.pkr.hcl``) are accepted.
        Unlike strict extension semantics, a dot-file whose whole name is an
        allowed suffix (``.dockerignore``, or even ``.ts``) also matches.
    """

    model_config = ConfigDict(frozen=True)

    ignored_dirs: frozenset[str] = DEFAULT_IGNORED_DIRS
    allowed_extensions: frozenset[str] = DEFAULT_ALLOWED_EXTENSIONS

    def is_ignored_dir(self, name: str) -> bool:
        return name in self.ignored_dirs

    def is_allowed_file(self, name: str) -> bool:
        return any(name.endswith(ext) for ext in self.allowed_extensions)


class FileSelector:
    """Recursively enumerate indexable files under a root directory.

    Parameters
    ----------
    config:
        Deny/allow lists. Defaults to :class:`SelectionConfig`'s defaults.
    """

    def __init__(self, config: SelectionConfig | None = None) -> None:
        self.config = config or SelectionConfig()

    def select(self, root_dir: str | Path) -> list[str]:
        """Return absolute paths of every eligible file under *root_dir*.

        Traversal is depth-first in directory-entry order. Any error while
        listing a directory aborts the walk with :class:`FileSystemError`;
        no partial result is returned.
        """
        root = os.path.abspath(root_dir)
        files: list[str] = []
        self._walk(root, files)
        logger.info("Selected %d files under %s", len(files), root)
        return files

    def _walk(self, directory: str, files: list[str]) -> None:
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as exc:
            raise FileSystemError(f"Error reading directory {directory}: {exc}") from exc

        for entry in entries:
            path = os.path.join(directory, entry.name)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as exc:
                raise FileSystemError(f"Error reading entry {path}: {exc}") from exc

            if is_dir:
                if not self.config.is_ignored_dir(entry.name):
                    self._walk(path, files)
            elif self.config.is_allowed_file(entry.name):
                files.append(path)
