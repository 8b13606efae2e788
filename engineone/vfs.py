"""A virtual file system: real directories mounted into one search path."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Optional, Union

__all__ = ["VfsError", "Mod", "Vfs"]

_log = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = frozenset({"cfg", "lua"})

PathLike = Union[str, "os.PathLike[str]"]


class VfsError(Exception):
    """Raised when the virtual file system cannot do what was asked."""


@dataclass
class Mod:
    """A loaded game: the scripts found in it, keyed by virtual path, in discovery order."""

    name: str
    files: dict[str, str] = field(default_factory=dict)

    @property
    def filenames(self) -> list[str]:
        """The virtual paths of the scripts, in discovery order."""
        return list(self.files)


def _virtual_parts(path: str) -> tuple[str, ...]:
    parts = tuple(part for part in PurePosixPath(path.replace("\\", "/")).parts if part not in ("/", "."))
    if ".." in parts:
        raise VfsError(f'Insecure path "{path}".')
    return parts


def _extension(name: str) -> Optional[str]:
    _, dot, ext = name.rpartition(".")
    return ext if dot else None


class Vfs:
    """Directories mounted at the root of one namespace, searched in mount order."""

    def __init__(self) -> None:
        self.search_path: list[Path] = []
        self.workspace = ""
        self.game = ""
        self.write_dir: Optional[Path] = None
        self.mods: list[Mod] = []

    # Search path

    def mount(self, path: PathLike) -> None:
        """Append a real directory to the search path."""
        real = Path(path).resolve()
        if not real.is_dir():
            raise VfsError(f'Could not add directory "{path}" to the search path: not found')
        if real not in self.search_path:
            self.search_path.append(real)

    def unmount(self, path: PathLike) -> None:
        """Remove a real directory from the search path."""
        real = Path(path).resolve()
        try:
            self.search_path.remove(real)
        except ValueError:
            raise VfsError(
                f'Could not remove directory "{path}" from the search path: not mounted'
            ) from None

    def _candidates(self, path: str):
        parts = _virtual_parts(path)
        for root in self.search_path:
            yield root.joinpath(*parts)

    def _find_file(self, path: str) -> Path:
        for candidate in self._candidates(path):
            if candidate.is_file():
                return candidate
        raise VfsError(f'Could not open file "{path}": not found')

    def _is_dir(self, path: str) -> bool:
        return any(candidate.is_dir() for candidate in self._candidates(path))

    def _list_dir(self, path: str) -> list[str]:
        names: list[str] = []
        seen: set[str] = set()
        for candidate in self._candidates(path):
            if not candidate.is_dir():
                continue
            for name in sorted(os.listdir(candidate)):
                if name not in seen:
                    seen.add(name)
                    names.append(name)
        return names

    def exists(self, path: str) -> bool:
        """Whether a file or directory exists at the virtual ``path``."""
        try:
            return any(candidate.exists() for candidate in self._candidates(path))
        except VfsError:
            return False

    # Configuration callbacks

    def set_workspace(self, path: str) -> None:
        """Set the workspace, which also becomes the write directory. Empty is ignored."""
        if not path:
            return
        self.workspace = path
        real = Path(path)
        if not real.is_dir():
            raise VfsError(f'Could not set workspace to "{path}": not a directory')
        self.write_dir = real.resolve()

    def load_game(self, game: str) -> Optional[Mod]:
        """Mount a game and read every ``.cfg`` and ``.lua`` file under it.

        The game directory, and its directory in the workspace when a
        workspace is set, are mounted at the root. Scripts are then looked
        for under the virtual path ``game``. An empty name does nothing.
        """
        if not game:
            return None
        self.game = game

        try:
            self.mount(game)
        except VfsError as exc:
            _log.error("%s", exc)
        else:
            _log.info('Mounted "%s".', game)

        if not self.workspace:
            _log.warning(
                "Workspace is not set, so a directory for the current game will not be created in the workspace."
            )
        else:
            full_workspace_path = f"{self.workspace}/{game}"
            try:
                self.mount(full_workspace_path)
            except VfsError:
                _log.error(
                    'Could not add workspace directory "%s" to the search path: not found',
                    full_workspace_path,
                )
            else:
                _log.info('Mounted "%s".', full_workspace_path)

        mod = Mod(game)
        self.mods.append(mod)

        _log.info('Searching for scripts in mod "%s"', game)
        if not self._is_dir(game):
            raise VfsError(f'Could not enumerate files in directory "{game}": not found')
        self._collect_scripts(mod, game)
        return mod

    def _collect_scripts(self, mod: Mod, directory: str) -> None:
        for name in self._list_dir(directory):
            filepath = f"{directory}/{name}"
            if self._is_dir(filepath):
                self._collect_scripts(mod, filepath)
                continue
            if _extension(name) not in SCRIPT_EXTENSIONS:
                continue
            _log.info("Found %s", filepath)
            mod.files[filepath] = self.read_text(filepath)

    # Reading

    def read_text(self, path: str) -> str:
        """Return the contents of a text file, up to its first NUL character."""
        text = self.read_bytes(path).decode("utf-8", errors="replace")
        return text.partition("\0")[0]

    def read_bytes(self, path: str) -> bytes:
        """Return the contents of a binary file."""
        real = self._find_file(path)
        try:
            return real.read_bytes()
        except OSError as exc:
            raise VfsError(f'Could not read from file "{path}": {exc}') from exc