"""Host project collaborators.

The pipeline asks the project which root documents include a partial and
tells it about generated files. Both seams are protocols; the directory
and manifest implementations back the command line tool.
"""

from pathlib import Path
from typing import Protocol

import yaml

from sassyflow.core.exceptions.errors import RegistrationError
from sassyflow.models.pipeline import BuildAction, SourceDocument


class ProjectGraph(Protocol):
    """Enumerates documents in the project containing a file."""

    def resolve_root_documents(self, source_file: Path) -> list[Path]: ...


class OutputRegistrar(Protocol):
    """Registers generated artifacts with the host project."""

    def add_nested_file(
        self,
        parent: Path,
        child: Path,
        build_action: BuildAction,
    ) -> None: ...


class DirectoryProjectGraph:
    """Treats everything below a root directory as one project."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def contains(self, path: Path) -> bool:
        try:
            path.resolve().relative_to(self.root)
        except ValueError:
            return False
        return True

    def resolve_root_documents(self, source_file: Path) -> list[Path]:
        """Find every root stylesheet in the project of a file.

        Hidden directories are skipped.

        Args:
            source_file: File whose project is searched, usually a partial.

        Returns:
            Sorted root document paths; empty when the file is outside the project.
        """
        if not self.contains(source_file):
            return []

        roots = []
        for path in self.root.rglob("*"):
            relative = path.relative_to(self.root)
            if any(part.startswith(".") for part in relative.parts[:-1]):
                continue
            if path.is_file() and SourceDocument(path=path).is_root:
                roots.append(path)
        return sorted(roots)


class ManifestRegistrar:
    """Records file nesting in a YAML manifest.

    The manifest maps each parent file to its nested children and their
    build action::

        site.scss:
          site.css: none
    """

    def __init__(self, manifest_path: Path) -> None:
        self.manifest_path = manifest_path

    def load(self) -> dict[str, dict[str, str]]:
        if not self.manifest_path.exists():
            return {}
        try:
            with open(self.manifest_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RegistrationError(
                f"Cannot read project manifest {self.manifest_path}: {e}"
            ) from e
        return data if isinstance(data, dict) else {}

    def _key(self, path: Path) -> str:
        base = self.manifest_path.parent.resolve()
        resolved = path.resolve()
        try:
            return resolved.relative_to(base).as_posix()
        except ValueError:
            return resolved.as_posix()

    def add_nested_file(
        self,
        parent: Path,
        child: Path,
        build_action: BuildAction,
    ) -> None:
        manifest = self.load()
        manifest.setdefault(self._key(parent), {})[self._key(child)] = build_action.value

        try:
            self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.manifest_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(manifest, f, sort_keys=True)
        except OSError as e:
            raise RegistrationError(
                f"Cannot write project manifest {self.manifest_path}: {e}",
                parent=parent,
                child=child,
            ) from e

    def children_of(self, parent: Path) -> dict[str, str]:
        return self.load().get(self._key(parent), {})
