"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass(frozen=True)
class FieldTreeError(PackageError):
    """Raised when a field tree edit targets a node that does not exist."""

    message: str
    path: tuple[int, ...] = ()

    def __str__(self) -> str:
        """Return error message payload."""
        if not self.path:
            return self.message
        return f"{self.message} (path: {'.'.join(str(index) for index in self.path)})"


@dataclass
class FieldTreeLoadError(PackageError):
    """Raised when a field tree or schema document cannot be loaded."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class EvaluationError(PackageError):
    """Raised by interchange evaluators when generated code cannot be evaluated."""

    message: str
    position: int | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"
