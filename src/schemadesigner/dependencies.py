"""Runtime dependency checks for CLI commands."""

from __future__ import annotations

import shutil

from schemadesigner.exceptions import DependencyError


def _is_executable_available(executable: str) -> bool:
    """Check whether an executable can be found on PATH.

    Args:
        executable (str): Executable name or path.

    Returns:
        bool: True if the executable resolves.
    """
    return shutil.which(executable) is not None


def _collect_missing_executables(executables: list[str]) -> list[str]:
    """Collect executables that cannot be resolved.

    Args:
        executables (list[str]): Executable names.

    Returns:
        list[str]: Missing executables.
    """
    return [executable for executable in executables if not _is_executable_available(executable)]


def ensure_node_evaluator_dependencies(node_binary: str = "node") -> None:
    """Validate runtime dependencies of the Node.js evaluator.

    Args:
        node_binary (str): Configured Node.js executable.

    Raises:
        DependencyError: If the executable is missing.
    """
    missing = _collect_missing_executables([node_binary])
    if missing:
        raise DependencyError(missing_package=missing, message="node evaluator")
