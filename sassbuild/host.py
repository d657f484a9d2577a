"""Host-side access to the compiled binding.

The binding is loaded straight from its install path rather than through
``sys.path`` so that a stale copy elsewhere can never satisfy the import.
"""
from __future__ import annotations

from importlib.machinery import ExtensionFileLoader
from pathlib import Path
from types import ModuleType
import importlib.util

PROBE_SOURCE = "s { a: ss }"


def binding_module_name(path: Path) -> str:
    return path.name.split(".", 1)[0]


def load_binding(path: Path) -> ModuleType:
    """Import the extension module stored at ``path``."""
    name = binding_module_name(path)
    loader = ExtensionFileLoader(name, str(path))
    spec = importlib.util.spec_from_file_location(name, str(path), loader=loader)
    if spec is None:
        raise ImportError(f"Cannot load binding from {path}", path=str(path))
    module = importlib.util.module_from_spec(spec)
    loader.exec_module(module)
    return module


def render_sync(data: str, *, binary_path: Path) -> str:
    """Render ``data`` synchronously through the binding at ``binary_path``."""
    binding = load_binding(binary_path)
    return binding.render_sync(data)


def probe_binary(binary_path: Path) -> None:
    """Raise if the binding cannot render a trivial stylesheet."""
    render_sync(PROBE_SOURCE, binary_path=binary_path)
