"""
Loading of an external parsing library from an explicit directory.

The library is imported from ``lib_dir`` alone and handed to the caller as a
`ModuleParser`; ``sys.path`` is left untouched.
"""

import importlib.machinery
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Sequence

from ..formats import ParseFormat
from .base import ReferenceParser

_LOGGER = logging.getLogger(__name__)

DEFAULT_MODULE_NAME = "anystyle"


class ParserLoadError(RuntimeError):
    """The parsing library could not be loaded from the requested location."""

    def __init__(self, path: Path | str, cause: BaseException | str, module_name: str = DEFAULT_MODULE_NAME):
        self.path = Path(path)
        self.cause = cause
        self.module_name = module_name
        super().__init__(f"failed to load {module_name} from {self.path}: {cause}")


def load_parser_module(lib_dir: Path | str, module_name: str = DEFAULT_MODULE_NAME) -> ModuleType:
    """Import ``module_name`` from ``lib_dir`` without touching ``sys.path``.

    Args:
        lib_dir: Directory that contains the module or package
        module_name: Top-level module name to import

    Returns:
        The imported module; it exposes a callable ``parse(references, format=...)``

    Raises:
        ParserLoadError: If the module is missing, fails to import, or has no ``parse``
    """
    lib_dir = Path(lib_dir)
    spec = importlib.machinery.PathFinder.find_spec(module_name, [str(lib_dir)])
    if spec is None or spec.loader is None:
        raise ParserLoadError(lib_dir, f"no module named '{module_name}'", module_name)

    module = importlib.util.module_from_spec(spec)
    # Packages with relative imports need to be registered while executing.
    previous = sys.modules.get(module_name)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
        if not callable(getattr(module, "parse", None)):
            raise ParserLoadError(lib_dir, f"module '{module_name}' has no callable 'parse'", module_name)
    except Exception as e:
        if previous is None:
            sys.modules.pop(module_name, None)
        else:
            sys.modules[module_name] = previous
        if isinstance(e, ParserLoadError):
            raise
        raise ParserLoadError(lib_dir, e, module_name) from e

    _LOGGER.debug(f"Loaded {module_name} from {spec.origin}")
    return module


class ModuleParser(ReferenceParser):
    """Adapter around a module exposing ``parse(references, format=...)``."""

    name = "anystyle"

    def __init__(self, module: ModuleType):
        self._module = module

    @classmethod
    def from_directory(cls, lib_dir: Path | str, module_name: str = DEFAULT_MODULE_NAME) -> "ModuleParser":
        return cls(load_parser_module(lib_dir, module_name))

    def parse(self, references: Sequence[str], format: ParseFormat | str = ParseFormat.JSON) -> Any:
        format = ParseFormat.coerce(format)
        return self._module.parse(list(references), format=format.value)
