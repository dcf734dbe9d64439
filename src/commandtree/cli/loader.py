"""Import an Application from a "module:attribute" reference."""

import importlib

from commandtree.core.application import Application
from commandtree.utils.config import Config


class TargetError(Exception):
    """Raised when an application reference cannot be resolved."""

    def __init__(self, target: str, reason: str):
        super().__init__(f"Cannot load '{target}': {reason}")
        self.target = target
        self.reason = reason


def load_application(target: str, config: Config) -> Application:
    """
    Resolve a reference such as "myapp.cli:app" to an Application.

    The attribute may be an Application instance or a factory that takes
    the Config and returns one.

    Args:
        target: "module:attribute" reference
        config: Configuration handed to factories

    Returns:
        The resolved Application

    Raises:
        TargetError: If the module, attribute or object type is wrong, or
            the factory raises
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise TargetError(target, "expected 'module:attribute'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetError(target, str(e)) from e

    obj = getattr(module, attr, None)
    if obj is None:
        raise TargetError(target, f"module has no attribute '{attr}'")

    if not isinstance(obj, Application) and callable(obj):
        try:
            obj = obj(config)
        except Exception as e:
            raise TargetError(target, f"factory failed: {e}") from e

    if not isinstance(obj, Application):
        raise TargetError(target, f"expected an Application, got {type(obj).__name__}")
    return obj
