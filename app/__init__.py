"""HTTP surface and services for natural-language flight search."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"


def create_app(*args: Any, **kwargs: Any):
    module = import_module("app.main")
    return module.create_app(*args, **kwargs)


__all__ = ["create_app", "__version__"]
