"""The dependency-injector surface command modules import from."""

__all__ = [
    "Provide",
    "containers",
    "inject",
    "providers",
]

import dependency_injector.containers as containers
import dependency_injector.providers as providers
from dependency_injector.wiring import Provide, inject
