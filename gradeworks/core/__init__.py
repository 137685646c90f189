__all__ = [
    "BootConfiguration",
    "di",
    "GradeworksContainer",
    "LoggingProvider",
    "Settings",
    "Secrets",
    "TimestampProvider",
]


from . import di
from .config import Secrets, Settings
from .container import BootConfiguration, GradeworksContainer
from .provider import LoggingProvider, TimestampProvider
