__all__ = [
    "GradingSettings",
    "LoggingSettings",
    "PinataSecrets",
    "PinataSettings",
    "Secrets",
    "Settings",
    "VendorSettings",
]


from .grading import GradingSettings
from .logging import LoggingSettings
from .secrets import PinataSecrets, Secrets
from .settings import Settings
from .vendor import PinataSettings, VendorSettings
