__all__ = [
    "BootConfiguration",
    "GradeworksContainer",
    "GradingContainer",
    "PinataContainer",
    "VendorContainer",
]


from .grading import GradingContainer
from .gradeworks import BootConfiguration, GradeworksContainer
from .vendor import PinataContainer, VendorContainer
