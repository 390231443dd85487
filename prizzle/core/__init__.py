"""Core components of prizzle"""

from .config import Config
from .converter import Prizzle

__all__ = ["Config", "Prizzle"]
