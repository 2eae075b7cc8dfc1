from .boundary import BoundaryTable
from .stream import MultiSeekIO

VERSION = "0.1.0"

__all__ = ["BoundaryTable", "MultiSeekIO", "VERSION"]
