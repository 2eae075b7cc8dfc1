# ruff: noqa: F401
from . import cat, info, md5
