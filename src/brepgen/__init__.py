# -*- coding: utf-8 -*-
"""parametric boundary-representation solids for CSG pipelines"""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("brepgen")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
