"""Version helpers.

``__version__`` is the package version (PEP 440) seen by pip/packaging.
"""

from __future__ import annotations

from dataclasses import dataclass
import platform
import sys


__version__ = "0.3.0"


@dataclass(frozen=True)
class VersionInfo:
    package_version: str
    python: str
    platform: str
    numpy: str
    pandas: str


def get_version_info() -> VersionInfo:
    import numpy as np
    import pandas as pd

    return VersionInfo(
        package_version=__version__,
        python=sys.version.split()[0],
        platform=f"{platform.system()} {platform.release()} ({platform.machine()})",
        numpy=np.__version__,
        pandas=pd.__version__,
    )
