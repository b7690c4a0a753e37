"""Resource path resolution for bundled data files.

Works the same whether the package runs from a source checkout, an installed
wheel, or a PyInstaller bundle.

Typical usage:
    from massbalance.core.resource_path import get_data_path

    fleet_dir = get_data_path("aircraft")
"""

import sys
from pathlib import Path


def is_bundled() -> bool:
    """Check if running from a PyInstaller bundle."""
    return hasattr(sys, "_MEIPASS")


def get_package_root() -> Path:
    """Get the directory holding the massbalance package resources.

    Returns:
        - From source or an installed wheel: the massbalance package directory
        - When bundled: massbalance/ inside the bundle directory
    """
    if is_bundled():
        return Path(getattr(sys, "_MEIPASS")) / "massbalance"
    # src/massbalance/core -> src/massbalance
    return Path(__file__).parent.parent


def get_data_path(data_file: str = "") -> Path:
    """Get path to a bundled data file or directory.

    Args:
        data_file: Relative path inside the data directory (e.g., "aircraft").

    Examples:
        >>> get_data_path("aircraft").name
        'aircraft'
    """
    base = get_package_root() / "data"
    return base / data_file if data_file else base
