"""
Version information for ansilog.

This file is the canonical source for version numbers.

Format: MAJOR.MINOR.PATCH[-PHASE]
Example: 1.9.5-beta
"""

# Version components - edit these for version bumps
MAJOR = 1
MINOR = 9
PATCH = 5
PHASE = None  # None, "alpha", "beta", "rc1", etc.

__app_name__ = "ansilog"


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_pip_version():
    """
    Return PEP 440 compliant version for pip/setuptools.

    - 1.9.5-alpha -> 1.9.5a0
    - 1.9.5-beta  -> 1.9.5b0
    - 1.9.5-rc1   -> 1.9.5rc1
    """
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    phase_map = {"alpha": "a0", "beta": "b0"}
    if PHASE:
        base += phase_map.get(PHASE, PHASE)
    return base


def get_version():
    """Return the full version string."""
    return get_base_version()


__version__ = get_version()

# For convenience in imports
VERSION = get_version()
BASE_VERSION = get_base_version()
PIP_VERSION = get_pip_version()
