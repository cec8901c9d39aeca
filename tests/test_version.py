"""Tests for ansilog._version — PEP 440 compliance and version parsing."""

import re

import ansilog
from ansilog._version import (
    BASE_VERSION,
    MAJOR, MINOR, PATCH,
    PIP_VERSION,
    VERSION,
    get_base_version,
    get_pip_version,
    get_version,
)


def test_base_version_format():
    """Base version should be MAJOR.MINOR.PATCH[-PHASE]."""
    base = get_base_version()
    assert re.match(r"^\d+\.\d+\.\d+(-\w+)?$", base), \
        f"Unexpected base version format: {base}"


def test_base_version_matches_components():
    base = get_base_version()
    assert base.startswith(f"{MAJOR}.{MINOR}.{PATCH}")


def test_pip_version_pep440():
    """PIP version must be PEP 440 compliant (no hyphens)."""
    pip_ver = get_pip_version()
    assert "-" not in pip_ver, f"PEP 440 forbids hyphens in version: {pip_ver}"
    assert re.match(r"^\d+\.\d+\.\d+", pip_ver)


def test_module_constants():
    assert VERSION == get_version()
    assert BASE_VERSION == get_base_version()
    assert PIP_VERSION == get_pip_version()


def test_package_exports_version():
    assert ansilog.__version__ == VERSION
    assert ansilog.__app_name__ == "ansilog"
