"""
Version information for catlog.

The release is MAJOR.MINOR.PATCH plus an optional pre-release PHASE. The
stamped __version__ adds build metadata after the first underscore:

    <release>_<branch>_<build>-<YYYYMMDD>-<commit>
    0.1.0-beta_main_7-20261018-5e2d91a

setup.py pins the PEP 440 form of the same release (PIP_VERSION).
"""

from typing import NamedTuple, Optional

MAJOR = 0
MINOR = 1
PATCH = 0
PHASE = "beta"

# Stamped at build time
__version__ = "0.1.0-beta_main_7-20261018-5e2d91a"
__app_name__ = "catlog"

# PEP 440 pre-release segment per phase; "rcN" passes through unchanged.
PRE_RELEASE = {"alpha": "a0", "beta": "b0"}
RELEASE_BRANCHES = ("main",)


class BuildStamp(NamedTuple):
    release: str
    branch: Optional[str] = None
    build: Optional[int] = None
    date: Optional[str] = None
    commit: Optional[str] = None


def parse_stamp(stamp: str) -> BuildStamp:
    """Split a stamped version into its release and build metadata.

    A stamp without metadata (no underscore) is a bare release.
    """
    release, _, meta = stamp.partition("_")
    if not meta:
        return BuildStamp(release)
    branch, _, build_info = meta.partition("_")
    fields = build_info.split("-") if build_info else []
    build = int(fields[0]) if fields and fields[0].isdigit() else None
    date = fields[1] if len(fields) > 1 else None
    commit = fields[2] if len(fields) > 2 else None
    return BuildStamp(release, branch or None, build, date, commit)


def release_string(phase: Optional[str] = PHASE) -> str:
    numbers = f"{MAJOR}.{MINOR}.{PATCH}"
    return f"{numbers}-{phase}" if phase else numbers


def to_pep440(stamp: BuildStamp, phase: Optional[str] = PHASE) -> str:
    """PEP 440 form: pre-release suffix, plus .devN off release branches."""
    pep = f"{MAJOR}.{MINOR}.{PATCH}"
    if phase:
        pep += PRE_RELEASE.get(phase, phase)
    if stamp.branch is None or stamp.branch in RELEASE_BRANCHES:
        return pep
    return f"{pep}.dev{stamp.build or 0}"


def get_version():
    return __version__


def get_base_version():
    """MAJOR.MINOR.PATCH[-PHASE], as stamped if a stamp is present."""
    stamp = parse_stamp(__version__)
    return stamp.release if stamp.branch else release_string()


def get_pip_version():
    return to_pep440(parse_stamp(__version__))


VERSION = get_version()
BASE_VERSION = get_base_version()
PIP_VERSION = get_pip_version()
