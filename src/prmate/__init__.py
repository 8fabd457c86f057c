"""
Top-level package for prmate.

prmate turns the commits of a branch into a pull-request description
grouped by Conventional Commit scope. The command line entry point lives
in :mod:`prmate.cli`.
"""

__all__ = ["__version__", "__base_version__"]

# Major version - controlled manually
__base_version__ = "1"

# Full version - major.minor.dev0+g{commit_sha}, where minor comes from the
# release tags of the prmate checkout itself
try:
    from prmate._version import generate_version
    __version__ = generate_version(__base_version__)
except Exception:
    # Installed from a wheel/sdist or git is unavailable
    __version__ = f"{__base_version__}.0.dev0"
