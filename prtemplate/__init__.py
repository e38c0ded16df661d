"""Pull-request description template engine."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("prtemplate")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
