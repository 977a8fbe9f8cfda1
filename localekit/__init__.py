"""Build tooling for the localization data package."""

__version__ = "1.0.0"
