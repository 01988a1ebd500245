"""carthage-cache: retrieve Carthage build artifacts from a local cache."""

__version__ = "0.1.0"
