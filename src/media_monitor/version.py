"""Version information for the package."""

# Package version
__version__ = "0.1.0"


def get_version_string() -> str:
    """Get the version string reported in log context.

    Returns:
        Version string like 'media-monitor 0.1.0'.
    """
    return f"media-monitor {__version__}"
