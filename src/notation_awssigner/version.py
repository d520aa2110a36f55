"""Plugin version reported in metadata, logs and the AWS user agent."""

__version__ = "1.0.0"


def get_version() -> str:
    return __version__
