"""Client-side throttle for URL validation requests."""

__version__ = "0.1.0"
