"""sendthrottle: sliding-window send throttling with priority draining."""

__version__ = "0.1.0"
