"""Energy balance and body-weight projection from logged meals and runs."""

__version__ = "0.1.0"
