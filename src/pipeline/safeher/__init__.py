"""SafeHer personal-safety core: risk scoring and safe place search."""

__version__ = "0.1.0"
