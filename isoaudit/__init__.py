"""ISO 9001 / ISO 45001 audit progress engine."""

__version__ = "0.1.0"
