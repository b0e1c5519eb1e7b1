"""genrules -- scaffold new projects with predefined quality rules."""

__version__ = "0.1.0"
