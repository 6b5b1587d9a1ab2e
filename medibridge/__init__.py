# medibridge/__init__.py
"""MediBridge clinic management backend."""

__version__ = "1.0.0"
