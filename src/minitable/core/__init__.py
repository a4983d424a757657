"""minitable core package."""

from .table import Column, Table

__all__ = ["Column", "Table"]
