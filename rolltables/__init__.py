"""Embedded storage and roll engine for tabletop roll tables."""

from rolltables.tables import Meta, Row, Table, load

__all__ = ["Meta", "Row", "Table", "load"]
