"""Importers building content blocks from serialized documents."""

from .json_importer import JSONBlockImporter, load_document

__all__ = ["JSONBlockImporter", "load_document"]
