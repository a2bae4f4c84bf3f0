"""Bulk import and export of leads."""

from .importer import BulkImporter, ImportResult
from .exporter import BulkExporter

__all__ = ["BulkImporter", "ImportResult", "BulkExporter"]
