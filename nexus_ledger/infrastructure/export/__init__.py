"""Export collaborators."""

from nexus_ledger.infrastructure.export.csv_exporter import CsvExporter

__all__ = ["CsvExporter"]
