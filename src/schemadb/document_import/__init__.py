"""Document import exports."""

from .document_reader import (
    DocumentImportError,
    read_documents,
    read_json_documents,
    read_workbook_documents,
)

__all__ = [
    "DocumentImportError",
    "read_documents",
    "read_json_documents",
    "read_workbook_documents",
]
