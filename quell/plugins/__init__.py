"""Built-in input plugins for quell."""

from quell.plugins.json_document import JsonDocumentPlugin

__all__ = ["JsonDocumentPlugin"]
