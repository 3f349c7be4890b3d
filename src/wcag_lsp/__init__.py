"""wcag-lsp package root."""

__all__ = ["__version__", "SERVER_NAME"]

__version__ = "0.4.0"
SERVER_NAME = "wcag-lsp"
