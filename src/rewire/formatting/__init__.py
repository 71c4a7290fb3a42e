from rewire.formatting.import_formatter import ImportFormatter, RuffImportFormatter

__all__ = ["ImportFormatter", "RuffImportFormatter"]
