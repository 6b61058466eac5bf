from .workbook_loader import WorkbookLoader

__all__ = ["WorkbookLoader"]
