"""Application use cases package."""

from .export_entries import ExportEntriesUseCase, ExportRow
from .get_category_totals import GetCategoryTotalsUseCase
from .get_chart_data import GetChartDataUseCase
from .get_entries_page import EntriesPage, GetEntriesPageUseCase
from .import_entries import ImportEntriesUseCase, ImportResult

__all__ = [
    "ExportEntriesUseCase",
    "ExportRow",
    "GetCategoryTotalsUseCase",
    "GetChartDataUseCase",
    "EntriesPage",
    "GetEntriesPageUseCase",
    "ImportEntriesUseCase",
    "ImportResult",
]
