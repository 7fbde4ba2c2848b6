"""Reads the expected-amounts workbook into a grid of raw cell values."""

from pathlib import Path
from typing import Any
import logging

from openpyxl import load_workbook

from ..utils.exceptions import SpreadsheetReadError

logger = logging.getLogger(__name__)


def read_workbook_grid(file_path: Path) -> list[list[Any]]:
    """
    Read the first worksheet of an .xlsx file.

    Args:
        file_path: Path to the workbook

    Returns:
        Rows of cell values (cached formula results, not formulas)

    Raises:
        SpreadsheetReadError: If the workbook cannot be opened or read
    """
    logger.info(f"Reading workbook: {file_path}")

    try:
        wb = load_workbook(file_path, read_only=True, data_only=True)
    except Exception as e:
        logger.error(f"Failed to open workbook: {e}")
        raise SpreadsheetReadError(f"Failed to open workbook {file_path}: {e}") from e

    try:
        ws = wb.worksheets[0]
        grid = [list(row) for row in ws.iter_rows(values_only=True)]
    except Exception as e:
        logger.error(f"Failed to read workbook: {e}")
        raise SpreadsheetReadError(f"Failed to read workbook {file_path}: {e}") from e
    finally:
        wb.close()

    logger.info(f"Read {len(grid)} rows from sheet '{ws.title}'")
    return grid
