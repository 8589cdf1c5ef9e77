"""Read-only loading of exported budget documents.

Budgets are kept by the backend; this module only reads JSON exports of
``GET /api/budgets/:id`` from disk so they can be inspected offline.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import BUDGETS_DIR
from .models import Budget

logger = logging.getLogger(__name__)


class BudgetDocumentError(ValueError):
    """Raised when a budget file cannot be read as a budget document."""


def _unwrap(data: object, source: str) -> object:
    # Raw API responses look like {"success": true, "data": {...budget...}}.
    if not isinstance(data, dict) or 'success' not in data:
        return data
    if not data.get('success'):
        message = data.get('message') or 'request was not successful'
        raise BudgetDocumentError(f"{source} holds a failed API response: {message}")
    return data.get('data')


def parse_budget_document(text: str, source: str = '<string>') -> Budget:
    """Parse budget JSON text, either a bare budget or a full API response.

    Raises:
        BudgetDocumentError: If the text is not JSON, not a JSON object, or
            a failed API response
    """
    try:
        data = _unwrap(json.loads(text), source)
    except json.JSONDecodeError as e:
        raise BudgetDocumentError(f"{source} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise BudgetDocumentError(f"{source} does not contain a budget object")
    return Budget.from_dict(data)


def load_budget_document(path: Union[str, Path]) -> Budget:
    """Load one budget document from a JSON file.

    Args:
        path: File to read

    Returns:
        Parsed Budget

    Raises:
        BudgetDocumentError: If the file cannot be read or is not a budget object
    """
    target = Path(path)
    try:
        text = target.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise BudgetDocumentError(f"Could not read {target}: {e}") from e
    return parse_budget_document(text, source=str(target))


class BudgetStorage:
    """Lists and loads budget documents from a directory."""

    def __init__(self, budgets_dir: Optional[Path] = None):
        """Initialize budget storage.

        Args:
            budgets_dir: Optional custom directory for budget files.
                        Defaults to BUDGETS_DIR from config.
        """
        self.budgets_dir = Path(budgets_dir) if budgets_dir is not None else BUDGETS_DIR

    def get_path(self, name: str) -> Path:
        """Get the file path for a budget by file stem."""
        return self.budgets_dir / f"{name}.json"

    def list_names(self) -> List[str]:
        if not self.budgets_dir.exists():
            return []
        return sorted(path.stem for path in self.budgets_dir.glob('*.json'))

    def load(self, name: str) -> Budget:
        """Load a single budget by file stem.

        Raises:
            BudgetDocumentError: If the file is missing or invalid
        """
        return load_budget_document(self.get_path(name))

    def load_all(self) -> Dict[str, Budget]:
        """Load all budget documents in the directory.

        Returns:
            Dictionary mapping file stems to budgets

        Note:
            Files that cannot be parsed are skipped with a warning.
        """
        budgets: Dict[str, Budget] = {}
        for name in self.list_names():
            try:
                budgets[name] = self.load(name)
            except BudgetDocumentError as e:
                logger.warning("Skipping budget file %s: %s", name, e)
        return budgets


def load_saved_budgets() -> Dict[str, Budget]:
    """Load all budget documents from the configured directory."""
    return BudgetStorage().load_all()
