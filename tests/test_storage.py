import json
import logging

import pytest

from budget_dashboard.storage import (
    BudgetDocumentError,
    BudgetStorage,
    load_budget_document,
    parse_budget_document,
)


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding='utf-8')
    return path


def test_load_bare_budget_document(tmp_path, budget_document):
    budget = load_budget_document(_write(tmp_path / 'march.json', budget_document))
    assert budget.budget_name == 'March groceries'
    assert len(budget.budget_items) == 3


def test_load_api_response_envelope(tmp_path, budget_document):
    path = _write(tmp_path / 'march.json', {'success': True, 'data': budget_document})
    assert load_budget_document(path).budget_id == 'b-1'


def test_failed_api_response_is_rejected():
    with pytest.raises(BudgetDocumentError, match='Budget not found'):
        parse_budget_document(json.dumps({'success': False, 'message': 'Budget not found'}))


def test_invalid_documents_raise_budget_document_error(tmp_path):
    with pytest.raises(BudgetDocumentError):
        parse_budget_document('{not json')
    with pytest.raises(BudgetDocumentError):
        parse_budget_document('[1, 2, 3]')
    with pytest.raises(BudgetDocumentError):
        load_budget_document(tmp_path / 'missing.json')


def test_budget_document_error_is_a_value_error():
    assert issubclass(BudgetDocumentError, ValueError)


def test_storage_lists_and_loads_budgets(tmp_path, budget_document):
    _write(tmp_path / 'march.json', budget_document)
    _write(tmp_path / 'april.json', {**budget_document, 'budgetName': 'April'})
    (tmp_path / 'notes.txt').write_text('ignored', encoding='utf-8')

    storage = BudgetStorage(tmp_path)
    assert storage.list_names() == ['april', 'march']
    assert storage.get_path('march') == tmp_path / 'march.json'
    assert storage.load('april').budget_name == 'April'


def test_load_all_skips_broken_files(tmp_path, budget_document, caplog):
    _write(tmp_path / 'good.json', budget_document)
    (tmp_path / 'broken.json').write_text('{"budgetItems": [', encoding='utf-8')

    with caplog.at_level(logging.WARNING, logger='budget_dashboard.storage'):
        budgets = BudgetStorage(tmp_path).load_all()

    assert list(budgets) == ['good']
    assert 'broken' in caplog.text


def test_missing_directory_has_no_budgets(tmp_path):
    storage = BudgetStorage(tmp_path / 'nope')
    assert storage.list_names() == []
    assert storage.load_all() == {}


def test_non_utf8_file_is_a_document_error(tmp_path, budget_document, caplog):
    _write(tmp_path / 'good.json', budget_document)
    latin = tmp_path / 'latin.json'
    latin.write_bytes(b'{"budgetName": "Caf\xe9"}')

    with pytest.raises(BudgetDocumentError, match='Could not read'):
        load_budget_document(latin)

    with caplog.at_level(logging.WARNING, logger='budget_dashboard.storage'):
        budgets = BudgetStorage(tmp_path).load_all()
    assert list(budgets) == ['good']
    assert 'latin' in caplog.text
