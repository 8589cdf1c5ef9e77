import importlib.util
import json
from datetime import date
from pathlib import Path

SCRIPTS_DIR = Path(__file__).resolve().parents[1] / 'scripts'


def _load_script(name):
    spec = importlib.util.spec_from_file_location(f'{name}_test', SCRIPTS_DIR / f'{name}.py')
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_validate_budget_reports_data_problems():
    module = _load_script('validate_budgets')
    from budget_dashboard.models import Budget

    budget = Budget.from_dict({
        'period': {'startDate': '2024-03-10', 'endDate': '2024-03-01'},
        'budgetItems': [
            {'item_name': 'Draft'},
            {'item_name': 'Both', 'allocated_quantity': 2, 'price_per_unit': 3, 'manual_allocated_amount': 10},
            {'item_name': 'Manual plan', 'manual_allocated_amount': 10,
             'consumption_plan': {'startDate': '2024-03-01', 'endDate': '2024-03-05', 'daily_quantity': 1}},
        ],
    })
    errors = module.validate_budget(budget)
    assert errors == [
        "period ends before it starts",
        "item 'Draft' has no allocation",
        "item 'Both' has both a manual amount and quantity/price",
        "item 'Manual plan' has a consumption plan that cannot be projected",
    ]


def test_validate_budget_accepts_clean_document(budget_document):
    module = _load_script('validate_budgets')
    from budget_dashboard.models import Budget

    assert module.validate_budget(Budget.from_dict(budget_document)) == []


def test_validate_main_exit_codes(tmp_path, budget_document, capsys):
    module = _load_script('validate_budgets')
    (tmp_path / 'ok.json').write_text(json.dumps(budget_document), encoding='utf-8')
    assert module.main(tmp_path) == 0

    (tmp_path / 'bad.json').write_text('nope', encoding='utf-8')
    assert module.main(tmp_path) == 1
    assert 'bad.json' in capsys.readouterr().out


def test_show_low_stock_prints_running_low_items(tmp_path, budget_document, capsys):
    module = _load_script('show_low_stock')
    (tmp_path / 'march.json').write_text(json.dumps(budget_document), encoding='utf-8')

    module.main(tmp_path, date(2024, 3, 8))
    out = capsys.readouterr().out
    assert 'Milk - 4.00 left, 2 days' in out
    assert 'Rice' not in out
