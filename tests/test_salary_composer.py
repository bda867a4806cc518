import pytest

from hrms.services import salary_composer
from hrms.services.salary_composer import DEFAULT_COMPONENTS, DEFAULT_DEDUCTIONS


def test_default_structure_for_120000():
    breakdown = salary_composer.compose(120000, DEFAULT_COMPONENTS, DEFAULT_DEDUCTIONS)

    assert breakdown.components["basic"]["value"] == pytest.approx(48000)
    assert breakdown.components["hra"]["value"] == pytest.approx(24000)
    assert breakdown.components["standardAllowance"]["value"] == pytest.approx(12000)
    assert breakdown.components["leaveTravelAllowance"]["value"] == pytest.approx(6000)
    assert breakdown.components["performanceBonus"]["value"] == 0.0
    # Provident fund is 12% of basic, not of the base wage
    assert breakdown.deductions["providentFund"]["value"] == pytest.approx(5760)
    assert breakdown.total_salary == pytest.approx(84240)
    assert breakdown.monthly_salary == pytest.approx(7020)


def test_fixed_items_keep_their_value():
    components = {
        "basic": {"is_percentage": True, "percentage": 50.0},
        "fixedAllowance": {"is_percentage": False, "value": 1500.0},
    }
    deductions = {"professionalTax": {"is_percentage": False, "value": 200.0}}

    breakdown = salary_composer.compose(10000, components, deductions)

    assert breakdown.components["fixedAllowance"]["value"] == 1500.0
    assert breakdown.total_salary == pytest.approx(5000 + 1500 - 200)


def test_deductions_without_basic_resolve_to_zero():
    components = {"hra": {"is_percentage": True, "percentage": 20.0}}
    deductions = {"providentFund": {"is_percentage": True, "percentage": 12.0}}

    breakdown = salary_composer.compose(10000, components, deductions)

    assert breakdown.deductions["providentFund"]["value"] == 0.0
    assert breakdown.total_salary == pytest.approx(2000)


def test_zero_wage():
    breakdown = salary_composer.compose(0, DEFAULT_COMPONENTS, DEFAULT_DEDUCTIONS)
    assert breakdown.total_salary == 0.0
    assert breakdown.monthly_salary == 0.0


def test_compose_does_not_mutate_inputs():
    components = {"basic": {"is_percentage": True, "percentage": 40.0, "value": 0.0}}
    salary_composer.compose(1000, components, {})
    assert components["basic"]["value"] == 0.0


def test_compose_is_idempotent():
    components = salary_composer.merge_items(None, {"fixedAllowance": {"value": 2500.0}}, DEFAULT_COMPONENTS)

    first = salary_composer.compose(90000, components, DEFAULT_DEDUCTIONS)
    second = salary_composer.compose(90000, components, DEFAULT_DEDUCTIONS)
    assert first == second

    # Feeding resolved values back in changes nothing
    again = salary_composer.compose(90000, first.components, first.deductions)
    assert again == first
    assert again.total_salary == first.total_salary
    assert again.monthly_salary == first.monthly_salary


def test_merge_starts_from_defaults():
    merged = salary_composer.merge_items(None, None, DEFAULT_COMPONENTS)
    assert merged == DEFAULT_COMPONENTS
    assert merged is not DEFAULT_COMPONENTS


def test_merge_replaces_only_named_items():
    existing = salary_composer.merge_items(None, None, DEFAULT_COMPONENTS)
    existing["hra"]["percentage"] = 25.0

    merged = salary_composer.merge_items(existing, {"basic": {"percentage": 50.0}}, DEFAULT_COMPONENTS)

    assert merged["basic"] == {"is_percentage": True, "percentage": 50.0, "value": 0.0}
    assert merged["hra"]["percentage"] == 25.0


def test_merge_accepts_new_keys():
    merged = salary_composer.merge_items(None, {"mealVoucher": {"value": 300.0}}, DEFAULT_COMPONENTS)
    assert merged["mealVoucher"] == {"is_percentage": False, "percentage": 0.0, "value": 300.0}
