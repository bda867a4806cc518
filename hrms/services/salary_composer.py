"""
Salary Composer

Expands an annual base wage into named salary components and deductions.

Two explicit passes:
1. Components: percentage items are a share of the base wage.
2. Deductions: percentage items are a share of the resolved *basic* component,
   not of the base wage.

Fixed (non-percentage) items keep the value they were given. The whole
structure is recomputed from scratch on every call; there is no incremental path.
"""
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

BASIC_COMPONENT = "basic"
MONTHS_PER_YEAR = 12

SalaryItem = Dict[str, Any]  # {"is_percentage": bool, "percentage": float, "value": float}

DEFAULT_COMPONENTS: Dict[str, SalaryItem] = {
    "basic": {"is_percentage": True, "percentage": 40.0, "value": 0.0},
    "hra": {"is_percentage": True, "percentage": 20.0, "value": 0.0},
    "standardAllowance": {"is_percentage": True, "percentage": 10.0, "value": 0.0},
    "performanceBonus": {"is_percentage": False, "percentage": 0.0, "value": 0.0},
    "leaveTravelAllowance": {"is_percentage": True, "percentage": 5.0, "value": 0.0},
    "fixedAllowance": {"is_percentage": False, "percentage": 0.0, "value": 0.0},
}

DEFAULT_DEDUCTIONS: Dict[str, SalaryItem] = {
    "providentFund": {"is_percentage": True, "percentage": 12.0, "value": 0.0},  # of basic
    "professionalTax": {"is_percentage": False, "percentage": 0.0, "value": 0.0},
}

# Template for keys outside the default schema
_BLANK_ITEM: SalaryItem = {"is_percentage": False, "percentage": 0.0, "value": 0.0}


@dataclass(frozen=True)
class SalaryBreakdown:
    components: Dict[str, SalaryItem] = field(default_factory=dict)
    deductions: Dict[str, SalaryItem] = field(default_factory=dict)
    total_salary: float = 0.0
    monthly_salary: float = 0.0


def _normalize(item: Mapping[str, Any]) -> SalaryItem:
    return {
        "is_percentage": bool(item.get("is_percentage", False)),
        "percentage": float(item.get("percentage") or 0.0),
        "value": float(item.get("value") or 0.0),
    }


def _resolve(items: Mapping[str, Mapping[str, Any]], base: float) -> Dict[str, SalaryItem]:
    resolved = {}
    for name, raw in items.items():
        item = _normalize(raw)
        if item["is_percentage"]:
            item["value"] = base * item["percentage"] / 100
        resolved[name] = item
    return resolved


def compose(
    base_wage: float,
    components: Mapping[str, Mapping[str, Any]],
    deductions: Mapping[str, Mapping[str, Any]],
) -> SalaryBreakdown:
    """Compute component/deduction values and the annual and monthly totals."""
    resolved_components = _resolve(components, base_wage)

    basic = resolved_components.get(BASIC_COMPONENT, {}).get("value", 0.0)
    resolved_deductions = _resolve(deductions, basic)

    total = (
        sum(c["value"] for c in resolved_components.values())
        - sum(d["value"] for d in resolved_deductions.values())
    )
    return SalaryBreakdown(
        components=resolved_components,
        deductions=resolved_deductions,
        total_salary=total,
        monthly_salary=total / MONTHS_PER_YEAR,
    )


def merge_items(
    existing: Optional[Mapping[str, Mapping[str, Any]]],
    overrides: Optional[Mapping[str, Mapping[str, Any]]],
    defaults: Mapping[str, SalaryItem],
) -> Dict[str, SalaryItem]:
    """
    Merge caller-supplied items into an existing (or default) item map.

    Keys not mentioned in overrides are kept as they are. A supplied entry
    replaces the stored one and its missing fields are filled from the
    default template of that key.
    """
    merged = deepcopy(dict(existing)) if existing else deepcopy(dict(defaults))
    for name, override in (overrides or {}).items():
        template = defaults.get(name, _BLANK_ITEM)
        merged[name] = _normalize({**template, **dict(override)})
    return merged
