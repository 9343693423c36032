"""Column width allocator — share a fixed width budget between columns.

Each known column starts from a baseline width and every known column is
scaled by the same factor so the set grows into (or shrinks into) the
budget.  Columns without a baseline get an equal share of what is left,
never less than ``UNKNOWN_COLUMN_FLOOR``.  Widths are floored to whole
units, so the plan may sum to slightly less than the budget.  That slack
is kept as-is; it is not pushed into any column.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from diabreport.config import UNKNOWN_COLUMN_FLOOR
from diabreport.reports.types import ReportType, require_exhaustive

ColumnWidthPlan = dict[str, int]

BASELINE_WIDTHS: Mapping[ReportType, Mapping[str, int]] = MappingProxyType({
    ReportType.USERS: MappingProxyType({
        "nome": 35,
        "email": 38,
        "genero": 18,
        "diabetes": 18,
        "duracao": 18,
        "peso": 15,
        "altura": 15,
        "imc": 12,
        "acompanhamento": 22,
        "hipertenso": 18,
        "possuiComplicacoes": 22,
        "descricaoComplicacoes": 55,
        "medicamentos": 55,
        "status": 15,
        "dataCadastro": 22,
    }),
    ReportType.MEDICATIONS: MappingProxyType({
        "nomeGenerico": 35,
        "nomeComercial": 35,
        "concentracao": 22,
        "formaFarmaceutica": 28,
        "viaAdministracao": 28,
        "descricao": 55,
        "dataCadastro": 22,
    }),
    ReportType.FOODS: MappingProxyType({
        "nome": 35,
        "classificacaoNova": 35,
        "carboidratosPor100g": 22,
        "carboidratosPorPorcao": 22,
        "descricaoPorcao": 28,
        "dataCadastro": 22,
    }),
    ReportType.COMPLICATIONS: MappingProxyType({
        "nome": 35,
        "palavrasChave": 45,
        "instrucoes": 55,
        "dataCadastro": 22,
    }),
})

require_exhaustive(BASELINE_WIDTHS, "BASELINE_WIDTHS")


def baselines_for(report_type: ReportType | None = None) -> Mapping[str, int]:
    """Baseline table of *report_type*, or all tables merged when None."""
    if report_type is not None:
        return BASELINE_WIDTHS[report_type]
    merged: dict[str, int] = {}
    for table in BASELINE_WIDTHS.values():
        merged.update(table)
    return MappingProxyType(merged)


def allocate(
    column_keys: Iterable[str],
    total_budget: int,
    report_type: ReportType | None = None,
    *,
    baselines: Mapping[str, int] | None = None,
) -> ColumnWidthPlan:
    """Assign an integer width to every column key.

    Parameters
    ----------
    column_keys:
        Columns to size.  Order does not influence the result.
    total_budget:
        Total width available (mm for PDF).
    report_type:
        Selects the baseline table.  Ignored when *baselines* is given.
    baselines:
        Explicit baseline table, mainly for callers with custom columns.

    Returns
    -------
    ColumnWidthPlan
        Mapping key -> width whose sum never exceeds *total_budget*.
    """
    keys = list(dict.fromkeys(column_keys))
    if not keys:
        return {}
    if total_budget < 0:
        raise ValueError(f"Width budget must not be negative: {total_budget}")

    table = baselines if baselines is not None else baselines_for(report_type)
    known = {k: table[k] for k in keys if table.get(k)}
    unknown = [k for k in keys if k not in known]

    reserve = UNKNOWN_COLUMN_FLOOR * len(unknown)
    if not known or reserve >= total_budget:
        even = total_budget // len(keys)
        return {k: even for k in keys}

    # Growth and shrink share the same factor: known_budget / used
    used = sum(known.values())
    known_budget = total_budget - reserve
    plan: ColumnWidthPlan = {k: width * known_budget // used for k, width in known.items()}

    if unknown:
        leftover = total_budget - sum(plan.values())
        share = leftover // len(unknown)
        for k in unknown:
            plan[k] = share

    return {k: plan[k] for k in keys}
