"""ReportType and the per-type tables every report run is keyed on."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ReportType(str, Enum):
    """The four record sets the console can export."""

    USERS = "users"
    MEDICATIONS = "medications"
    FOODS = "foods"
    COMPLICATIONS = "complications"

    @property
    def collection(self) -> str:
        """Name of the document-store collection holding the records."""
        return self.value

    @property
    def label(self) -> str:
        return REPORT_LABELS[self]

    @property
    def columns(self) -> tuple[str, ...]:
        """Ordered column keys of every row of this report type."""
        return REPORT_COLUMNS[self]

    @classmethod
    def parse(cls, value: Any) -> ReportType:
        """Coerce *value* (member or raw string) into a ReportType.

        Raises ``ValueError`` for anything that is not one of the four types.
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


def require_exhaustive(table: Mapping[ReportType, Any], name: str) -> None:
    """Fail at import time when a per-type *table* misses a ReportType."""
    missing = [t.value for t in ReportType if t not in table]
    if missing:
        raise TypeError(f"{name} has no entry for report type(s): {', '.join(missing)}")


REPORT_LABELS: Mapping[ReportType, str] = MappingProxyType({
    ReportType.USERS: "Usuários cadastrados no sistema",
    ReportType.MEDICATIONS: "Medicações cadastradas",
    ReportType.FOODS: "Alimentos cadastrados",
    ReportType.COMPLICATIONS: "Complicações cadastradas",
})

REPORT_COLUMNS: Mapping[ReportType, tuple[str, ...]] = MappingProxyType({
    ReportType.USERS: (
        "nome",
        "email",
        "genero",
        "diabetes",
        "duracao",
        "peso",
        "altura",
        "imc",
        "acompanhamento",
        "hipertenso",
        "possuiComplicacoes",
        "descricaoComplicacoes",
        "medicamentos",
        "status",
        "dataCadastro",
    ),
    ReportType.MEDICATIONS: (
        "nomeGenerico",
        "nomeComercial",
        "concentracao",
        "formaFarmaceutica",
        "viaAdministracao",
        "descricao",
        "dataCadastro",
    ),
    ReportType.FOODS: (
        "nome",
        "classificacaoNova",
        "carboidratosPor100g",
        "carboidratosPorPorcao",
        "descricaoPorcao",
        "dataCadastro",
    ),
    ReportType.COMPLICATIONS: (
        "nome",
        "palavrasChave",
        "instrucoes",
        "dataCadastro",
    ),
})

require_exhaustive(REPORT_LABELS, "REPORT_LABELS")
require_exhaustive(REPORT_COLUMNS, "REPORT_COLUMNS")
