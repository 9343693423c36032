"""Label dictionary: raw domain codes and column keys to display text.

All tables are read-only.  Every lookup falls back to the key itself when
the key is not mapped, so new codes in the store still show up in reports.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping
from zoneinfo import ZoneInfo

from diabreport.config import DATE_FORMAT, DATETIME_FORMAT, DEFAULT_TIMEZONE

NOT_INFORMED = "Não informado"

GENDER_LABELS: Mapping[str, str] = MappingProxyType({
    "masculino": "Masculino",
    "feminino": "Feminino",
    "outro": "Outro",
})

DIABETES_TYPE_LABELS: Mapping[str, str] = MappingProxyType({
    "type1": "Tipo 1",
    "type2": "Tipo 2",
    "gestational": "Gestacional",
    "other": "Outro",
})

NOVA_CLASS_LABELS: Mapping[str, str] = MappingProxyType({
    "g1": "Grupo 1 - In natura/Minimamente processados",
    "g2": "Grupo 2 - Ingredientes culinários",
    "g3": "Grupo 3 - Processados",
    "g4": "Grupo 4 - Ultraprocessados",
})

COLUMN_LABELS: Mapping[str, str] = MappingProxyType({
    # Users
    "nome": "Nome",
    "email": "E-mail",
    "genero": "Gênero",
    "diabetes": "Tipo Diabetes",
    "duracao": "Duração",
    "peso": "Peso (kg)",
    "altura": "Altura (cm)",
    "imc": "IMC",
    "acompanhamento": "Acompanhamento",
    "hipertenso": "Hipertenso",
    "possuiComplicacoes": "Possui Complicações",
    "descricaoComplicacoes": "Descrição das Complicações",
    "medicamentos": "Medicamentos",
    "status": "Status",
    "dataCadastro": "Data Cadastro",
    # Medications
    "nomeGenerico": "Nome Genérico",
    "nomeComercial": "Nome Comercial",
    "concentracao": "Concentração",
    "formaFarmaceutica": "Forma Farmacêutica",
    "viaAdministracao": "Via de Administração",
    "descricao": "Descrição",
    # Foods
    "classificacaoNova": "Classificação NOVA",
    "carboidratosPor100g": "Carboidratos (100g)",
    "carboidratosPorPorcao": "Carboidratos por Porção",
    "descricaoPorcao": "Descrição da Porção",
    # Complications
    "palavrasChave": "Palavras-chave",
    "instrucoes": "Instruções",
})

# Dense PDF variant only
GENDER_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    "Masculino": "Masc",
    "Feminino": "Fem",
    "Outro": "Outro",
})

DIABETES_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    "Tipo 1": "Tipo 1",
    "Tipo 2": "Tipo 2",
    "Gestacional": "Gest",
    "Outro": "Outro",
})


def _code_label(table: Mapping[str, str], code: Any) -> str:
    code = "" if code is None else str(code)
    return table.get(code) or code or NOT_INFORMED


def gender_label(code: Any) -> str:
    return _code_label(GENDER_LABELS, code)


def diabetes_type_label(code: Any) -> str:
    return _code_label(DIABETES_TYPE_LABELS, code)


def nova_class_label(code: Any) -> str:
    """Describe a NOVA food-processing group code ('g1'..'g4')."""
    return _code_label(NOVA_CLASS_LABELS, code)


def column_label(key: str) -> str:
    """Human header for a column key; unmapped keys are returned as-is."""
    return COLUMN_LABELS.get(key, key)


def abbreviate_gender(label: str) -> str:
    return GENDER_ABBREVIATIONS.get(label, label)


def abbreviate_diabetes(label: str) -> str:
    return DIABETES_ABBREVIATIONS.get(label, label)


def yes_no(flag: Any) -> str:
    return "Sim" if flag else "Não"


def to_text(value: Any) -> str:
    """Render a stored scalar the way the web console shows it.

    Integral floats lose their fractional part (``65.0`` -> ``"65"``),
    booleans become ``"true"``/``"false"`` and ``None`` becomes ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(v) for v in value)
    return str(value)


def truncate(text: str, max_length: int) -> str:
    """Cut *text* to *max_length* characters, ending with '...' when cut."""
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 3, 0)] + "..."


def _zone(tz: str | ZoneInfo | None) -> ZoneInfo:
    if isinstance(tz, ZoneInfo):
        return tz
    return ZoneInfo(tz or DEFAULT_TIMEZONE)


def _localize(moment: datetime, tz: str | ZoneInfo | None) -> datetime:
    # Naive datetimes from the store are UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(_zone(tz))


def format_date(moment: datetime | date, tz: str | ZoneInfo | None = None) -> str:
    """pt-BR calendar date; datetimes are shown in the *tz* wall clock."""
    if isinstance(moment, datetime):
        moment = _localize(moment, tz)
    return moment.strftime(DATE_FORMAT)


def format_datetime(moment: datetime, tz: str | ZoneInfo | None = None) -> str:
    return _localize(moment, tz).strftime(DATETIME_FORMAT)
