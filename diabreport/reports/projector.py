"""Row projector — flatten one raw record into an ordered display row.

Usage::

    from diabreport.reports.projector import project

    row = project(ReportType.FOODS, {"name": "Arroz", "classification": "g1"})
    row.values["classificacaoNova"]  # 'Grupo 1 - In natura/Minimamente processados'
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Mapping
from zoneinfo import ZoneInfo

from diabreport.reports.dataset import ProjectedRow
from diabreport.reports.labels import (
    diabetes_type_label,
    format_date,
    gender_label,
    nova_class_label,
    to_text,
    yes_no,
)
from diabreport.reports.types import ReportType, require_exhaustive

logger = logging.getLogger(__name__)

RawRecord = Mapping[str, Any]

CREATED_AT_FIELD = "createdAt"


def coerce_timestamp(value: Any) -> datetime | None:
    """Turn a stored creation timestamp into an aware UTC datetime.

    Accepts datetimes, dates, ISO-8601 strings, epoch seconds and
    document-store timestamp objects exposing ``to_datetime()`` or
    ``toDate()``.  Anything else is treated as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    for attr in ("to_datetime", "toDate"):
        converter = getattr(value, attr, None)
        if callable(converter):
            try:
                value = converter()
            except Exception:
                logger.debug("Could not convert timestamp %r", value, exc_info=True)
                return None
            break
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        try:
            moment = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _text(record: RawRecord, field: str) -> str:
    """Stored value as text; missing or falsy values become ''."""
    value = record.get(field)
    if not value:
        return ""
    return to_text(value)


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def body_mass_index(weight: Any, height_cm: Any) -> str:
    """BMI to one decimal, or '' when weight or height is zero or unusable."""
    kg = _number(weight)
    cm = _number(height_cm)
    if not kg or not cm:
        return ""
    return f"{kg / (cm / 100) ** 2:.1f}"


def _joined(value: Any, missing: str) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(to_text(v) for v in value)
    return to_text(value) if value else missing


def _created(record: RawRecord, tz: str | ZoneInfo | None) -> tuple[datetime | None, str]:
    created_at = coerce_timestamp(record.get(CREATED_AT_FIELD))
    return created_at, format_date(created_at, tz) if created_at else ""


def _project_user(record: RawRecord, tz: str | ZoneInfo | None) -> tuple[dict[str, str], datetime | None]:
    created_at, created_text = _created(record, tz)
    has_complications = bool(record.get("hasChronicComplications"))
    if has_complications:
        complications = _text(record, "chronicComplicationsDescription") or "Não especificado"
    else:
        complications = "-"
    values = {
        "nome": _text(record, "name"),
        "email": _text(record, "email"),
        "genero": gender_label(record.get("gender") or ""),
        "diabetes": diabetes_type_label(record.get("diabetesType") or ""),
        "duracao": _text(record, "diabetesDuration"),
        "peso": _text(record, "weight"),
        "altura": _text(record, "height"),
        "imc": body_mass_index(record.get("weight"), record.get("height")),
        "acompanhamento": yes_no(record.get("isFollowedUp")),
        "hipertenso": yes_no(record.get("isHypertensive")),
        "possuiComplicacoes": yes_no(has_complications),
        "descricaoComplicacoes": complications,
        "medicamentos": _joined(record.get("medications"), "-"),
        "status": "Ativo" if record.get("status") == "active" else "Inativo",
        "dataCadastro": created_text,
    }
    return values, created_at


def _project_medication(record: RawRecord, tz: str | ZoneInfo | None) -> tuple[dict[str, str], datetime | None]:
    created_at, created_text = _created(record, tz)
    values = {
        "nomeGenerico": _text(record, "genericName"),
        "nomeComercial": _text(record, "commercialName"),
        "concentracao": _text(record, "concentration"),
        "formaFarmaceutica": _text(record, "pharmaceuticalForm"),
        "viaAdministracao": _text(record, "administrationRoute"),
        "descricao": _text(record, "description"),
        "dataCadastro": created_text,
    }
    return values, created_at


def _project_food(record: RawRecord, tz: str | ZoneInfo | None) -> tuple[dict[str, str], datetime | None]:
    created_at, created_text = _created(record, tz)
    values = {
        "nome": _text(record, "name"),
        "classificacaoNova": nova_class_label(record.get("classification") or ""),
        "carboidratosPor100g": _text(record, "carbs100"),
        "carboidratosPorPorcao": _text(record, "carbsPortion"),
        "descricaoPorcao": _text(record, "portionDesc"),
        "dataCadastro": created_text,
    }
    return values, created_at


def _project_complication(record: RawRecord, tz: str | ZoneInfo | None) -> tuple[dict[str, str], datetime | None]:
    created_at, created_text = _created(record, tz)
    values = {
        "nome": _text(record, "name"),
        "palavrasChave": _joined(record.get("keywords"), ""),
        "instrucoes": _text(record, "instructions"),
        "dataCadastro": created_text,
    }
    return values, created_at


_Projector = Callable[..., tuple[dict[str, str], datetime | None]]

PROJECTORS: Mapping[ReportType, _Projector] = MappingProxyType({
    ReportType.USERS: _project_user,
    ReportType.MEDICATIONS: _project_medication,
    ReportType.FOODS: _project_food,
    ReportType.COMPLICATIONS: _project_complication,
})

require_exhaustive(PROJECTORS, "PROJECTORS")


def project(
    report_type: ReportType,
    record: RawRecord,
    *,
    tz: str | ZoneInfo | None = None,
) -> ProjectedRow:
    """Project *record* into the row shape of *report_type*.

    Missing or malformed fields never raise; they degrade to '' or '-'.
    The record's ``id`` (if any) becomes the row identifier.

    Raises
    ------
    TypeError
        If *report_type* is not a :class:`ReportType`.
    """
    if not isinstance(report_type, ReportType):
        raise TypeError(f"Unknown report type: {report_type!r}")
    values, created_at = PROJECTORS[report_type](record, tz)
    return ProjectedRow(
        id=to_text(record.get("id")),
        values=values,
        created_at=created_at,
    )
