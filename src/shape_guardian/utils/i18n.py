"""Translation of issue messages through key-based templates."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Mapping, Optional, Union

from ..core.errors import Issue, IssueCode, VldError
from ..core.values import format_number, is_number

MessageResolver = Union[Mapping[str, str], Callable[[str], Optional[str]]]

_STRING_FORMAT_CODES = {
    code.value: code.value[len("invalid_"):]
    for code in IssueCode
    if code.value.startswith("invalid_")
    and code.value
    not in (
        "invalid_type",
        "invalid_literal",
        "invalid_enum_value",
        "invalid_union",
        "invalid_discriminator",
        "invalid_tuple_length",
        "invalid_map_entry",
        "invalid_date",
        "invalid_datetime",
    )
}


class _SafeParams(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _resolve(resolver: MessageResolver, key: str) -> str | None:
    if callable(resolver):
        return resolver(key)
    return resolver.get(key)


def issue_params(issue: Issue) -> Dict[str, str]:
    """Template parameters for an issue, numbers rendered without ``.0``."""
    params: Dict[str, str] = {}
    for name, value in issue.params.items():
        params[name] = format_number(value) if is_number(value) else str(value)
    if "received_type" in params:
        params["received"] = params["received_type"]
    if issue.key in _STRING_FORMAT_CODES:
        params.setdefault("validation", _STRING_FORMAT_CODES[issue.key])
    return params


def translate_issue(issue: Issue, resolver: MessageResolver) -> Issue:
    template = _resolve(resolver, issue.key)
    if template is None and issue.key in _STRING_FORMAT_CODES:
        template = _resolve(resolver, "invalid_string")
    if template is None:
        return issue
    return replace(issue, message=template.format_map(_SafeParams(issue_params(issue))))


def translate_error(error: VldError, resolver: MessageResolver) -> VldError:
    """Re-render every issue whose key has a template in ``resolver``."""
    return VldError(translate_issue(issue, resolver) for issue in error.issues)


def english() -> Dict[str, str]:
    return {
        "invalid_type": "Expected {expected}, received {received}",
        "too_small": "Value must be at least {minimum}",
        "too_big": "Value must be at most {maximum}",
        "invalid_string": "Invalid {validation}",
        "not_int": "Expected integer, received float",
        "not_finite": "Number must be finite",
        "missing_field": "Required field is missing",
        "unrecognized_key": "Unrecognized key",
        "parse_error": "Failed to parse input",
    }


def german() -> Dict[str, str]:
    return {
        "invalid_type": "{expected} erwartet, {received} erhalten",
        "too_small": "Wert muss mindestens {minimum} sein",
        "too_big": "Wert darf höchstens {maximum} sein",
        "invalid_string": "Ungültiger Wert ({validation})",
        "not_int": "Ganzzahl erwartet",
        "not_finite": "Zahl muss endlich sein",
        "missing_field": "Pflichtfeld fehlt",
        "unrecognized_key": "Unbekanntes Feld",
        "parse_error": "Eingabe konnte nicht verarbeitet werden",
    }


def russian() -> Dict[str, str]:
    return {
        "invalid_type": "Ожидалось {expected}, получено {received}",
        "too_small": "Значение должно быть не менее {minimum}",
        "too_big": "Значение должно быть не более {maximum}",
        "invalid_string": "Некорректное значение ({validation})",
        "not_int": "Ожидалось целое число",
        "not_finite": "Число должно быть конечным",
        "missing_field": "Обязательное поле отсутствует",
        "unrecognized_key": "Неизвестное поле",
        "parse_error": "Ошибка разбора входных данных",
    }


def spanish() -> Dict[str, str]:
    return {
        "invalid_type": "Se esperaba {expected}, se recibió {received}",
        "too_small": "El valor debe ser al menos {minimum}",
        "too_big": "El valor debe ser como máximo {maximum}",
        "invalid_string": "Valor inválido ({validation})",
        "not_int": "Se esperaba un número entero",
        "not_finite": "El número debe ser finito",
        "missing_field": "Campo obligatorio faltante",
        "unrecognized_key": "Campo no reconocido",
        "parse_error": "Error al procesar la entrada",
    }


def resolver_for(language: str) -> Dict[str, str]:
    """Built-in resolver by language code (``en``, ``de``, ``ru``, ``es``)."""
    builtins: Dict[str, Callable[[], Dict[str, str]]] = {
        "en": english,
        "de": german,
        "ru": russian,
        "es": spanish,
    }
    try:
        return builtins[language.split("-")[0].lower()]()
    except KeyError:
        raise ValueError(f"No built-in messages for language {language!r}") from None
