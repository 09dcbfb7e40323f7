"""Declarative validation and sanitization of submitted form fields.

A chain is an ordered list of Rule descriptors plus a list of
(field, sanitizer) pairs. Values are trimmed first, rules run in order, and
the first failing rule of a field is the one reported for it. Sanitizers then
produce the values handed to the models. Nothing here touches storage.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from bookinstance import STATUS_VALUES
from utils.dates import parse_iso_date

_ALPHANUMERIC = re.compile(r"^[0-9A-Za-z]+$")

# Same character set as the usual server-side HTML escaping of form input
_ESCAPES = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})


@dataclass(frozen=True)
class Rule:
    field: str
    check: Callable[[str], bool]
    message: str


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str
    value: str = ""

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "value": self.value}


@dataclass
class FormResult:
    values: Dict[str, Any] = field(default_factory=dict)
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def errors_for(self, name: str) -> List[ValidationError]:
        return [e for e in self.errors if e.field == name]


# ------------------------- Checks ------------------------- #
def required(value: str) -> bool:
    return len(value) >= 1


def alphanumeric(value: str) -> bool:
    return bool(_ALPHANUMERIC.match(value))


def iso8601(value: str) -> bool:
    return parse_iso_date(value) is not None


def one_of(choices: Iterable[str]) -> Callable[[str], bool]:
    allowed = frozenset(choices)

    def check(value: str) -> bool:
        return value in allowed

    return check


def optional(check: Callable[[str], bool]) -> Callable[[str], bool]:
    """Let empty values through; run the check on anything else."""
    def wrapped(value: str) -> bool:
        return not value or check(value)

    return wrapped


# ------------------------- Sanitizers ------------------------- #
def trim(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip()


def escape(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).translate(_ESCAPES)


def to_date(value: Optional[str]):
    return parse_iso_date(value)


# ------------------------- Runner ------------------------- #
def run_validation(form: Mapping[str, Any], rules: Sequence[Rule],
                   sanitizers: Sequence[Tuple[str, Callable[[Any], Any]]]) -> FormResult:
    """Validate and sanitize a submitted form.

    Every field named by a rule or a sanitizer is read from ``form`` (missing
    fields count as empty) and trimmed before anything else happens.
    """
    names = [r.field for r in rules] + [name for name, _ in sanitizers]
    trimmed = {name: trim(form.get(name)) for name in dict.fromkeys(names)}

    errors: List[ValidationError] = []
    failed = set()
    for rule in rules:
        if rule.field in failed:
            continue
        value = trimmed[rule.field]
        if not rule.check(value):
            failed.add(rule.field)
            errors.append(ValidationError(rule.field, rule.message, value))

    values: Dict[str, Any] = dict(trimmed)
    for name, sanitizer in sanitizers:
        values[name] = sanitizer(values[name])
    return FormResult(values=values, errors=errors)


# ------------------------- Chains ------------------------- #
AUTHOR_RULES = [
    Rule("first_name", required, "First name must be specified."),
    Rule("first_name", alphanumeric, "First name has non-alphanumeric characters."),
    Rule("family_name", required, "Family name must be specified."),
    Rule("family_name", alphanumeric, "Family name has non-alphanumeric characters."),
    Rule("date_of_birth", optional(iso8601), "Invalid date of birth"),
    Rule("date_of_death", optional(iso8601), "Invalid date of death"),
]

AUTHOR_SANITIZERS = [
    ("first_name", escape),
    ("family_name", escape),
    ("date_of_birth", to_date),
    ("date_of_death", to_date),
]

BOOKINSTANCE_RULES = [
    Rule("book", required, "Book must be specified"),
    Rule("imprint", required, "Imprint must be specified"),
    Rule("due_back", optional(iso8601), "Invalid date"),
    Rule("status", one_of(STATUS_VALUES), "Invalid status"),
]

BOOKINSTANCE_SANITIZERS = [
    ("book", escape),
    ("imprint", escape),
    ("status", escape),
    ("due_back", to_date),
]
