"""
Field rules: a field location plus an ordered chain of checks.

Rules read like the chains they are declared with:

    body("email").not_empty("Email is required").is_email("Invalid Email format")

Every check in a chain runs, so one field can contribute several failures.
A failure records its message and the error kind it asks the gate for.
Plain checks default to the kind inferred from their message; custom
checks tag the kind by raising the matching GateError subclass.
"""
from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Optional, Union

from email_validator import EmailNotValidError, validate_email

from app.core.errors import ErrorKind, GateError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from app.core.security import CurrentUser


class Location(str, enum.Enum):
    body = "body"
    path = "path"


@dataclass
class RequestContext:
    """Request-scoped inputs the rules read from. Discarded after the gate resolves."""
    body: dict[str, Any] = field(default_factory=dict)
    path_params: dict[str, Any] = field(default_factory=dict)
    user: Optional["CurrentUser"] = None
    db: Optional["Session"] = None

    def lookup(self, location: Location, name: str) -> Any:
        source = self.body if location is Location.body else self.path_params
        return source.get(name)


@dataclass(frozen=True)
class Failure:
    field: str
    message: str
    kind: ErrorKind


# A custom check receives the raw value and the context. It passes by
# returning; it fails by raising a GateError (tagged kind) or ValueError.
CustomCheck = Callable[[Any, RequestContext], Union[None, Awaitable[None]]]


def as_text(value: Any) -> str:
    """Coerce a field value the way string validators see it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_present(text: str) -> bool:
    # Whitespace counts as content.
    return text != ""


def is_email(text: str) -> bool:
    """Syntax only. The domain must be dotted; `.test` domains are allowed."""
    try:
        validate_email(text, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _PredicateCheck:
    predicate: Callable[[str], bool]
    message: str
    kind: ErrorKind

    async def evaluate(self, name: str, value: Any, ctx: RequestContext) -> Optional[Failure]:
        if self.predicate(as_text(value)):
            return None
        return Failure(field=name, message=self.message, kind=self.kind)


@dataclass(frozen=True)
class _CustomCheck:
    fn: CustomCheck

    async def evaluate(self, name: str, value: Any, ctx: RequestContext) -> Optional[Failure]:
        try:
            result = self.fn(value, ctx)
            if inspect.isawaitable(result):
                await result
        except GateError as exc:
            return Failure(field=name, message=exc.message, kind=exc.kind)
        except ValueError as exc:
            message = str(exc)
            return Failure(field=name, message=message, kind=ErrorKind.for_message(message))
        return None


class FieldRule:
    """One field and the checks declared against it, in declaration order."""

    def __init__(self, location: Location, name: str):
        self.location = location
        self.name = name
        self._checks: list[Union[_PredicateCheck, _CustomCheck]] = []

    def __repr__(self) -> str:
        return f"FieldRule({self.location.value}:{self.name}, checks={len(self._checks)})"

    def _add_predicate(
        self, predicate: Callable[[str], bool], message: str, kind: Optional[ErrorKind]
    ) -> "FieldRule":
        self._checks.append(
            _PredicateCheck(predicate, message, kind or ErrorKind.for_message(message))
        )
        return self

    def not_empty(self, message: str, kind: Optional[ErrorKind] = None) -> "FieldRule":
        return self._add_predicate(is_present, message, kind)

    def is_email(self, message: str, kind: Optional[ErrorKind] = None) -> "FieldRule":
        return self._add_predicate(is_email, message, kind)

    def is_in(
        self,
        choices: Union[Iterable[str], type[enum.Enum]],
        message: str,
        kind: Optional[ErrorKind] = None,
    ) -> "FieldRule":
        if isinstance(choices, type) and issubclass(choices, enum.Enum):
            allowed = frozenset(str(member.value) for member in choices)
        else:
            allowed = frozenset(choices)
        return self._add_predicate(lambda text: text in allowed, message, kind)

    def min_length(
        self, length: int, message: str, kind: Optional[ErrorKind] = None
    ) -> "FieldRule":
        return self._add_predicate(lambda text: len(text) >= length, message, kind)

    def custom(self, fn: CustomCheck) -> "FieldRule":
        self._checks.append(_CustomCheck(fn))
        return self

    async def run(self, ctx: RequestContext) -> list[Failure]:
        value = ctx.lookup(self.location, self.name)
        failures: list[Failure] = []
        for check in self._checks:
            failure = await check.evaluate(self.name, value, ctx)
            if failure is not None:
                failures.append(failure)
        return failures


def body(name: str) -> FieldRule:
    return FieldRule(Location.body, name)


def param(name: str) -> FieldRule:
    return FieldRule(Location.path, name)
