"""
Validation gate.

`guard(*rules)` returns a FastAPI dependency. The dependency runs every rule
against the request, then either lets the request through or raises exactly
one categorized error chosen from the *first* failure:

    NOT_FOUND     -> NotFoundError(all messages)
    UNAUTHORIZED  -> UnauthorizedError(first message only)
    BAD_REQUEST   -> BadRequestError(all messages)

Gates are declared as route dependencies, so they run before FastAPI parses
the body model and before the handler touches the database.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.errors import ERROR_FOR_KIND, BadRequestError, ErrorKind, GateError
from app.core.security import get_optional_user
from app.db.base import get_db
from app.validation.rules import FieldRule, Failure, Location, RequestContext

logger = logging.getLogger(__name__)


async def run_rules(rules: Sequence[FieldRule], ctx: RequestContext) -> list[Failure]:
    """
    Evaluate rules in declaration order and collect every failure.

    Rules are awaited one at a time: they share the request's Session,
    which must not be used concurrently.
    """
    failures: list[Failure] = []
    for rule in rules:
        failures.extend(await rule.run(ctx))
    return failures


def error_for(failures: Sequence[Failure]) -> GateError:
    """Pick the error to raise for a non-empty failure list."""
    first = failures[0]
    error_cls = ERROR_FOR_KIND[first.kind]
    if first.kind is ErrorKind.UNAUTHORIZED:
        return error_cls(first.message)
    return error_cls([f.message for f in failures])


async def read_json_body(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    # Routes with a body model never get here with bad JSON: FastAPI answers
    # 422 before dependencies run. Gates on body-less routes do.
    try:
        data = json.loads(raw)
    except ValueError:
        raise BadRequestError("Malformed JSON body") from None
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


def guard(*rules: FieldRule):
    """Build a gate dependency over `rules`."""
    rules = tuple(rules)
    reads_body = any(rule.location is Location.body for rule in rules)

    async def gate(request: Request, db: Session = Depends(get_db)) -> None:
        ctx = RequestContext(
            body=await read_json_body(request) if reads_body else {},
            path_params=dict(request.path_params),
            user=get_optional_user(request),
            db=db,
        )
        failures = await run_rules(rules, ctx)
        if not failures:
            return

        error = error_for(failures)
        logger.info(
            "Rejected %s %s: %s %s",
            request.method,
            request.url.path,
            error.kind.value,
            error.messages,
        )
        raise error

    gate.rules = rules  # type: ignore[attr-defined]
    return gate
