from .gate import guard, run_rules, error_for
from .rules import FieldRule, Failure, RequestContext, body, param
from .validators import (
    validate_job_input,
    validate_id_param,
    validate_register_input,
    validate_login_input,
    validate_update_user_input,
)

__all__ = [
    "guard",
    "run_rules",
    "error_for",
    "FieldRule",
    "Failure",
    "RequestContext",
    "body",
    "param",
    "validate_job_input",
    "validate_id_param",
    "validate_register_input",
    "validate_login_input",
    "validate_update_user_input",
]
