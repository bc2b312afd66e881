"""Request body validation for endpoints.

@validate_request looks at the view function's signature. A parameter
annotated with a Pydantic model is built from the request body and passed
in; path parameters pass through untouched.

    @jobs_bp.post("/post")
    @validate_request
    def post_job(data: JobCreate):
        ...

JSON bodies and form bodies (urlencoded or multipart) are both accepted, so
endpoints that also take a file upload validate the same way. Pydantic
failures become ValidationError (400) naming the offending fields.
"""

import inspect
import logging
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def _find_model_parameter(func) -> tuple[str, type[BaseModel]] | None:
    """Return (name, model) of the first parameter annotated with a BaseModel."""
    for name, param in inspect.signature(func).parameters.items():
        annotation = param.annotation
        if inspect.isclass(annotation) and issubclass(annotation, BaseModel):
            return name, annotation
    return None


def _request_payload() -> dict:
    """Read the request body as a dict, from JSON or form fields."""
    if request.is_json:
        payload = request.get_json(silent=True)
        if payload is None:
            raise ValidationError("Request body is not valid JSON.")
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object.")
        return payload

    payload = {}
    for key in request.form.keys():
        values = request.form.getlist(key)
        payload[key] = values if len(values) > 1 else values[0]
    return payload


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "expected_type": error["type"],
        })
    return errors


def _summarize(errors: list[dict]) -> str:
    missing = [e["field"] for e in errors if e["expected_type"] == "missing"]
    if missing:
        return f"Missing required fields: {', '.join(missing)}."
    invalid = ", ".join(dict.fromkeys(e["field"] for e in errors))
    return f"Invalid value for: {invalid}."


def parse_model(model: type[BaseModel], payload: dict) -> BaseModel:
    """
    Validate a payload against a model.

    Raises:
        ValidationError: With field-level details if validation fails
    """
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        errors = _format_errors(e)
        logger.warning(f"Validation failed for {model.__name__}: {errors}")
        raise ValidationError(
            _summarize(errors),
            {"model": model.__name__, "errors": errors}
        ) from e


def validate_request(func):
    """
    Decorator that validates the request body against the annotated model.

    Raises:
        ValidationError: If the body is missing, malformed or fails validation
    """
    target = _find_model_parameter(func)

    @wraps(func)
    def wrapper(*args, **kwargs):
        if target is not None:
            name, model = target
            kwargs[name] = parse_model(model, _request_payload())
        return func(*args, **kwargs)

    return wrapper
