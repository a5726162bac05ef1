"""
API response utilities for decoding GitLab responses.

Responses are handed back un-decoded by the dispatcher; facades decode them
here into a pydantic model or a list of models. Any mismatch between the
payload and the requested shape raises DecodeError, keeping decode failures
distinguishable from transport and status failures.
"""

from functools import lru_cache
from typing import Any, List, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import DecodeError

M = TypeVar("M", bound=BaseModel)


@lru_cache(maxsize=None)
def _list_adapter(model: Type[BaseModel]) -> TypeAdapter:
    return TypeAdapter(List[model])  # type: ignore[valid-type]


def _read_json(response: httpx.Response, target_type: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(target_type, e) from e


def decode_entity(response: httpx.Response, model: Type[M]) -> M:
    """
    Decode a JSON object response into a single model instance.

    Args:
        response: Un-decoded response
        model: Pydantic model class

    Returns:
        Model instance

    Raises:
        DecodeError: If the body is not a JSON object matching the model
    """
    payload = _read_json(response, model.__name__)
    if not isinstance(payload, dict):
        raise DecodeError(
            model.__name__, TypeError(f"expected a JSON object, got {type(payload).__name__}")
        )
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(model.__name__, e) from e


def decode_list(response: httpx.Response, model: Type[M]) -> List[M]:
    """
    Decode a JSON array response into an ordered list of model instances.

    Args:
        response: Un-decoded response
        model: Pydantic model class of the elements

    Returns:
        List of model instances

    Raises:
        DecodeError: If the body is not a JSON array of matching objects
    """
    target_type = f"List[{model.__name__}]"
    payload = _read_json(response, target_type)
    if not isinstance(payload, list):
        raise DecodeError(
            target_type, TypeError(f"expected a JSON array, got {type(payload).__name__}")
        )
    try:
        return _list_adapter(model).validate_python(payload)
    except ValidationError as e:
        raise DecodeError(target_type, e) from e


def decode_text(response: httpx.Response) -> str:
    """Return the response body as text (raw file content endpoints)."""
    return response.text
