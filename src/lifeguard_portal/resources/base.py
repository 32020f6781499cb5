"""Shared plumbing for the typed resource clients."""

from __future__ import annotations

from typing import Any, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..client import PortalClient, PortalResponseError

ModelT = TypeVar("ModelT", bound=BaseModel)


def segment(value: str) -> str:
    """Encode a value as a single URL path segment."""
    return quote(str(value), safe="")


class Resource:
    """Maps one operation to one HTTP verb and path under ``base_path``."""

    def __init__(self, client: PortalClient, base_path: str) -> None:
        self.client = client
        self.base_path = base_path

    def path(self, *parts: str) -> str:
        if not parts:
            return f"{self.base_path}/"
        return "/".join([self.base_path, *(segment(part) for part in parts)])

    @staticmethod
    def parse(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise PortalResponseError(
                f"Unexpected {model.__name__} response: {exc.error_count()} invalid field(s)"
            ) from exc

    @staticmethod
    def parse_list(model: Type[ModelT], data: Any) -> list[ModelT]:
        try:
            return TypeAdapter(list[model]).validate_python(data or [])  # type: ignore[valid-type]
        except ValidationError as exc:
            raise PortalResponseError(
                f"Unexpected {model.__name__} list response: {exc.error_count()} invalid field(s)"
            ) from exc
