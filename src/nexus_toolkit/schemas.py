from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar, Union

from pydantic import BaseModel, ValidationError

from nexus_toolkit.models import (
    CatalogReviewInput,
    CatalogReviewResponse,
    OrchestrateError,
    OrchestrateInput,
    OrchestrateResponse,
    RegistryImportInput,
    RegistryImportResponse,
)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class ParseSuccess(Generic[M]):
    value: M

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ParseFailure:
    errors: list[str]

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


ParseResult = Union[ParseSuccess[M], ParseFailure]


def _json_path(loc: tuple[int | str, ...]) -> str:
    out = "$"
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}"
    return out


def _render_errors(exc: ValidationError) -> list[str]:
    return [f"{_json_path(err['loc'])}: {err['msg']}" for err in exc.errors(include_url=False)]


def safe_parse(model: type[M], instance: Any) -> ParseResult[M]:
    """Validate ``instance`` against ``model`` without raising.

    Returns :class:`ParseSuccess` holding the typed value, or
    :class:`ParseFailure` holding one ``"$.path: message"`` line per violation.
    """

    try:
        return ParseSuccess(model.model_validate(instance))
    except ValidationError as exc:
        return ParseFailure(_render_errors(exc))


CONTRACTS: dict[str, type[BaseModel]] = {
    "orchestrate.input": OrchestrateInput,
    "orchestrate.response": OrchestrateResponse,
    "orchestrate.error": OrchestrateError,
    "research_catalog_review.input": CatalogReviewInput,
    "research_catalog_review.response": CatalogReviewResponse,
    "registry_import.input": RegistryImportInput,
    "registry_import.response": RegistryImportResponse,
}


@dataclass(frozen=True)
class SchemaRegistry:
    contracts: Mapping[str, type[BaseModel]] = field(default_factory=lambda: dict(CONTRACTS))

    def names(self) -> list[str]:
        return sorted(self.contracts)

    def model(self, name: str) -> type[BaseModel]:
        model = self.contracts.get(name)
        if model is None:
            raise KeyError(f"Contract not found: {name}")
        return model

    def safe_parse(self, instance: Any, *, contract: str) -> ParseResult[BaseModel]:
        return safe_parse(self.model(contract), instance)

    def validate(self, instance: Any, *, contract: str) -> list[str]:
        result = self.safe_parse(instance, contract=contract)
        if isinstance(result, ParseFailure):
            return result.errors
        return []

    def json_schema(self, name: str) -> dict[str, Any]:
        return self.model(name).model_json_schema(by_alias=True)
