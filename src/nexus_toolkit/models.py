from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, model_validator
from pydantic.alias_generators import to_camel

Number = Union[StrictInt, StrictFloat]


class Contract(BaseModel):
    """Base for tool payloads: camelCase on the wire, frozen once parsed.

    Optional fields may be absent but never ``null``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        frozen=True,
        protected_namespaces=(),
    )

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            names = {field.alias or name for name, field in cls.model_fields.items()}
            nulls = sorted(key for key, value in data.items() if value is None and key in names)
            if nulls:
                raise ValueError(f"null is not allowed for: {', '.join(nulls)}")
        return data


# orchestrate


class OrchestrateInput(Contract):
    task: StrictStr = Field(min_length=1)
    context: dict[str, Any] | None = None
    max_iterations: Annotated[StrictInt, Field(ge=1, le=50)] | None = None
    timeout: Annotated[StrictInt, Field(ge=1000, le=600000)] | None = None


class SubtaskResult(Contract):
    task: StrictStr
    status: Literal["completed", "failed", "skipped"]
    output: StrictStr | None = None
    error: StrictStr | None = None


class OrchestrateResponse(Contract):
    task: StrictStr
    status: Literal["completed", "failed", "timeout", "error"]
    output: StrictStr | None = None
    subtasks: list[SubtaskResult] | None = None
    iterations: Number | None = None
    duration_ms: Number | None = None
    error: StrictStr | None = None


class OrchestrateError(Contract):
    """Body returned by ``orchestrate`` when no model adapter is configured."""

    error: StrictStr


# research_catalog_review


class CatalogReviewInput(Contract):
    action: Literal["list", "approve", "dismiss", "flush"]
    identifier: StrictStr | None = None
    topic: StrictStr | None = None
    create_issue: StrictBool | None = None


class CatalogReference(Contract):
    identifier: StrictStr
    title: StrictStr | None = None
    source: StrictStr | None = None
    discovered_at: StrictStr | None = None


class CatalogReviewData(Contract):
    pending: list[CatalogReference] | None = None
    count: Number | None = None
    approved: StrictStr | None = None
    dismissed: StrictStr | None = None
    flushed: Number | None = None


class CatalogReviewResponse(Contract):
    action: StrictStr
    success: StrictBool
    message: StrictStr
    data: CatalogReviewData | None = None


# registry_import


class RegistryImportInput(Contract):
    provider: Literal["anthropic", "google", "openai"]
    model_id: StrictStr = Field(min_length=1)
    dry_run: StrictBool | None = None


class QualityScores(Contract):
    reasoning: Number
    code_generation: Number
    speed: Number
    cost: Number


class Pricing(Contract):
    input_per_1m: Number = Field(alias="inputPer1M")
    output_per_1m: Number = Field(alias="outputPer1M")


class ModelEntry(Contract):
    id: StrictStr
    display_name: StrictStr
    provider: StrictStr
    context_window: Number
    output_modalities: list[StrictStr]
    input_modalities: list[StrictStr]
    tool_capabilities: list[StrictStr]
    special_features: list[StrictStr]
    pricing: Pricing
    quality_scores: QualityScores
    cli_name: StrictStr
    cli_model_name: StrictStr


class RegistryImportResponse(Contract):
    dry_run: StrictBool
    entry: ModelEntry
    persisted: StrictBool
    warnings: list[StrictStr]
