from __future__ import annotations

import re
import unittest
from typing import Any

import mock_responses as mocks
from nexus_toolkit.models import (
    CatalogReviewInput,
    CatalogReviewResponse,
    OrchestrateError,
    OrchestrateInput,
    OrchestrateResponse,
    RegistryImportInput,
    RegistryImportResponse,
)
from nexus_toolkit.schemas import ParseFailure, ParseSuccess, SchemaRegistry, safe_parse


def _snake_cased(value: Any) -> Any:
    if isinstance(value, dict):
        return {re.sub(r"(?<!^)([A-Z])", r"_\1", key).lower(): _snake_cased(v) for key, v in value.items()}
    if isinstance(value, list):
        return [_snake_cased(v) for v in value]
    return value


class TestOrchestrateContracts(unittest.TestCase):
    def test_accepts_minimal_input(self) -> None:
        self.assertTrue(safe_parse(OrchestrateInput, {"task": "Test"}).ok)

    def test_accepts_full_input(self) -> None:
        result = safe_parse(
            OrchestrateInput,
            {"task": "Complex task", "context": {"key": "value"}, "maxIterations": 10, "timeout": 30000},
        )
        self.assertIsInstance(result, ParseSuccess)
        self.assertEqual(result.value.max_iterations, 10)
        self.assertEqual(result.value.context, {"key": "value"})

    def test_rejects_empty_task(self) -> None:
        result = safe_parse(OrchestrateInput, {"task": ""})
        self.assertIsInstance(result, ParseFailure)
        self.assertTrue(result.errors[0].startswith("$.task:"))

    def test_rejects_max_iterations_out_of_bounds(self) -> None:
        self.assertFalse(safe_parse(OrchestrateInput, {"task": "x", "maxIterations": 51}).ok)
        self.assertFalse(safe_parse(OrchestrateInput, {"task": "x", "maxIterations": 0}).ok)
        self.assertTrue(safe_parse(OrchestrateInput, {"task": "x", "maxIterations": 50}).ok)

    def test_rejects_timeout_out_of_bounds(self) -> None:
        self.assertFalse(safe_parse(OrchestrateInput, {"task": "x", "timeout": 700000}).ok)
        self.assertFalse(safe_parse(OrchestrateInput, {"task": "x", "timeout": 999}).ok)
        self.assertTrue(safe_parse(OrchestrateInput, {"task": "x", "timeout": 600000}).ok)

    def test_does_not_coerce_numeric_strings(self) -> None:
        self.assertFalse(safe_parse(OrchestrateInput, {"task": "x", "maxIterations": "5"}).ok)

    def test_rejects_fractional_iterations_and_timeout(self) -> None:
        self.assertFalse(safe_parse(OrchestrateInput, {"task": "x", "maxIterations": 1.5}).ok)
        self.assertFalse(safe_parse(OrchestrateInput, {"task": "x", "timeout": 1500.5}).ok)

    def test_snake_case_keys_are_not_wire_names(self) -> None:
        result = safe_parse(OrchestrateInput, {"task": "x", "max_iterations": 5})
        self.assertIsInstance(result, ParseSuccess)
        self.assertIsNone(result.value.max_iterations)

    def test_rejects_missing_task(self) -> None:
        result = safe_parse(OrchestrateInput, {"maxIterations": 1})
        self.assertIsInstance(result, ParseFailure)
        self.assertIn("$.task", result.message)

    def test_parses_success_response(self) -> None:
        result = safe_parse(OrchestrateResponse, mocks.ORCHESTRATE_SUCCESS)
        self.assertIsInstance(result, ParseSuccess)
        self.assertEqual(result.value.status, "completed")
        self.assertEqual(len(result.value.subtasks), 2)
        self.assertEqual(result.value.duration_ms, 5200)

    def test_parses_timeout_error_and_failed_responses(self) -> None:
        for payload, status in [
            (mocks.ORCHESTRATE_TIMEOUT, "timeout"),
            (mocks.ORCHESTRATE_ERROR, "error"),
            (mocks.ORCHESTRATE_FAILED, "failed"),
        ]:
            result = safe_parse(OrchestrateResponse, payload)
            self.assertIsInstance(result, ParseSuccess, payload)
            self.assertEqual(result.value.status, status)
        self.assertIn("not idle", safe_parse(OrchestrateResponse, mocks.ORCHESTRATE_ERROR).value.error)

    def test_rejects_unknown_status(self) -> None:
        self.assertFalse(safe_parse(OrchestrateResponse, mocks.clone(mocks.ORCHESTRATE_SUCCESS, status="running")).ok)

    def test_rejects_bad_subtask_status(self) -> None:
        payload = mocks.clone(mocks.ORCHESTRATE_SUCCESS, subtasks=[{"task": "a", "status": "pending"}])
        result = safe_parse(OrchestrateResponse, payload)
        self.assertIsInstance(result, ParseFailure)
        self.assertTrue(any(e.startswith("$.subtasks[0].status") for e in result.errors))

    def test_rejects_explicit_null_for_optional_field(self) -> None:
        self.assertFalse(safe_parse(OrchestrateResponse, mocks.clone(mocks.ORCHESTRATE_SUCCESS, output=None)).ok)

    def test_error_payload(self) -> None:
        self.assertTrue(safe_parse(OrchestrateError, {"error": "No adapter configured"}).ok)
        self.assertFalse(safe_parse(OrchestrateError, {}).ok)


class TestCatalogReviewContracts(unittest.TestCase):
    def test_input_actions(self) -> None:
        for action in ["list", "approve", "dismiss", "flush"]:
            self.assertTrue(safe_parse(CatalogReviewInput, {"action": action}).ok)
        self.assertFalse(safe_parse(CatalogReviewInput, {"action": "delete"}).ok)

    def test_input_optional_fields(self) -> None:
        result = safe_parse(
            CatalogReviewInput,
            {"action": "approve", "identifier": "arxiv:1", "topic": "routing", "createIssue": True},
        )
        self.assertIsInstance(result, ParseSuccess)
        self.assertTrue(result.value.create_issue)
        self.assertFalse(safe_parse(CatalogReviewInput, {"action": "approve", "createIssue": 1}).ok)

    def test_parses_all_recorded_responses(self) -> None:
        for payload in [
            mocks.CATALOG_LIST_EMPTY,
            mocks.CATALOG_LIST_WITH_ITEMS,
            mocks.CATALOG_APPROVE,
            mocks.CATALOG_DISMISS,
            mocks.CATALOG_FLUSH,
        ]:
            self.assertTrue(safe_parse(CatalogReviewResponse, payload).ok, payload)

    def test_list_with_items(self) -> None:
        value = safe_parse(CatalogReviewResponse, mocks.CATALOG_LIST_WITH_ITEMS).value
        self.assertEqual(value.data.count, 2)
        self.assertEqual(value.data.pending[0].discovered_at, "2026-02-13")

    def test_rejects_missing_success(self) -> None:
        payload = mocks.clone(mocks.CATALOG_LIST_EMPTY)
        del payload["success"]
        self.assertFalse(safe_parse(CatalogReviewResponse, payload).ok)

    def test_rejects_boolean_count(self) -> None:
        payload = mocks.clone(mocks.CATALOG_LIST_EMPTY, data={"pending": [], "count": True})
        result = safe_parse(CatalogReviewResponse, payload)
        self.assertIsInstance(result, ParseFailure)
        self.assertTrue(all(e.startswith("$.data.count") for e in result.errors))

    def test_rejects_pending_without_identifier(self) -> None:
        payload = mocks.clone(mocks.CATALOG_LIST_EMPTY, data={"pending": [{"title": "x"}]})
        self.assertFalse(safe_parse(CatalogReviewResponse, payload).ok)


class TestRegistryImportContracts(unittest.TestCase):
    def test_input(self) -> None:
        self.assertTrue(safe_parse(RegistryImportInput, {"provider": "openai", "modelId": "codex-5.3"}).ok)
        self.assertFalse(safe_parse(RegistryImportInput, {"provider": "mistral", "modelId": "x"}).ok)
        self.assertFalse(safe_parse(RegistryImportInput, {"provider": "google", "modelId": ""}).ok)

    def test_parses_all_providers(self) -> None:
        for payload in [mocks.IMPORT_ANTHROPIC, mocks.IMPORT_GOOGLE, mocks.IMPORT_OPENAI]:
            result = safe_parse(RegistryImportResponse, payload)
            self.assertIsInstance(result, ParseSuccess, payload)
            self.assertTrue(result.value.dry_run)
            self.assertFalse(result.value.persisted)

    def test_entry_fields_are_typed(self) -> None:
        entry = safe_parse(RegistryImportResponse, mocks.IMPORT_ANTHROPIC).value.entry
        self.assertEqual(entry.cli_model_name, "claude-opus-4-6")
        self.assertEqual(entry.pricing.input_per_1m, 0)
        self.assertEqual(entry.quality_scores.code_generation, 5)

    def test_rejects_snake_cased_payload(self) -> None:
        payload = _snake_cased(mocks.IMPORT_ANTHROPIC)
        result = safe_parse(RegistryImportResponse, payload)
        self.assertIsInstance(result, ParseFailure)
        self.assertIn("$.dryRun: Field required", result.errors)

    def test_rejects_incomplete_entry(self) -> None:
        payload = mocks.clone(mocks.IMPORT_ANTHROPIC)
        del payload["entry"]["cliName"]
        result = safe_parse(RegistryImportResponse, payload)
        self.assertIsInstance(result, ParseFailure)
        self.assertIn("$.entry.cliName: Field required", result.errors)

    def test_rejects_missing_warnings(self) -> None:
        payload = mocks.clone(mocks.IMPORT_OPENAI)
        del payload["warnings"]
        self.assertFalse(safe_parse(RegistryImportResponse, payload).ok)

    def test_parsed_value_is_frozen(self) -> None:
        value = safe_parse(RegistryImportResponse, mocks.IMPORT_GOOGLE).value
        with self.assertRaises(Exception):
            value.dry_run = False


class TestSchemaRegistry(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = SchemaRegistry()

    def test_lists_contracts(self) -> None:
        self.assertIn("registry_import.response", self.registry.names())
        self.assertEqual(len(self.registry.names()), 7)

    def test_validate_returns_rendered_errors(self) -> None:
        errors = self.registry.validate({"task": "x", "maxIterations": 51}, contract="orchestrate.input")
        self.assertEqual(len(errors), 1)
        self.assertTrue(errors[0].startswith("$.maxIterations:"))
        self.assertEqual(self.registry.validate(mocks.CATALOG_FLUSH, contract="research_catalog_review.response"), [])

    def test_unknown_contract(self) -> None:
        with self.assertRaises(KeyError):
            self.registry.model("nope.response")

    def test_json_schema_uses_wire_names(self) -> None:
        schema = self.registry.json_schema("registry_import.input")
        self.assertIn("modelId", schema["properties"])
        self.assertIn("provider", schema["required"])


if __name__ == "__main__":
    unittest.main()
