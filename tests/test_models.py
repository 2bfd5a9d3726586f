# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

import pytest
from pydantic import ValidationError

from sourcesync_mcp.models import (
    DEFAULT_CHUNK_CONFIG,
    ConnectorIngestConfig,
    DocumentFilterConfig,
    DocumentUpdateData,
    EmbeddingModelConfig,
    HttpMethod,
    HybridConfig,
    Pagination,
    RequestSpec,
    TextIngestConfig,
    UrlsIngestConfig,
)
from sourcesync_mcp.schemas import HybridSearchParams, SemanticSearchParams


class TestRequestSpec:
    def test_requires_credential(self) -> None:
        with pytest.raises(ValidationError):
            RequestSpec(method=HttpMethod.GET, path="/v1/namespaces", credential="")

    def test_frozen(self) -> None:
        spec = RequestSpec(method=HttpMethod.GET, path="/v1/namespaces", credential="key")
        with pytest.raises(ValidationError):
            spec.path = "/other"  # type: ignore[misc]


class TestWireModels:
    def test_camel_case_dump(self) -> None:
        config = TextIngestConfig(
            config={"text": "hello", "name": "greeting"},
            chunk_config={"chunk_size": 100, "chunk_overlap": 10},
        )
        assert config.to_api() == {
            "source": "TEXT",
            "config": {"text": "hello", "name": "greeting"},
            "chunkConfig": {"chunkSize": 100, "chunkOverlap": 10},
        }

    def test_accepts_camel_case_input(self) -> None:
        config = UrlsIngestConfig.model_validate(
            {"config": {"urls": ["https://a.example"], "scrapeOptions": {"includeSelectors": ["main"]}}}
        )
        assert config.config.scrape_options is not None
        assert config.config.scrape_options.include_selectors == ["main"]

    def test_urls_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError):
            UrlsIngestConfig(config={"urls": []})

    def test_default_chunk_config(self) -> None:
        assert DEFAULT_CHUNK_CONFIG.to_api() == {"chunkSize": 400, "chunkOverlap": 50}

    def test_connector_source_restricted(self) -> None:
        config = ConnectorIngestConfig(source="GOOGLE_DRIVE", config={"connection_id": "conn_1"})
        assert config.to_api()["config"] == {"connectionId": "conn_1"}
        with pytest.raises(ValidationError):
            ConnectorIngestConfig(source="TEXT", config={"connection_id": "conn_1"})

    def test_filter_enums_dump_as_values(self) -> None:
        config = DocumentFilterConfig(document_types=["URL"], document_ingestion_statuses=["FAILED"])
        assert config.to_api() == {"documentTypes": ["URL"], "documentIngestionStatuses": ["FAILED"]}

    def test_filter_rejects_unknown_enum(self) -> None:
        with pytest.raises(ValidationError):
            DocumentFilterConfig(document_types=["SPREADSHEET"])

    def test_metadata_operations_aliases(self) -> None:
        data = DocumentUpdateData.model_validate(
            {"$metadata": {"$set": {"team": "search"}, "$remove": {"tags": ["old"]}}}
        )
        assert data.to_api() == {"$metadata": {"$set": {"team": "search"}, "$remove": {"tags": ["old"]}}}

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_pagination_bounds(self, page_size: int) -> None:
        with pytest.raises(ValidationError):
            Pagination(page_size=page_size)


class TestEmbeddingModelConfig:
    def test_model_matches_provider(self) -> None:
        config = EmbeddingModelConfig(provider="OPENAI", model="text-embedding-3-small", api_key="sk")
        assert config.to_api() == {"provider": "OPENAI", "model": "text-embedding-3-small", "apiKey": "sk"}

    def test_model_from_other_provider_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            EmbeddingModelConfig(provider="COHERE", model="text-embedding-3-small", api_key="key")
        assert "not available" in str(exc_info.value)


class TestSearchParams:
    @pytest.mark.parametrize("top_k", [0, 101])
    def test_top_k_bounds(self, top_k: int) -> None:
        with pytest.raises(ValidationError):
            SemanticSearchParams(query="q", top_k=top_k)

    def test_score_threshold_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SemanticSearchParams(query="q", score_threshold=1.5)

    def test_query_required(self) -> None:
        with pytest.raises(ValidationError):
            SemanticSearchParams(query="")

    def test_hybrid_weights_bounds(self) -> None:
        with pytest.raises(ValidationError):
            HybridConfig(semantic_weight=1.2, keyword_weight=0.3)
        with pytest.raises(ValidationError):
            HybridSearchParams(query="q")
