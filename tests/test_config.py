"""
Tests for configuration, component wiring and the helper scripts.
"""

import json
import logging
import threading
import time
import pytest
from unittest.mock import patch, MagicMock

from qdrant_client import QdrantClient

from pdf_query_quest.api import dependencies
from pdf_query_quest.config.settings import Settings
from pdf_query_quest.config.utils import read_config
from pdf_query_quest.services.query_service import QueryService
from pdf_query_quest.utils.logging import LOG_FORMAT, setup_logger
from scripts import ask_pdf, create_qdrant_collection


def test_settings_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("CHAT_MODEL", "gpt-4o")
    monkeypatch.setenv("ENABLE_EMBEDDINGS", "true")
    monkeypatch.setenv("RETRIEVAL_TOP_K", "5")

    settings = Settings()

    assert settings.chat_model == "gpt-4o"
    assert settings.enable_embeddings is True
    assert settings.retrieval_top_k == 5


def test_settings_enabled_stages():
    settings = Settings(enable_embeddings=True, enable_vector_store=False)

    assert settings.enabled_stages() == {"embeddings": True, "vector_store": False, "completion": True}


def test_settings_cors_origin_list():
    settings = Settings(cors_origins="http://localhost:3000, https://example.com,")

    assert settings.cors_origin_list == ["http://localhost:3000", "https://example.com"]


def test_read_yaml_config(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("system_prompt: hello\nnested:\n  key: 1\n")

    assert read_config(str(path)) == {"system_prompt": "hello", "nested": {"key": 1}}


def test_read_json_config(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"a": 1}))

    assert read_config(str(path)) == {"a": 1}


@pytest.mark.parametrize("filename, content", [
    ("broken.yaml", "key: [unclosed"),
    ("broken.json", "{not json"),
    ("settings.toml", "a = 1"),
    ("list.yaml", "- one\n- two\n"),
])
def test_read_config_returns_empty_on_bad_files(tmp_path, filename, content):
    path = tmp_path / filename
    path.write_text(content)

    assert read_config(str(path)) == {}


def test_read_config_missing_file(tmp_path):
    assert read_config(str(tmp_path / "nope.yaml")) == {}


def test_read_config_extension_is_case_insensitive(tmp_path):
    path = tmp_path / "PROMPTS.YML"
    path.write_text("system_prompt: hi\n")

    assert read_config(str(path)) == {"system_prompt": "hi"}


def test_setup_logger_replaces_handlers(tmp_path):
    log_file = tmp_path / "logs" / "service.log"

    setup_logger("pdf_query_quest.test_setup", level="debug")
    logger = setup_logger("pdf_query_quest.test_setup", level="warning", log_file=str(log_file))
    logger.warning("written to file")

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 2
    assert any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)
    for handler in logger.handlers:
        handler.flush()
        assert handler.formatter._fmt == LOG_FORMAT
    assert "[WARNING] [pdf_query_quest.test_setup] - written to file" in log_file.read_text()

    setup_logger("pdf_query_quest.test_setup", log_to_console=False)
    assert logger.handlers == []


@pytest.fixture
def clean_components():
    dependencies.reset_components()
    yield
    dependencies.reset_components()


def test_query_service_completion_only(clean_components):
    settings = Settings(openai_api_key="sk-test", enable_embeddings=False, enable_vector_store=False)

    with patch.object(dependencies, "settings", settings), \
         patch("pdf_query_quest.core.llm.OpenAI") as mock_openai:
        service = dependencies.get_query_service()

        assert isinstance(service, QueryService)
        assert service.embedder is None
        assert service.vector_store is None
        assert dependencies.get_query_service() is service
        mock_openai.assert_called_once()


def test_query_service_with_all_stages(clean_components, embedding_function):
    settings = Settings(
        openai_api_key="sk-test",
        enable_embeddings=True,
        enable_vector_store=True,
        embedding_dimension=8,
        qdrant_collection="wired_collection",
        retrieval_top_k=2,
        default_document_id="upload",
    )

    with patch.object(dependencies, "settings", settings), \
         patch("pdf_query_quest.core.llm.OpenAI"), \
         patch.object(dependencies, "build_embedding_function", return_value=embedding_function), \
         patch.object(dependencies, "QdrantClient", return_value=QdrantClient(location=":memory:")):
        service = dependencies.get_query_service()

    assert service.embedder.dimension == 8
    assert service.vector_store.collection_name == "wired_collection"
    assert service.top_k == 2
    assert service.default_document_id == "upload"


def test_vector_store_without_embeddings_is_rejected(clean_components):
    settings = Settings(openai_api_key="sk-test", enable_embeddings=False, enable_vector_store=True)

    with patch.object(dependencies, "settings", settings), \
         patch("pdf_query_quest.core.llm.OpenAI"):
        with pytest.raises(ValueError):
            dependencies.get_query_service()


@pytest.mark.parametrize("request_timeout, expected", [
    (0.5, 1),
    (2.6, 3),
    (30, 30),
])
def test_qdrant_timeout_rounds_to_whole_seconds(clean_components, request_timeout, expected):
    settings = Settings(enable_embeddings=True, enable_vector_store=True, request_timeout=request_timeout)

    with patch.object(dependencies, "settings", settings), \
         patch.object(dependencies, "QdrantClient") as mock_client, \
         patch.object(dependencies, "QdrantStore"):
        dependencies.get_vector_store()

    mock_client.assert_called_once_with(url=settings.qdrant_url, api_key=settings.qdrant_api_key, timeout=expected)


def test_concurrent_first_requests_build_one_service(clean_components):
    settings = Settings(openai_api_key="sk-test", enable_embeddings=False, enable_vector_store=False)
    started = threading.Barrier(4)
    results = []

    def slow_service(**kwargs):
        time.sleep(0.05)
        return MagicMock()

    def first_request():
        started.wait()
        results.append(dependencies.get_query_service())

    with patch.object(dependencies, "settings", settings), \
         patch("pdf_query_quest.core.llm.OpenAI"), \
         patch.object(dependencies, "QueryService", side_effect=slow_service) as mock_service:
        threads = [threading.Thread(target=first_request) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert mock_service.call_count == 1
    assert len(results) == 4
    assert all(result is results[0] for result in results)


def test_create_qdrant_collection_script():
    client = QdrantClient(location=":memory:")

    create_qdrant_collection.create_collection(client, "script_collection", 16)

    assert client.get_collection("script_collection").config.params.vectors.size == 16


def test_ask_pdf_prints_answer(tmp_path, capsys):
    document = tmp_path / "resume.txt"
    document.write_text("Jane Doe\njane@example.com\n")
    response = MagicMock(status_code=200)
    response.json.return_value = {"answer": '{"answer": "jane@example.com"}'}

    with patch.object(ask_pdf, "ask_question", return_value=response) as mock_ask:
        exit_code = ask_pdf.main([str(document), "What is the email?", "--document-id", "jane"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == '{"answer": "jane@example.com"}'
    mock_ask.assert_called_once_with(
        resume="Jane Doe\njane@example.com\n",
        question="What is the email?",
        document_id="jane",
        base_url="http://localhost:8000",
        timeout=120.0,
    )


def test_ask_pdf_reports_error(tmp_path, capsys):
    document = tmp_path / "resume.txt"
    document.write_text("text")
    response = MagicMock(status_code=400)
    response.json.return_value = {"error": "Missing question or resume content"}

    with patch.object(ask_pdf, "ask_question", return_value=response):
        exit_code = ask_pdf.main([str(document), ""])

    assert exit_code == 1
    assert "Missing question or resume content" in capsys.readouterr().err
