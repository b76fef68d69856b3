"""Tests for the dispatcher: validation tier vs tool-failure tier, per-tool flow."""

from __future__ import annotations

import base64
import json
import logging

import pytest

from core.dispatcher import ERROR_PREFIX, UNKNOWN_ERROR_MESSAGE, error_response
from core.errors import InvalidArgumentsError, ToolNotFoundError
from core.handlers import DEFAULT_FILE_QUERY, DEFAULT_FILES_QUERY, SEARCH_RESULTS_LABEL
from core.models import ToolResponse
from tests.helpers import GENERATE_URL, gemini_body


def sent_payload(route) -> dict:
    return json.loads(route.calls[0].request.content)


class TestProtocolErrors:
    """Malformed calls are rejected before any handler or HTTP work."""

    @pytest.mark.respx(assert_all_called=False)
    async def test_unknown_tool(self, dispatcher, respx_mock):
        route = respx_mock.post(GENERATE_URL)
        with pytest.raises(ToolNotFoundError, match="Unknown tool: frobnicate"):
            await dispatcher.dispatch("frobnicate", {"query": "x"})
        assert not route.called

    @pytest.mark.parametrize(
        "name, arguments",
        [
            ("search", {}),
            ("search", None),
            ("search", {"query": 123}),
            ("analyze_file", {"query": "what is it"}),
            ("analyze_file", {"file_path": ["a.png"]}),
            ("analyze_file", {"file_path": "a.png", "query": 5}),
            ("analyze_files", {"file_paths": "a.png"}),
            ("analyze_files", {"file_paths": []}),
            ("analyze_files", {"file_paths": ["a.png", 7]}),
            ("analyze_files", {"query": "compare"}),
        ],
    )
    @pytest.mark.respx(assert_all_called=False)
    async def test_invalid_arguments(self, dispatcher, respx_mock, name, arguments):
        route = respx_mock.post(GENERATE_URL)
        with pytest.raises(InvalidArgumentsError) as exc_info:
            await dispatcher.dispatch(name, arguments)
        assert exc_info.value.tool_name == name
        assert not route.called

    async def test_missing_file_is_not_a_protocol_error(self, dispatcher, tmp_path):
        response = await dispatcher.dispatch("analyze_file", {"file_path": str(tmp_path / "missing.png")})
        assert response.is_error
        assert response.text.startswith(ERROR_PREFIX)

    async def test_file_failure_logged_under_tool_name(self, dispatcher, tmp_path, caplog):
        caplog.set_level(logging.ERROR, logger="core.dispatcher")
        await dispatcher.dispatch("analyze_file", {"file_path": str(tmp_path / "missing.png")})
        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 1
        assert messages[0].startswith("analyze_file failed: ")
        assert "Gemini API" not in messages[0]


class TestSearch:
    async def test_appends_search_results(self, dispatcher, respx_mock):
        respx_mock.post(GENERATE_URL).respond(200, json=gemini_body("答え", rendered_content="<div>結果</div>"))
        response = await dispatcher.dispatch("search", {"query": "最新ニュース"})
        assert response == ToolResponse(text="答え" + SEARCH_RESULTS_LABEL + "<div>結果</div>")
        assert SEARCH_RESULTS_LABEL == "\n\n検索結果:\n"

    async def test_empty_snippet_returns_answer_only(self, dispatcher, respx_mock):
        respx_mock.post(GENERATE_URL).respond(200, json=gemini_body("答え", rendered_content=""))
        response = await dispatcher.dispatch("search", {"query": "q"})
        assert response.text == "答え"
        assert not response.is_error

    async def test_payload_enables_google_search(self, dispatcher, respx_mock):
        route = respx_mock.post(GENERATE_URL).respond(200, json=gemini_body())
        await dispatcher.dispatch("search", {"query": "q"})
        assert sent_payload(route) == {
            "contents": [{"role": "user", "parts": [{"text": "q"}]}],
            "tools": [{"googleSearch": {}}],
        }

    async def test_http_500_becomes_error_payload(self, dispatcher, respx_mock):
        respx_mock.post(GENERATE_URL).respond(500)
        response = await dispatcher.dispatch("search", {"query": "q"})
        assert response.is_error
        assert response.text == "エラーが発生しました: Request failed with status code 500"
        assert response.to_dict() == {
            "content": [{"type": "text", "text": response.text}],
            "isError": True,
        }

    async def test_malformed_body_becomes_error_payload(self, dispatcher, respx_mock):
        respx_mock.post(GENERATE_URL).respond(200, json={"candidates": []})
        response = await dispatcher.dispatch("search", {"query": "q"})
        assert response.is_error
        assert len(response.content) == 1


class TestAnalyzeFile:
    async def test_pdf_part_then_query(self, dispatcher, respx_mock, sample_files):
        route = respx_mock.post(GENERATE_URL).respond(200, json=gemini_body("PDFの要約"))
        response = await dispatcher.dispatch("analyze_file", {"file_path": sample_files["pdf"], "query": "要約"})

        assert response.text == "PDFの要約"
        payload = sent_payload(route)
        assert "tools" not in payload
        assert payload["contents"][0]["parts"] == [
            {"inlineData": {
                "mimeType": "application/pdf",
                "data": base64.b64encode(b"%PDF-1.4\n%%EOF").decode(),
            }},
            {"text": "要約"},
        ]

    async def test_markdown_is_sent_as_image(self, dispatcher, respx_mock, sample_files):
        route = respx_mock.post(GENERATE_URL).respond(200, json=gemini_body())
        await dispatcher.dispatch("analyze_file", {"file_path": sample_files["md"]})
        first_part = sent_payload(route)["contents"][0]["parts"][0]
        assert first_part["inlineData"]["mimeType"] == "image/jpeg"

    async def test_default_query(self, dispatcher, respx_mock, sample_files):
        route = respx_mock.post(GENERATE_URL).respond(200, json=gemini_body())
        await dispatcher.dispatch("analyze_file", {"file_path": sample_files["png"]})
        assert sent_payload(route)["contents"][0]["parts"][-1] == {"text": DEFAULT_FILE_QUERY}


class TestAnalyzeFiles:
    async def test_mixed_files_in_input_order(self, dispatcher, respx_mock, sample_files):
        route = respx_mock.post(GENERATE_URL).respond(200, json=gemini_body("一致しています"))
        response = await dispatcher.dispatch(
            "analyze_files",
            {"file_paths": [sample_files["md"], sample_files["png"]], "query": "compare"},
        )

        assert response == ToolResponse(text="一致しています")
        assert sent_payload(route)["contents"][0]["parts"] == [
            {"text": "Hello"},
            {"inlineData": {
                "mimeType": "image/jpeg",
                "data": base64.b64encode(b"\x89PNG\r\n\x1a\n").decode(),
            }},
            {"text": "compare"},
        ]

    async def test_default_query(self, dispatcher, respx_mock, sample_files):
        route = respx_mock.post(GENERATE_URL).respond(200, json=gemini_body())
        await dispatcher.dispatch("analyze_files", {"file_paths": [sample_files["pdf"]]})
        assert sent_payload(route)["contents"][0]["parts"][-1] == {"text": DEFAULT_FILES_QUERY}

    @pytest.mark.respx(assert_all_called=False)
    async def test_one_missing_file_fails_everything(self, dispatcher, respx_mock, sample_files, tmp_path):
        route = respx_mock.post(GENERATE_URL)
        response = await dispatcher.dispatch(
            "analyze_files",
            {"file_paths": [sample_files["md"], str(tmp_path / "gone.pdf")]},
        )
        assert response.is_error
        assert "gone.pdf" in response.text
        assert not route.called


class TestErrorResponse:
    def test_uses_exception_message(self):
        assert error_response(RuntimeError("boom")).text == ERROR_PREFIX + "boom"

    def test_empty_message_falls_back(self):
        assert error_response(RuntimeError()).text == ERROR_PREFIX + UNKNOWN_ERROR_MESSAGE
