"""Tests for the Bedrock landing-zone analyzer."""

import json
from io import BytesIO
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from rakshak.analysis.analyzer import (
    NO_REPORT_MESSAGE,
    REPORT_FAILURE_MESSAGE,
    LandingZoneAnalyzer,
)
from rakshak.analysis.models import SlopeClass
from rakshak.config import DashboardSettings
from rakshak.exceptions import ExternalServiceError, ProcessingError

_JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"
_PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png"


def _make_response(text: str) -> dict[str, Any]:
    body_content = json.dumps({"content": [{"text": text}]}).encode()
    return {"body": BytesIO(body_content)}


def _make_verdict(**overrides: Any) -> str:
    verdict = {
        "safe": True,
        "score": 85,
        "hazards": ["Loose gravel"],
        "recommendation": "Proceed with landing",
        "slope": "Flat",
    }
    verdict.update(overrides)
    return json.dumps(verdict)


def _build_analyzer(mock_boto3: MagicMock) -> tuple[LandingZoneAnalyzer, MagicMock]:
    mock_client = MagicMock()
    mock_boto3.client.return_value = mock_client
    return LandingZoneAnalyzer(DashboardSettings()), mock_client


class TestAnalyzeLandingZone:
    """Tests for analyze_landing_zone."""

    @patch("rakshak.analysis.analyzer.boto3")
    def test_creates_bedrock_runtime_client(self, mock_boto3: MagicMock) -> None:
        _build_analyzer(mock_boto3)
        args, kwargs = mock_boto3.client.call_args
        assert args == ("bedrock-runtime",)
        assert kwargs["region_name"] == "us-east-1"

    @patch("rakshak.analysis.analyzer.boto3")
    def test_safe_verdict(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response(_make_verdict())

        result = analyzer.analyze_landing_zone(_JPEG_BYTES)

        assert result.safe is True
        assert result.score == 85
        assert result.hazards == ["Loose gravel"]
        assert result.slope == SlopeClass.FLAT

    @patch("rakshak.analysis.analyzer.boto3")
    def test_request_body(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response(_make_verdict())

        analyzer.analyze_landing_zone(_PNG_BYTES)

        call_kwargs = mock_client.invoke_model.call_args.kwargs
        body = json.loads(call_kwargs["body"])
        assert call_kwargs["modelId"] == DashboardSettings().bedrock_model_id
        assert body["anthropic_version"] == "bedrock-2023-05-31"
        image_block = body["messages"][0]["content"][0]
        assert image_block["source"]["media_type"] == "image/png"

    @patch("rakshak.analysis.analyzer.boto3")
    def test_jpeg_media_type(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response(_make_verdict())

        analyzer.analyze_landing_zone(_JPEG_BYTES)

        body = json.loads(mock_client.invoke_model.call_args.kwargs["body"])
        assert body["messages"][0]["content"][0]["source"]["media_type"] == "image/jpeg"

    @patch("rakshak.analysis.analyzer.boto3")
    def test_json_in_code_block(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        wrapped = f"```json\n{_make_verdict(safe=False, score=20, slope='Steep incline')}\n```"
        mock_client.invoke_model.return_value = _make_response(wrapped)

        result = analyzer.analyze_landing_zone(_JPEG_BYTES)

        assert result.safe is False
        assert result.slope == SlopeClass.STEEP

    @patch("rakshak.analysis.analyzer.boto3")
    def test_service_failure_falls_back(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.side_effect = RuntimeError("Bedrock unavailable")

        result = analyzer.analyze_landing_zone(_JPEG_BYTES)

        assert result.safe is False
        assert result.score == 0
        assert result.hazards == ["AI Connection Failed", "Unknown Terrain"]
        assert result.recommendation == "Abort landing. Maintain altitude."

    @patch("rakshak.analysis.analyzer.boto3")
    def test_invalid_json_falls_back(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response("not json at all")

        result = analyzer.analyze_landing_zone(_JPEG_BYTES)

        assert result.safe is False
        assert "AI Connection Failed" in result.hazards

    @patch("rakshak.analysis.analyzer.boto3")
    def test_empty_reply_falls_back(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response("   ")

        result = analyzer.analyze_landing_zone(_JPEG_BYTES)

        assert result.score == 0


class TestGenerateMissionReport:
    """Tests for generate_mission_report."""

    @patch("rakshak.analysis.analyzer.boto3")
    def test_returns_stripped_report(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response("  Mission nominal.  \n")

        assert analyzer.generate_mission_report("BAT 91%") == "Mission nominal."

    @patch("rakshak.analysis.analyzer.boto3")
    def test_logs_are_included_in_prompt(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response("ok")

        analyzer.generate_mission_report("payload SALINE dropped")

        body = json.loads(mock_client.invoke_model.call_args.kwargs["body"])
        assert "payload SALINE dropped" in body["messages"][0]["content"][0]["text"]

    @patch("rakshak.analysis.analyzer.boto3")
    def test_empty_report(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = _make_response("")

        assert analyzer.generate_mission_report("logs") == NO_REPORT_MESSAGE

    @patch("rakshak.analysis.analyzer.boto3")
    def test_failure_message(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.side_effect = RuntimeError("throttled")

        assert analyzer.generate_mission_report("logs") == REPORT_FAILURE_MESSAGE


class TestInvoke:
    """Tests for the raw Bedrock call."""

    @patch("rakshak.analysis.analyzer.boto3")
    def test_wraps_client_errors(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.side_effect = RuntimeError("denied")

        with pytest.raises(ExternalServiceError) as exc_info:
            analyzer._invoke([{"type": "text", "text": "hi"}])
        assert exc_info.value.context["service_name"] == "bedrock"

    @patch("rakshak.analysis.analyzer.boto3")
    def test_malformed_envelope(self, mock_boto3: MagicMock) -> None:
        analyzer, mock_client = _build_analyzer(mock_boto3)
        mock_client.invoke_model.return_value = {"body": BytesIO(b'{"content": []}')}

        with pytest.raises(ProcessingError):
            analyzer._invoke([{"type": "text", "text": "hi"}])
