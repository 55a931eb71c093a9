"""Bedrock-backed landing-zone analysis and mission reporting.

This is the boundary to the AI service. Every failure is absorbed here:
landing analysis falls back to an abort verdict and report generation falls
back to a fixed message, so callers never see an exception.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.config import Config
from pydantic import ValidationError

from rakshak.analysis.models import LandingAnalysis, fallback_analysis
from rakshak.exceptions import ExternalServiceError, ProcessingError

if TYPE_CHECKING:
    from rakshak.config import DashboardSettings

logger = logging.getLogger(__name__)

_SERVICE_NAME = "bedrock"
_ANTHROPIC_VERSION = "bedrock-2023-05-31"
_MAX_TOKENS = 1024
_CONNECT_TIMEOUT_SECONDS = 3
_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

NO_REPORT_MESSAGE = "No report generated."
REPORT_FAILURE_MESSAGE = "Failed to generate report."

_SYSTEM_PROMPT = """You are the AI navigation brain of "Rakshak", a disaster relief drone.
Your job is to analyze images of potential landing zones.
Assess the safety for landing a drone carrying medical supplies.
Consider: Slope, Debris (water, rubble), Surface Stability, and overhead obstructions.
Return strict JSON."""

_ANALYSIS_PROMPT = """Analyze this terrain for a drone landing. Is it safe?

Return ONLY valid JSON:
{
  "safe": true,
  "score": 0-100,
  "hazards": ["hazard description"],
  "recommendation": "What the drone should do",
  "slope": "Flat | Moderate | Steep"
}"""


class LandingZoneAnalyzer:
    """Analyzes landing-zone images and writes mission reports via Bedrock."""

    def __init__(self, settings: DashboardSettings) -> None:
        """Initialize the analyzer.

        Args:
            settings: Ground station configuration with model and timeout.
        """
        self._model_id = settings.bedrock_model_id
        self._client = boto3.client(  # type: ignore[call-overload]
            "bedrock-runtime",
            region_name=settings.aws_region,
            config=Config(
                connect_timeout=_CONNECT_TIMEOUT_SECONDS,
                read_timeout=settings.ai_timeout_seconds,
                retries={"max_attempts": 1},
            ),
        )

    def analyze_landing_zone(self, image_bytes: bytes) -> LandingAnalysis:
        """Assess whether the pictured terrain is safe to land on.

        Args:
            image_bytes: Raw JPEG or PNG bytes from the drone camera.

        Returns:
            The model's verdict, or the abort verdict if anything fails.
        """
        try:
            content_text = self._invoke(
                [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": _media_type(image_bytes),
                            "data": base64.b64encode(image_bytes).decode("utf-8"),
                        },
                    },
                    {"type": "text", "text": _ANALYSIS_PROMPT},
                ]
            )
            analysis = self._parse_analysis(content_text)
        except Exception:
            logger.exception("AI landing analysis failed, using safe default")
            return fallback_analysis()

        logger.info(
            "Landing zone analyzed: safe=%s score=%s slope=%s",
            analysis.safe,
            analysis.score,
            analysis.slope,
        )
        return analysis

    def generate_mission_report(self, logs: str) -> str:
        """Write a brief tactical post-mission summary.

        Args:
            logs: Mission log text.

        Returns:
            The summary, or a fixed message when none could be produced.
        """
        prompt = (
            "Generate a brief, tactical post-mission summary based on these logs: "
            f"{logs}. Focus on efficiency and anomalies."
        )
        try:
            report = self._invoke([{"type": "text", "text": prompt}])
        except Exception:
            logger.exception("Mission report generation failed")
            return REPORT_FAILURE_MESSAGE

        return report.strip() or NO_REPORT_MESSAGE

    def _invoke(self, content: list[dict[str, Any]]) -> str:
        """Send one user message and return the text of the reply.

        Raises:
            ExternalServiceError: If the Bedrock call fails.
            ProcessingError: If the response envelope is malformed.
        """
        try:
            response = self._client.invoke_model(
                modelId=self._model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(
                    {
                        "anthropic_version": _ANTHROPIC_VERSION,
                        "max_tokens": _MAX_TOKENS,
                        "system": _SYSTEM_PROMPT,
                        "messages": [{"role": "user", "content": content}],
                    }
                ),
            )
        except Exception as error:
            raise ExternalServiceError(
                f"Bedrock invocation failed: {error}",
                service_name=_SERVICE_NAME,
            ) from error

        try:
            response_body = json.loads(response["body"].read())
            return str(response_body["content"][0]["text"])
        except (json.JSONDecodeError, KeyError, IndexError, TypeError) as error:
            raise ProcessingError(f"Malformed Bedrock response: {error}") from error

    def _parse_analysis(self, content_text: str) -> LandingAnalysis:
        """Parse the model's JSON verdict.

        Raises:
            ProcessingError: If the text is not a valid verdict.
        """
        json_text = content_text
        if "```json" in json_text:
            json_text = json_text.split("```json")[1].split("```")[0]
        elif "```" in json_text:
            json_text = json_text.split("```")[1].split("```")[0]

        if not json_text.strip():
            raise ProcessingError("No response from AI")

        try:
            return LandingAnalysis.model_validate(json.loads(json_text.strip()))
        except (json.JSONDecodeError, ValidationError) as error:
            raise ProcessingError(f"Failed to parse landing analysis: {error}") from error


def _media_type(image_bytes: bytes) -> str:
    if image_bytes.startswith(_PNG_SIGNATURE):
        return "image/png"
    return "image/jpeg"
