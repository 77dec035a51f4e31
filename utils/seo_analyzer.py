"""
SEO report generation for SEO Analyzer.

Sends extracted page signals to Claude and decodes the score and findings.
A malformed response is replaced by a fixed fallback so the report always
renders; it is never retried.
"""

import json
import logging

from pydantic import ValidationError

from analysis_prompt import get_seo_messages
from models import AnalysisResult, PageSignals
from utils.anthropic_client import call_anthropic_api_with_retry

logger = logging.getLogger(__name__)


class ModelResponseInvalid(ValueError):
    """Raised when the model response is not the expected JSON object"""

    pass


def decode_analysis(response_text: str) -> AnalysisResult:
    """
    Strictly decode a model response.

    Raises:
        ModelResponseInvalid: If the text is not a JSON object with an
            integer ``score`` in [0, 100] and a non-empty list of strings
            under ``analysis``
    """
    try:
        data = json.loads(response_text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ModelResponseInvalid(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ModelResponseInvalid("Analysis is not in expected format")

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise ModelResponseInvalid(str(e)) from e


def parse_analysis(response_text: str) -> AnalysisResult:
    """
    Decode a model response, substituting the fallback result for anything
    that is not exactly the expected JSON object (prose, markdown fences and
    non-standard JSON included).
    """
    try:
        return decode_analysis(response_text)
    except ModelResponseInvalid as e:
        logger.warning(f"⚠️  Invalid AI response, using fallback: {str(e)[:200]}")
        return AnalysisResult.fallback()


def generate_report(signals: PageSignals) -> AnalysisResult:
    """
    Score the page signals with Claude.

    Args:
        signals: PageSignals extracted from the page

    Returns:
        AnalysisResult (fallback if the response could not be decoded)

    Raises:
        anthropic.APIError: If the model call itself fails
    """
    system_prompt, messages = get_seo_messages(signals)
    response_text = call_anthropic_api_with_retry(system_prompt, messages)

    result = parse_analysis(response_text)
    logger.info(f"🤖 AI analysis complete: score={result.score}, findings={len(result.analysis)}")
    return result
