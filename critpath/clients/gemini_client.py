"""
Gemini Python SDK client for task diagram review.

Uses the google-genai library to send a rendered dependency diagram and a
critical path summary to a multimodal model and return its commentary.
Includes exponential backoff for rate limit handling. Failures are reported
in the returned GeminiResponse, never raised to the caller.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from google import genai
from google.genai import types

from critpath.config.settings import settings

_logger = logging.getLogger(__name__)

# Retry configuration for rate limiting
RETRY_MAX_ATTEMPTS = 5
RETRY_BASE_DELAY_SECONDS = 1.0
RETRY_MAX_DELAY_SECONDS = 60.0
RETRY_EXPONENTIAL_BASE = 2

# Error patterns that indicate rate limiting (should retry with backoff)
RETRYABLE_ERROR_PATTERNS = [
    "429",
    "resource_exhausted",
    "rate limit",
    "rate_limit",
    "quota exceeded",
    "quota_exceeded",
    "too many requests",
    "overloaded",
    "temporarily unavailable",
    "503",
    "500",
    "internal error",
]

REVIEW_PROMPT = """You are reviewing a project task dependency diagram.
Tasks on the critical path are highlighted in red.

Critical path summary:
---
{summary}
---

Comment on the schedule: which tasks drive the total duration, where
parallel work could shorten it, and any dependency links that look
suspicious. Keep the answer short and concrete."""

T = TypeVar('T')


def _is_retryable_api_error(error: Exception) -> bool:
    """
    Check if an API error is retryable (rate limit, temporary failure, etc.).

    Args:
        error: The exception raised by the API call

    Returns:
        True if the error indicates a temporary/rate limit issue that should be retried
    """
    error_str = str(error).lower()
    return any(pattern in error_str for pattern in RETRYABLE_ERROR_PATTERNS)


def _calculate_backoff_delay(attempt: int) -> float:
    """
    Calculate exponential backoff delay with jitter.

    Args:
        attempt: Current attempt number (0-indexed)

    Returns:
        Delay in seconds before next retry
    """
    delay = RETRY_BASE_DELAY_SECONDS * (RETRY_EXPONENTIAL_BASE ** attempt)

    # Add jitter (random 0-25% of delay) to prevent thundering herd
    delay += delay * random.uniform(0, 0.25)

    return min(delay, RETRY_MAX_DELAY_SECONDS)


def _call_with_retry(
    api_call: Callable[[], T],
    operation_name: str = "API call",
) -> T:
    """
    Execute an API call with exponential backoff retry on rate limit errors.

    Args:
        api_call: A callable that makes the API request
        operation_name: Description of the operation for logging

    Returns:
        The result of the successful API call

    Raises:
        Exception: The last exception if all retries are exhausted
    """
    last_exception = None

    for attempt in range(RETRY_MAX_ATTEMPTS):
        try:
            return api_call()
        except Exception as e:
            last_exception = e

            if not _is_retryable_api_error(e):
                raise

            if attempt < RETRY_MAX_ATTEMPTS - 1:
                delay = _calculate_backoff_delay(attempt)
                _logger.warning(
                    f"Rate limit hit on {operation_name} (attempt {attempt + 1}/{RETRY_MAX_ATTEMPTS}). "
                    f"Retrying in {delay:.1f}s. Error: {str(e)[:100]}"
                )
                time.sleep(delay)
            else:
                _logger.error(
                    f"Max retries ({RETRY_MAX_ATTEMPTS}) exhausted for {operation_name}. "
                    f"Last error: {str(e)[:200]}"
                )

    raise last_exception


@dataclass
class GeminiResponse:
    """Response from Gemini API."""
    success: bool
    result: Optional[Any]
    error: Optional[str]
    model: str
    usage: Optional[dict] = None


def _get_client() -> genai.Client:
    """Get authenticated Gemini client."""
    api_key = settings.GEMINI_API_KEY
    if not api_key:
        raise ValueError("No API key found. Set GEMINI_API_KEY or GOOGLE_API_KEY in .env")
    return genai.Client(api_key=api_key)


def _extract_usage(response) -> Optional[dict]:
    if not hasattr(response, 'usage_metadata') or response.usage_metadata is None:
        return None
    return {
        "prompt_tokens": getattr(response.usage_metadata, 'prompt_token_count', None),
        "output_tokens": getattr(response.usage_metadata, 'candidates_token_count', None),
        "total_tokens": getattr(response.usage_metadata, 'total_token_count', None),
    }


def review_diagram(
    image_png: bytes,
    summary: str,
    model: Optional[str] = None,
) -> GeminiResponse:
    """
    Ask Gemini to comment on a rendered task diagram.

    Args:
        image_png: PNG bytes of the dependency diagram
        summary: Text summary of the critical path
        model: Gemini model to use (default: settings.GEMINI_MODEL)

    Returns:
        GeminiResponse with free-form commentary in result
    """
    model = model or settings.GEMINI_MODEL

    try:
        client = _get_client()
    except ValueError as e:
        return GeminiResponse(success=False, result=None, error=str(e), model=model)
    except Exception as e:
        return GeminiResponse(
            success=False,
            result=None,
            error=f"Failed to initialize Gemini client: {e}",
            model=model,
        )

    try:
        image_part = types.Part.from_bytes(data=image_png, mime_type="image/png")
        prompt = REVIEW_PROMPT.format(summary=summary)

        response = _call_with_retry(
            lambda: client.models.generate_content(
                model=model,
                contents=[image_part, prompt],
            ),
            operation_name="diagram review",
        )

        return GeminiResponse(
            success=True,
            result=response.text,
            error=None,
            model=model,
            usage=_extract_usage(response),
        )

    except Exception as e:
        return GeminiResponse(success=False, result=None, error=str(e), model=model)
