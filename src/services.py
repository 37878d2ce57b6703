"""
Services for the Adventure Planner Bot.

Handles the external call to the hosted LLM (any Ollama-compatible chat
endpoint) and turns its answer, or its failure, into something the bot
can show.
"""

import re
import logging

import httpx
import ollama

from config import (
    OLLAMA_HOST,
    OLLAMA_API_KEY,
    LLM_MODEL,
    LLM_TEMPERATURE,
    REQUEST_TIMEOUT
)
from errors import (
    EmptyResponse,
    QuotaExhausted,
    RateLimited,
    UpstreamError
)
from models import Adventure
from prompts import SYSTEM_PROMPT
from response_parser import parse_adventures

logger = logging.getLogger(__name__)

STATUS_TOO_MANY_REQUESTS = 429
STATUS_PAYMENT_REQUIRED = 402


def build_client() -> ollama.Client:
    """Create the LLM client from configuration."""
    headers = {}
    if OLLAMA_API_KEY:
        headers["Authorization"] = f"Bearer {OLLAMA_API_KEY}"
    return ollama.Client(
        host=OLLAMA_HOST,
        headers=headers,
        timeout=REQUEST_TIMEOUT
    )


class AdventureRequestClient:
    """
    Asks the model for adventures, one call per request.

    There is no retry, caching or de-duplication here: whether to try
    again is up to the user.
    """

    def __init__(
        self,
        client=None,
        model: str = LLM_MODEL,
        temperature: float = LLM_TEMPERATURE
    ):
        self.client = client if client is not None else build_client()
        self.model = model
        self.temperature = temperature

    def request_adventures(self, prompt_text: str) -> list[Adventure]:
        """
        Generate adventures for a composed prompt.

        Args:
            prompt_text: Output of compose_prompt()

        Returns:
            List of Adventure objects (may be empty)

        Raises:
            RateLimited: service returned 429
            QuotaExhausted: service returned 402
            UpstreamError: any other failure to get an answer
            EmptyResponse: the answer had no content
            MalformedResponse: the content is not a valid adventures batch
        """
        logger.info(f"Requesting adventures for: {prompt_text[:60]}...")

        try:
            response = self.client.chat(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt_text}
                ],
                options={"temperature": self.temperature}
            )
        except ollama.ResponseError as e:
            logger.error(f"LLM error: {e.status_code} {e.error}")
            if e.status_code == STATUS_TOO_MANY_REQUESTS:
                raise RateLimited(e.error) from e
            if e.status_code == STATUS_PAYMENT_REQUIRED:
                raise QuotaExhausted(e.error) from e
            raise UpstreamError(f"LLM error: {e.status_code}") from e
        except httpx.TimeoutException as e:
            logger.error(f"LLM request timed out after {REQUEST_TIMEOUT}s")
            raise UpstreamError("Request timed out") from e
        except (ConnectionError, httpx.HTTPError) as e:
            logger.error(f"Could not reach LLM: {e}")
            raise UpstreamError(str(e)) from e
        except Exception as e:
            logger.error(f"Error requesting adventures: {e}")
            raise UpstreamError(str(e)) from e

        try:
            content = response["message"]["content"]
        except (KeyError, TypeError):
            content = None

        if not content:
            raise EmptyResponse("No response from AI")

        content = re.sub(
            r'<think>.*?</think>', '', content, flags=re.DOTALL
        ).strip()
        if not content:
            raise EmptyResponse("No response from AI")

        logger.debug(f"LLM response: {content}")

        adventures = parse_adventures(content)
        logger.info(f"Received {len(adventures)} adventures")
        return adventures
