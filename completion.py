# completion.py

import logging
from typing import Optional

import httpx
from openai import APIStatusError, OpenAI, OpenAIError

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Single-turn client for an OpenAI-compatible chat completion API.

    `complete` never raises for upstream problems: HTTP errors, network
    failures, timeouts and malformed payloads come back as a readable
    message, which the caller stores as the assistant's response.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self.model = model
        self.client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    def complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
            return response.choices[0].message.content or ""
        except APIStatusError as e:
            logger.warning("Completion API returned %s", e.status_code)
            return f"Error from AI: {e.status_code} - {e.response.text}"
        except (OpenAIError, IndexError, AttributeError, TypeError, ValueError) as e:
            logger.exception("Completion API call failed")
            return f"Sorry, I am having trouble connecting to the AI right now. ({e})"
