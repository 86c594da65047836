"""
Company advisor for Section 2

Asks Gemini which company a CVE hurts most and where to send the coffee.
"""

from typing import Optional

import google.genai

from .config import OutreachConfig
from .errors import ModelCallError
from .prompts import build_prompt
from .responses import StructuredResponse, parse_response


class CompanyAdvisor:
    """
    Single-shot LLM wrapper.

    Workflow:
    1. Render the company prompt around a CVE description
    2. Send it to the model in one request (no retries, no chat history)
    3. Parse the XML reply into a StructuredResponse
    """

    def __init__(self, client=None, model: Optional[str] = None):
        """Initialize with the Gemini API or an injected test client."""
        self.model = model or OutreachConfig.GEMINI_MODEL

        if client is not None:
            self.client = client
        else:
            OutreachConfig.validate(require_commerce=False)
            self.client = google.genai.Client(api_key=OutreachConfig.GEMINI_API_KEY)

        self.request_count = 0

    def complete(self, prompt: str) -> str:
        """Send ``prompt`` to the model and return the raw reply text."""
        self.request_count += 1
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except Exception as exc:
            raise ModelCallError(f"model request failed: {exc}") from exc

        text = (response.text or "").strip()
        if not text:
            raise ModelCallError("model returned no text")
        return text

    def identify_company(self, description: str) -> StructuredResponse:
        """
        Identify the most affected company for a CVE description.

        Raises:
            ModelCallError: If the request fails.
            MalformedResponse: If the reply does not parse.
        """
        raw_output = self.complete(build_prompt(description))
        return parse_response(raw_output)
