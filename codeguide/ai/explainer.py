"""Gemini-powered code explainer.

Sends one ``generateContent`` request per selection and turns the reply
into an :data:`~codeguide.models.ExplanationResult`. Failures are returned
as values; nothing raised by the transport reaches the caller.
"""

import logging

import httpx

from codeguide.config import (
    API_BASE_URL,
    DEFAULT_MODEL,
    ENDPOINT_TEMPLATE,
    NO_EXPLANATION_TEXT,
)
from codeguide.models import (
    ApiError,
    Credential,
    ExplanationRequest,
    ExplanationResult,
    MalformedResponse,
    Selection,
    Success,
    TransportFailure,
)

logger = logging.getLogger(__name__)


def parse_response(data: object) -> Success | MalformedResponse:
    """Extract ``candidates[0].content.parts[0].text`` from a decoded body."""
    if not isinstance(data, dict):
        return MalformedResponse("response body is not an object")

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return MalformedResponse("no candidates")

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return MalformedResponse("candidate has no content")

    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return MalformedResponse("content has no parts")

    text = parts[0].get("text")
    if not isinstance(text, str) or not text:
        return MalformedResponse("first part has no text")

    return Success(text)


class ExplanationRequester:
    """Issue a single explanation request against the Gemini REST API.

    Args:
        model: Model id placed in the endpoint path.
        base_url: Scheme and host of the API.
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``.
        log: Logger receiving diagnostics. The API key is never logged.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = API_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        log: logging.Logger = logger,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._log = log

    @property
    def endpoint(self) -> str:
        return ENDPOINT_TEMPLATE.format(base=self.base_url, model=self.model)

    async def request(self, selection: Selection, credential: Credential) -> ExplanationResult:
        """Explain *selection*, authenticating with *credential*.

        No retries are attempted; the call is made at most once.
        """
        payload = ExplanationRequest.from_selection(selection).to_payload()
        self._log.info("Generating explanation using %s", self.model)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": credential.value},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )

                if not response.is_success:
                    self._log.info("Gemini returned HTTP %s", response.status_code)
                    return ApiError(response.text, response.status_code)

                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            self._log.info("Explanation request failed: %s", type(exc).__name__)
            return TransportFailure(str(exc) or type(exc).__name__)

        self._log.debug("Gemini raw response: %r", data)

        parsed = parse_response(data)
        if isinstance(parsed, MalformedResponse):
            self._log.info("No explanation in response: %s", parsed.reason)
            return Success(NO_EXPLANATION_TEXT)
        return parsed
