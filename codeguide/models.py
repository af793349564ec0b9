"""codeguide data models for selections, credentials and explanation outcomes."""

from dataclasses import dataclass, field
from typing import ClassVar, Union

from codeguide.config import INSTRUCTION, NO_EXPLANATION_TEXT

# ---------------------------------------------------------------------------
# Credential sources
# ---------------------------------------------------------------------------

PROJECT: str = "project"
GLOBAL: str = "global"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Selection:
    """Source text highlighted by the user.

    Attributes:
        text: The selected text, verbatim.
        origin: Where the text came from (file path or ``<stdin>``).
    """

    text: str
    origin: str = "<stdin>"

    def is_blank(self) -> bool:
        """Return ``True`` if the selection is empty or whitespace-only."""
        return not self.text.strip()


@dataclass(frozen=True)
class Credential:
    """The secret authorizing calls to the explanation service.

    Attributes:
        value: The API key. Hidden from ``repr()``.
        source: Which store supplied it, ``project`` or ``global``.
    """

    value: str = field(repr=False)
    source: str = GLOBAL

    def masked(self) -> str:
        """Return a display-safe form of the key."""
        return f"{self.value[:4]}…"


@dataclass(frozen=True)
class ExplanationRequest:
    """A single-turn prompt derived from a :class:`Selection`."""

    prompt: str

    @classmethod
    def from_selection(cls, selection: Selection) -> "ExplanationRequest":
        return cls(prompt=f"{INSTRUCTION}{selection.text}")

    def to_payload(self) -> dict:
        """Return the ``generateContent`` request body."""
        return {"contents": [{"parts": [{"text": self.prompt}]}]}


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class _Outcome:
    """Shared behaviour for every pipeline outcome."""

    kind: ClassVar[str] = ""

    @property
    def message(self) -> str:
        raise NotImplementedError

    def is_success(self) -> bool:
        return False

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary representation."""
        return {"kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class Success(_Outcome):
    """The service returned an explanation (possibly the sentinel text)."""

    kind: ClassVar[str] = "success"

    text: str

    @property
    def message(self) -> str:
        return self.text

    def is_success(self) -> bool:
        return True

    def is_sentinel(self) -> bool:
        """Return ``True`` for the degraded "no explanation" success."""
        return self.text == NO_EXPLANATION_TEXT


@dataclass(frozen=True)
class ApiError(_Outcome):
    """The service answered with a non-success HTTP status.

    ``detail`` is the raw response body, surfaced verbatim.
    """

    kind: ClassVar[str] = "api_error"

    detail: str
    status_code: int | None = None

    @property
    def message(self) -> str:
        return f"API Error: {self.detail}"

    def to_dict(self) -> dict:
        return {**super().to_dict(), "status_code": self.status_code}


@dataclass(frozen=True)
class MalformedResponse(_Outcome):
    """A 2xx body without an extractable explanation."""

    kind: ClassVar[str] = "malformed_response"

    reason: str

    @property
    def message(self) -> str:
        return f"Malformed response: {self.reason}"


@dataclass(frozen=True)
class TransportFailure(_Outcome):
    """Network, timeout or decoding fault while talking to the service."""

    kind: ClassVar[str] = "transport_failure"

    detail: str

    @property
    def message(self) -> str:
        return f"Error fetching explanation: {self.detail}"


@dataclass(frozen=True)
class NoSelection(_Outcome):
    """Nothing (or only whitespace) was selected."""

    kind: ClassVar[str] = "no_selection"

    @property
    def message(self) -> str:
        return "Please select some code first."


@dataclass(frozen=True)
class AbsentCredential(_Outcome):
    """No API key was found in any configuration source."""

    kind: ClassVar[str] = "absent_credential"

    @property
    def message(self) -> str:
        return (
            "Gemini API key not found in .codeguide/settings.json "
            "or the user settings."
        )


ExplanationResult = Union[Success, ApiError, MalformedResponse, TransportFailure]
Outcome = Union[ExplanationResult, NoSelection, AbsentCredential]
