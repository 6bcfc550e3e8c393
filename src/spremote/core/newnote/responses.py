"""Response classification.

The device answers with free text whose meaning sits at fixed offsets.
Offsets below are relative to the decoded response with the status-echo
prefix already removed.
"""

from __future__ import annotations

from dataclasses import dataclass

from spremote.core.errors import ProtocolError, UnknownResponseCode

STATUS_CODE_OFFSET = 6
STATUS_CODE_LENGTH = 3
STATUS_TEXT_OFFSET = 9
POSITIVE_TEXT_LENGTH = 16
POS_IDENTIFICATION_OFFSET = 26

SUCCESS_CODE = "000"
TERMINAL_READY = "INIT OK"
UNKNOWN_ERROR = "unknown error"

NEGATIVE_RESPONSES: dict[int, str] = {
    1: "invalid length",
    2: "invalid command",
    3: "invalid version",
    4: "out of context",
    5: "operation cancelled",
    6: "out of service",
    7: "register the terminal",
    8: "invalid model",
    12: "generic error",
}

POSITIVE_RESPONSES: dict[str, str] = {
    "EM SERVIÇO": "in service",
    "PAGAM. EFECTUADO": "payment successful",
    "DEVOL EFECTUADA": "refund successful",
    "VERIF ASSINATURA": "payment successful — verify signature",
    "IDENTIF. CLIENTE": "payment successful — identify client",
    "IDENTIF+ASSINAT.": "payment successful — verify signature and identify client",
}


@dataclass(frozen=True)
class Classification:
    """Outcome of inspecting one response."""

    success: bool
    code: str
    description: str | None = None


def _require(raw: str, length: int, what: str) -> None:
    if len(raw) < length:
        raise ProtocolError(
            f"response too short for {what}: need {length} characters, got {len(raw)}"
        )


def status_code(raw: str) -> str:
    """Return the 3-character status code field."""
    end = STATUS_CODE_OFFSET + STATUS_CODE_LENGTH
    _require(raw, end, "status code")
    return raw[STATUS_CODE_OFFSET:end]


def describe_negative(raw: str) -> str:
    """Map the failure code in *raw* to its description.

    Raises UnknownResponseCode when the code is not numeric or not in
    NEGATIVE_RESPONSES.
    """
    code = status_code(raw)
    if not code.isdigit():
        raise UnknownResponseCode(raw)
    description = NEGATIVE_RESPONSES.get(int(code))
    if description is None:
        raise UnknownResponseCode(raw)
    return description


def describe_positive(raw: str) -> str | None:
    """Return the sub-status text of a successful response, if known."""
    label = raw[STATUS_TEXT_OFFSET : STATUS_TEXT_OFFSET + POSITIVE_TEXT_LENGTH]
    return POSITIVE_RESPONSES.get(label.rstrip())


def _classify(raw: str, success: bool) -> Classification:
    code = status_code(raw)
    if success:
        return Classification(True, code, describe_positive(raw))
    return Classification(False, code, describe_negative(raw))


def classify(raw: str) -> Classification:
    """Classify an Open/Close/Purchase/Refund response."""
    return _classify(raw, status_code(raw) == SUCCESS_CODE)


def classify_terminal_status(raw: str) -> Classification:
    """Classify a TerminalStatus response (ready marker at offset 9)."""
    _require(raw, STATUS_TEXT_OFFSET, "terminal status")
    return _classify(raw, raw[STATUS_TEXT_OFFSET:].startswith(TERMINAL_READY))


def pos_identification(raw: str) -> str:
    """Return the POS identification carried by a TerminalStatus reply."""
    _require(raw, POS_IDENTIFICATION_OFFSET, "POS identification")
    return raw[POS_IDENTIFICATION_OFFSET:]
