"""Receipt recovery from purchase responses.

A successful purchase reply embeds the terminal id, the transaction
timestamp and, when the receipt was not printed on the device, the
merchant and client copies as free text. Devices in the field have
produced several layouts over time:

* copies separated by a single-byte column delimiter (\\x01 for 20
  columns, \\x02 for 40 columns, \\x03 on some firmware);
* older firmware that emits one run of text with the copies separated
  only by their "CÓPIA COMERCIANTE" / "CÓPIA CLIENTE" headers;
* device-printed receipts, where only a compact id/date/time block is
  returned.

Header extraction and the split strategies are pure functions. The
strategies in RECEIPT_STRATEGIES are tried in order until one returns
a ReceiptData. Any ReceiptParseError is absorbed here and degrades to
an empty receipt: recovering receipt text never fails a purchase.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from spremote.core.errors import ReceiptParseError

lg = logging.getLogger(__name__)

UNKNOWN_TIMESTAMP = datetime.min
DEFAULT_WIDTH = 20

# -- header patterns --

ECR_HEADER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Ident\. TPA:\s*(\d+)\s*(\d{2}-\d{2}-\d{2})\s*(\d{2}:\d{2}:\d{2})"),
    re.compile(
        r"Terminal Pagamento Automático:\s*(\d+)\s*(\d{2}-\d{2}-\d{2})\s*(\d{2}:\d{2}:\d{2})"
    ),
)
ECR_TIMESTAMP_FORMAT = "%y-%m-%d %H:%M:%S"

PRINTED_TERMINAL_ID = re.compile(r"[\x1c\x08](\d{8})")
PRINTED_DATE = re.compile(r"(\d{8})")
PRINTED_TIME = re.compile(r"(\d{6})")
PRINTED_TIMESTAMP_FORMAT = "%Y%m%d %H%M%S"

# -- delimiter layout --

DELIMITERS: tuple[str, ...] = ("\x01", "\x02", "\x03")
MERCHANT_SEGMENT = 1
CLIENT_SEGMENT = 2
MAX_SEGMENTS = 3
VENDOR_TRAILER_KEYWORD = "NEWNOTE"

# -- legacy layout --

LEGACY_RECEIPT_OFFSET = 32
MERCHANT_HEADER = "CÓPIA COMERCIANTE"
CLIENT_HEADER = "CÓPIA CLIENTE"
MERCHANT_HEADER_PLAIN = "COPIA COMERCIANTE"
CLIENT_HEADER_PLAIN = "COPIA CLIENTE"
CLIENT_LEAD_IN = 3
CURRENCY_SYMBOL = "€"

_LEGACY_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    (" " * 13, "\n"),
    (" " * 6, "\n"),
    ("TC:", "\nTC:"),
    ("Id.Estab:", "\nId.Estab:"),
    ("Per:", "\nPer:"),
    ("AUT:", "\nAUT:"),
    ("Mg", "\nMg"),
    ("COMPRA\n   ", "COMPRA         "),
)
_LEGACY_DATE = re.compile(r"(\d{2}-\d{2}-\d{2})")
_LEGACY_HEADERS = re.compile(
    "|".join(re.escape(h) for h in (
        MERCHANT_HEADER, CLIENT_HEADER, MERCHANT_HEADER_PLAIN, CLIENT_HEADER_PLAIN,
    ))
)


@dataclass(frozen=True)
class ReceiptData:
    """Merchant and client copies of a receipt. Empty when unavailable."""

    merchant_copy: str = ""
    client_copy: str = ""

    def __bool__(self) -> bool:
        return bool(self.merchant_copy or self.client_copy)


@dataclass(frozen=True)
class ReceiptHeader:
    terminal_id: str
    timestamp: datetime = UNKNOWN_TIMESTAMP

    @property
    def timestamp_known(self) -> bool:
        return self.timestamp != UNKNOWN_TIMESTAMP


@dataclass(frozen=True)
class ParsedReceipt:
    header: ReceiptHeader
    receipt: ReceiptData = field(default_factory=ReceiptData)


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

def parse_timestamp(text: str, fmt: str) -> datetime:
    """Parse *text* with *fmt*; UNKNOWN_TIMESTAMP if it does not parse."""
    try:
        return datetime.strptime(text, fmt)
    except ValueError:
        lg.debug("unparseable receipt timestamp: %r", text)
        return UNKNOWN_TIMESTAMP


def match_ecr_header(text: str) -> ReceiptHeader | None:
    """Find the "Ident. TPA" style label with terminal id, date and time."""
    for pattern in ECR_HEADER_PATTERNS:
        match = pattern.search(text)
        if match:
            terminal_id, date, time = match.groups()
            stamp = parse_timestamp(f"{date} {time}", ECR_TIMESTAMP_FORMAT)
            return ReceiptHeader(terminal_id, stamp)
    return None


def match_printed_header(text: str) -> ReceiptHeader | None:
    """Find the compact id/date/time block of a device-printed receipt.

    The terminal id is 8 digits after a field separator or backspace;
    the date (YYYYMMDD) and time (HHMMSS) follow it in that order.
    """
    id_match = PRINTED_TERMINAL_ID.search(text)
    if id_match is None:
        return None
    rest = text[id_match.end():]
    date_match = PRINTED_DATE.search(rest)
    if date_match is None:
        return ReceiptHeader(id_match.group(1))
    time_match = PRINTED_TIME.search(rest, date_match.end())
    if time_match is None:
        return ReceiptHeader(id_match.group(1))
    stamp = parse_timestamp(
        f"{date_match.group(1)} {time_match.group(1)}", PRINTED_TIMESTAMP_FORMAT
    )
    return ReceiptHeader(id_match.group(1), stamp)


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def split_on_delimiters(text: str, delimiters: Sequence[str] = DELIMITERS) -> list[str]:
    """Split on the first delimiter that yields more than one segment.

    Returns ``[text]`` when none of them splits the text.
    """
    for delimiter in delimiters:
        segments = text.split(delimiter)
        if len(segments) > 1:
            return segments
    return [text]


def strip_lead_byte(segment: str) -> str:
    """Drop the byte that follows the delimiter in a non-empty segment."""
    return segment[1:]


def wrap_fixed(text: str, width: int = DEFAULT_WIDTH) -> list[str]:
    """Cut *text* into lines of exactly *width* characters (last may be short)."""
    if width <= 0:
        raise ValueError(f"width must be positive: {width}")
    return [text[i : i + width] for i in range(0, len(text), width)]


def reflow(text: str, width: int = DEFAULT_WIDTH) -> str:
    return "\n".join(wrap_fixed(text, width))


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def split_receipt(text: str, width: int = DEFAULT_WIDTH) -> ReceiptData | None:
    """Delimiter layout: second segment is the merchant copy, third the client's.

    Returns None when the text does not split, or splits into more
    segments than the layout has, so that the legacy layout is tried.
    """
    segments = split_on_delimiters(text)
    if not MERCHANT_SEGMENT < len(segments) <= MAX_SEGMENTS:
        return None
    merchant = strip_lead_byte(segments[MERCHANT_SEGMENT])
    client = ""
    if len(segments) > CLIENT_SEGMENT:
        client = strip_lead_byte(segments[CLIENT_SEGMENT])
        cut = client.find(VENDOR_TRAILER_KEYWORD)
        if cut >= 0:
            client = client[:cut]
    return ReceiptData(reflow(merchant, width), reflow(client, width))


def legacy_receipt(text: str, width: int = DEFAULT_WIDTH) -> ReceiptData | None:
    """Header layout: reinsert line breaks and cut at the copy headers.

    Lines are already shaped by the inserted breaks, so *width* is not
    applied here.
    """
    if len(text) <= LEGACY_RECEIPT_OFFSET:
        raise ReceiptParseError(
            f"response too short for legacy receipt: {len(text)} characters"
        )
    body = text[LEGACY_RECEIPT_OFFSET:]
    for old, new in _LEGACY_SUBSTITUTIONS:
        body = body.replace(old, new)
    body = _LEGACY_DATE.sub(r"\n\1", body)
    body = body.replace(CURRENCY_SYMBOL, "")

    parts = _LEGACY_HEADERS.split(body)
    if len(parts) < 2:
        return None
    merchant = parts[0] + MERCHANT_HEADER_PLAIN
    client = parts[1][CLIENT_LEAD_IN:] + CLIENT_HEADER_PLAIN
    return ReceiptData(merchant, client)


ReceiptStrategy = Callable[[str, int], "ReceiptData | None"]

RECEIPT_STRATEGIES: tuple[ReceiptStrategy, ...] = (
    split_receipt,
    legacy_receipt,
)


def extract_receipt(
    text: str,
    width: int = DEFAULT_WIDTH,
    strategies: Sequence[ReceiptStrategy] = RECEIPT_STRATEGIES,
) -> ReceiptData:
    """Run *strategies* in order; empty ReceiptData if none succeeds."""
    for strategy in strategies:
        try:
            receipt = strategy(text, width)
        except ReceiptParseError as exc:
            lg.debug("%s: %s", strategy.__name__, exc)
            continue
        if receipt is not None:
            return receipt
    return ReceiptData()


def parse_receipt(text: str, width: int = DEFAULT_WIDTH) -> ParsedReceipt | None:
    """Recover header and copies from a text-receipt purchase response.

    Returns None when no header label is present: the device printed
    the receipt itself and returned no text.
    """
    header = match_ecr_header(text)
    if header is None:
        return None
    return ParsedReceipt(header, extract_receipt(text, width))
