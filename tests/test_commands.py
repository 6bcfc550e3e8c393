from __future__ import annotations

import pytest

from spremote.core.errors import InvalidCommand
from spremote.core.newnote import (
    ClosePeriodMessage,
    OpenPeriodMessage,
    PurchaseMessage,
    RefundMessage,
)
from spremote.core.newnote.commands import (
    PERIOD_COMMAND_LENGTH,
    PURCHASE_COMMAND_LENGTH,
    REFUND_COMMAND_LENGTH,
    TERMINAL_STATUS_COMMAND,
    build_close_period,
    build_open_period,
    build_purchase,
    build_refund,
    build_terminal_status,
    pad_field,
)


def test_terminal_status_is_fixed_literal():
    assert build_terminal_status() == TERMINAL_STATUS_COMMAND


def test_open_period_defaults():
    assert build_open_period(OpenPeriodMessage("0001")) == "S00010001100"


def test_open_period_supervisor_flag_is_inverted():
    command = build_open_period(OpenPeriodMessage("1", use_supervisor_card=True))
    assert command == "S0001" + "0001" + "0" + "0" + "0"


def test_close_period_print_on_device():
    command = build_close_period(ClosePeriodMessage(7, print_on_device=True))
    assert command == "S0011" + "0007" + "1" + "1" + "0"


def test_purchase_layout():
    command = build_purchase(PurchaseMessage("1", 360, print_on_device=True))
    assert command == "C0001" + "0001" + "00000360" + "0" + "1" + "0" + "00"
    assert len(command) == 22


def test_refund_layout():
    command = build_refund(RefundMessage("12", "1500"))
    assert command == "C0021" + "0012" + "00001500" + "00000000"


@pytest.mark.parametrize("tid", [0, 1, "42", "999", 9999])
@pytest.mark.parametrize("amount", [0, 5, "12345", 99999999])
def test_rendered_lengths_are_fixed(tid, amount):
    assert len(build_open_period(OpenPeriodMessage(tid))) == PERIOD_COMMAND_LENGTH
    assert len(build_close_period(ClosePeriodMessage(tid))) == PERIOD_COMMAND_LENGTH
    assert len(build_purchase(PurchaseMessage(tid, amount))) == PURCHASE_COMMAND_LENGTH
    assert len(build_refund(RefundMessage(tid, amount))) == REFUND_COMMAND_LENGTH


def test_template_length_constants():
    assert PERIOD_COMMAND_LENGTH == 12
    assert PURCHASE_COMMAND_LENGTH == 22
    assert REFUND_COMMAND_LENGTH == 25


@pytest.mark.parametrize("message", [
    OpenPeriodMessage("12345"),
    ClosePeriodMessage(10000),
    PurchaseMessage("1", "123456789"),
    RefundMessage("1", 100000000),
    PurchaseMessage("1a", "1"),
    PurchaseMessage("1", "-5"),
    RefundMessage(-1, 1),
    PurchaseMessage(True, 1),
    PurchaseMessage("1", "١٢"),
])
def test_out_of_contract_fields_raise(message):
    builders = {
        OpenPeriodMessage: build_open_period,
        ClosePeriodMessage: build_close_period,
        PurchaseMessage: build_purchase,
        RefundMessage: build_refund,
    }
    with pytest.raises(InvalidCommand):
        builders[type(message)](message)


def test_unsupported_receipt_width():
    with pytest.raises(InvalidCommand):
        build_purchase(PurchaseMessage("1", "1", receipt_width=40))


def test_pad_field_strips_whitespace():
    assert pad_field("amount", " 36 ", 8) == "00000036"
