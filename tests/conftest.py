from __future__ import annotations

import pytest

from spremote.core.base import Agent
from spremote.core.newnote import NewNoteTerminal


class FakeConnection:
    """Stands in for Connection: records frames, replays canned replies."""

    def __init__(self, *replies: str, echo: bytes = b"00") -> None:
        self.replies = list(replies)
        self.frames: list[bytes] = []
        self.echo = echo

    def exchange(self, frame: bytes) -> bytes:
        self.frames.append(frame)
        return self.echo + self.replies.pop(0).encode("utf-8")


@pytest.fixture
def make_terminal():
    def factory(*replies: str, on_command=None):
        conn = FakeConnection(*replies)
        terminal = NewNoteTerminal(Agent(conn, on_command=on_command))
        return terminal, conn

    return factory
