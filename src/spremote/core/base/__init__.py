from spremote.core.base.agent import Agent
from spremote.core.base.message import Message, Result
from spremote.core.base.terminal import Terminal

__all__ = ["Agent", "Message", "Result", "Terminal"]
