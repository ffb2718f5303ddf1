"""Service layer: the HTTP chat client, prompt input and the CLI."""

from .chat_client import ChatClient
from .input_reader import read_prompt

__all__ = ["ChatClient", "read_prompt"]
