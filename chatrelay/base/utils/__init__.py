"""Small JSON envelope helpers shared by the dialects."""

from .envelopes import (
    ErrorEnvelope,
    decode_json_object,
    extract_error,
    get_object,
    get_text,
    raise_for_error_status,
)

__all__ = [
    "ErrorEnvelope",
    "decode_json_object",
    "extract_error",
    "get_object",
    "get_text",
    "raise_for_error_status",
]
