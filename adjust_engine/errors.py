"""Failures raised around the adjustment pipeline."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    DECODE_FAILED = "decode_failed"
    ENCODE_FAILED = "encode_failed"


class AdjustError(Exception):
    """A fatal codec failure; no adjusted bytes are produced."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, cause: str) -> None:
        super().__init__(cause)
        self.kind = kind
        self.cause = cause


class DecodeError(AdjustError):
    def __init__(self, cause: str) -> None:
        super().__init__(ErrorKind.DECODE_FAILED, cause)


class EncodeError(AdjustError):
    def __init__(self, cause: str) -> None:
        super().__init__(ErrorKind.ENCODE_FAILED, cause)
