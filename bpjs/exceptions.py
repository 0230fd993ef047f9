"""
Error types for the BPJS integration and the DRF exception handler.

Decoding a partner payload can fail in two very different ways.  A
stream that is merely truncated or references a code the dictionary
does not hold yet is common partner-data noise and is reported as an
empty result; anything else is a ``DecompressionError`` which callers
treat as "partner payload unreadable".
"""
from __future__ import annotations

from typing import Optional

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler


class DecompressionError(Exception):
    """An LZ-String payload could not be decoded."""


class OutputLimitExceeded(DecompressionError):
    """Decoded output grew past the caller supplied ceiling."""

    def __init__(self, limit: int):
        super().__init__(f"Decompressed output exceeds {limit} characters")
        self.limit = limit


class MalformedStreamError(Exception):
    """Truncated stream or unresolvable code.

    Raised inside the decoder only; ``decompress`` turns it into an empty
    result and it never reaches callers.
    """


class BpjsError(Exception):
    code = 'bpjs_error'

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class BpjsEncryptionError(BpjsError):
    code = 'bpjs_encryption'


class BpjsResponseError(BpjsError):
    code = 'bpjs_response'


def api_exception_handler(exc, context):
    if isinstance(exc, BpjsError):
        return Response({'ok': False, 'error': {'code': exc.code, 'message': str(exc)}}, status=502)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}}, status=resp.status_code)
