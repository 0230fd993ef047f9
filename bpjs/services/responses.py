"""
Processing of BPJS web service responses.

A partner response is a JSON envelope::

    {"metaData": {"code": "200", "message": "OK"}, "response": "<payload>"}

where ``payload`` is AES encrypted with the consumer secret and the
plaintext is an LZ-String ``compressToBase64`` string of the actual
JSON document.  The helpers here undo both layers; the HTTP exchange
itself belongs to the callers.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from django.conf import settings

from bpjs import lzstring
from bpjs.exceptions import BpjsEncryptionError, BpjsResponseError, DecompressionError
from bpjs.services.crypto import BpjsCrypto

logger = logging.getLogger(__name__)


def decompress_payload(compressed: Optional[str]) -> str:
    """LZ-String decode with the configured output ceiling."""
    try:
        return lzstring.decompress(compressed, max_output=settings.BPJS_LZSTRING_MAX_OUTPUT)
    except DecompressionError as e:
        raise BpjsEncryptionError(f'Decompression failed: {e}') from e


def decrypt_and_decompress(encrypted: Optional[str]) -> str:
    if not encrypted:
        return ''
    decrypted = BpjsCrypto.decrypt(encrypted, settings.BPJS_CONS_SECRET)
    decompressed = decompress_payload(decrypted)
    if settings.BPJS_LOGGING_ENABLED:
        logger.debug(
            "Processed BPJS response - encrypted length: %d, decrypted length: %d, final length: %d",
            len(encrypted), len(decrypted), len(decompressed),
        )
    return decompressed


def parse_payload(text: str) -> Any:
    """JSON document of a decoded payload; ``None`` when nothing was recovered."""
    if not text:
        logger.warning("BPJS payload decoded to an empty string")
        return None
    try:
        return json.loads(text)
    except ValueError as e:
        raise BpjsResponseError(f'Decoded payload is not JSON: {e}') from e


def check_metadata(body: Dict[str, Any]) -> None:
    meta = body.get('metaData') or body.get('metadata')
    if not isinstance(meta, dict):
        return
    code = str(meta.get('code', ''))
    if code != '200':
        message = meta.get('message') or 'unknown error'
        logger.error("BPJS API returned error - code: %s, message: %s", code, message)
        raise BpjsResponseError(f'BPJS API error: {message}', code=code)


def decode_envelope(body: Dict[str, Any], *, encrypted: bool = True) -> Dict[str, Any]:
    """Return a copy of ``body`` with ``response`` replaced by its JSON document.

    Raises ``BpjsResponseError`` when the partner reports an error in
    ``metaData`` and ``BpjsEncryptionError`` when the payload cannot be
    decrypted or decompressed.
    """
    check_metadata(body)
    payload = body.get('response')
    if not encrypted or not isinstance(payload, str):
        return dict(body)
    return {**body, 'response': parse_payload(decrypt_and_decompress(payload))}
