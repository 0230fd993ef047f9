"""
Operator endpoints for inspecting BPJS payloads.

* ``POST /api/bpjs/decode`` – decode a captured ``response`` field.
  Accepts ``payload`` and ``encrypted`` (default false).  Encrypted
  payloads are first decrypted with the configured consumer secret.
  Returns the decoded text, its length and, when it parses, the JSON
  document.  Rate limited per operator (``bpjs_decode`` scope).

* ``GET /api/bpjs/health`` – integration flags plus a crypto self-check
  against the configured secret.
"""
from __future__ import annotations

from django.conf import settings
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle

from bpjs.exceptions import BpjsResponseError
from bpjs.serializers.decode import DecodePayloadSerializer
from bpjs.services import config
from bpjs.services.crypto import BpjsCrypto
from bpjs.services.responses import decompress_payload, decrypt_and_decompress, parse_payload


class DecodeRateThrottle(UserRateThrottle):
    # rate comes from DEFAULT_THROTTLE_RATES['bpjs_decode']
    scope = 'bpjs_decode'


@api_view(['POST'])
@permission_classes([IsAdminUser])
@throttle_classes([DecodeRateThrottle])
def decode_payload(request):
    s = DecodePayloadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    if vd['encrypted']:
        text = decrypt_and_decompress(vd['payload'])
    else:
        text = decompress_payload(vd['payload'])

    # empty text means nothing usable was recovered
    doc = None
    if text:
        try:
            doc = parse_payload(text)
        except BpjsResponseError:
            # plain text payloads are still returned as text
            doc = None

    return Response({
        'ok': bool(text),
        'data': {'text': text, 'json': doc, 'length': len(text)},
    })


@api_view(['GET'])
@permission_classes([IsAdminUser])
def bpjs_health(request):
    info = config.summary()
    info['crypto'] = BpjsCrypto.validate_configuration(settings.BPJS_CONS_SECRET) if settings.BPJS_CONS_SECRET else False
    return Response({'ok': True, 'bpjs': info})
