from rest_framework import serializers

from bpjs.lzstring import ALPHABET


class DecodePayloadSerializer(serializers.Serializer):
    payload = serializers.CharField()
    encrypted = serializers.BooleanField(required=False, default=False)

    def validate_payload(self, v):
        # AES output is standard Base64, so both kinds share the alphabet
        v = (v or '').strip()
        if any(ch not in ALPHABET for ch in v):
            raise serializers.ValidationError('payload contains characters outside the Base64 alphabet')
        return v
