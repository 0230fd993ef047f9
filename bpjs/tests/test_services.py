import json

import pytest
from lzstring import LZString

from bpjs.exceptions import BpjsEncryptionError, BpjsResponseError, OutputLimitExceeded
from bpjs.services import config
from bpjs.services.crypto import BpjsCrypto
from bpjs.services.responses import (
    decode_envelope,
    decompress_payload,
    decrypt_and_decompress,
    parse_payload,
)

SECRET = '0123456789abcdef0123456789abcdef'


@pytest.fixture
def bpjs_settings(settings):
    settings.BPJS_ENABLE = True
    settings.BPJS_CONS_ID = '12345'
    settings.BPJS_CONS_SECRET = SECRET
    settings.BPJS_USER_KEY = 'user-key'
    settings.BPJS_LZSTRING_MAX_OUTPUT = 1024 * 1024
    return settings


def seal(text):
    """Compress then encrypt, the way BPJS prepares ``response``."""
    return BpjsCrypto.encrypt(LZString().compressToBase64(text), SECRET)


def test_encrypt_decrypt_round_trip():
    token = BpjsCrypto.encrypt('BYUwNmD2Q===', SECRET)
    assert token != 'BYUwNmD2Q==='
    assert BpjsCrypto.decrypt(token, SECRET) == 'BYUwNmD2Q==='


def test_decrypt_empty_returns_empty():
    assert BpjsCrypto.decrypt('', SECRET) == ''
    assert BpjsCrypto.encrypt('', SECRET) == ''


@pytest.mark.parametrize('secret', ['', 'short-secret'])
def test_bad_secret_raises(secret):
    with pytest.raises(BpjsEncryptionError):
        BpjsCrypto.encrypt('data', secret)


def test_garbage_ciphertext_raises():
    # five bytes is not a whole AES block
    with pytest.raises(BpjsEncryptionError) as exc_info:
        BpjsCrypto.decrypt('aGVsbG8=', SECRET)
    assert exc_info.value.__cause__ is not None


def test_validate_configuration():
    assert BpjsCrypto.validate_configuration(SECRET) is True
    assert BpjsCrypto.validate_configuration('too-short') is False


def test_is_configured(bpjs_settings):
    assert config.is_configured()
    bpjs_settings.BPJS_USER_KEY = ''
    assert not config.is_configured()
    bpjs_settings.BPJS_USER_KEY = 'user-key'
    bpjs_settings.BPJS_ENABLE = False
    assert not config.is_configured()


def test_decrypt_and_decompress(bpjs_settings):
    assert decrypt_and_decompress(BpjsCrypto.encrypt('BYUwNmD2Q===', SECRET)) == 'hello'
    assert decrypt_and_decompress('') == ''
    assert decrypt_and_decompress(None) == ''


def test_decompress_payload_applies_configured_ceiling(bpjs_settings):
    bpjs_settings.BPJS_LZSTRING_MAX_OUTPUT = 3
    with pytest.raises(BpjsEncryptionError) as exc_info:
        decompress_payload('IY5A')
    assert isinstance(exc_info.value.__cause__, OutputLimitExceeded)


def test_decompress_payload_wraps_unreadable_stream(bpjs_settings):
    with pytest.raises(BpjsEncryptionError):
        decompress_payload('IZ*=')


def test_decode_envelope(bpjs_settings):
    doc = {'peserta': {'noKartu': '0000000000001', 'nama': 'PASIEN UJI', 'statusPeserta': {'kode': '0', 'keterangan': 'AKTIF'}}}
    body = {'metaData': {'code': '200', 'message': 'OK'}, 'response': seal(json.dumps(doc))}
    decoded = decode_envelope(body)
    assert decoded['response'] == doc
    assert decoded['metaData'] == body['metaData']
    # input is left untouched
    assert isinstance(body['response'], str)


def test_decode_envelope_numeric_meta_code(bpjs_settings):
    body = {'metadata': {'code': 200, 'message': 'OK'}, 'response': seal('[1, 2, 3]')}
    assert decode_envelope(body)['response'] == [1, 2, 3]


def test_decode_envelope_unencrypted_passthrough(bpjs_settings):
    body = {'metaData': {'code': '200', 'message': 'OK'}, 'response': {'list': []}}
    assert decode_envelope(body, encrypted=False) == body


def test_decode_envelope_partner_error(bpjs_settings):
    body = {'metaData': {'code': '201', 'message': 'Peserta tidak ditemukan'}, 'response': None}
    with pytest.raises(BpjsResponseError) as exc_info:
        decode_envelope(body)
    assert exc_info.value.code == '201'
    assert 'Peserta tidak ditemukan' in str(exc_info.value)


def test_decode_envelope_truncated_payload_gives_none(bpjs_settings):
    body = {'metaData': {'code': '200', 'message': 'OK'}, 'response': BpjsCrypto.encrypt('BYUwNmD2', SECRET)}
    assert decode_envelope(body)['response'] is None


def test_parse_payload_rejects_non_json():
    with pytest.raises(BpjsResponseError):
        parse_payload('hello')
    assert parse_payload('') is None
