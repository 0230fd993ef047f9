from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from bpjs.services.crypto import BpjsCrypto

SECRET = '0123456789abcdef0123456789abcdef'


def test_decode_plain_payload():
    out = StringIO()
    call_command('decode_bpjs_payload', 'BYUwNmD2Q===', stdout=out)
    assert out.getvalue().strip() == 'hello'


def test_decode_encrypted_payload(settings):
    settings.BPJS_CONS_SECRET = SECRET
    out = StringIO()
    call_command('decode_bpjs_payload', BpjsCrypto.encrypt('IxA=', SECRET), '--encrypted', '--pretty', stdout=out)
    assert out.getvalue().strip() == '1'


def test_decode_from_stdin(monkeypatch):
    monkeypatch.setattr('sys.stdin', StringIO('IY5A\n'))
    out = StringIO()
    call_command('decode_bpjs_payload', '-', stdout=out)
    assert out.getvalue().strip() == 'aaaa'


def test_nothing_recovered_is_an_error():
    with pytest.raises(CommandError):
        call_command('decode_bpjs_payload', 'BYUwNmD2', stdout=StringIO())


def test_unreadable_payload_is_an_error():
    with pytest.raises(CommandError):
        call_command('decode_bpjs_payload', 'IZ*=', stdout=StringIO())
