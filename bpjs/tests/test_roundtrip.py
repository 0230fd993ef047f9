"""
Round trips against the lz-string reference encoder (PyPI ``lzstring``).
"""
import json
import random

import pytest
from lzstring import LZString

from bpjs.lzstring import decompress


def compress(text):
    return LZString().compressToBase64(text)


SAMPLES = [
    'a',
    'ab',
    'aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa',
    'hello hello hello',
    'The quick brown fox jumps over the lazy dog',
    'Nomor kartu: 0001234567890; Faskes: RSUD Kota',
    'Überweisung – €12,50 – naïve café',
    'ランダムな日本語のテキスト',
    json.dumps({
        'metaData': {'code': '200', 'message': 'OK'},
        'peserta': {'noKartu': '0000000000001', 'nama': 'PASIEN UJI', 'hakKelas': {'kode': '3'}},
    }),
]


@pytest.mark.parametrize('text', SAMPLES)
def test_round_trip(text):
    assert decompress(compress(text)) == text


def test_round_trip_long_repetitive_text():
    # enough phrases to push the code width well past eight bits
    text = ''.join('pasien-%d;' % (i % 97) for i in range(3000))
    assert decompress(compress(text)) == text


def test_round_trip_random_text():
    rnd = random.Random(1234)
    alphabet = 'abcdefghij KLMNOP{}[]":,0123456789éλ中'
    for _ in range(25):
        text = ''.join(rnd.choice(alphabet) for _ in range(rnd.randint(1, 400)))
        assert decompress(compress(text)) == text
