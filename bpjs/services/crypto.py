import base64
import logging

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

from bpjs.exceptions import BpjsEncryptionError

logger = logging.getLogger(__name__)


class BpjsCrypto:
    """AES/ECB/PKCS#7 with the consumer secret as key.

    BPJS hands out secrets of AES key length (16, 24 or 32 bytes); any
    other length is rejected by the cipher and surfaces as
    ``BpjsEncryptionError``.
    """

    @staticmethod
    def _cipher(cons_secret: str):
        if not cons_secret:
            raise BpjsEncryptionError('Consumer secret is not configured')
        try:
            return AES.new(cons_secret.encode('utf-8'), AES.MODE_ECB)
        except ValueError as e:
            raise BpjsEncryptionError(f'Invalid consumer secret: {e}') from e

    @staticmethod
    def decrypt(encrypted_data: str, cons_secret: str) -> str:
        # returns the still-compressed payload
        if not encrypted_data:
            logger.warning("Attempted to decrypt null or empty data")
            return ''
        cipher = BpjsCrypto._cipher(cons_secret)
        try:
            raw = cipher.decrypt(base64.b64decode(encrypted_data))
            return unpad(raw, AES.block_size).decode('utf-8')
        except (ValueError, UnicodeDecodeError) as e:
            logger.error("Failed to decrypt BPJS payload: %s", e)
            raise BpjsEncryptionError(f'Decryption failed: {e}') from e

    @staticmethod
    def encrypt(plain_data: str, cons_secret: str) -> str:
        if not plain_data:
            return ''
        cipher = BpjsCrypto._cipher(cons_secret)
        try:
            raw = cipher.encrypt(pad(plain_data.encode('utf-8'), AES.block_size))
        except ValueError as e:
            raise BpjsEncryptionError(f'Encryption failed: {e}') from e
        return base64.b64encode(raw).decode('ascii')

    @staticmethod
    def validate_configuration(cons_secret: str) -> bool:
        """Encrypt/decrypt a sample string with the given secret."""
        sample = 'TEST'
        try:
            ok = BpjsCrypto.decrypt(BpjsCrypto.encrypt(sample, cons_secret), cons_secret) == sample
        except BpjsEncryptionError as e:
            logger.error("BPJS encryption configuration validation failed: %s", e)
            return False
        if not ok:
            logger.error("BPJS encryption validation failed - data mismatch")
        return ok
