import json
import sys

from django.core.management.base import BaseCommand, CommandError

from bpjs.exceptions import BpjsError
from bpjs.services.responses import decompress_payload, decrypt_and_decompress


class Command(BaseCommand):
    help = "Decode a captured BPJS response payload (LZ-String, optionally AES encrypted)."

    def add_arguments(self, parser):
        parser.add_argument('payload', help="Payload string, or '-' to read it from stdin")
        parser.add_argument('--encrypted', action='store_true', help="Decrypt with BPJS_CONS_SECRET before decompressing")
        parser.add_argument('--pretty', action='store_true', help="Pretty-print the result when it is JSON")

    def handle(self, *args, **options):
        payload = options['payload']
        if payload == '-':
            payload = sys.stdin.read()

        try:
            if options['encrypted']:
                text = decrypt_and_decompress(payload.strip())
            else:
                text = decompress_payload(payload)
        except BpjsError as e:
            raise CommandError(str(e)) from e

        if not text:
            raise CommandError("Nothing could be recovered from the payload")

        if options['pretty']:
            try:
                text = json.dumps(json.loads(text), indent=2, ensure_ascii=False)
            except ValueError:
                self.stderr.write(self.style.WARNING("Payload is not JSON; printing as-is"))
        self.stdout.write(text)
