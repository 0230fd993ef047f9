"""BPJS Kesehatan integration app for the hospital backend.

Partner responses arrive encrypted and LZ-String compressed; this app
holds the decoder (``bpjs.lzstring``), the payload crypto and response
services, and the operator endpoints used to inspect captured payloads.
"""
