"""
Signing module.

Validates sign requests, bakes fields into the document, records SHA-256
audit digests of original and result, and verifies stored files against them.
"""
