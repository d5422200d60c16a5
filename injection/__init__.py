"""
Field injection module.

Burns positioned text, date, signature, image and radio fields into page 1
of a PDF (reportlab overlay merged with pypdf).
"""
