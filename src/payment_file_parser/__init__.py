"""Decoders for SWIFT MT101, CFONB and ISO 20022 payment files"""

__version__ = "0.1.0"
