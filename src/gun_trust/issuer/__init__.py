"""Certificate issuing for GUN signing keys."""

from .generator import CERT_VALIDITY, generate_certificate, new_serial_number

__all__ = ["CERT_VALIDITY", "generate_certificate", "new_serial_number"]
