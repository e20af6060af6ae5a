"""Security — URL encryption for request mappers.

Encrypt what another mapper generates::

    from hush.security import AESGCMCrypt, CryptoMapper

    key = AESGCMCrypt.generate_key()
    mapper = CryptoMapper(RouteMapper(router), lambda: AESGCMCrypt(key))

Audit events for rejected and expired URLs::

    from hush.security import set_security_event_sink

    set_security_event_sink(events.append)
"""

from hush.security.audit import SecurityEvent, emit_security_event, set_security_event_sink
from hush.security.crypt import AESGCMCrypt, Crypt, CryptFactory, NoCrypt, SignedCrypt
from hush.security.crypto_mapper import CryptoMapper, RequestSettingHandler
from hush.security.segments import SegmentChecksumGenerator, hash_string

__all__ = [
    "AESGCMCrypt",
    "Crypt",
    "CryptFactory",
    "CryptoMapper",
    "NoCrypt",
    "RequestSettingHandler",
    "SecurityEvent",
    "SegmentChecksumGenerator",
    "SignedCrypt",
    "emit_security_event",
    "hash_string",
    "set_security_event_sink",
]
