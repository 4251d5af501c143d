# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# address.py - MWEB stealth addresses and their bech32 text form.
#
# Payload is version 0 followed by scan pubkey A and spend pubkey B (33 bytes each),
# which makes these much longer than the 90 characters BIP-173 allows. So we do
# our own length handling, but use the bech32 package for checksum and charset.
# Plain bech32 only (BIP-173 constant), a bech32m checksum does not verify.
#
from collections import namedtuple
from bech32 import bech32_encode, bech32_verify_checksum, convertbits, CHARSET
from . import secp
from .exceptions import AddressDecodeError

MWEB_ADDRESS_VERSION = 0


class StealthAddress(namedtuple('StealthAddress', 'scan_pubkey spend_pubkey')):
    # A = scan pubkey, B = spend pubkey; both 33-byte compressed points

    __slots__ = ()

    def A(self):
        return self.scan_pubkey

    def B(self):
        return self.spend_pubkey

    @classmethod
    def from_bytes(cls, raw):
        if len(raw) != 66:
            raise ValueError("stealth address payload must be 66 bytes")
        return cls(secp.pubkey(raw[0:33]), secp.pubkey(raw[33:66]))

    def __bytes__(self):
        return self.scan_pubkey + self.spend_pubkey


def bech32_decode_nolimit(bech):
    # Same as bech32.bech32_decode() but without the 90 character limit.
    # Returns (hrp, data) with checksum removed; raises ValueError.
    if any(ord(x) < 33 or ord(x) > 126 for x in bech):
        raise ValueError("invalid character")
    if bech.lower() != bech and bech.upper() != bech:
        raise ValueError("mixed case")

    bech = bech.lower()
    pos = bech.rfind('1')
    if pos < 1 or pos + 7 > len(bech):
        raise ValueError("separator misplaced")
    if not all(x in CHARSET for x in bech[pos+1:]):
        raise ValueError("invalid data character")

    hrp = bech[:pos]
    data = [CHARSET.find(x) for x in bech[pos+1:]]
    if not bech32_verify_checksum(hrp, data):
        raise ValueError("bad checksum")

    return hrp, data[:-6]


def encode_mweb_address(hrp, sa):
    """
    Render stealth address as text

    Args:
        hrp: human readable part, for example 'ltcmweb'
        sa: StealthAddress

    Returns:
        str: bech32 (not bech32m) address
    """
    data = [MWEB_ADDRESS_VERSION] + convertbits(bytes(sa), 8, 5)
    return bech32_encode(hrp, data)


def decode_mweb_address(hrp, addr):
    """
    Parse text into StealthAddress, if hrp matches

    Raises:
        AddressDecodeError: any problem, including wrong hrp
    """
    try:
        got_hrp, data = bech32_decode_nolimit(addr)
    except ValueError as exc:
        raise AddressDecodeError("Invalid address: %s" % exc)

    if got_hrp != hrp:
        raise AddressDecodeError("Address is for '%s', expected '%s'" % (got_hrp, hrp))

    if not data or data[0] != MWEB_ADDRESS_VERSION:
        raise AddressDecodeError("Unsupported MWEB address version")

    raw = convertbits(data[1:], 5, 8, False)
    if raw is None:
        raise AddressDecodeError("Invalid address padding")

    try:
        return StealthAddress.from_bytes(bytes(raw))
    except ValueError as exc:
        raise AddressDecodeError("Invalid stealth address: %s" % exc)

# EOF
