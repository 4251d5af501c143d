# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
"""MWEB Output Python Serializations

MwebOutput, MwebOutputMessage:
    data structures that map to the MWEB output as seen on chain, except the
    range proof is carried as its hash only.
ser_*, deser_*: functions that handle serialization/deserialization
"""

import struct
from binascii import b2a_hex
from blake3 import blake3
from . import mw

# message feature bits
MWEB_MSG_STANDARD_FIELDS = 0x01
MWEB_MSG_EXTRA_DATA = 0x02
MWEB_MSG_KNOWN_FEATURES = MWEB_MSG_STANDARD_FIELDS | MWEB_MSG_EXTRA_DATA

def bytes_to_hex_str(s):
    return str(b2a_hex(s), 'ascii')

def read_exact(f, n):
    # short reads are not okay
    rv = f.read(n)
    if len(rv) != n:
        raise EOFError("wanted %d bytes, got %d" % (n, len(rv)))
    return rv

# Serialization/deserialization tools
def ser_compact_size(l):
    if l < 253:
        return struct.pack("B", l)
    elif l < 0x10000:
        return struct.pack("<BH", 253, l)
    elif l < 0x100000000:
        return struct.pack("<BI", 254, l)
    else:
        return struct.pack("<BQ", 255, l)

def deser_compact_size(f):
    # only the shortest encoding is accepted, so bytes and value map one-to-one
    nit = struct.unpack("<B", read_exact(f, 1))[0]
    if nit == 253:
        nit = struct.unpack("<H", read_exact(f, 2))[0]
        min_val = 253
    elif nit == 254:
        nit = struct.unpack("<I", read_exact(f, 4))[0]
        min_val = 0x10000
    elif nit == 255:
        nit = struct.unpack("<Q", read_exact(f, 8))[0]
        min_val = 0x100000000
    else:
        return nit

    if nit < min_val:
        raise ValueError("non-canonical compact size")
    return nit

def deser_string(f):
    nit = deser_compact_size(f)
    return read_exact(f, nit)

def ser_string(s):
    return ser_compact_size(len(s)) + s


class MwebOutputMessage(object):
    def __init__(self, features=MWEB_MSG_STANDARD_FIELDS, key_exchange_pubkey=b'\0'*33,
                    view_tag=0, masked_value=0, masked_nonce=0, extra_data=b''):
        self.features = features
        self.key_exchange_pubkey = key_exchange_pubkey
        self.view_tag = view_tag
        self.masked_value = masked_value
        self.masked_nonce = masked_nonce
        self.extra_data = extra_data

    @property
    def has_standard_fields(self):
        return bool(self.features & MWEB_MSG_STANDARD_FIELDS)

    def deserialize(self, f):
        self.features = read_exact(f, 1)[0]
        if self.features & ~MWEB_MSG_KNOWN_FEATURES:
            raise ValueError("unknown message features: 0x%02x" % self.features)

        if self.has_standard_fields:
            self.key_exchange_pubkey = read_exact(f, 33)
            self.view_tag = read_exact(f, 1)[0]
            self.masked_value = struct.unpack("<Q", read_exact(f, 8))[0]
            self.masked_nonce = int.from_bytes(read_exact(f, 16), 'big')

        if self.features & MWEB_MSG_EXTRA_DATA:
            self.extra_data = deser_string(f)

    def serialize(self):
        r = bytes([self.features])

        if self.has_standard_fields:
            assert len(self.key_exchange_pubkey) == 33
            r += self.key_exchange_pubkey
            r += bytes([self.view_tag])
            r += struct.pack("<Q", self.masked_value)
            r += self.masked_nonce.to_bytes(16, 'big')

        if self.features & MWEB_MSG_EXTRA_DATA:
            r += ser_string(self.extra_data)

        return r

    def hash(self):
        return blake3(self.serialize()).digest()

    def __repr__(self):
        return "MwebOutputMessage(features=0x%02x Ke=%s view_tag=%d)" \
            % (self.features, bytes_to_hex_str(self.key_exchange_pubkey), self.view_tag)


class MwebOutput(object):
    def __init__(self):
        self.commitment = b'\0' * 33
        self.sender_pubkey = b'\0' * 33
        self.receiver_pubkey = b'\0' * 33
        self.message = MwebOutputMessage()
        self.range_proof_hash = b'\0' * 32
        self.signature = b'\0' * 64

    def deserialize(self, f):
        self.commitment = read_exact(f, 33)
        self.sender_pubkey = read_exact(f, 33)
        self.receiver_pubkey = read_exact(f, 33)
        self.message = MwebOutputMessage()
        self.message.deserialize(f)
        self.range_proof_hash = read_exact(f, 32)
        self.signature = read_exact(f, 64)

    def serialize(self):
        r = b""
        r += self.commitment
        r += self.sender_pubkey
        r += self.receiver_pubkey
        r += self.message.serialize()
        r += self.range_proof_hash
        r += self.signature
        return r

    def hash(self):
        # output id
        return blake3(self.serialize()).digest()

    def signature_message(self):
        # what the sender signs: everything but the signature, message by its hash
        h = blake3()
        h.update(self.commitment)
        h.update(self.sender_pubkey)
        h.update(self.receiver_pubkey)
        h.update(self.message.hash())
        h.update(self.range_proof_hash)
        return h.digest()

    def sign(self, sender_key):
        self.signature = mw.sign(sender_key, self.signature_message())

    def verify_signature(self):
        return mw.verify(self.sender_pubkey, self.signature_message(), self.signature)

    def __repr__(self):
        return "MwebOutput(C=%s Ko=%s)" \
            % (bytes_to_hex_str(self.commitment), bytes_to_hex_str(self.receiver_pubkey))

# EOF
