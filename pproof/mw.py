# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# mw.py - MimbleWimble primitives: tagged hashing, Pedersen commitments, output
#         masks and Schnorr signatures.
#
# Hashing is BLAKE3 with a one-byte domain tag in front. Each derivation step has
# its own tag, never share them.
#
# Commitments are C = r*G + v*H with H a "nothing up my sleeve" generator. Blinding
# factors pass through a switch commitment (third generator J) before use.
#
import hashlib, struct
from blake3 import blake3
from . import secp
from .secp import CURVE_GEN, CURVE_ORDER

# Hash tags, one per purpose.
HASH_TAG_BLIND = b'B'
HASH_TAG_DERIVE = b'D'
HASH_TAG_NONCE = b'N'
HASH_TAG_OUTKEY = b'O'
HASH_TAG_SENDKEY = b'S'
HASH_TAG_TAG = b'T'
HASH_TAG_NONCE_MASK = b'X'
HASH_TAG_VALUE_MASK = b'Y'

# Schnorr signatures use BIP-340 style tagged SHA256, precomputed: SHA256(tag)
SIG_TAG_NONCE_H = hashlib.sha256(b'MWEB/SigNonce').digest()
SIG_TAG_CHALLENGE_H = hashlib.sha256(b'MWEB/SigChallenge').digest()

# Value generator H: same NUMS point as BIP-341 uses (x = SHA256 of G, uncompressed)
GENERATOR_H_X = 0x50929b74c1a04954b78b4b6035e97a5e078a5a0f28ec96d547bfee9ace803ac0
GENERATOR_H = secp.lift_x(GENERATOR_H_X)

MAX_VALUE = (1 << 64) - 1


def _find_generator(seed):
    # try-and-increment: first counter giving a valid x-coordinate
    ctr = 0
    while 1:
        x = int.from_bytes(hashlib.sha256(seed + struct.pack('>I', ctr)).digest(), 'big')
        try:
            return secp.lift_x(x)
        except ValueError:
            ctr += 1

# Switch commitment generator J
GENERATOR_J = _find_generator(b'MWEB/SwitchCommitmentJ')


def hashed(tag, *parts):
    """BLAKE3 over tag || parts, 32 bytes"""
    assert len(tag) == 1, "hash tags are one byte"
    h = blake3(tag)
    for p in parts:
        h.update(p)
    return h.digest()


def sha256t(tag_hash, msg):
    # BIP-340 tagged hash, given precomputed SHA256(tag)
    return hashlib.sha256(tag_hash + tag_hash + msg).digest()


def check_value(value):
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_VALUE:
        raise ValueError("value must be a 64-bit unsigned integer")
    return value


def serialize_commitment(point):
    # 0x08 when y is a square mod p, else 0x09; then x
    x = point.x()
    y = point.y()
    prefix = 0x08 if secp.is_quad(y) else 0x09
    return bytes([prefix]) + x.to_bytes(32, 'big')


def _commit_point(blind, value):
    point = CURVE_GEN * secp.scalar_int(blind) + GENERATOR_H * value
    if point == secp.INFINITY:
        raise ValueError("commitment is point at infinity")
    return point


def new_commitment(blind, value):
    """
    Pedersen commitment to value: C = blind*G + value*H

    Args:
        blind: 32-byte blinding factor
        value: amount (64-bit unsigned)

    Returns:
        bytes: 33-byte commitment
    """
    check_value(value)
    return serialize_commitment(_commit_point(blind, value))


def blind_switch(blind, value):
    """
    Switch-commitment adjustment of a blinding factor

        blind' = blind + SHA256(commit(blind, value) || blind*J)

    Binds the blinding factor to the value; returns 32 bytes.
    """
    check_value(value)
    r = secp.scalar_int(blind)
    commit = serialize_commitment(_commit_point(blind, value))
    rJ = secp.serialize_point(secp.point_mul(GENERATOR_J, r))

    tweak = int.from_bytes(hashlib.sha256(commit + rJ).digest(), 'big')
    return secp.scalar_bytes(r + tweak)


class OutputMask:
    # Blinding factor and XOR masks, derived from the shared secret of an output.

    def __init__(self, blind, value_mask, nonce_mask):
        self.blind = blind
        self.value_mask = value_mask
        self.nonce_mask = nonce_mask

    @classmethod
    def from_shared(cls, shared_secret):
        blind = hashed(HASH_TAG_BLIND, shared_secret)
        value_mask = int.from_bytes(hashed(HASH_TAG_VALUE_MASK, shared_secret)[0:8], 'little')
        nonce_mask = int.from_bytes(hashed(HASH_TAG_NONCE_MASK, shared_secret)[0:16], 'big')
        return cls(blind, value_mask, nonce_mask)

    def mask_value(self, value):
        return value ^ self.value_mask

    def mask_nonce(self, nonce):
        # nonce is a 128-bit integer here
        return nonce ^ self.nonce_mask


def sign(key, message):
    """
    Schnorr signature over BLAKE3(message)

    Deterministic: nonce comes from key and message, so the same inputs always
    produce the same 64 bytes (R.x || s).

    Raises:
        InvalidKeyError: if key is not a valid secret key
    """
    x = secp.ec_seckey_verify(key)
    P = secp.serialize_point(CURVE_GEN * x)
    digest = blake3(message).digest()

    k = int.from_bytes(sha256t(SIG_TAG_NONCE_H, key + P + digest), 'big') % CURVE_ORDER
    if k == 0:
        raise ValueError("Generated nonce k is zero (extremely unlikely)")

    R = CURVE_GEN * k
    if R.y() & 1:
        # R must have even y
        k = CURVE_ORDER - k

    r_bytes = R.x().to_bytes(32, 'big')
    e = int.from_bytes(sha256t(SIG_TAG_CHALLENGE_H, r_bytes + P + digest), 'big') % CURVE_ORDER
    s = (k + e * x) % CURVE_ORDER

    return r_bytes + s.to_bytes(32, 'big')


def verify(pubkey_bytes, message, sig):
    """
    Verify Schnorr signature made by sign()

    Args:
        pubkey_bytes: signer's 33-byte compressed public key
        message: bytes that were signed
        sig: 64-byte signature

    Returns:
        bool: True if signature is valid, False otherwise
    """
    if len(sig) != 64:
        return False

    r = int.from_bytes(sig[0:32], 'big')
    s = int.from_bytes(sig[32:64], 'big')
    if r >= secp.FIELD_ORDER or s >= CURVE_ORDER:
        return False

    try:
        P = secp.parse_point(pubkey_bytes)
    except ValueError:
        return False

    digest = blake3(message).digest()
    e = int.from_bytes(sha256t(SIG_TAG_CHALLENGE_H, sig[0:32] + bytes(pubkey_bytes) + digest),
                       'big') % CURVE_ORDER

    # R = s*G - e*P
    R = CURVE_GEN * s + (-P) * e if e else CURVE_GEN * s
    if R == secp.INFINITY:
        return False
    if R.y() & 1:
        return False

    return R.x() == r

# EOF
