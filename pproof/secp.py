# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# secp.py - secp256k1 group operations, bytes in and bytes out.
#
# Same calling conventions as the ngu.secp256k1 module we use on the device:
#   - public keys (points) are 33-byte compressed SEC encodings
#   - scalars are 32-byte big-endian strings, reduced by curve order
#
# The group arithmetic itself comes from the python-ecdsa package.
#
from ecdsa import VerifyingKey, MalformedPointError
from ecdsa.curves import SECP256k1
from ecdsa.ecdsa import generator_secp256k1
from ecdsa.ellipticcurve import PointJacobi, INFINITY
from .exceptions import InvalidKeyError

CURVE_GEN = generator_secp256k1
CURVE_ORDER = CURVE_GEN.order()
FIELD_ORDER = SECP256k1.curve.p()


def scalar_int(scalar_bytes):
    # big-endian string to integer, reduced mod n
    if len(scalar_bytes) != 32:
        raise ValueError("scalar must be 32 bytes")
    return int.from_bytes(scalar_bytes, 'big') % CURVE_ORDER


def scalar_bytes(k):
    return (k % CURVE_ORDER).to_bytes(32, 'big')


def curve_y(x):
    """
    Solve curve equation for y, given x

    Returns the root which is a quadratic residue; the other root is
    (FIELD_ORDER - y), since -1 is not a square mod p.

    Raises:
        ValueError: if x is not the x-coordinate of any point
    """
    p = FIELD_ORDER
    if not 0 <= x < p:
        raise ValueError("x out of range")
    y2 = (pow(x, 3, p) + 7) % p
    y = pow(y2, (p + 1) // 4, p)
    if y * y % p != y2:
        raise ValueError("x not on curve")
    return y


def is_quad(y):
    # True if y is a square mod p (Euler's criterion)
    return pow(y, (FIELD_ORDER - 1) // 2, FIELD_ORDER) == 1


def lift_x(x):
    # point with given x and even y (as in BIP-340)
    y = curve_y(x)
    if y & 1:
        y = FIELD_ORDER - y
    return PointJacobi(SECP256k1.curve, x, y, 1, CURVE_ORDER)


def parse_point(pubkey_bytes):
    """
    Parse a compressed public key into a curve point

    Args:
        pubkey_bytes: 33-byte compressed public key

    Returns:
        ecdsa point object

    Raises:
        ValueError: if not a valid compressed encoding of a point on the curve
    """
    if not isinstance(pubkey_bytes, (bytes, bytearray)):
        raise TypeError("pubkey_bytes must be bytes")
    if len(pubkey_bytes) != 33 or pubkey_bytes[0] not in (0x02, 0x03):
        raise ValueError("pubkey must be 33 bytes, compressed")

    try:
        vk = VerifyingKey.from_string(bytes(pubkey_bytes), curve=SECP256k1,
                                      validate_point=False)
    except MalformedPointError:
        raise ValueError("Invalid elliptic curve point")

    return vk.pubkey.point


def serialize_point(point):
    # compressed SEC encoding; there is no encoding for infinity
    if point == INFINITY:
        raise ValueError("point at infinity")

    vk = VerifyingKey.from_public_point(point, curve=SECP256k1, validate_point=False)
    return vk.to_string('compressed')


def pubkey(pubkey_bytes):
    """Validate a public key, returns it unchanged if okay (else ValueError)"""
    parse_point(pubkey_bytes)
    return bytes(pubkey_bytes)


def ec_seckey_verify(seckey):
    # secret keys are used as-is, so no reduction here
    if len(seckey) != 32:
        raise InvalidKeyError("secret key must be 32 bytes")
    k = int.from_bytes(seckey, 'big')
    if not 0 < k < CURVE_ORDER:
        raise InvalidKeyError("secret key out of range")
    return k


def ec_pubkey_create(seckey):
    """
    Public key for a secret key: k*G

    Args:
        seckey: 32-byte secret key

    Returns:
        bytes: 33-byte compressed public key

    Raises:
        InvalidKeyError: if key is zero or not below curve order
    """
    k = ec_seckey_verify(seckey)
    return serialize_point(CURVE_GEN * k)


def point_mul(point, k):
    # scalar multiply with check for degenerate cases
    k %= CURVE_ORDER
    if not k:
        raise ValueError("scalar is zero")
    return point * k


def ec_pubkey_tweak_mul(pubkey_bytes, scalar):
    """
    Multiply a public key by a scalar (pubkey * scalar)

    Args:
        pubkey_bytes: 33-byte compressed public key
        scalar: 32-byte scalar (big-endian integer), or an int

    Returns:
        33-byte compressed public key result
    """
    if not isinstance(scalar, int):
        scalar = scalar_int(scalar)

    return serialize_point(point_mul(parse_point(pubkey_bytes), scalar))

# EOF
