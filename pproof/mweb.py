# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# mweb.py - Create MWEB outputs for a stealth address, and the receiver's view of them.
#
# Sender side, for recipient (A, B) and value v, sender key k:
#
#   n  = HASH16(T_nonce || k)                  secret nonce
#   s  = HASH32(T_send || A || B || v || n)    unique sending key
#   t  = HASH32(T_derive || s*A)               shared secret
#   Ko = B * HASH32(T_outkey || t)             receiver's one-time pubkey
#   Ke = s*B                                   key exchange pubkey
#   C  = v*H + SWITCH(v, HASH32(T_blind || t)) commitment
#
# The receiver knows a (where A = a*B) so gets the same shared point from a*Ke.
#
import os, struct
from collections import namedtuple
from blake3 import blake3
from . import mw, secp
from .mw import HASH_TAG_NONCE, HASH_TAG_SENDKEY, HASH_TAG_DERIVE, HASH_TAG_OUTKEY, HASH_TAG_TAG
from .address import StealthAddress
from .serializations import MwebOutput, MwebOutputMessage, MWEB_MSG_STANDARD_FIELDS

Recipient = namedtuple('Recipient', 'address value')


def nonce_for_key(sender_key):
    # 16-byte secret nonce bound to the sender key
    return mw.hashed(HASH_TAG_NONCE, sender_key)[0:16]


def send_key(A, B, value, nonce):
    # s = HASH32(T_send || A || B || v || n); v is 8 bytes little-endian
    h = blake3(HASH_TAG_SENDKEY)
    h.update(A)
    h.update(B)
    h.update(struct.pack('<Q', value))
    h.update(nonce)
    return h.digest()


def derive_shared(shared_point):
    # t = HASH32(T_derive || s*A)
    return mw.hashed(HASH_TAG_DERIVE, shared_point)


def view_tag(shared_point):
    return mw.hashed(HASH_TAG_TAG, shared_point)[0]


def receiver_pubkey(B, t):
    # Ko = B * HASH32(T_outkey || t)
    return secp.ec_pubkey_tweak_mul(B, mw.hashed(HASH_TAG_OUTKEY, t))


def random_key():
    # fresh secret key, retry in the (unlikely) out-of-range case
    while 1:
        key = os.urandom(32)
        try:
            secp.ec_seckey_verify(key)
            return key
        except ValueError:
            pass


def keychain_address(scan_key, spend_pubkey):
    """
    Stealth address for a receiver: A = a*B, B = spend pubkey

    Args:
        scan_key: scan secret key a (32 bytes)
        spend_pubkey: spend public key B (33 bytes compressed)

    Returns:
        StealthAddress
    """
    a = secp.ec_seckey_verify(scan_key)
    return StealthAddress(secp.ec_pubkey_tweak_mul(spend_pubkey, a), secp.pubkey(spend_pubkey))


def create_output(recipient, sender_key=None):
    """
    Build a signed MWEB output paying recipient.value to recipient.address

    Args:
        recipient: Recipient tuple (StealthAddress, value)
        sender_key: 32-byte secret key; random if None

    Returns:
        (MwebOutput, blind): output, and blinding factor used in its commitment

    Raises:
        InvalidKeyError: bad sender key
        ValueError: value out of range
    """
    if sender_key is None:
        sender_key = random_key()

    value = mw.check_value(recipient.value)
    A = recipient.address.A()
    B = recipient.address.B()

    # also validates the key
    sender_pubkey = secp.ec_pubkey_create(sender_key)

    n = nonce_for_key(sender_key)
    s = send_key(A, B, value, n)

    sA = secp.ec_pubkey_tweak_mul(A, s)
    t = derive_shared(sA)

    Ko = receiver_pubkey(B, t)
    Ke = secp.ec_pubkey_tweak_mul(B, s)

    mask = mw.OutputMask.from_shared(t)
    blind = mw.blind_switch(mask.blind, value)

    msg = MwebOutputMessage(features=MWEB_MSG_STANDARD_FIELDS,
                            key_exchange_pubkey=Ke,
                            view_tag=view_tag(sA),
                            masked_value=mask.mask_value(value),
                            masked_nonce=mask.mask_nonce(int.from_bytes(n, 'big')))

    output = MwebOutput()
    output.commitment = mw.new_commitment(blind, value)
    output.sender_pubkey = sender_pubkey
    output.receiver_pubkey = Ko
    output.message = msg
    output.sign(sender_key)

    return output, blind


def rewind_output(output, scan_key, spend_pubkey):
    """
    Receiver's view: recover value and nonce from an output sent to us

    Args:
        output: MwebOutput
        scan_key: scan secret key a (32 bytes)
        spend_pubkey: our spend public key B (33 bytes)

    Returns:
        (value, nonce): value as int, nonce as 16 bytes

    Raises:
        ValueError: output is not for us, or does not open correctly
    """
    msg = output.message
    if not msg.has_standard_fields:
        raise ValueError("output has no standard fields")

    a = secp.ec_seckey_verify(scan_key)
    sA = secp.ec_pubkey_tweak_mul(msg.key_exchange_pubkey, a)
    if view_tag(sA) != msg.view_tag:
        raise ValueError("view tag mismatch")

    t = derive_shared(sA)
    if receiver_pubkey(spend_pubkey, t) != output.receiver_pubkey:
        raise ValueError("receiver pubkey mismatch")

    mask = mw.OutputMask.from_shared(t)
    value = mask.mask_value(msg.masked_value)
    nonce = mask.mask_nonce(msg.masked_nonce).to_bytes(16, 'big')

    blind = mw.blind_switch(mask.blind, value)
    if mw.new_commitment(blind, value) != output.commitment:
        raise ValueError("commitment mismatch")

    return value, nonce

# EOF
