# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# test_mweb.py - output creation, and the receiver's side of it
#
import pytest
from pproof import mw, mweb, secp
from pproof.mweb import Recipient
from pproof.exceptions import InvalidKeyError
from vectors import SENDER_KEY, OTHER_SENDER_KEY, SCAN_KEY, TEST_VALUE


def test_nonce():
    n = mweb.nonce_for_key(SENDER_KEY)
    assert len(n) == 16
    assert n == mw.hashed(mw.HASH_TAG_NONCE, SENDER_KEY)[0:16]
    assert n != mweb.nonce_for_key(OTHER_SENDER_KEY)

def test_send_key(stealth_addr):
    A, B = stealth_addr
    n = mweb.nonce_for_key(SENDER_KEY)
    s = mweb.send_key(A, B, TEST_VALUE, n)

    assert len(s) == 32
    assert s != mweb.send_key(A, B, TEST_VALUE+1, n)
    assert s != mweb.send_key(B, A, TEST_VALUE, n)

def test_keychain_address(spend_pubkey):
    sa = mweb.keychain_address(SCAN_KEY, spend_pubkey)
    assert sa.B() == spend_pubkey
    assert sa.A() == secp.ec_pubkey_tweak_mul(spend_pubkey, SCAN_KEY)

    with pytest.raises(InvalidKeyError):
        mweb.keychain_address(bytes(32), spend_pubkey)

def test_random_key():
    k1 = mweb.random_key()
    k2 = mweb.random_key()
    assert len(k1) == 32
    assert k1 != k2
    secp.ec_seckey_verify(k1)


class TestCreateOutput:

    def test_deterministic(self, stealth_addr):
        o1, b1 = mweb.create_output(Recipient(stealth_addr, TEST_VALUE), SENDER_KEY)
        o2, b2 = mweb.create_output(Recipient(stealth_addr, TEST_VALUE), SENDER_KEY)
        assert o1.serialize() == o2.serialize()
        assert b1 == b2

    def test_fields(self, stealth_addr):
        out, blind = mweb.create_output(Recipient(stealth_addr, TEST_VALUE), SENDER_KEY)

        assert out.commitment == mw.new_commitment(blind, TEST_VALUE)
        assert out.sender_pubkey == secp.ec_pubkey_create(SENDER_KEY)
        assert out.receiver_pubkey not in stealth_addr
        assert out.message.has_standard_fields
        assert out.verify_signature()

    def test_random_sender(self, stealth_addr):
        o1, _ = mweb.create_output(Recipient(stealth_addr, 1000))
        o2, _ = mweb.create_output(Recipient(stealth_addr, 1000))
        assert o1.sender_pubkey != o2.sender_pubkey
        assert o1.commitment != o2.commitment
        assert o1.verify_signature() and o2.verify_signature()

    @pytest.mark.parametrize('value', [-1, 1 << 64, '5'])
    def test_bad_value(self, stealth_addr, value):
        with pytest.raises(ValueError):
            mweb.create_output(Recipient(stealth_addr, value), SENDER_KEY)

    def test_bad_key(self, stealth_addr):
        with pytest.raises(InvalidKeyError):
            mweb.create_output(Recipient(stealth_addr, 1), bytes(32))


class TestRewind:
    """Receiver, holding scan key, can open outputs sent to them"""

    @pytest.mark.parametrize('value', [0, 1, TEST_VALUE, (1 << 64) - 1])
    def test_rewind(self, stealth_addr, spend_pubkey, value):
        out, _ = mweb.create_output(Recipient(stealth_addr, value), SENDER_KEY)

        got_value, got_nonce = mweb.rewind_output(out, SCAN_KEY, spend_pubkey)
        assert got_value == value
        assert got_nonce == mweb.nonce_for_key(SENDER_KEY)

    def test_not_ours(self, stealth_addr, spend_pubkey):
        out, _ = mweb.create_output(Recipient(stealth_addr, 1234), SENDER_KEY)

        with pytest.raises(ValueError):
            mweb.rewind_output(out, OTHER_SENDER_KEY, spend_pubkey)

    def test_commitment_checked(self, stealth_addr, spend_pubkey):
        out, _ = mweb.create_output(Recipient(stealth_addr, 1234), SENDER_KEY)
        out.message.masked_value ^= 1

        with pytest.raises(ValueError) as ee:
            mweb.rewind_output(out, SCAN_KEY, spend_pubkey)
        assert 'commitment' in str(ee.value)

# EOF
