# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# test_serialize.py - MWEB output wire format
#
import pytest
from io import BytesIO
from pproof.serializations import (
    MwebOutput, MwebOutputMessage, ser_compact_size, deser_compact_size, ser_string,
    deser_string, MWEB_MSG_STANDARD_FIELDS, MWEB_MSG_EXTRA_DATA)
from vectors import SENDER_KEY, RANGE_PROOF_HASH, G_BYTES


def parse(raw):
    rv = MwebOutput()
    rv.deserialize(BytesIO(raw))
    return rv

@pytest.mark.parametrize('n, expect', [
    (0, '00'),
    (252, 'fc'),
    (253, 'fdfd00'),
    (0xffff, 'fdffff'),
    (0x10000, 'fe00000100'),
    (0x100000000, 'ff0000000001000000'),
])
def test_compact_size(n, expect):
    assert ser_compact_size(n).hex() == expect
    assert deser_compact_size(BytesIO(bytes.fromhex(expect))) == n

def test_string():
    assert ser_string(b'abc') == b'\x03abc'
    assert deser_string(BytesIO(b'\x03abcdef')) == b'abc'
    with pytest.raises(EOFError):
        deser_string(BytesIO(b'\x05abc'))

@pytest.mark.parametrize('raw', ['fd0200', 'fdfc00', 'fe00000000', 'feffff0000',
                                 'ff0000000000000000', 'ffffffffff00000000'])
def test_compact_size_noncanonical(raw):
    # shorter form exists, so these are refused
    with pytest.raises(ValueError) as ee:
        deser_compact_size(BytesIO(bytes.fromhex(raw)))
    assert 'non-canonical' in str(ee.value)


class TestOutput:
    """Outputs made by make_proof"""

    def test_layout(self, good_proof):
        raw = good_proof.output
        out = parse(raw)

        assert out.serialize() == raw
        # 3 points, message (1 + 33 + 1 + 8 + 16), range proof hash, signature
        assert len(raw) == 33*3 + 59 + 32 + 64

        assert out.commitment[0] in (0x08, 0x09)
        assert out.range_proof_hash == RANGE_PROOF_HASH
        assert out.message.features == MWEB_MSG_STANDARD_FIELDS
        assert out.message.has_standard_fields
        assert out.hash().hex() == good_proof.output_id

    def test_truncated(self, good_proof):
        for ln in (0, 10, 33, 99, 100, 150, len(good_proof.output)-1):
            with pytest.raises(EOFError):
                parse(good_proof.output[0:ln])

    def test_unknown_features(self, good_proof):
        raw = bytearray(good_proof.output)
        assert raw[99] == MWEB_MSG_STANDARD_FIELDS
        raw[99] |= 0x80

        with pytest.raises(ValueError) as ee:
            parse(bytes(raw))
        assert 'unknown message features' in str(ee.value)

    def test_signature(self, good_proof):
        out = parse(good_proof.output)
        assert out.verify_signature()

        out.range_proof_hash = bytes(32)
        assert not out.verify_signature()

        out.sign(SENDER_KEY)
        assert out.verify_signature()
        assert out.hash().hex() != good_proof.output_id

    def test_signature_covers_message(self, good_proof):
        out = parse(good_proof.output)
        out.message.view_tag ^= 0x01
        assert not out.verify_signature()

    def test_defaults(self):
        out = MwebOutput()
        assert out.serialize() == bytes(33*3) + b'\x01' + bytes(33+1+8+16) + bytes(32+64)


class TestMessage:

    def test_extra_data(self):
        msg = MwebOutputMessage(features=MWEB_MSG_STANDARD_FIELDS | MWEB_MSG_EXTRA_DATA,
                                key_exchange_pubkey=G_BYTES, view_tag=0x5a,
                                masked_value=1234, masked_nonce=(1 << 127) + 3,
                                extra_data=b'hello')
        raw = msg.serialize()
        assert len(raw) == 1 + 33 + 1 + 8 + 16 + 1 + 5
        assert raw.endswith(b'\x05hello')

        got = MwebOutputMessage()
        got.deserialize(BytesIO(raw))
        assert got.serialize() == raw
        assert got.view_tag == 0x5a
        assert got.masked_value == 1234
        assert got.masked_nonce == (1 << 127) + 3
        assert got.extra_data == b'hello'

    def test_extra_data_long_length(self):
        msg = MwebOutputMessage(features=MWEB_MSG_EXTRA_DATA, extra_data=b'xy')
        assert msg.serialize() == b'\x02\x02xy'

        got = MwebOutputMessage()
        with pytest.raises(ValueError):
            got.deserialize(BytesIO(b'\x02\xfd\x02\x00xy'))

    def test_no_standard_fields(self):
        msg = MwebOutputMessage(features=MWEB_MSG_EXTRA_DATA, extra_data=b'xy')
        assert not msg.has_standard_fields
        assert msg.serialize() == b'\x02\x02xy'

        got = MwebOutputMessage()
        got.deserialize(BytesIO(b'\x00'))
        assert got.serialize() == b'\x00'

    def test_hash(self):
        m1 = MwebOutputMessage(key_exchange_pubkey=G_BYTES, masked_value=1)
        m2 = MwebOutputMessage(key_exchange_pubkey=G_BYTES, masked_value=2)
        assert len(m1.hash()) == 32
        assert m1.hash() != m2.hash()

# EOF
