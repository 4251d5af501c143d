# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# proof.py - Payment proofs for MWEB outputs.
#
# The sender, knowing the secret key used to build an output, can show anyone that
# the output pays a specific value to a specific stealth address. No scan keys needed
# by the verifier, everything is re-derived from the public fields of the proof.
#
import json, struct
from io import BytesIO
from binascii import a2b_hex
from collections import namedtuple
from . import chains, mw, mweb, secp
from .mweb import Recipient
from .serializations import MwebOutput, bytes_to_hex_str
from .exceptions import (
    InvalidKeyError, MalformedOutputError, MalformedProofError,
    OutputIdMismatchError, CommitmentMismatchError, ReceiverKeyMismatchError,
    KeyExchangeMismatchError, MaskedValueMismatchError, MaskedNonceMismatchError,
    SignatureInvalidError, PaymentProofError
)

NONCE_LEN = 16
SIGNATURE_LEN = 64

PROOF_FIELDS = ('output', 'output_id', 'address', 'value', 'nonce', 'signature')


class PaymentProof(namedtuple('PaymentProof', PROOF_FIELDS)):
    """
    Proof that an MWEB output pays `value` to stealth `address`.

    Fields:
        output:     serialized MwebOutput (bytes)
        output_id:  hex of the output's hash
        address:    destination address, as text
        value:      amount in litoshis
        nonce:      16 bytes derived from sender key
        signature:  Schnorr signature over nonce by output's sender key
    """

    __slots__ = ()

    def _check_fields(self):
        # shape of the container only; the checks that matter are in verify()
        if not isinstance(self.output, (bytes, bytearray)):
            raise MalformedProofError("output must be bytes")
        if not isinstance(self.output_id, str):
            raise MalformedProofError("output_id must be hex string")
        if not isinstance(self.address, str):
            raise MalformedProofError("address must be a string")
        try:
            mw.check_value(self.value)
        except ValueError as exc:
            raise MalformedProofError(str(exc))
        if not isinstance(self.nonce, (bytes, bytearray)) or len(self.nonce) != NONCE_LEN:
            raise MalformedProofError("nonce must be %d bytes" % NONCE_LEN)
        if not isinstance(self.signature, (bytes, bytearray)) \
                or len(self.signature) != SIGNATURE_LEN:
            raise MalformedProofError("signature must be %d bytes" % SIGNATURE_LEN)

    def parse_output(self):
        # bytes to MwebOutput; must consume everything
        f = BytesIO(self.output)
        output = MwebOutput()
        try:
            output.deserialize(f)
        except (EOFError, ValueError, struct.error) as exc:
            raise MalformedOutputError("Unable to parse output: %s" % exc)

        if f.read(1):
            raise MalformedOutputError("Unexpected bytes after output")

        return output

    def verify(self, chain=None):
        """
        Check the proof, raising the first failed check as an exception.

        Returns None if all good. Does not change anything, safe to call again.
        Raises some subclass of PaymentProofError otherwise.
        """
        self._check_fields()
        chain = chain or chains.current_chain()

        # Deserialize the output
        output = self.parse_output()

        # Verify the output id
        if bytes_to_hex_str(output.hash()) != self.output_id:
            raise OutputIdMismatchError

        # Construct the stealth address
        sa = chain.decode_address(self.address)
        A, B = sa.A(), sa.B()

        # Calculate the send key: s = HASH32(T_send||Ai||Bi||v||n)
        s = mweb.send_key(A, B, self.value, self.nonce)

        # Calculate the shared secret: t = HASH32(T_derive||s*Ai)
        sA = secp.ec_pubkey_tweak_mul(A, s)
        t = mweb.derive_shared(sA)

        # Verify the output's commitment: C ?= v*H + SWITCH(v, HASH32(T_blind||t))
        mask = mw.OutputMask.from_shared(t)
        blind = mw.blind_switch(mask.blind, self.value)
        if mw.new_commitment(blind, self.value) != output.commitment:
            raise CommitmentMismatchError

        # Verify the output's public key: Ko ?= Bi * HASH32(T_outkey||t)
        if mweb.receiver_pubkey(B, t) != output.receiver_pubkey:
            raise ReceiverKeyMismatchError

        # Verify the output's key exchange public key: Ke ?= s*Bi
        msg = output.message
        if secp.ec_pubkey_tweak_mul(B, s) != msg.key_exchange_pubkey:
            raise KeyExchangeMismatchError

        # Verify the encrypted value: v' ?= v ^ HASH8(T_vmask||t)
        if mask.mask_value(self.value) != msg.masked_value:
            raise MaskedValueMismatchError

        # Verify the encrypted nonce: n' ?= n ^ HASH16(T_nmask||t)
        if mask.mask_nonce(int.from_bytes(self.nonce, 'big')) != msg.masked_nonce:
            raise MaskedNonceMismatchError

        # Verify the sender key signature
        if not mw.verify(output.sender_pubkey, bytes(self.nonce), self.signature):
            raise SignatureInvalidError

    def is_valid(self, chain=None):
        try:
            self.verify(chain)
        except PaymentProofError:
            return False
        return True

    def to_dict(self):
        return dict(output=bytes_to_hex_str(self.output),
                    output_id=self.output_id,
                    address=self.address,
                    value=self.value,
                    nonce=bytes_to_hex_str(self.nonce),
                    signature=bytes_to_hex_str(self.signature))

    @classmethod
    def from_dict(cls, d):
        if not isinstance(d, dict):
            raise MalformedProofError("expected an object")
        missing = [fn for fn in PROOF_FIELDS if fn not in d]
        if missing:
            raise MalformedProofError("missing field(s): " + ', '.join(missing))

        try:
            rv = cls(output=a2b_hex(d['output']),
                     output_id=d['output_id'],
                     address=d['address'],
                     value=d['value'],
                     nonce=a2b_hex(d['nonce']),
                     signature=a2b_hex(d['signature']))
        except (TypeError, ValueError) as exc:
            raise MalformedProofError("bad hex: %s" % exc)

        rv._check_fields()
        return rv

    def to_json(self, **kws):
        return json.dumps(self.to_dict(), **kws)

    @classmethod
    def from_json(cls, text):
        try:
            d = json.loads(text)
        except ValueError as exc:
            raise MalformedProofError("not JSON: %s" % exc)
        return cls.from_dict(d)


def make_proof(address, value, sender_key, range_proof_hash, chain=None):
    """
    Build an output paying value to address, and a proof about it

    Args:
        address: destination MWEB address (text)
        value: amount in litoshis
        sender_key: 32-byte secret key used to construct the output
        range_proof_hash: 32-byte hash of the range proof to bind into output
        chain: network, default is current_chain()

    Returns:
        PaymentProof

    Raises:
        AddressDecodeError: address isn't an MWEB address on this chain
        InvalidKeyError: sender key not usable
        ValueError: value or range_proof_hash not usable
    """
    if not sender_key:
        raise InvalidKeyError("sender key required")
    secp.ec_seckey_verify(sender_key)
    if len(range_proof_hash) != 32:
        raise ValueError("range proof hash must be 32 bytes")
    mw.check_value(value)

    chain = chain or chains.current_chain()
    sa = chain.decode_address(address)

    output, _ = mweb.create_output(Recipient(sa, value), sender_key)

    # bind to range proof done elsewhere, then re-sign
    output.range_proof_hash = bytes(range_proof_hash)
    output.sign(sender_key)

    nonce = mweb.nonce_for_key(sender_key)

    return PaymentProof(output=output.serialize(),
                        output_id=bytes_to_hex_str(output.hash()),
                        address=address,
                        value=value,
                        nonce=nonce,
                        signature=mw.sign(sender_key, nonce))

# EOF
