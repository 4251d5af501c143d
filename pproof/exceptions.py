# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# exceptions.py - Exceptions defined by us.
#

# Bad secret key (zero, or not less than curve order)
class InvalidKeyError(ValueError):
    pass

# Anything wrong with a payment proof, or the things it refers to
class PaymentProofError(ValueError):
    pass

# Text of address is not a usable MWEB stealth address (for this chain)
class AddressDecodeError(PaymentProofError):
    pass

# PPROOF_CHAIN names a network we don't know
class UnknownChainError(PaymentProofError):
    pass

# Output bytes could not be parsed
class MalformedOutputError(PaymentProofError):
    pass

# Proof container (json/dict) is missing fields or has wrong sizes
class MalformedProofError(PaymentProofError):
    pass

# Something recomputed during verification does not match the output.
# - one subclass per check, so callers can tell them apart
class ProofMismatchError(PaymentProofError):
    check = None

    def __init__(self, msg=None):
        super().__init__(msg or '%s mismatch' % self.check)

class OutputIdMismatchError(ProofMismatchError):
    check = 'output id'

class CommitmentMismatchError(ProofMismatchError):
    check = 'commitment'

class ReceiverKeyMismatchError(ProofMismatchError):
    check = 'receiver pubkey'

class KeyExchangeMismatchError(ProofMismatchError):
    check = 'key exchange pubkey'

class MaskedValueMismatchError(ProofMismatchError):
    check = 'masked value'

class MaskedNonceMismatchError(ProofMismatchError):
    check = 'masked nonce'

class SignatureInvalidError(ProofMismatchError):
    check = 'sender key signature'

    def __init__(self, msg=None):
        super().__init__(msg or 'sender key signature invalid')

# EOF
