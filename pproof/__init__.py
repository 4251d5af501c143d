# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# pproof - MWEB payment proofs
#
from .proof import PaymentProof, make_proof
from .address import StealthAddress
from .exceptions import *

__version__ = '1.0'
