# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
import pytest
from pproof import chains, secp
from pproof.mweb import keychain_address
from pproof.proof import make_proof
from vectors import SENDER_KEY, SCAN_KEY, SPEND_KEY, OTHER_SPEND_KEY, RANGE_PROOF_HASH, TEST_VALUE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # don't let the caller's settings leak into tests
    for vn in ('PPROOF_CHAIN', 'PPROOF_DEBUG', 'PPROOF_AUDIT_DIR'):
        monkeypatch.delenv(vn, raising=False)

@pytest.fixture
def spend_pubkey():
    return secp.ec_pubkey_create(SPEND_KEY)

@pytest.fixture
def stealth_addr(spend_pubkey):
    return keychain_address(SCAN_KEY, spend_pubkey)

@pytest.fixture
def mweb_addr(stealth_addr):
    return chains.LitecoinMain.encode_address(stealth_addr)

@pytest.fixture
def other_mweb_addr():
    sa = keychain_address(SCAN_KEY, secp.ec_pubkey_create(OTHER_SPEND_KEY))
    return chains.LitecoinMain.encode_address(sa)

@pytest.fixture
def good_proof(mweb_addr):
    return make_proof(mweb_addr, TEST_VALUE, SENDER_KEY, RANGE_PROOF_HASH)

# EOF
