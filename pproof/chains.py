# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# chains.py - Magic values for the networks we support
#
import os
from bech32 import decode as segwit_decode
from .address import encode_mweb_address, decode_mweb_address
from .exceptions import AddressDecodeError, UnknownChainError


class ChainsBase:

    @classmethod
    def encode_address(cls, sa):
        # StealthAddress to text
        return encode_mweb_address(cls.mweb_hrp, sa)

    @classmethod
    def decode_address(cls, addr):
        # text to StealthAddress, or AddressDecodeError; no whitespace allowed
        if addr.lower().startswith(cls.bech32_hrp + '1'):
            witver, _ = segwit_decode(cls.bech32_hrp, addr)
            if witver is not None:
                raise AddressDecodeError("Not an MWEB address: segwit v%d address" % witver)

        return decode_mweb_address(cls.mweb_hrp, addr)

    @classmethod
    def possible_address(cls, addr):
        # quick test, no checksum verification
        return addr.lower().startswith(cls.mweb_hrp + '1')

    @classmethod
    def render_value(cls, val, unpad=False):
        # convert litoshi value into human form.
        # - always be precise
        # - return (string, units label)
        unit = cls.ctype
        div = 100000000          # caution: don't use 1E8 here, that's a float
        fmt = '%08d'

        if unpad:
            # show precise value, but no trailing zeros
            if (val % div):
                txt = (('%d.'+fmt) % (val // div, val % div)).rstrip('0')
            else:
                # round amount, omit decimal point
                txt = '%d' % (val // div)
        else:
            # all the zeros & fixed with result
            txt = ('%d.'+fmt) % (val // div, val % div)

        return txt, unit


class LitecoinMain(ChainsBase):
    # see <https://github.com/litecoin-project/litecoin/blob/master/src/chainparams.cpp>
    ctype = 'LTC'
    name = 'Litecoin Mainnet'

    bech32_hrp = 'ltc'
    mweb_hrp = 'ltcmweb'


class LitecoinTestnet(ChainsBase):
    ctype = 'XLT'
    name = 'Litecoin Testnet'

    bech32_hrp = 'tltc'
    mweb_hrp = 'tmweb'


def get_chain(short_name):
    # lookup by ctype; case does not matter
    for c in AllChains:
        if c.ctype == short_name.upper():
            return c

    raise KeyError(short_name)

def current_chain():
    # return chain matching current setting, from environment
    chain = os.environ.get('PPROOF_CHAIN')
    if not chain:
        return LitecoinMain

    try:
        return get_chain(chain)
    except KeyError:
        raise UnknownChainError("Unknown chain in PPROOF_CHAIN: %s" % chain)

def chain_for_address(addr):
    # which chain does this address seem to belong to?
    for c in AllChains:
        if c.possible_address(addr):
            return c

    raise AddressDecodeError("Not an MWEB address: %.20s..." % addr)

AllChains = [LitecoinMain, LitecoinTestnet]

# EOF
