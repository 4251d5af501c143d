# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# based on <http://click.pocoo.org/5/setuptools/#setuptools-integration>
#
# To use this, install with:
#
#   pip install --editable .
#
# and for the tests:
#
#   pip install --editable '.[test]'

from setuptools import setup

setup(
    name='pproof',
    version='1.0',
    description='Payment proofs for MWEB outputs',
    packages=['pproof'],
    python_requires='>=3.8',
    install_requires=[
        'Click',
        'ecdsa>=0.18',
        'bech32==1.2.0',        # PyPI release API: bech32_encode(hrp, data), no Encoding
        'blake3',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points='''
        [console_scripts]
        pproof=pproof.cli:main
    ''',
)
