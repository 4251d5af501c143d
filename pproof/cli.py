# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# cli.py - Make and check MWEB payment proofs from the command line.
#
import os, sys, click
from binascii import a2b_hex
from . import chains
from .address import StealthAddress
from .audit import AuditLogger
from .exceptions import PaymentProofError
from .proof import PaymentProof, make_proof

# print some things, sometimes
DEBUG = bool(os.environ.get('PPROOF_DEBUG'))


def pick_chain(ctx, address=None):
    # explicit --chain wins, else guess from address, else environment
    ctype = ctx.obj.get('chain') if ctx.obj else None
    if ctype:
        return chains.get_chain(ctype)
    if address:
        try:
            return chains.chain_for_address(address)
        except PaymentProofError:
            pass
    try:
        return chains.current_chain()
    except PaymentProofError as exc:
        raise click.UsageError(str(exc))

def hex_arg(txt, length, label):
    try:
        rv = a2b_hex(txt.strip())
    except ValueError:
        raise click.BadParameter('%s: not hex' % label)
    if len(rv) != length:
        raise click.BadParameter('%s: need %d bytes, got %d' % (label, length, len(rv)))
    return rv

def load_proof(fd):
    try:
        return PaymentProof.from_json(fd.read())
    except PaymentProofError as exc:
        raise click.ClickException('Unable to load proof: %s' % exc)


# Options we want for all commands
@click.group()
@click.option('--chain', '-c', type=click.Choice([c.ctype for c in chains.AllChains],
                                                  case_sensitive=False),
                default=None, help='Network (default: $PPROOF_CHAIN, else from address)')
@click.pass_context
def main(ctx, chain):
    ctx.ensure_object(dict)
    ctx.obj['chain'] = chain

@main.command()
@click.argument('address')
@click.argument('value', type=int)
@click.option('--key', '-k', required=True, help='Sender secret key (hex)')
@click.option('--range-proof-hash', '-r', default='00'*32,
                help='Hash of range proof to bind (hex)')
@click.option('--output', '-o', type=click.File('wt'), default='-', help='Where to put result')
@click.pass_context
def make(ctx, address, value, key, range_proof_hash, output):
    "Construct an output and a proof that it pays VALUE (litoshis) to ADDRESS"
    address = address.strip()
    key = hex_arg(key, 32, 'key')
    rp_hash = hex_arg(range_proof_hash, 32, 'range proof hash')
    chain = pick_chain(ctx, address)

    problem = None
    with AuditLogger() as log:
        try:
            proof = make_proof(address, value, key, rp_hash, chain=chain)
            log.proof_made(proof)
        except ValueError as exc:
            log.error(str(exc))
            problem = exc

    if problem:
        raise click.ClickException(str(problem))

    output.write(proof.to_json(indent=2))
    output.write('\n')

    if DEBUG:
        print("output id: %s" % proof.output_id, file=sys.stderr)

@main.command()
@click.argument('proof_file', type=click.File('rt'))
@click.pass_context
def verify(ctx, proof_file):
    "Check a payment proof; exit code is non-zero if not valid"
    proof = load_proof(proof_file)
    chain = pick_chain(ctx, proof.address)

    problem = None
    with AuditLogger() as log:
        try:
            proof.verify(chain)
        except PaymentProofError as exc:
            problem = exc

        log.proof_checked(proof, problem)

    if problem:
        click.echo('FAILED: %s' % problem)
        if DEBUG:
            print("failed check: %s" % type(problem).__name__, file=sys.stderr)
        ctx.exit(1)

    click.echo('OK')

@main.command()
@click.argument('proof_file', type=click.File('rt'))
@click.pass_context
def show(ctx, proof_file):
    "Summarize a payment proof (does not verify it)"
    proof = load_proof(proof_file)
    chain = pick_chain(ctx, proof.address)

    txt, units = chain.render_value(proof.value, unpad=True)
    click.echo('Address:   %s' % proof.address)
    click.echo('Value:     %s %s' % (txt, units))
    click.echo('Output ID: %s' % proof.output_id)
    click.echo('Network:   %s' % chain.name)

@main.command()
@click.option('--scan', required=True, help='Scan public key A (hex, 33 bytes)')
@click.option('--spend', required=True, help='Spend public key B (hex, 33 bytes)')
@click.pass_context
def address(ctx, scan, spend):
    "Encode a stealth address from its two public keys"
    raw = hex_arg(scan, 33, 'scan') + hex_arg(spend, 33, 'spend')
    try:
        sa = StealthAddress.from_bytes(raw)
    except ValueError as exc:
        raise click.BadParameter(str(exc))

    click.echo(pick_chain(ctx).encode_address(sa))

if __name__ == '__main__':
    main()

# EOF
