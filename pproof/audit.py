# (c) Copyright 2026 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# audit.py - Keep a record of proofs made and checked, for the command line tool.
#
# Log goes into PPROOF_AUDIT_DIR/pproof.log. Nothing is kept if that isn't set,
# and if the file can't be opened we complain on stderr instead.
#
import os, sys, time, traceback


class AuditLogger:
    def __init__(self, dirname=None, never_log=False):
        self.dirname = dirname if dirname is not None else os.environ.get('PPROOF_AUDIT_DIR')
        self.never_log = never_log or not self.dirname
        self.fname = None

    def __enter__(self):
        try:
            if self.never_log:
                raise NotImplementedError

            # mkdir if needed
            os.makedirs(self.dirname, exist_ok=True)

            self.fname = os.path.join(self.dirname, 'pproof.log')
            self.fd = open(self.fname, 'a+t')       # append mode
        except NotImplementedError:
            self.fd = open(os.devnull, 'wt')
        except OSError:
            # may be fatal or not, depending on configuration
            self.fname = None
            self.fd = sys.stderr

        print('==== %s' % time.strftime('%Y-%m-%d %H:%M:%S'), file=self.fd)
        return self

    def __exit__(self, exc_type, exc_value, tb):
        if exc_value:
            self.fd.write('\n\n---- pproof Exception ----\n')
            traceback.print_exception(exc_type, exc_value, tb, file=self.fd)

        self.fd.write('\n===\n\n')

        if self.fd is not sys.stderr:
            self.fd.close()

    @property
    def is_unsaved(self):
        return not self.fname

    def info(self, msg):
        print('Info: ' + msg, file=self.fd)

    def error(self, msg):
        print('Error: ' + msg, file=self.fd)

    def proof_made(self, proof):
        print('Payment proof created:', file=self.fd)
        print('  output id = ' + proof.output_id, file=self.fd)
        print('  address = ' + proof.address, file=self.fd)
        print('  value = %d' % proof.value, file=self.fd)

    def proof_checked(self, proof, problem=None):
        print('Payment proof checked:', file=self.fd)
        print('  output id = ' + str(proof.output_id), file=self.fd)
        if problem is None:
            self.info('proof is valid')
        else:
            self.error('proof rejected: %s (%s)' % (problem, type(problem).__name__))

# EOF
