# cli.py
#
# HxC XML repair command line interface.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

import os, sys, textwrap

from hxcrepair import __version__
from hxcrepair.document import Document
from hxcrepair.repair import repair

def usage(argv, message=None):
    if message:
        print("Err: %s" % message)
    print("Usage:")
    print("  %s <hxc.xml>" % os.path.basename(argv[0]))
    print("\trepairs missing sectors in HxC XML dumps")
    return 1

def run(argv, out) -> int:

    if len(argv) < 2:
        return usage(argv, "Filename missing")
    if len(argv) > 2:
        return usage(argv, "Too many arguments")

    name = argv[1]
    if not os.access(name, os.R_OK):
        return usage(argv, "File not readable: %s" % name)
    if not os.path.isfile(name):
        return usage(argv, "Not a plain file: %s" % name)

    document = Document.from_file(name)
    repair(document)

    # Only reached if every track was reconciled.
    out.write(document.to_string())
    out.flush()
    return 0

def main(argv=None):
    if argv is None:
        argv = sys.argv

    # All logging/printing on stderr. Stdout carries only the repaired
    # document. Configure line buffering, even if the logging output is
    # not to a console.
    out = sys.stdout
    if hasattr(sys.stderr, 'reconfigure'):
        sys.stderr.reconfigure(line_buffering=True)
    sys.stdout = sys.stderr

    try:
        print("Repair HxC XML (hxcrepair %s)" % __version__)
        res = run(argv, out)
    except (IndexError, AssertionError, TypeError, KeyError):
        raise
    except KeyboardInterrupt:
        res = 1
    except Exception as err:
        print("** FATAL ERROR:")
        print(textwrap.dedent(str(err)))
        res = 1
    finally:
        sys.stdout = out

    return res

# Local variables:
# python-indent: 4
# End:
