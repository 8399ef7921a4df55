# hxcrepair/error.py
#
# Error management and reporting.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from typing import Any

class Fatal(Exception):
    pass

def check(pred, desc):
    if not pred:
        raise Fatal(desc)

def _fmt(value: Any) -> str:
    # bool is an int subclass but reads better as itself.
    if isinstance(value, int) and not isinstance(value, bool):
        return '%s0x%x' % ('-' if value < 0 else '', abs(value))
    return repr(value)

_predicates = {
    'eq': ('==', lambda a, b: a == b),
    'gt': ('>', lambda a, b: a > b),
}

def expect(what: str, value1: Any, how: str, value2: Any) -> None:
    """Abort the run unless `value1 <how> value2` holds.

    `how` is 'eq' or 'gt'. Both operands are reported in the message,
    integers in hex.
    """
    op, pred = _predicates[how]
    if not pred(value1, value2):
        raise Fatal('Expectation fails: %s: %s %s %s -> false'
                    % (what, _fmt(value1), op, _fmt(value2)))

# Local variables:
# python-indent: 4
# End:
