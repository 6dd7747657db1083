"""Error types raised by the core simulation."""

from __future__ import annotations


class InvariantViolation(Exception):
    """A construction-time contract was broken (e.g. an empty movement schedule).

    Never raised during a normal tick; seeing one means the caller built
    an object from invalid inputs.
    """
