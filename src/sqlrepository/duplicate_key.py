# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Duplicate-key error classification.

Drivers signal unique/primary key violations differently: an SQLSTATE code,
a vendor error number or only a message. ``is_duplicate_key_error`` checks
them in that order. Repositories accept any ``Callable[[BaseException], bool]``
in its place when a driver needs a stricter rule.
"""

from __future__ import annotations

from typing import Callable, Optional

import ahocorasick

from .constants import DuplicateKeyConstants

DuplicateKeyClassifier = Callable[[BaseException], bool]

_MARKER_AUTOMATON: Optional[ahocorasick.Automaton] = None


def _get_marker_automaton() -> ahocorasick.Automaton:
    """Get or create the automaton matching duplicate-key message markers."""
    global _MARKER_AUTOMATON
    if _MARKER_AUTOMATON is None:
        automaton = ahocorasick.Automaton()
        for marker in DuplicateKeyConstants.MESSAGE_MARKERS:
            automaton.add_word(marker, marker)
        automaton.make_automaton()
        _MARKER_AUTOMATON = automaton
    return _MARKER_AUTOMATON


def get_sqlstate(err: BaseException) -> Optional[str]:
    """SQLSTATE from driver attributes (psycopg, psycopg2) or a string first argument."""
    for attribute in DuplicateKeyConstants.SQLSTATE_ATTRIBUTES:
        value = getattr(err, attribute, None)
        if isinstance(value, str) and value:
            return value
    if err.args and isinstance(err.args[0], str) and len(err.args[0]) == 5 and err.args[0].isalnum():
        return err.args[0]
    return None


def get_vendor_code(err: BaseException) -> Optional[int]:
    """Numeric vendor error code, as PyMySQL and mysqlclient put in ``args[0]``."""
    if err.args and isinstance(err.args[0], int) and not isinstance(err.args[0], bool):
        return err.args[0]
    return None


def has_duplicate_marker(message: str) -> bool:
    automaton = _get_marker_automaton()
    for _ in automaton.iter(message.lower()):
        return True
    return False


def is_duplicate_key_error(err: BaseException) -> bool:
    """
    Whether ``err`` reports a unique or primary key violation.

    Args:
        err: Native driver exception

    Returns:
        True for SQLSTATE 23000/23505, MySQL error 1062, or a message containing
        "duplicate" or "UNIQUE constraint failed" (case-insensitive)
    """
    sqlstate = get_sqlstate(err)
    if sqlstate in DuplicateKeyConstants.SQLSTATE_CODES:
        return True
    if get_vendor_code(err) in DuplicateKeyConstants.MYSQL_ERROR_CODES:
        return True
    return has_duplicate_marker(str(err))
