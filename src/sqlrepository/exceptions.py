# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Exceptions raised by the repository.
"""

from __future__ import annotations


class PersistException(RuntimeError):
    """Raised when a persist operation (insert) fails.

    When a native driver error is wrapped it is available as ``__cause__``.
    """


class RecordNotFoundException(LookupError):
    """Raised when a requested record does not exist."""
