# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class PkStrategy(Enum):
    """How a primary key is produced for an insert."""

    AUTOINCREMENT = "autoincrement"  # database identity column
    INTEGER = "integer"              # MAX+1 lookup with collision retry
    STRING = "string"                # random UUIDv4 text
    NONE = "none"                    # caller supplies the key
