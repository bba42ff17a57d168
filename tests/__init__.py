# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Test suite for SQLRepository.

- Unit tests for the statement builder, dialects, key generators and classifier
- Integration tests for the repository against SQLite files
"""

from pathlib import Path
import tempfile
import uuid


def create_test_db_path() -> Path:
    return Path(tempfile.gettempdir()) / f"test_sqlrepo_{uuid.uuid4().hex[:8]}.db"


def cleanup_test_db(db_path: Path) -> None:
    for suffix in ("", "-wal", "-shm", "-journal"):
        path = Path(f"{db_path}{suffix}")
        if path.exists():
            path.unlink()


__all__ = [
    "create_test_db_path",
    "cleanup_test_db",
]
