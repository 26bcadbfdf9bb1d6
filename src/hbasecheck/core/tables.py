"""Table identifiers and region descriptors.

This module owns the rules for which table names the probe accepts and the
lightweight, SDK-free representation of a table region.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ROOT_TABLE = "-ROOT-"
META_TABLE = ".META."

# Checked on every run, in this order, ahead of user tables.
CATALOG_TABLES = (ROOT_TABLE, META_TABLE)

_TABLE_NAME_RE = re.compile(r"[A-Za-z0-9][\w.-]*", re.ASCII)


@dataclass(frozen=True)
class Region:
    """
    A single region of an HBase table.

    Attributes:
        name: Region name as reported by the Thrift server.
        server_name: Regionserver the region is assigned to, or None/empty
                     when the region is not assigned.
    """

    name: str
    server_name: str | None = None

    @property
    def assigned(self) -> bool:
        return bool(self.server_name)


def is_catalog_table(table: str) -> bool:
    """Return True for the built-in catalog tables."""
    return table in CATALOG_TABLES


def validate_table_name(table: str) -> str:
    """
    Validate a user table name.

    Catalog table names are accepted as-is. Anything else must start with an
    alphanumeric character followed by word characters, dots or dashes.

    Raises:
        ValueError: If the name is not a valid table name.
    """
    if is_catalog_table(table):
        return table
    if not _TABLE_NAME_RE.fullmatch(table):
        raise ValueError(f"invalid table name {table} given")
    return table


def parse_table_list(raw: str | None) -> list[str]:
    """
    Turn a comma-separated table list into validated, unique user tables.

    - Whitespace around names is ignored and empty entries are dropped.
    - Catalog tables are removed, since they are always checked separately.
    - Duplicates are removed, keeping the first occurrence.

    Raises:
        ValueError: If no tables were given, none remain after filtering, or
                    a name is invalid.
    """
    if raw is None:
        raise ValueError("no tables specified")

    names = [part.strip() for part in raw.split(",")]
    tables = [n for n in names if n and not is_catalog_table(n)]
    if not tables:
        raise ValueError("no valid tables specified")

    unique = list(dict.fromkeys(tables))
    return [validate_table_name(t) for t in unique]
