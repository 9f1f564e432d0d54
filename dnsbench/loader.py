"""
Input loading and validation.

Reads server and domain lists from disk and validates them before any
benchmarking starts. Every failure raises InputValidationError with a
message naming the offending file and entry.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Union

import dns.exception
import dns.inet
import dns.name

from .exceptions import InputValidationError
from .models import Server


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def validate_servers(servers: Iterable[Server]) -> list[Server]:
    """Check every server has a name and an IP address. Duplicates are kept."""
    validated = []
    for position, server in enumerate(servers, start=1):
        name = (server.name or "").strip()
        address = (server.address or "").strip()
        if not name or not address:
            raise InputValidationError(
                f"Server entry {position} must have both a name and an address"
            )
        if not dns.inet.is_address(address):
            raise InputValidationError(
                f"Server entry {position} ({name}): address {address!r} is not an IP address"
            )
        validated.append(Server(name=name, address=address, description=server.description))

    if not validated:
        raise InputValidationError("Server list is empty")
    return validated


def validate_domains(domains: Iterable[str]) -> list[str]:
    """Trim, drop blanks, check names parse, and deduplicate keeping first occurrence."""
    seen = set()
    validated = []
    for domain in domains:
        domain = (domain or "").strip()
        if not domain or domain in seen:
            continue
        try:
            dns.name.from_text(domain)
        except (dns.exception.DNSException, UnicodeError) as e:
            raise InputValidationError(f"Invalid domain name {domain!r}: {e}") from e
        seen.add(domain)
        validated.append(domain)

    if not validated:
        raise InputValidationError("no domains defined")
    return validated


def _require_file(path: Path, kind: str) -> None:
    if not path.is_file():
        raise InputValidationError(f"{kind} file not found: {path}")


def _lower_keys(row: dict) -> dict:
    return {(k or "").strip().lower(): v for k, v in row.items()}


def _servers_from_csv(path: Path) -> list[Server]:
    try:
        with open(path, "r", newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            fieldnames = reader.fieldnames or []
            rows = list(reader)
    except (UnicodeDecodeError, csv.Error) as e:
        raise InputValidationError(f"{path}: cannot read CSV: {e}") from e

    fields = {(name or "").strip().lower() for name in fieldnames}
    if not {"name", "address"} <= fields:
        raise InputValidationError(
            f"{path}: CSV header must contain 'Name' and 'Address' columns"
        )

    servers = []
    # Line 1 is the header
    for line, row in enumerate(rows, start=2):
        row = _lower_keys(row)
        name = (row.get("name") or "").strip()
        address = (row.get("address") or "").strip()
        if not name or not address:
            raise InputValidationError(
                f"{path}:{line}: server entry is missing Name or Address"
            )
        servers.append(Server(name=name, address=address))
    return servers


def _servers_from_json(path: Path) -> list[Server]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InputValidationError(f"{path}: invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise InputValidationError(f"{path}: file is not valid UTF-8: {e}") from e

    if isinstance(data, dict):
        data = data.get("servers", [])
    if not isinstance(data, list):
        raise InputValidationError(f"{path}: expected a list of servers")

    servers = []
    for position, entry in enumerate(data, start=1):
        if not isinstance(entry, dict):
            raise InputValidationError(f"{path}: server entry {position} is not an object")
        entry = _lower_keys(entry)
        name = str(entry.get("name") or "").strip()
        address = str(entry.get("address") or "").strip()
        if not name or not address:
            raise InputValidationError(
                f"{path}: server entry {position} is missing name or address"
            )
        servers.append(Server(name=name, address=address, description=entry.get("description")))
    return servers


def load_servers(path: PathLike) -> list[Server]:
    """
    Load servers from a CSV or JSON file.

    CSV files need a header row with Name and Address columns. JSON files
    hold a list of objects with name and address keys, either at the top
    level or under a "servers" key.

    Args:
        path: Path to the server list

    Returns:
        Non-empty list of servers, in file order

    Raises:
        InputValidationError: If the file is missing, malformed or empty
    """
    path = Path(path)
    _require_file(path, "Server")

    if path.suffix.lower() == ".json":
        servers = _servers_from_json(path)
    else:
        servers = _servers_from_csv(path)

    if not servers:
        raise InputValidationError(f"{path}: no servers defined")

    try:
        servers = validate_servers(servers)
    except InputValidationError as e:
        raise InputValidationError(f"{path}: {e}") from e

    logger.info("Loaded %d servers from %s", len(servers), path)
    return servers


def load_domains(path: PathLike) -> list[str]:
    """
    Load domains from a text file, one per line.

    Blank lines and lines starting with '#' are ignored. Domains keep
    their case; exact duplicates are dropped.

    Raises:
        InputValidationError: If the file is missing, unreadable, holds an
            unparseable name or holds no domains
    """
    path = Path(path)
    _require_file(path, "Domain")

    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            lines = [line.strip() for line in f if not line.strip().startswith("#")]
    except UnicodeDecodeError as e:
        raise InputValidationError(f"{path}: file is not valid UTF-8: {e}") from e

    try:
        domains = validate_domains(lines)
    except InputValidationError as e:
        raise InputValidationError(f"{path}: {e}") from e

    logger.info("Loaded %d domains from %s", len(domains), path)
    return domains
