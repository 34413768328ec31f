from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console


class CompactUUIDOpsError(Exception):
    pass


class UsageError(CompactUUIDOpsError):
    pass


class OpError(CompactUUIDOpsError):
    pass


COMPACT_UUID_ALPHABET = "COMPACT_UUID_ALPHABET"
COMPACT_UUID_PAD_LENGTH = "COMPACT_UUID_PAD_LENGTH"
COMPACT_UUID_STRICT = "COMPACT_UUID_STRICT"

_ERROR_CONSOLE = Console(stderr=True)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {msg}")


def _rich_note(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[yellow]note:[/yellow] {msg}")


@dataclass(frozen=True)
class GlobalOpts:
    alphabet: str | None
    pad_length: int | None
    strict: bool
    pretty: bool
    quiet: bool


def _truthy(raw: str | None) -> bool:
    return str(raw or "").strip().lower() in {"1", "true", "yes", "on"}


def _env_or_none(*names: str) -> str | None:
    for n in names:
        v = (os.environ.get(n) or "").strip()
        if v:
            return v
    return None


def _parse_pad_length(raw: str | int | None, *, source: str) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        val = int(raw)
    except (TypeError, ValueError) as e:
        raise UsageError(f"invalid pad length from {source}: {raw!r}") from e
    if val < 0:
        raise UsageError(f"invalid pad length from {source}: must be >= 0")
    return val


def _apply_global_env(
    *,
    alphabet: str | None,
    pad_length: int | None,
    strict: bool,
    plain_json: bool,
    quiet: bool,
) -> GlobalOpts:
    """Merge root options with COMPACT_UUID_* env values; options win."""
    # spaces are valid symbols, so the alphabet is read unstripped
    resolved_alphabet = alphabet or os.environ.get(COMPACT_UUID_ALPHABET) or None
    if pad_length is not None:
        resolved_pad = _parse_pad_length(pad_length, source="--pad-length")
    else:
        resolved_pad = _parse_pad_length(
            _env_or_none(COMPACT_UUID_PAD_LENGTH), source=f"env {COMPACT_UUID_PAD_LENGTH}"
        )
    return GlobalOpts(
        alphabet=resolved_alphabet,
        pad_length=resolved_pad,
        strict=strict or _truthy(os.environ.get(COMPACT_UUID_STRICT)),
        pretty=not plain_json,
        quiet=quiet,
    )


def _print_json(obj: Any, *, pretty: bool) -> None:
    if pretty:
        sys.stdout.write(json.dumps(obj, indent=2, sort_keys=True) + "\n")
    else:
        sys.stdout.write(json.dumps(obj, separators=(",", ":"), sort_keys=True) + "\n")
