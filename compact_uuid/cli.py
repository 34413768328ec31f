from __future__ import annotations

import argparse
import sys
from typing import Any

import click
import typer
from dotenv import load_dotenv

from . import __version__
from .cli_shared import (
    COMPACT_UUID_ALPHABET,
    COMPACT_UUID_PAD_LENGTH,
    COMPACT_UUID_STRICT,
    GlobalOpts,
    OpError,
    UsageError,
    _apply_global_env,
    _eprint,
    _print_json,
    _rich_error,
    _rich_note,
)
from .codec import CompactUUID
from .decoder import invalid_positions
from .errors import InvalidAlphabet, InvalidCharacter, InvalidValue
from .uuid5 import Namespace, format_uuid, name_based_id, namespace_for_name, parse_uuid


app = typer.Typer(
    name="compact-uuid",
    help="Encode UUIDs with a custom alphabet and decode them back.",
    no_args_is_help=True,
    add_completion=False,
)


def _bootstrap_env() -> None:
    # Discover and load .env without overriding already-exported values.
    load_dotenv()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"compact-uuid {__version__}")
        raise typer.Exit(code=0)


def _namespace(**kwargs: Any) -> argparse.Namespace:
    return argparse.Namespace(**kwargs)


def _render_usage_error_with_help(
    *,
    message: str,
    ctx: click.Context | None = None,
) -> None:
    _rich_error(message)
    help_text = ""
    if isinstance(ctx, click.Context):
        help_text = str(ctx.get_help() or "").strip()
    if help_text:
        _eprint("")
        _eprint(help_text)


@app.callback()
def app_callback(
    ctx: typer.Context,
    alphabet: str | None = typer.Option(
        None,
        "--alphabet",
        help=f"Symbols to encode with; deduplicated and sorted (env override: {COMPACT_UUID_ALPHABET})",
    ),
    pad_length: int | None = typer.Option(
        None,
        "--pad-length",
        help=f"Minimum output length (default: alphabet pad length; env override: {COMPACT_UUID_PAD_LENGTH})",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help=f"Reject characters outside the alphabet when decoding (env override: {COMPACT_UUID_STRICT})",
    ),
    plain_json: bool = typer.Option(False, "--plain-json", help="Emit compact JSON output"),
    quiet: bool = typer.Option(False, "--quiet", help="Reduce stderr logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    del version
    try:
        g = _apply_global_env(
            alphabet=alphabet,
            pad_length=pad_length,
            strict=strict,
            plain_json=plain_json,
            quiet=quiet,
        )
    except UsageError as e:
        _render_usage_error_with_help(message=str(e), ctx=ctx)
        raise typer.Exit(code=2)
    ctx.obj = {"g": g}


def _ctx_global(ctx: typer.Context) -> GlobalOpts:
    return ctx.obj["g"]


def _codec(g: GlobalOpts) -> CompactUUID:
    try:
        return CompactUUID(g.alphabet, strict=g.strict)
    except InvalidAlphabet as e:
        raise UsageError(f"invalid alphabet: {e}") from e


def _pad_length(args: argparse.Namespace, g: GlobalOpts) -> int | None:
    val = getattr(args, "pad_length", None)
    if val is None:
        return g.pad_length
    if val < 0:
        raise UsageError("invalid --pad-length: must be >= 0")
    return val


def _invoke(ctx: typer.Context, func: Any, **kwargs: Any) -> None:
    g = _ctx_global(ctx)
    args = _namespace(**kwargs)
    try:
        code = int(func(args, g))
    except UsageError as e:
        _render_usage_error_with_help(message=str(e), ctx=ctx)
        raise typer.Exit(code=2)
    except OpError as e:
        _rich_error(str(e))
        raise typer.Exit(code=1)

    if code:
        raise typer.Exit(code=code)


def cmd_encode(args: argparse.Namespace, g: GlobalOpts) -> int:
    codec = _codec(g)
    try:
        raw = parse_uuid(args.value)
    except ValueError as e:
        raise UsageError(f"invalid UUID {args.value!r}: expected 8-4-4-4-12 hex text") from e
    encoded = codec.encode(raw, _pad_length(args, g))
    _print_json(
        {"kind": "compact-uuid.encode.v1", "uuid": format_uuid(raw), "encoded": encoded},
        pretty=g.pretty,
    )
    return 0


def cmd_decode(args: argparse.Namespace, g: GlobalOpts) -> int:
    codec = _codec(g)
    text = str(args.text)
    try:
        raw = codec.decode_bytes(text)
    except InvalidCharacter as e:
        raise UsageError(str(e)) from e
    substituted = invalid_positions(text, codec.alphabet)
    if substituted and not g.quiet:
        _rich_note(
            f"{len(substituted)} character(s) outside the alphabet decoded as "
            f"{codec.alphabet.zero_digit!r} (pass --strict to reject)"
        )
    _print_json(
        {"kind": "compact-uuid.decode.v1", "encoded": text, "uuid": format_uuid(raw)},
        pretty=g.pretty,
    )
    return 0


def cmd_name(args: argparse.Namespace, g: GlobalOpts) -> int:
    codec = _codec(g)
    choice = str(args.namespace or "auto").strip().lower()
    if choice == "auto":
        namespace = namespace_for_name(args.name)
    else:
        try:
            namespace = Namespace[choice.upper()]
        except KeyError as e:
            raise UsageError(
                f"invalid --namespace {args.namespace!r} (expected auto, dns, url, oid or x500)"
            ) from e
    raw = name_based_id(namespace, args.name)
    _print_json(
        {
            "kind": "compact-uuid.name.v1",
            "name": args.name,
            "namespace": namespace.name.lower(),
            "uuid": format_uuid(raw),
            "encoded": codec.encode(raw, _pad_length(args, g)),
        },
        pretty=g.pretty,
    )
    return 0


def cmd_random(args: argparse.Namespace, g: GlobalOpts) -> int:
    codec = _codec(g)
    try:
        raw = codec.random_value()
    except InvalidValue as e:
        raise OpError(f"random source failed: {e}") from e
    _print_json(
        {
            "kind": "compact-uuid.random.v1",
            "uuid": format_uuid(raw),
            "encoded": codec.encode(raw, _pad_length(args, g)),
        },
        pretty=g.pretty,
    )
    return 0


def cmd_info(args: argparse.Namespace, g: GlobalOpts) -> int:
    codec = _codec(g)
    if args.num_bytes < 1:
        raise UsageError("invalid --num-bytes: must be >= 1")
    alpha = codec.alphabet
    _print_json(
        {
            "kind": "compact-uuid.info.v1",
            "alphabet": alpha.symbols,
            "base": alpha.base,
            "defaultPadLength": alpha.default_pad_length(),
            "fullWidthLength": alpha.full_width_length(),
            "numBytes": args.num_bytes,
            "encodeLength": alpha.encode_length(args.num_bytes),
            "strict": codec.strict,
        },
        pretty=g.pretty,
    )
    return 0


_PAD_HELP = "Minimum output length for this command (overrides --pad-length on the root command)"


@app.command("encode", help="Encode a UUID given in canonical text form.")
def encode(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="UUID, e.g. 5453b1ed-7bde-4a41-a76c-27f61ade5f73"),
    pad_length: int | None = typer.Option(None, "--pad-length", help=_PAD_HELP),
) -> None:
    _invoke(ctx, cmd_encode, value=value, pad_length=pad_length)


@app.command("decode", help="Decode an encoded string back to a UUID.")
def decode(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Encoded string"),
) -> None:
    _invoke(ctx, cmd_decode, text=text)


@app.command("name", help="Encode the name-based (version 5) UUID of NAME.")
def name(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name to hash; http(s):// names use the URL namespace"),
    namespace: str = typer.Option("auto", "--namespace", help="auto, dns, url, oid or x500"),
    pad_length: int | None = typer.Option(None, "--pad-length", help=_PAD_HELP),
) -> None:
    _invoke(ctx, cmd_name, name=name, namespace=namespace, pad_length=pad_length)


@app.command("random", help="Encode a random UUID.")
def random(
    ctx: typer.Context,
    length: int | None = typer.Option(None, "--length", help=_PAD_HELP),
) -> None:
    _invoke(ctx, cmd_random, pad_length=length)


@app.command("info", help="Show the canonical alphabet and derived lengths.")
def info(
    ctx: typer.Context,
    num_bytes: int = typer.Option(16, "--num-bytes", help="Payload size for the encode length"),
) -> None:
    _invoke(ctx, cmd_info, num_bytes=num_bytes)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        _bootstrap_env()
        result = app(args=argv, prog_name="compact-uuid", standalone_mode=False)
        if result is None:
            return 0
        return int(result)
    except typer.Exit as e:
        return int(e.exit_code)
    except click.ClickException as e:
        if isinstance(e, click.UsageError):
            _render_usage_error_with_help(message=e.format_message(), ctx=getattr(e, "ctx", None))
            return int(e.exit_code)
        _rich_error(e.format_message())
        return int(e.exit_code)


if __name__ == "__main__":
    raise SystemExit(main())
