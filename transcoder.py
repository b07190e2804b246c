#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
transcoder.py — keyed digit-substitution transcoder (encode/decode), plus a tiny CLI.

Purpose
-------
Turn text into a string built only from characters of a caller-supplied key,
and back again. Each character's code point is written in decimal, every digit
is swapped for a key character, and the per-character tokens are joined by a
key-derived delimiter.

  key = "abcdefghijk"        ->  alphabet "abcdefghij", delimiter "k"
  encode("AB")  (65, 66)     ->  "gf" + "k" + "gg"  =  "gfkgg"
  decode("gfkgg")            ->  "AB"

NOT A CIPHER
------------
This is a structural transform. There is no diffusion, no keyed randomness, and
the output leaks length and character frequency. Anyone who sees a few encoded
strings can recover the alphabet. Use it only as a cosmetic layer *after* a
real hash or cipher has done the protecting, e.g.:

    digest = hashlib.sha512(secret).hexdigest()
    token  = Transcoder("~Esp3eo0Nn-").encode(digest)

Key rules
---------
- At least MIN_DISTINCT (11) distinct characters.
- alphabet  = first 10 distinct characters, in order of first occurrence.
- delimiter = the 11th distinct character.
- Anything past the 11th distinct character is ignored; repeats are harmless.

Characters are code points (Python str iteration), so astral characters such
as emoji are one token each, not a surrogate pair.

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
import os, sys, json, getpass, argparse
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, List, Optional

VERSION = "1.0"

# ---- configuration knobs ----
DIGITS = 10                    # alphabet size (decimal)
MIN_DISTINCT = DIGITS + 1      # alphabet + delimiter
MAX_CODE_POINT = 0x10FFFF
_MAX_TOKEN_LEN = len(str(MAX_CODE_POINT))
KEY_ENV_VAR = "TRANSCODER_KEY"


# ---------- exceptions ----------

class TranscoderError(Exception):
    """Base exception for transcoder."""


class InvalidKeyError(TranscoderError):
    """Key has fewer than MIN_DISTINCT distinct characters."""


class RoundTripValidationError(TranscoderError):
    """decode(encode(x)) != x. Internal defect, never a caller mistake."""


class UnsupportedCharacterError(TranscoderError):
    """A code point cannot be carried by the digit scheme."""


class UnknownSymbolError(TranscoderError):
    """Encoded input contains a character outside the alphabet."""


class EmptyTokenError(TranscoderError):
    """Encoded input has an empty token (edge or doubled delimiter, or empty input)."""


# ---------- transcoder ----------

@dataclass(frozen=True)
class Transcoder:
    """
    Immutable encoder/decoder bound to one key.

    decode() only knows the token grammar. Text that happens to parse (for
    example a token with leading zero symbols, of any length) decodes
    "successfully" to something meaningless; it cannot tell whether encode()
    produced it.
    """

    key: str = field(repr=False, compare=False)
    alphabet: str = field(init=False)
    delimiter: str = field(init=False)
    _lookup: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            raise TypeError("key must be str")
        # dict keeps insertion order; a set would not
        distinct = list(dict.fromkeys(self.key))
        if len(distinct) < MIN_DISTINCT:
            raise InvalidKeyError(
                f"key must contain at least {MIN_DISTINCT} distinct characters; got {len(distinct)}"
            )
        base = distinct[:DIGITS]
        object.__setattr__(self, "alphabet", "".join(base))
        object.__setattr__(self, "delimiter", distinct[DIGITS])
        object.__setattr__(self, "_lookup", MappingProxyType({ch: str(d) for d, ch in enumerate(base)}))

    # ---- public API ----

    def encode(self, source: str) -> str:
        """
        Encode `source`, one token per code point, joined by the delimiter.

        Every call decodes its own output before returning; a mismatch raises
        RoundTripValidationError. The empty string cannot round-trip (an empty
        encoded string is not decodable) and is rejected that way too.
        """
        if not isinstance(source, str):
            raise TypeError("source must be str")
        encoded = self.delimiter.join(self._encode_char(ch, i) for i, ch in enumerate(source))
        self._validate(source, encoded)
        return encoded

    def decode(self, encoded: str) -> str:
        """Reverse encode(). Raises EmptyTokenError / UnknownSymbolError on malformed input."""
        if not isinstance(encoded, str):
            raise TypeError("encoded must be str")
        tokens = encoded.split(self.delimiter)
        return "".join(self._decode_token(tok, i) for i, tok in enumerate(tokens))

    @staticmethod
    def info() -> dict:
        return {
            "name": "Transcoder",
            "version": VERSION,
            "min_distinct": MIN_DISTINCT,
            "digits": DIGITS,
            "notes": "Digit-substitution obfuscation layer. Not a cipher; apply a real hash/cipher first.",
        }

    # ---- internals ----

    def _encode_char(self, ch: str, pos: int) -> str:
        cp = ord(ch)
        if not 0 <= cp <= MAX_CODE_POINT:
            raise UnsupportedCharacterError(f"character at position {pos} has code point {cp} outside 0..{MAX_CODE_POINT}")
        digits = str(cp)
        if not (digits.isascii() and digits.isdigit()):
            raise UnsupportedCharacterError(f"character at position {pos} did not render as decimal digits: {digits!r}")
        return "".join(self.alphabet[int(d)] for d in digits)

    def _decode_token(self, token: str, index: int) -> str:
        if not token:
            raise EmptyTokenError(f"empty token at index {index}")
        digits: List[str] = []
        for ch in token:
            d = self._lookup.get(ch)
            if d is None:
                raise UnknownSymbolError(f"symbol {ch!r} in token {index} is not in the alphabet")
            digits.append(d)
        # leading zero symbols are tolerated; only significant digits count
        value = "".join(digits).lstrip("0") or "0"
        if len(value) > _MAX_TOKEN_LEN:
            raise UnsupportedCharacterError(f"token {index} is too long to be a code point ({len(value)} significant digits)")
        cp = int(value)
        if cp > MAX_CODE_POINT:
            raise UnsupportedCharacterError(f"token {index} decodes to {cp}, above {MAX_CODE_POINT}")
        return chr(cp)

    def _validate(self, source: str, encoded: str) -> None:
        try:
            restored = self.decode(encoded)
        except TranscoderError as e:
            raise RoundTripValidationError(f"could not validate encoding: {e}") from e
        if restored != source:
            raise RoundTripValidationError("could not validate encoding: source was malformed in the process")


# ---------- Tiny CLI ----------

def _resolve_key(cli_key: Optional[str]) -> str:
    if cli_key:
        return cli_key
    env_key = os.environ.get(KEY_ENV_VAR)
    if env_key:
        return env_key
    return getpass.getpass("Key: ")

def _read_text(args) -> str:
    if args.text is not None:
        return args.text
    if args.infile:
        with open(args.infile, "r", encoding="utf-8", errors="surrogatepass", newline="") as f:
            return f.read()
    data = sys.stdin.read()
    # one trailing line break on stdin is framing, not payload
    if data.endswith("\r\n"):
        return data[:-2]
    if data.endswith("\n"):
        return data[:-1]
    return data

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="transcoder", description="Keyed digit-substitution encoder (not a cipher)")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name, help_ in (("encode", "encode text"), ("decode", "decode text")):
        s = sub.add_parser(name, help=help_)
        s.add_argument("text", nargs="?", help="text to process (default: --infile or stdin)")
        s.add_argument("--key", help=f"key with >= {MIN_DISTINCT} distinct chars (default: ${KEY_ENV_VAR} or prompt)")
        s.add_argument("--infile", help="read UTF-8 text from file")
        s.add_argument("--outfile", help="write UTF-8 result to file")
    sub.add_parser("info", help="print engine info as JSON")
    return p

def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.cmd == "info":
        print(json.dumps(Transcoder.info(), indent=2))
        return 0
    try:
        tc = Transcoder(_resolve_key(args.key))
        text = _read_text(args)
        out = tc.encode(text) if args.cmd == "encode" else tc.decode(text)
        if args.outfile:
            with open(args.outfile, "w", encoding="utf-8", errors="surrogatepass", newline="") as f:
                f.write(out)
            print("Wrote:", args.outfile)
        else:
            print(out)
    except (TranscoderError, UnicodeError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
