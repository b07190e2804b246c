#!/usr/bin/env python3
"""
transcoder_selftest.py — black-box self-test for Transcoder

Checks the properties every key must satisfy:
  * round trip on mixed text (ASCII, BMP, astral, control chars)
  * determinism across instances
  * key boundary (11 distinct ok, 10 distinct rejected, repeats ignored)
  * delimiter never inside the alphabet
  * one token per code point
  * malformed input rejected on decode
  * the "abcdefghijk" known vector

Usage:
    import transcoder_selftest as tst
    report = tst.run_self_test()
    # or: python transcoder_selftest.py

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
from typing import Any, Dict, Type

from transcoder import Transcoder, TranscoderError, InvalidKeyError

DEFAULT_SELFTEST_KEY = "~Esp3eo0Nn-"
_SAMPLE = "Hello \x00\x01\x7f — ünïcödé 日本語 🐱 tail"

def _safe_preview(s: str, limit: int = 60) -> str:
    out = []
    for ch in s[:limit]:
        o = ord(ch)
        if o < 32 or o == 127:
            out.append(f"\\x{o:02x}")
        else:
            out.append(ch)
    if len(s) > limit:
        out.append("...")
    return "".join(out)

def _ok(why: str = "") -> Dict[str, Any]:
    return {"ok": True, "why": why}

def _fail(why: str) -> Dict[str, Any]:
    return {"ok": False, "why": why}

def run_self_test(transcoder_cls: Type[Transcoder] = Transcoder, key: str = DEFAULT_SELFTEST_KEY) -> Dict[str, Any]:
    tests: Dict[str, Dict[str, Any]] = {}
    encoded = ""

    # 1) Round trip
    try:
        tc = transcoder_cls(key)
        encoded = tc.encode(_SAMPLE)
        tests["round_trip"] = _ok() if tc.decode(encoded) == _SAMPLE else _fail("decoded text mismatch")
    except Exception as e:
        tests["round_trip"] = _fail(f"exception: {e}")

    # 2) Determinism
    try:
        a, b = transcoder_cls(key), transcoder_cls(key)
        if (a.alphabet, a.delimiter) != (b.alphabet, b.delimiter):
            tests["determinism"] = _fail("alphabet/delimiter differ between instances")
        elif a.encode(_SAMPLE) != b.encode(_SAMPLE):
            tests["determinism"] = _fail("encode output differs between instances")
        else:
            tests["determinism"] = _ok()
    except Exception as e:
        tests["determinism"] = _fail(f"exception: {e}")

    # 3) Key boundary
    try:
        eleven = "0123456789X"
        base = transcoder_cls(eleven)
        noisy = transcoder_cls("0011223344556677889XX0X9")
        try:
            transcoder_cls("0123456789" * 3)
            tests["key_boundary"] = _fail("10 distinct characters unexpectedly accepted")
        except InvalidKeyError:
            if (noisy.alphabet, noisy.delimiter) != (base.alphabet, base.delimiter):
                tests["key_boundary"] = _fail("repeated characters changed the derivation")
            else:
                tests["key_boundary"] = _ok()
    except Exception as e:
        tests["key_boundary"] = _fail(f"exception: {e}")

    # 4) Delimiter exclusivity
    try:
        tc = transcoder_cls(key)
        tests["delimiter_exclusive"] = _fail("delimiter found in alphabet") if tc.delimiter in tc.alphabet else _ok()
    except Exception as e:
        tests["delimiter_exclusive"] = _fail(f"exception: {e}")

    # 5) Token count
    try:
        tc = transcoder_cls(key)
        n = len(tc.encode(_SAMPLE).split(tc.delimiter))
        tests["token_count"] = _ok() if n == len(_SAMPLE) else _fail(f"{n} tokens for {len(_SAMPLE)} characters")
    except Exception as e:
        tests["token_count"] = _fail(f"exception: {e}")

    # 6) Malformed decode
    try:
        tc = transcoder_cls(key)
        foreign = next(chr(c) for c in range(33, 0x250) if chr(c) not in tc.alphabet + tc.delimiter)
        accepted = []
        for bad in ("", tc.delimiter * 2, foreign):
            try:
                tc.decode(bad)
                accepted.append(bad)
            except TranscoderError:
                pass
        tests["malformed_decode"] = _fail(f"accepted malformed input: {accepted!r}") if accepted else _ok()
    except Exception as e:
        tests["malformed_decode"] = _fail(f"exception: {e}")

    # 7) Known vector
    try:
        tc = transcoder_cls("abcdefghijk")
        if (tc.alphabet, tc.delimiter) != ("abcdefghij", "k"):
            tests["known_vector"] = _fail(f"derived {tc.alphabet!r}/{tc.delimiter!r}")
        elif tc.encode("A") != "gf" or tc.encode("AB") != "gfkgg":
            tests["known_vector"] = _fail("encode output does not match vector")
        elif tc.decode("gfkgg") != "AB":
            tests["known_vector"] = _fail("decode output does not match vector")
        else:
            tests["known_vector"] = _ok()
    except Exception as e:
        tests["known_vector"] = _fail(f"exception: {e}")

    return {
        "transcoder": transcoder_cls.__name__,
        "version": transcoder_cls.info().get("version", "?"),
        "all_passed": all(t["ok"] for t in tests.values()),
        "tests": tests,
        "sample": {
            "encoded": (encoded[:80] + "...") if len(encoded) > 80 else encoded,
            "source_preview": _safe_preview(_SAMPLE),
        },
    }

if __name__ == "__main__":  # pragma: no cover
    rep = run_self_test()
    print(f"Transcoder: {rep['transcoder']}  Version: {rep['version']}")
    print("All passed:", rep["all_passed"])
    for name, r in rep["tests"].items():
        status = "OK " if r["ok"] else "FAIL"
        why = ("" if r["ok"] else f"  ({r['why']})")
        print(f" - {name:20s}: {status}{why}")
    print("Sample encoded:", rep["sample"]["encoded"])
    print("Source preview:", rep["sample"]["source_preview"])
    raise SystemExit(0 if rep["all_passed"] else 1)
