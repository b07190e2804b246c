import io
import json

import transcoder
from transcoder import KEY_ENV_VAR, main


def test_encode_positional(capsys):
    assert main(["encode", "AB", "--key", "abcdefghijk"]) == 0
    assert capsys.readouterr().out == "gfkgg\n"


def test_decode_positional(capsys):
    assert main(["decode", "gfkgg", "--key", "abcdefghijk"]) == 0
    assert capsys.readouterr().out == "AB\n"


def test_key_from_environment(monkeypatch, capsys):
    monkeypatch.setenv(KEY_ENV_VAR, "abcdefghijk")
    assert main(["encode", "A"]) == 0
    assert capsys.readouterr().out == "gf\n"


def test_key_from_prompt(monkeypatch, capsys):
    monkeypatch.setattr(transcoder.getpass, "getpass", lambda prompt="": "abcdefghijk")
    assert main(["decode", "gf"]) == 0
    assert capsys.readouterr().out == "A\n"


def test_stdin_trailing_newline_dropped(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("gfkgg\n"))
    assert main(["decode", "--key", "abcdefghijk"]) == 0
    assert capsys.readouterr().out == "AB\n"


def test_file_round_trip(tmp_path, capsys):
    src = tmp_path / "in.txt"
    enc = tmp_path / "enc.txt"
    dec = tmp_path / "dec.txt"
    src.write_text("line one\nline two 🐱", encoding="utf-8")
    key = "~Esp3eo0Nn-"
    assert main(["encode", "--key", key, "--infile", str(src), "--outfile", str(enc)]) == 0
    assert main(["decode", "--key", key, "--infile", str(enc), "--outfile", str(dec)]) == 0
    assert dec.read_text(encoding="utf-8") == "line one\nline two 🐱"
    assert "Wrote:" in capsys.readouterr().out


def test_invalid_key_exit_code(capsys):
    assert main(["encode", "x", "--key", "short"]) == 2
    assert "error:" in capsys.readouterr().err


def test_malformed_input_exit_code(capsys):
    assert main(["decode", "gfkkgg", "--key", "abcdefghijk"]) == 2
    assert "empty token" in capsys.readouterr().err


def test_info(capsys):
    assert main(["info"]) == 0
    info = json.loads(capsys.readouterr().out)
    assert info["name"] == "Transcoder"


def test_file_round_trip_keeps_trailing_newline(tmp_path):
    src = tmp_path / "in.txt"
    enc = tmp_path / "enc.txt"
    dec = tmp_path / "dec.txt"
    src.write_bytes(b"line one\r\nline two\n")
    key = "abcdefghijk"
    assert main(["encode", "--key", key, "--infile", str(src), "--outfile", str(enc)]) == 0
    assert main(["decode", "--key", key, "--infile", str(enc), "--outfile", str(dec)]) == 0
    assert dec.read_bytes() == b"line one\r\nline two\n"


def test_lone_surrogate_file_round_trip(tmp_path):
    key = "abcdefghijk"
    enc = tmp_path / "enc.txt"
    dec = tmp_path / "dec.txt"
    enc.write_text(transcoder.Transcoder(key).encode("a\ud800b"), encoding="utf-8")
    assert main(["decode", "--key", key, "--infile", str(enc), "--outfile", str(dec)]) == 0
    with open(dec, "r", encoding="utf-8", errors="surrogatepass") as f:
        assert f.read() == "a\ud800b"
    again = tmp_path / "again.txt"
    assert main(["encode", "--key", key, "--infile", str(dec), "--outfile", str(again)]) == 0
    assert again.read_text(encoding="utf-8") == enc.read_text(encoding="utf-8")


def test_unwritable_output_exit_code(tmp_path, capsys):
    out = tmp_path / "missing-dir" / "out.txt"
    assert main(["encode", "A", "--key", "abcdefghijk", "--outfile", str(out)]) == 2
    assert "error:" in capsys.readouterr().err


def test_missing_infile_exit_code(tmp_path, capsys):
    missing = tmp_path / "nope.txt"
    assert main(["encode", "--key", "abcdefghijk", "--infile", str(missing)]) == 2
    assert "error:" in capsys.readouterr().err
