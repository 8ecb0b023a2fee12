import json
import sys
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from monkey import monkey_cli
from monkey.monkey_errors import ParseError


def test_run_monkey_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="let x = 1 + 2 * 3; x", is_string=True)
    out = capsys.readouterr().out.splitlines()
    assert out == ["let x = (1 + (2 * 3));", "x"]


def test_run_monkey_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "input.monkey"
    file_path.write_text("add(1, 2);")
    monkey_cli.run_monkey(source=str(file_path))
    assert capsys.readouterr().out.strip() == "add(1, 2)"


def test_run_monkey_rejects_other_extensions() -> None:
    with pytest.raises(ValueError):
        monkey_cli.run_monkey(source="program.txt")


def test_run_monkey_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="let a = 1;", is_string=True, tokens=True)
    out = capsys.readouterr().out.splitlines()
    assert out == ["LET\tlet", "IDENT\ta", "ASSIGN\t=", "INT\t1", "SEMICOLON\t;"]


def test_run_monkey_json(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="-a", is_string=True, as_json=True)
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "Program"
    expr = data["statements"][0]["expression"]
    assert expr["kind"] == "PrefixExpression"
    assert expr["operator"] == "-"
    assert expr["right"] == {"kind": "Identifier", "token": "a", "value": "a"}


def test_run_monkey_raises_parse_error() -> None:
    with pytest.raises(ParseError) as exc:
        monkey_cli.run_monkey(source="let x 5;", is_string=True)
    assert "expected next token to be ASSIGN, got INT instead" in exc.value.errors


def test_main_prints_errors_and_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "let = 1;"])
    with pytest.raises(SystemExit) as exc:
        monkey_cli.main()
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("parser errors:")
    assert "\texpected next token to be IDENT, got ASSIGN instead" in err


def test_main_success(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "if (a) { b } else { c }"])
    monkey_cli.main()
    assert capsys.readouterr().out.strip() == "ifa belse c"


def test_main_tokens_and_json_are_exclusive(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "1", "--tokens", "--json"])
    with pytest.raises(SystemExit) as exc:
        monkey_cli.main()
    assert exc.value.code == 2


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(value=st.integers(min_value=0, max_value=10**6))  # type: ignore[misc]
def test_run_monkey_integer_roundtrip(
    value: int, capsys: pytest.CaptureFixture[str]
) -> None:
    monkey_cli.run_monkey(source=f"{value};", is_string=True)
    assert capsys.readouterr().out.strip() == str(value)
