"""Data-driven checker tests: one .tests file per mode."""

from pathlib import Path

import pytest

from tinyts import check, errors, type_show

TYPECHECK_DIR = Path(__file__).parent / "typecheck"


def parse_typecheck_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse .tests file into (name, input, expected) tuples.

    Expected is one of: 'ok: <type>', 'error: <ErrorClass>: <message>'
    """
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            test_input = "\n".join(input_lines)
            expected = "\n".join(expected_lines).strip()
            result.append((test_name, test_input, expected))
        else:
            i += 1
    return result


def discover_typecheck_tests() -> list[tuple[str, str, str, str]]:
    """Find all checker tests, returns (test_id, input, expected, mode)."""
    results = []
    for test_file in sorted(TYPECHECK_DIR.glob("*.tests")):
        for name, input_code, expected in parse_typecheck_file(test_file):
            test_id = f"{test_file.stem}/{name}"
            results.append((test_id, input_code, expected, test_file.stem))
    return results


def pytest_generate_tests(metafunc):
    """Parametrize tests over checker test files."""
    if "typecheck_input" in metafunc.fixturenames:
        params = [
            pytest.param(input_code, expected, mode, id=test_id)
            for test_id, input_code, expected, mode in discover_typecheck_tests()
        ]
        metafunc.parametrize("typecheck_input,typecheck_expected,typecheck_mode", params)


def test_typecheck(typecheck_input: str, typecheck_expected: str, typecheck_mode: str):
    """Check a program and compare its type or first error."""
    if typecheck_expected.startswith("ok: "):
        ty = check(typecheck_input, typecheck_mode)
        assert type_show(ty) == typecheck_expected[len("ok: "):]
        return
    assert typecheck_expected.startswith("error: "), typecheck_expected
    class_name, message = typecheck_expected[len("error: "):].split(": ", 1)
    error_class = getattr(errors, class_name)
    with pytest.raises(error_class) as exc_info:
        check(typecheck_input, typecheck_mode)
    assert type(exc_info.value) is error_class
    assert exc_info.value.msg == message


def test_every_mode_has_a_test_file():
    from tinyts import MODES

    stems = sorted(p.stem for p in TYPECHECK_DIR.glob("*.tests"))
    assert stems == sorted(MODES)


def test_test_files_are_well_formed():
    for test_file in sorted(TYPECHECK_DIR.glob("*.tests")):
        cases = parse_typecheck_file(test_file)
        assert len(cases) > 0, test_file.name
        names = [name for name, _, _ in cases]
        assert len(names) == len(set(names)), test_file.name
        for name, _, expected in cases:
            assert expected.startswith("ok: ") or expected.startswith("error: "), name
