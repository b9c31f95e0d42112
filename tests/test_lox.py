"""Tests for the driver: phase ordering, reporting and exit codes."""

import io
import sys

import pytest

from lox_pl import Lox, main


def test_static_errors_suppress_execution(run):
    result = run('print "before";\n{ var a = a; }\nprint "after";')
    assert result.out == ""
    assert result.err == "[line 2] Error at 'a': Can't read local variable in its own initializer.\n"
    assert result.lox.had_error
    assert not result.lox.had_runtimeError


def test_syntax_errors_skip_resolution(run):
    result = run("print 1\nreturn 2;")
    assert result.out == ""
    # the resolver never runs, so the top-level return goes unreported
    assert result.err == "[line 2] Error at 'return': Expect ';' after value.\n"


def test_scanner_errors_are_reported(run):
    result = run("print 1; #")
    assert result.out == ""
    assert result.err == "[line 1] Error: Unexpected character: #\n"


def test_runtime_error_stops_remaining_statements(run):
    result = run('print "one";\nprint -"two";\nprint "three";')
    assert result.lines == ["one"]
    assert result.err == "Operand must be a number.\n[line 2]\n"


def test_separate_drivers_do_not_share_globals(run):
    first = run("var shared = 1;")
    assert first.err == ""
    second = run("print shared;")
    assert second.err == "Undefined variable 'shared'.\n[line 1]\n"


def test_prompt_keeps_bindings_between_lines():
    out, err = io.StringIO(), io.StringIO()
    lines = iter(["var a = 1;", "print a + ;", "a = a + 1;", "print a;", ":exit", "print 99;"])
    lox = Lox(out=out, err=err)
    lox.run_prompt(read_line=lambda prompt: next(lines))
    assert out.getvalue() == "2\n"
    assert err.getvalue() == "[line 1] Error at ';': Expect expression.\n"
    assert not lox.had_error


def test_prompt_stops_at_end_of_input():
    def read_line(prompt):
        raise EOFError

    lox = Lox(out=io.StringIO(), err=io.StringIO())
    lox.run_prompt(read_line=read_line)


def test_debug_traces_phases():
    err = io.StringIO()
    lox = Lox(out=io.StringIO(), err=err, debug=True)
    lox.run("{ var a = 1; print a; }")
    trace = err.getvalue()
    assert "[lox] Phase 1: Scanning" in trace
    assert "[lox] Phase 3: Resolving" in trace
    assert "[lox]   1 local references resolved" in trace
    assert "[lox] Phase 4: Interpreting" in trace


@pytest.mark.parametrize(
    "source, status",
    [
        ("print 1;", 0),
        ("print ;", 65),
        ("return;", 65),
        ("print nope;", 70),
    ],
)
def test_run_file_status(tmp_path, source, status):
    script = tmp_path / "script.lox"
    script.write_text(source, encoding="utf-8")
    lox = Lox(out=io.StringIO(), err=io.StringIO())
    assert lox.run_file(str(script)) == status


def test_main_runs_a_script(tmp_path, capsys):
    script = tmp_path / "hello.lox"
    script.write_text('print "hello";', encoding="utf-8")
    main([str(script)])
    assert capsys.readouterr().out == "hello\n"


def test_main_exit_codes(tmp_path, capsys):
    script = tmp_path / "broken.lox"
    script.write_text("print 1 + nil;", encoding="utf-8")
    with pytest.raises(SystemExit) as info:
        main([str(script)])
    assert info.value.code == 70
    assert "Operands must be two numbers or two strings." in capsys.readouterr().err

    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "missing.lox")])
    assert info.value.code == 66

    with pytest.raises(SystemExit) as info:
        main(["one.lox", "two.lox"])
    assert info.value.code == 64


def test_deep_nesting_is_a_static_error(run):
    result = run("print " + "(" * 5000 + "1" + ")" * 5000 + ";")
    assert result.out == ""
    assert result.err == "[line 1] Error at '(': Program is nested too deeply.\n"
    assert result.lox.had_error


def test_deep_blocks_are_a_static_error(run):
    result = run("{" * 5000 + "}" * 5000)
    assert "Program is nested too deeply." in result.err
    assert result.lox.had_error
    assert not result.lox.had_runtimeError


def test_run_restores_recursion_limit(tmp_path, capsys):
    limit = sys.getrecursionlimit()
    Lox(out=io.StringIO(), err=io.StringIO()).run("fun f() { f(); }\nf();")
    assert sys.getrecursionlimit() == limit

    script = tmp_path / "hello.lox"
    script.write_text('print "hello";', encoding="utf-8")
    main([str(script)])
    assert sys.getrecursionlimit() == limit


def test_main_starts_a_repl_without_a_script(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("print 1 + 1;\n:exit\n"))
    main([])
    out = capsys.readouterr().out
    assert out.startswith("| Welcome to Lox!\n| Type ':exit' to quit REPL.\n")
    assert "2\n" in out
