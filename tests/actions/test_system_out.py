"""Unit tests for the System.out / System.err code actions."""

import pytest
from pydantic import ValidationError

from sysoutlogger.actions import (
    RewriteConfig,
    StreamConfig,
    SystemStream,
    TextEdit,
    apply_edits,
    convert_source,
    find_system_out_call,
    get_system_out_arguments,
    provide_code_actions,
)

# --- Helpers ---


def refactor(initial_text: str, expected_actions: int, cursor: int = 1, config: RewriteConfig | None = None):
    """Apply the preferred action at `cursor` and return the new text, or None when nothing is offered."""
    actions = provide_code_actions(initial_text, cursor, config)
    if expected_actions == 0:
        assert actions is None
        return None
    assert actions is not None
    assert len(actions) == expected_actions
    preferred = [a for a in actions if a.is_preferred]
    assert len(preferred) == 1
    return apply_edits(initial_text, preferred[0].edits)


# --- Tests ---


def test_refactors_out_println_string():
    """Test out.println(string)."""
    assert refactor('\tSystem.out.println("Simple");', 3) == '\tlogger.debug("Simple");'


def test_refactors_out_print_string():
    """Test out.print(string)."""
    assert refactor('\tSystem.out.print("Simple");', 3) == '\tlogger.debug("Simple");'


def test_refactors_out_print_int():
    """Test out.print(int)."""
    assert refactor("\tSystem.out.print(123);", 3) == '\tlogger.debug("{}", 123);'


def test_refactors_with_lombok():
    """Test @Slf4j switches the logger reference to `log`."""
    text = "@Slf4j\tSystem.out.print(123);"
    assert refactor(text, 3, cursor=len("@Slf4j\tS")) == '@Slf4j\tlog.debug("{}", 123);'


def test_refactors_out_print_variable():
    """Test out.print(var1)."""
    assert refactor("\tSystem.out.print(var1);", 3) == '\tlogger.debug("{}", var1);'


def test_refactors_err_print():
    """Test System.err gets a single, preferred error action."""
    assert refactor('\tSystem.err.print("Simple");', 1) == '\tlogger.error("Simple");'


def test_refactors_and_removes_whitespace():
    """Test whitespace around the argument is dropped."""
    assert refactor('\tSystem.out.println( "Simple"   \n);', 3) == '\tlogger.debug("Simple");'


def test_refactors_string_plus_string():
    """Test string + char are merged into one message."""
    assert refactor("\tSystem.out.println(\"Simple\" + '1');", 3) == '\tlogger.debug("Simple1");'


def test_refactors_string_plus_int():
    """Test string + int."""
    assert refactor('\tSystem.out.println("Simple " + 1);', 3) == '\tlogger.debug("Simple {}", 1);'


def test_refactors_string_and_variables():
    """Test string + var + string + var."""
    text = '\tSystem.out.println("Var1=" + var1 + ", var2=" + var2);'
    assert refactor(text, 3) == '\tlogger.debug("Var1={}, var2={}", var1, var2);'


def test_refactors_method_call():
    """Test a nested call with several arguments is passed through."""
    text = '\tSystem.out.println(methodCall("arg", 123));'
    assert refactor(text, 3) == '\tlogger.debug("{}", methodCall("arg", 123));'


def test_refactors_space_before_parenthesis():
    """Test whitespace between the method name and `(` is kept out of the edits."""
    assert refactor("\tSystem.out.println (x);", 3) == '\tlogger.debug ("{}", x);'


def test_does_not_refactor_unfinished():
    """Test an unclosed argument list offers nothing."""
    refactor('\tSystem.out.println("Simple "', 0)


def test_does_not_refactor_unfinished_nested_call():
    """Test an unclosed nested call offers nothing."""
    refactor('\tSystem.out.println(call("Simple "', 0)


def test_does_not_refactor_missing_arguments():
    """Test a method name without arguments offers nothing."""
    refactor("\tSystem.out.println   ", 0)


def test_does_not_refactor_unrelated_parentheses():
    """Test parentheses after other code are not taken as the call's arguments."""
    refactor("\tRunnable r = System.out.println; foo(bar);", 0)


def test_no_call_on_cursor_line():
    """Test only the line under the cursor is searched."""
    text = 'int a = 1;\nSystem.out.println("Simple");'
    assert provide_code_actions(text, 2) is None
    assert provide_code_actions(text, len("int a = 1;\n") + 3) is not None


def test_action_order_and_titles():
    """Test System.out offers info, debug and trace in that order with debug preferred."""
    actions = provide_code_actions('System.out.println("x");', 0)
    assert [a.title for a in actions] == ["Convert to logger.info", "Convert to logger.debug", "Convert to logger.trace"]
    assert [a.is_preferred for a in actions] == [False, True, False]


def test_edits_keep_surrounding_text():
    """Test the edits cover the method name and the text between the parentheses only."""
    text = 'x();System.out.println("a" + b);y();'
    actions = provide_code_actions(text, 0)
    method_edit, argument_edit = actions[1].edits
    assert text[method_edit.start : method_edit.end] == "System.out.println"
    assert text[argument_edit.start : argument_edit.end] == '"a" + b'
    assert argument_edit.new_text == '"a{}", b'


def test_find_system_out_call():
    """Test stream and method are extracted from the match."""
    text = '    System.err.println("oops");'
    match = find_system_out_call(text, 10)
    assert match.start == 4
    assert match.method_match == "System.err.println"
    assert match.stream == SystemStream.ERR
    assert match.method == "println"
    assert find_system_out_call("MySystem.out.println(1);", 0) is None


def test_get_system_out_arguments_end():
    """Test `end` points one past the closing parenthesis."""
    text = 'System.out.print("a");'
    match = get_system_out_arguments(text, find_system_out_call(text, 0))
    assert text[match.end - 1] == ")"
    assert text[match.end :] == ";"
    assert match.open_paren == len("System.out.print")


def test_custom_config():
    """Test severities, preference, logger name and title come from the config."""
    config = RewriteConfig(
        logger_reference="LOG",
        title_template="Use {{ logger }}.{{ severity }}() for System.{{ stream }}.{{ method }}",
        out=StreamConfig(severities=["info", "warn"], preferred="info"),
    )
    actions = provide_code_actions("System.out.println(1);", 0, config)
    assert [a.title for a in actions] == [
        "Use LOG.info() for System.out.println",
        "Use LOG.warn() for System.out.println",
    ]
    assert apply_edits("System.out.println(1);", actions[0].edits) == 'LOG.info("{}", 1);'


def test_preferred_must_be_offered():
    """Test a preferred severity outside of the offered ones is rejected."""
    with pytest.raises(ValidationError):
        StreamConfig(severities=["info"], preferred="debug")
    with pytest.raises(ValidationError):
        StreamConfig(severities=[], preferred="debug")


def test_apply_edits_rejects_overlaps():
    """Test overlapping edits raise instead of corrupting the text."""
    with pytest.raises(ValueError):
        apply_edits("abcdef", [TextEdit(start=0, end=3, new_text="x"), TextEdit(start=2, end=4, new_text="y")])


def test_apply_edits_order_independent():
    """Test edits are applied relative to the original text regardless of order."""
    edits = [TextEdit(start=4, end=5, new_text="EE"), TextEdit(start=0, end=1, new_text="A")]
    assert apply_edits("abcdef", edits) == "AbcdEEf"


# --- Whole-file conversion ---


JAVA_SOURCE = """\
public class Example {
    public void run(int count) {
        System.out.println("Starting");
        System.out.println("Count=" + count + ", twice=" + (count * 2));
        System.err.println("Failed: " + describe(count, "x"));
        System.out.print(
            "multi" +
            " line");
        System.out.println("unfinished"
    }
}
"""

EXPECTED_SOURCE = """\
public class Example {
    public void run(int count) {
        logger.debug("Starting");
        logger.debug("Count={}, twice={}", count, (count * 2));
        logger.error("Failed: {}", describe(count, "x"));
        logger.debug("multi line");
        System.out.println("unfinished"
    }
}
"""


def test_convert_source():
    """Test every complete call gets its preferred conversion."""
    converted, result = convert_source(JAVA_SOURCE)
    assert converted == EXPECTED_SOURCE
    assert result.converted == 4
    assert result.skipped == 1


def test_convert_source_forced_severity():
    """Test out_severity applies to System.out calls only."""
    text = 'System.out.println("a");\nSystem.err.println("b");'
    converted, _ = convert_source(text, out_severity="info")
    assert converted == 'logger.info("a");\nlogger.error("b");'


def test_convert_source_keeps_hex_value():
    """Test hex literals keep their value in the rewritten call."""
    converted, result = convert_source("System.out.println(0xFF);")
    assert converted == 'logger.debug("{}", 255);'
    assert result.converted == 1


def test_convert_source_lombok():
    """Test the Lombok logger is used for calls after @Slf4j only."""
    text = 'System.out.println("a");\n@Slf4j\nclass A { void f() { System.out.println("b"); } }'
    converted, _ = convert_source(text)
    assert converted == 'logger.debug("a");\n@Slf4j\nclass A { void f() { log.debug("b"); } }'


def test_convert_source_nested_call_site_is_skipped():
    """Test a print call inside the arguments of another print call is left alone."""
    text = "System.out.println(wrap(System.out.println(1)));"
    converted, result = convert_source(text)
    assert converted == 'logger.debug("{}", wrap(System.out.println(1)));'
    assert result.converted == 1
    assert result.skipped == 1


def test_convert_source_without_calls():
    """Test text without print calls is returned unchanged."""
    text = 'logger.info("already done");'
    converted, result = convert_source(text)
    assert converted == text
    assert result.converted == 0
    assert result.skipped == 0
