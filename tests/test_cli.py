import re

import pytest

from pggen.cli import parse_args, usage

USAGE_RE = re.compile(r"Usage:.*Args:.*Options:", re.S)


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_text(flag, capsys):
    with pytest.raises(SystemExit) as info:
        parse_args([flag])
    assert info.value.code == 0
    assert USAGE_RE.search(capsys.readouterr().out)


def test_no_args_is_error(capsys):
    with pytest.raises(SystemExit) as info:
        parse_args([])
    assert info.value.code == 1
    assert USAGE_RE.search(capsys.readouterr().err)


def test_bad_arg_is_error(capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["--bad-arg", "test.toml"])
    assert info.value.code == 1
    assert USAGE_RE.search(capsys.readouterr().err)


def test_missing_option_value_is_error(capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["-c"])
    assert info.value.code == 1
    assert USAGE_RE.search(capsys.readouterr().err)


def test_usage_ok_goes_to_stdout(capsys):
    with pytest.raises(SystemExit) as info:
        usage(True)
    captured = capsys.readouterr()
    assert info.value.code == 0
    assert USAGE_RE.search(captured.out)
    assert captured.err == ""


def test_config_file_only():
    config = parse_args(["test.toml"])
    assert config.config_file_path == "test.toml"
    assert config.connection_strings == []


def test_all_options():
    config = parse_args(
        [
            "-o", "models/pggen.gen.go",
            "-c", "bad",
            "--connection-string", "$DB_URL",
            "-d", "FOO",
            "--disable-var", "BLIP=baz",
            "-e", "FOO",
            "--enable-var", "UNSET=missing_value",
            "test.toml",
        ]
    )
    assert config.output_file_name == "models/pggen.gen.go"
    assert config.connection_strings == ["bad", "$DB_URL"]
    assert config.disable_vars == ["FOO", "BLIP=baz"]
    assert config.enable_vars == ["FOO", "UNSET=missing_value"]
    assert config.config_file_path == "test.toml"


def test_long_output_option():
    config = parse_args(["--output-file", "out.go", "test.toml"])
    assert config.output_file_name == "out.go"


def test_two_positionals_is_error():
    with pytest.raises(SystemExit) as info:
        parse_args(["a.toml", "b.toml"])
    assert info.value.code == 1