import pytest

from dockrun.errors import CommandSyntaxError
from dockrun.shell import join_continuations, split_command_line


def test_plain_words() -> None:
    assert split_command_line("docker run -p 80:80 nginx:latest") == [
        "docker",
        "run",
        "-p",
        "80:80",
        "nginx:latest",
    ]


def test_quotes_keep_inner_whitespace() -> None:
    tokens = split_command_line(
        """docker run -e "GREETING=hello world" -e 'NAME=a b' -p 80:80 img:1"""
    )
    assert tokens[2:6] == ["-e", "GREETING=hello world", "-e", "NAME=a b"]


def test_line_continuations_are_joined() -> None:
    command = "docker run \\\n  -p 8080:80 \\\n  -v /data:/data \\\n  app:2"
    assert join_continuations(command) == "docker run -p 8080:80 -v /data:/data app:2"
    assert split_command_line(command)[-1] == "app:2"


def test_hash_is_not_a_comment() -> None:
    assert split_command_line("docker run -e PASS=a#b -p 1:1 x:1")[3] == "PASS=a#b"


def test_unterminated_quote_raises() -> None:
    with pytest.raises(CommandSyntaxError):
        split_command_line('docker run -e "BROKEN -p 80:80 nginx:1')
