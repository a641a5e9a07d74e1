import pytest

from minishell.ast import NodeType
from minishell.errors import ShellSyntaxError
from minishell.lexer import tokenize
from minishell.parser import Parser, parse
from minishell.tokens import Token, TokenType


def test_default_input_of_source_test():
    tree = parse(
        tokenize("ls -la | grep .c && echo 'Build Success' || echo 'Build Fail'")
    )
    assert tree.type is NodeType.OR
    assert tree.right.type is NodeType.COMMAND
    assert tree.right.args == ["echo", "Build Fail"]
    and_node = tree.left
    assert and_node.type is NodeType.AND
    assert and_node.right.args == ["echo", "Build Success"]
    pipe = and_node.left
    assert pipe.type is NodeType.PIPE
    assert pipe.left.args == ["ls", "-la"]
    assert pipe.right.args == ["grep", ".c"]


def test_simple_command():
    tree = parse(tokenize("cat file"))
    assert tree.type is NodeType.COMMAND
    assert tree.args == ["cat", "file"]
    assert tree.redirections == []


def test_pipeline_nests_to_the_right():
    tree = parse(tokenize("a | b | c"))
    assert tree.type is NodeType.PIPE
    assert tree.left.args == ["a"]
    assert tree.right.type is NodeType.PIPE
    assert tree.right.left.args == ["b"]
    assert tree.right.right.args == ["c"]


def test_logic_operators_nest_to_the_left():
    tree = parse(tokenize("a && b && c"))
    assert tree.type is NodeType.AND
    assert tree.right.args == ["c"]
    assert tree.left.type is NodeType.AND
    assert tree.left.left.args == ["a"]


def test_output_redirection():
    tree = parse(tokenize("echo hello > output.txt"))
    assert tree.args == ["echo", "hello"]
    assert [(r.type, r.file_name) for r in tree.redirections] == [
        (TokenType.REDIR_OUT, "output.txt")
    ]


def test_redirections_keep_order_and_kind():
    tree = parse(tokenize("< in cat << EOF >> log"))
    assert tree.args == ["cat"]
    assert [(r.type, r.file_name) for r in tree.redirections] == [
        (TokenType.REDIR_IN, "in"),
        (TokenType.REDIR_HEREDOC, "EOF"),
        (TokenType.REDIR_APPEND, "log"),
    ]


def test_redirection_only_command():
    tree = parse(tokenize("> out"))
    assert tree.args == []
    assert tree.redirections[0].file_name == "out"


def test_variables_are_arguments():
    tree = parse(tokenize("echo $HOME"))
    assert tree.args == ["echo", "$HOME"]


def test_tokens_without_eof_are_accepted():
    tree = parse([Token(TokenType.WORD, "ls")])
    assert tree.args == ["ls"]


@pytest.mark.parametrize(
    "line", ["", "   ", "ls |", "| ls", "ls | | wc", "|| ls", "ls &&", "ls >", "cat < $X"]
)
def test_syntax_errors(line):
    with pytest.raises(ShellSyntaxError) as info:
        parse(tokenize(line))
    assert info.value.exit_code == 258


def test_consume_mismatch_does_not_advance():
    parser = Parser(tokenize("ls"))
    assert parser.consume(TokenType.PIPE) is None
    assert parser.peek() == Token(TokenType.WORD, "ls")
    assert parser.consume(TokenType.WORD) == Token(TokenType.WORD, "ls")
    assert parser.peek() == Token(TokenType.EOF)


def test_peek_past_end_is_none():
    parser = Parser([Token(TokenType.EOF)])
    parser.consume(TokenType.EOF)
    assert parser.peek() is None
    assert parser.consume(TokenType.EOF) is None


def test_parse_command_stops_at_pipe():
    parser = Parser(tokenize("a b | c"))
    node = parser.parse_command()
    assert node.args == ["a", "b"]
    assert parser.peek().type is TokenType.PIPE


def test_parse_redirection_appends_to_list():
    parser = Parser(tokenize("> file"))
    redirections = []
    parser.parse_redirection(redirections)
    assert [(r.type, r.file_name) for r in redirections] == [
        (TokenType.REDIR_OUT, "file")
    ]
    assert parser.peek().type is TokenType.EOF