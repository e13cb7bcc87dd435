"""Build a syntax tree from a list of typed tokens."""

from __future__ import annotations

from minishlex.nodes import OPERATOR_TYPES, Node, create_command
from minishlex.quotes import remove_quotes
from minishlex.tokens import Token, TokenType

_NODE_TYPES = frozenset(
    {TokenType.BUILTIN, TokenType.CMD, TokenType.FILE, TokenType.ARG}
)
_COMMAND_TYPES = frozenset({TokenType.CMD, TokenType.BUILTIN})


def _last_left_is_command(node: Node) -> bool:
    seen: set[int] = set()
    while node.left is not None and id(node) not in seen:
        seen.add(id(node))
        node = node.left
    return node.token.type in _COMMAND_TYPES


class _TreeBuilder:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0
        self.root: Node | None = None
        self.current: Node | None = None

    def _token_at(self, index: int) -> Token:
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return Token(None, TokenType.NULL)

    def build(self) -> Node | None:
        while (token := self._token_at(self.index)).type is not TokenType.NULL:
            if token.value is None and token.type is TokenType.CMD:
                token.value = ""
            if token.type is TokenType.ARG:
                self.index += 1
                continue
            if token.type in _NODE_TYPES:
                if token.type is TokenType.FILE:
                    token.old_value = token.value
                    token.value = remove_quotes(token.value or "")
                self._add_command()
            elif token.type in OPERATOR_TYPES:
                self._add_operator()
            else:
                self.index += 1
        if self.root is not None:
            self.root.prev = None
        return self.root

    def _add_command(self) -> None:
        node, self.index = create_command(self.tokens, self.index)
        following = self._token_at(self.index)
        if self.root is None:
            self.root = node
        elif self.current is not None and self.current.is_operator():
            self.current.right = node
        elif (
            following.type is not TokenType.ARG
            and node.token.type is not TokenType.ARG
        ):
            parent = self.current.prev if self.current is not None else None
            if parent is not None:
                parent.left = node
        node.prev = self.current
        self.current = node

    def _add_operator(self) -> None:
        token = self.tokens[self.index]
        op = Node(token, left=self.root)
        op.prev = self.current
        root = self.root
        if root is None:
            self.root = op
        elif (
            root.token.type is TokenType.PIPE
            and root.right is None
            and _last_left_is_command(root)
        ):
            root.right = op
            self.current = op
            self.index += 1
            return
        else:
            root.prev = op

        current = self.current
        if (
            token.type is TokenType.IN_REDIRECT
            and current is not None
            and current.prev is not None
            and current.prev.right is current
            and current.prev.token.type is TokenType.PIPE
        ):
            pipe = current.prev
            self.root = pipe
            pipe.right = op
            op.left = current
            op.prev = pipe
            pipe.prev = None
        else:
            self.root = op
        self.current = op
        self.index += 1


def parse(tokens: list[Token]) -> Node | None:
    """Return the root of the syntax tree for *tokens*, or None if empty."""
    return _TreeBuilder(tokens).build()