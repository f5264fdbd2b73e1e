"""
Query document classification.

Only the leading operation keyword and the operation name are load-bearing.
Everything after the name (variable definitions, selection sets) is never
read, so it does not have to be well formed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from graphql import GraphQLSyntaxError, Lexer, Source, TokenKind

from ..errors import InvalidDocument

INVALID_DOCUMENT_MESSAGE = "Invalid GraphQL query"


class OperationKind(str, Enum):
    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class ParsedOperation:
    kind: OperationKind
    name: str


def parse_operation(document: object) -> ParsedOperation:
    """
    Classify a query document and extract its operation name.

    Reads the first two tokens after any whitespace and comments: the
    ``query``/``mutation`` keyword, then the operation name.

    Raises:
        InvalidDocument: If the document is not a string or does not start
            with a keyword followed by a name
    """
    if not isinstance(document, str):
        raise InvalidDocument(INVALID_DOCUMENT_MESSAGE)

    lexer = Lexer(Source(document))
    try:
        keyword = lexer.advance()
        name = lexer.advance() if keyword.kind is TokenKind.NAME else None
    except GraphQLSyntaxError as e:
        raise InvalidDocument(f"{INVALID_DOCUMENT_MESSAGE}: {e.message}") from e

    try:
        kind = OperationKind(keyword.value)
    except ValueError:
        raise InvalidDocument(INVALID_DOCUMENT_MESSAGE) from None

    if name is None or name.kind is not TokenKind.NAME:
        raise InvalidDocument(INVALID_DOCUMENT_MESSAGE)

    return ParsedOperation(kind=kind, name=name.value)
