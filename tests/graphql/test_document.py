"""Unit tests for query document classification."""

import pytest

from staffdir.errors import InvalidDocument
from staffdir.graphql.document import OperationKind, parse_operation


@pytest.mark.unit
class TestParseOperation:
    def test_named_query(self):
        parsed = parse_operation("query GetEmployee($id: String!) { employee }")

        assert parsed.kind is OperationKind.QUERY
        assert parsed.name == "GetEmployee"

    def test_named_mutation(self):
        parsed = parse_operation(
            "mutation UpdateEmployee($id: String!, $input: EmployeeInput!) { employee }"
        )

        assert parsed.kind is OperationKind.MUTATION
        assert parsed.name == "UpdateEmployee"

    def test_leading_whitespace_and_comments(self):
        parsed = parse_operation("\n  # dashboard\n  query GetEmployeeStats { stats }")

        assert parsed.name == "GetEmployeeStats"

    def test_first_operation_wins(self):
        parsed = parse_operation("query GetEmployees { employees } mutation DeleteEmployee { success }")

        assert parsed.kind is OperationKind.QUERY
        assert parsed.name == "GetEmployees"

    @pytest.mark.parametrize(
        ("document", "name"),
        [
            ("query GetEmployees", "GetEmployees"),
            ("query GetEmployees { employees { id name }", "GetEmployees"),
            ("query GetEmployees($id: ) { employees }", "GetEmployees"),
            ("mutation ToggleFlagEmployee(", "ToggleFlagEmployee"),
            ("query GetEmployee { employee } \"unterminated", "GetEmployee"),
        ],
    )
    def test_body_after_name_is_not_read(self, document, name):
        assert parse_operation(document).name == name

    @pytest.mark.parametrize(
        "document",
        [
            None,
            42,
            "",
            "   ",
            "# only a comment",
            "{ employees }",
            "query { employees }",
            "query",
            "subscription OnEmployee { employee }",
            "fragment F on Employee { id }",
            "Query GetEmployees { employees }",
        ],
    )
    def test_invalid_documents(self, document):
        with pytest.raises(InvalidDocument, match="Invalid GraphQL query"):
            parse_operation(document)

    def test_lexer_error_in_header_carries_detail(self):
        with pytest.raises(InvalidDocument) as exc_info:
            parse_operation('query "GetEmployees')

        assert exc_info.value.message.startswith("Invalid GraphQL query: ")
        assert exc_info.value.code == "INVALID_DOCUMENT"
