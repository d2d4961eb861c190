"""
Tests for query execution against the user schema
"""

import pytest

from userql.graphql.dispatch import (
    QueryFailure,
    QueryRequest,
    QuerySuccess,
    describe_operation,
    execute_query,
)
from userql.store import SEED_USERS

FULL_SELECTION = """
query GetUser($id: String!) {
  userById(id: $id) {
    id
    name
    email
  }
}
"""


def run(query: str, store=None, **kwargs):
    return execute_query(QueryRequest(query=query, **kwargs), store)


@pytest.mark.unit
class TestResolution:
    """Documents that validate and resolve."""

    @pytest.mark.parametrize("user", SEED_USERS, ids=lambda u: u.id)
    def test_seeded_user_full_selection(self, seeded_store, user):
        outcome = run(f'{{ userById(id: "{user.id}") {{ id name email }} }}', seeded_store)

        assert isinstance(outcome, QuerySuccess)
        assert outcome.data == {
            "userById": {"id": user.id, "name": user.name, "email": user.email}
        }

    def test_unknown_id_resolves_to_null(self, seeded_store):
        outcome = run('{ userById(id: "404") { id name } }', seeded_store)

        assert outcome == QuerySuccess(data={"userById": None})

    def test_only_selected_fields_returned(self, seeded_store):
        outcome = run('{ userById(id: "1") { id } }', seeded_store)

        assert isinstance(outcome, QuerySuccess)
        assert outcome.data == {"userById": {"id": "1"}}

    def test_selection_order_is_preserved(self, seeded_store):
        outcome = run('{ userById(id: "2") { email id } }', seeded_store)

        assert isinstance(outcome, QuerySuccess)
        assert list(outcome.data["userById"]) == ["email", "id"]

    def test_variables(self, seeded_store):
        outcome = run(FULL_SELECTION, seeded_store, variables={"id": "2"})

        assert isinstance(outcome, QuerySuccess)
        assert outcome.data["userById"]["name"] == "Charlie"

    def test_alias(self, seeded_store):
        outcome = run(
            '{ first: userById(id: "1") { name } second: userById(id: "2") { name } }',
            seeded_store,
        )

        assert outcome == QuerySuccess(
            data={"first": {"name": "Pavel"}, "second": {"name": "Charlie"}}
        )

    def test_operation_name_selects_operation(self, seeded_store):
        document = """
        query One { userById(id: "1") { name } }
        query Two { userById(id: "2") { name } }
        """
        outcome = run(document, seeded_store, operation_name="Two")

        assert outcome == QuerySuccess(data={"userById": {"name": "Charlie"}})

    def test_custom_store(self, custom_store):
        outcome = run('{ userById(id: "42") { name } }', custom_store)
        assert outcome == QuerySuccess(data={"userById": {"name": "Ada"}})

        outcome = run('{ userById(id: "1") { name } }', custom_store)
        assert outcome == QuerySuccess(data={"userById": None})

    def test_defaults_to_process_store(self):
        outcome = run('{ userById(id: "1") { email } }')
        assert outcome == QuerySuccess(data={"userById": {"email": "Pavelboukine@gmail.com"}})


@pytest.mark.unit
class TestRejection:
    """Documents that fail before any resolver runs."""

    def test_syntax_error(self, seeded_store):
        outcome = run('{ userById(id: "1") { id ', seeded_store)

        assert isinstance(outcome, QueryFailure)
        assert len(outcome.errors) == 1
        assert "Syntax Error" in outcome.errors[0]["message"]

    def test_empty_document(self, seeded_store):
        outcome = run("", seeded_store)

        assert isinstance(outcome, QueryFailure)
        assert outcome.errors

    def test_missing_id_argument(self, seeded_store):
        outcome = run("{ userById { id } }", seeded_store)

        assert isinstance(outcome, QueryFailure)
        message = outcome.errors[0]["message"]
        assert "'id'" in message
        assert "required" in message

    def test_unknown_field(self, seeded_store):
        outcome = run('{ userById(id: "1") { id phone } }', seeded_store)

        assert isinstance(outcome, QueryFailure)
        assert any("phone" in error["message"] for error in outcome.errors)

    def test_unknown_root_field(self, seeded_store):
        outcome = run('{ userByEmail(email: "a@b.c") { id } }', seeded_store)

        assert isinstance(outcome, QueryFailure)
        assert any("userByEmail" in error["message"] for error in outcome.errors)

    def test_non_string_argument(self, seeded_store):
        outcome = run("{ userById(id: 1) { id } }", seeded_store)

        assert isinstance(outcome, QueryFailure)
        assert outcome.errors

    def test_non_string_variable(self, seeded_store):
        outcome = run(FULL_SELECTION, seeded_store, variables={"id": 1})

        assert isinstance(outcome, QueryFailure)
        assert "$id" in outcome.errors[0]["message"]

    def test_missing_variable(self, seeded_store):
        outcome = run(FULL_SELECTION, seeded_store, variables={})

        assert isinstance(outcome, QueryFailure)
        assert "$id" in outcome.errors[0]["message"]

    def test_missing_selection_set(self, seeded_store):
        outcome = run('{ userById(id: "1") }', seeded_store)

        assert isinstance(outcome, QueryFailure)

    def test_mutations_not_supported(self, seeded_store):
        outcome = run('mutation { userById(id: "1") { id } }', seeded_store)

        assert isinstance(outcome, QueryFailure)

    def test_errors_carry_locations(self, seeded_store):
        outcome = run('{ userById(id: "1") { phone } }', seeded_store)

        assert isinstance(outcome, QueryFailure)
        error = outcome.errors[0]
        assert error["locations"] == [{"line": 1, "column": 23}]

    def test_unknown_operation_name(self, seeded_store):
        outcome = run(
            'query A { userById(id: "1") { id } }', seeded_store, operation_name="Nope"
        )

        assert outcome == QueryFailure(errors=[{"message": "Unknown operation named 'Nope'."}])

    def test_fragment_only_document(self, seeded_store):
        outcome = run("fragment F on User { id }", seeded_store)

        assert outcome == QueryFailure(errors=[{"message": "Must provide an operation."}])

    def test_several_operations_without_name(self, seeded_store):
        document = """
        query A { userById(id: "1") { id } }
        query B { userById(id: "2") { id } }
        """
        outcome = run(document, seeded_store)

        assert isinstance(outcome, QueryFailure)
        assert outcome.errors[0]["message"] == (
            "Must provide operation name if query contains multiple operations."
        )

    def test_empty_operation_name_means_none(self, seeded_store):
        outcome = run('query A { userById(id: "1") { id } }', seeded_store, operation_name="")

        assert outcome == QuerySuccess(data={"userById": {"id": "1"}})


@pytest.mark.unit
class TestDescribeOperation:
    """Operation naming used in logs."""

    def test_explicit_operation_name(self):
        assert describe_operation(QueryRequest(query="{ x }", operation_name="Mine")) == "Mine"

    def test_named_query(self):
        assert describe_operation(QueryRequest(query=FULL_SELECTION)) == "GetUser"

    def test_introspection(self):
        assert describe_operation(QueryRequest(query="{ __schema { types { name } } }")) == (
            "__introspection"
        )

    def test_anonymous(self):
        assert describe_operation(QueryRequest(query='{ userById(id: "1") { id } }')) == (
            "unnamed_operation"
        )
