"""
Tests for request logging helpers
"""

import pytest

from feedgraph.middleware import operation_name_from_payload, sanitize_query_params


class TestSanitizeQueryParams:
    @pytest.mark.unit
    def test_redacts_sensitive_keys(self):
        params = {"access_token": "abc", "API_KEY": "xyz", "page": "2"}

        assert sanitize_query_params(params) == {
            "access_token": "[REDACTED]",
            "API_KEY": "[REDACTED]",
            "page": "2",
        }

    @pytest.mark.unit
    def test_empty_params(self):
        assert sanitize_query_params({}) == {}


class TestOperationNameFromPayload:
    @pytest.mark.unit
    def test_explicit_operation_name_wins(self):
        assert operation_name_from_payload("GetUser", "query Other { users { id } }") == "GetUser"

    @pytest.mark.unit
    def test_named_query(self):
        assert operation_name_from_payload(None, "query GetUser($id: UUID!) { user(id: $id) { id } }") == "GetUser"

    @pytest.mark.unit
    def test_named_mutation_is_prefixed(self):
        query = "mutation Subscribe { subscribeTo(userId: \"a\", authorId: \"b\") }"

        assert operation_name_from_payload(None, query) == "mutation:Subscribe"

    @pytest.mark.unit
    def test_introspection(self):
        assert operation_name_from_payload(None, "{ __schema { types { name } } }") == "__introspection"

    @pytest.mark.unit
    def test_anonymous_and_missing(self):
        assert operation_name_from_payload("", "{ users { id } }") == "unnamed_operation"
        assert operation_name_from_payload(None, None) is None
