"""Tests for the permissive document accessors."""

from spec_quality.core.document import (
    Operation,
    as_list,
    has,
    is_set,
    iter_all_responses,
    iter_operations,
    iter_responses,
    lookup,
)


class TestIsSet:
    """Tests for presence checks."""

    def test_absent_values(self) -> None:
        for value in (None, False, 0, 0.0, ""):
            assert not is_set(value)

    def test_present_values(self) -> None:
        for value in ("x", 1, True, {}, [], "0"):
            assert is_set(value)


class TestLookup:
    """Tests for nested optional lookup."""

    def test_nested(self) -> None:
        assert lookup({"a": {"b": {"c": 1}}}, "a", "b", "c") == 1

    def test_missing_key(self) -> None:
        assert lookup({"a": {}}, "a", "b", "c") is None

    def test_wrong_type_midway(self) -> None:
        assert lookup({"a": ["b"]}, "a", "b") is None
        assert lookup("text", "a") is None

    def test_has(self) -> None:
        assert has({"info": {"title": "X"}}, "info", "title")
        assert not has({"info": None}, "info", "title")

    def test_as_list(self) -> None:
        assert as_list(("a", "b")) == ["a", "b"]
        assert as_list("ab") == []
        assert as_list(None) == []


class TestIterOperations:
    """Tests for operation iteration."""

    def test_document_order_and_parameters_skipped(self) -> None:
        doc = {
            "paths": {
                "/z": {"parameters": [], "post": {}, "get": {}},
                "/a": {"delete": {"operationId": "d"}},
            }
        }
        ops = list(iter_operations(doc))
        assert [(op.path, op.method) for op in ops] == [("/z", "post"), ("/z", "get"), ("/a", "delete")]
        assert ops[2].get("operationId") == "d"

    def test_tolerates_bad_shapes(self) -> None:
        doc = {"paths": {"/a": None, "/b": "x", "/c": {"get": None}}}
        ops = list(iter_operations(doc))
        assert ops == [Operation("/c", "get", {})]

    def test_no_paths(self) -> None:
        assert list(iter_operations({})) == []
        assert list(iter_operations({"paths": ["/a"]})) == []

    def test_label(self) -> None:
        assert Operation("/pets", "get", {}).label == "GET /pets"


class TestIterResponses:
    """Tests for response iteration."""

    def test_codes_are_strings(self) -> None:
        op = Operation("/a", "get", {"responses": {200: {"description": "ok"}, "4XX": None}})
        assert list(iter_responses(op)) == [("200", {"description": "ok"}), ("4XX", {})]

    def test_all_responses(self) -> None:
        doc = {"paths": {"/a": {"get": {"responses": {"200": {}}}, "put": {"responses": {"204": {}}}}}}
        assert [(op.method, code) for op, code, _ in iter_all_responses(doc)] == [("get", "200"), ("put", "204")]
