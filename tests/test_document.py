"""Tests for document-level constraints and validate_document."""

import pytest

from syncgate.definitions.types import StringValidator
from syncgate.errors import ForbiddenError, ValidationFailedError
from syncgate.validation.document import validate_document, validate_document_constraints

from conftest import make_definition

IMMUTABLE_MESSAGE = "documents of this type cannot be replaced or deleted"


class TestImmutableDocuments:
    def setup_method(self):
        self.definition = make_definition(immutable=True, allow_unknown_properties=True)

    def test_create_allowed(self):
        assert validate_document_constraints({"_id": "a", "v": 1}, None, self.definition) == []

    def test_delete_rejected(self):
        errors = validate_document_constraints({"_id": "a", "_deleted": True}, {"_id": "a"}, self.definition)
        assert errors == [IMMUTABLE_MESSAGE]

    def test_identical_replace_allowed(self):
        doc = {"_id": "a", "_rev": "2-b", "v": [1, {"x": None}]}
        old_doc = {"_id": "a", "_rev": "1-a", "_revisions": {"start": 1}, "v": [1, {"x": None}]}
        assert validate_document_constraints(doc, old_doc, self.definition) == []

    def test_changed_replace_rejected(self):
        errors = validate_document_constraints({"_id": "a", "v": 2}, {"_id": "a", "v": 1}, self.definition)
        assert errors == [IMMUTABLE_MESSAGE]

    def test_attachment_changes_count(self):
        doc = {"_id": "a", "_attachments": {"f.txt": {"content_type": "text/plain", "length": 2}}}
        assert validate_document_constraints(doc, {"_id": "a"}, self.definition) == [IMMUTABLE_MESSAGE]

    def test_recreating_deleted_document_allowed(self):
        old_doc = {"_id": "a", "_deleted": True}
        assert validate_document_constraints({"_id": "a", "v": 1}, old_doc, self.definition) == []


class TestReplaceAndDelete:
    def test_cannot_replace(self):
        definition = make_definition(cannot_replace=True)
        assert validate_document_constraints({"_id": "a"}, {"_id": "a"}, definition) == [
            "documents of this type cannot be replaced"
        ]
        assert validate_document_constraints({"_id": "a", "_deleted": True}, {"_id": "a"}, definition) == []

    def test_cannot_delete(self):
        definition = make_definition(cannot_delete=True)
        assert validate_document_constraints({"_id": "a", "_deleted": True}, {"_id": "a"}, definition) == [
            "documents of this type cannot be deleted"
        ]
        assert validate_document_constraints({"_id": "a"}, {"_id": "a"}, definition) == []

    def test_deleting_already_deleted_document(self):
        definition = make_definition(cannot_delete=True)
        old_doc = {"_id": "a", "_deleted": True}
        assert validate_document_constraints({"_id": "a", "_deleted": True}, old_doc, definition) == []


class TestDocumentId:
    def test_checked_on_create(self):
        definition = make_definition(document_id_regex_pattern=r"^note\.")
        assert validate_document_constraints({"_id": "note.1"}, None, definition) == []
        assert validate_document_constraints({"_id": "bad"}, None, definition) == [
            r"document ID must conform to expected pattern ^note\."
        ]

    def test_not_checked_on_replace(self):
        definition = make_definition(document_id_regex_pattern=r"^note\.")
        assert validate_document_constraints({"_id": "bad"}, {"_id": "bad"}, definition) == []


class TestValidateDocument:
    def test_aggregates_errors(self):
        definition = make_definition(
            property_validators=[StringValidator(name="a", required=True), StringValidator(name="b", required=True)]
        )
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_document({"_id": "x"}, None, definition, "myDoc")

        error = exc_info.value
        assert isinstance(error, ForbiddenError)
        assert error.doc_type == "myDoc"
        assert error.errors == ['item "a" must not be null or missing', 'item "b" must not be null or missing']
        assert error.forbidden == (
            'Invalid myDoc document: item "a" must not be null or missing; item "b" must not be null or missing'
        )

    def test_delete_skips_property_validation(self):
        definition = make_definition(property_validators=[StringValidator(name="a", required=True)])
        validate_document({"_id": "x", "_deleted": True}, {"_id": "x", "a": "v"}, definition, "myDoc")

    def test_valid_document(self):
        definition = make_definition(property_validators=[StringValidator(name="a", required=True)])
        validate_document({"_id": "x", "a": "v"}, None, definition, "myDoc")
