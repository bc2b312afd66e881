"""Tests for the @validate_request decorator."""

import io

import pytest
from flask import Blueprint, Flask, jsonify
from pydantic import BaseModel, Field

from elevate_core.api.validation import parse_model, validate_request
from elevate_core.exceptions import ElevateError, ValidationError
from elevate_core.main import handle_elevate_error


# Test Pydantic schemas
class MockCreateRequest(BaseModel):
    """Test schema for request body validation."""
    name: str = Field(..., description="Name field")
    amount: float = Field(..., description="Amount field")
    tags: list[str] = Field(default_factory=list)


class MockUpdateRequest(BaseModel):
    """Test schema with all optional fields."""
    name: str | None = None
    amount: float | None = None


test_validation_bp = Blueprint("validation_test_routes", __name__)


@test_validation_bp.post("/test/valid")
@validate_request
def route_valid(data: MockCreateRequest):
    return jsonify({"name": data.name, "amount": data.amount, "tags": data.tags}), 200


@test_validation_bp.get("/test/path/<uuid>")
@validate_request
def route_path_param(uuid: str):
    return jsonify({"uuid": uuid}), 200


@test_validation_bp.put("/test/combined/<uuid>")
@validate_request
def route_combined(uuid: str, data: MockUpdateRequest):
    return jsonify({"uuid": uuid, "name": data.name, "amount": data.amount}), 200


@pytest.fixture
def validation_client():
    """Standalone app with the validation routes and the ElevateError handler."""
    test_app = Flask(__name__)
    test_app.config['TESTING'] = True
    test_app.errorhandler(ElevateError)(handle_elevate_error)
    test_app.register_blueprint(test_validation_bp)
    with test_app.test_client() as client:
        yield client


def test_valid_json_body(validation_client):
    response = validation_client.post("/test/valid", json={"name": "Test", "amount": 100.5})
    assert response.status_code == 200
    assert response.get_json() == {"name": "Test", "amount": 100.5, "tags": []}


def test_valid_form_body(validation_client):
    response = validation_client.post("/test/valid", data={"name": "Test", "amount": "12"})
    assert response.status_code == 200
    assert response.get_json()["amount"] == 12.0


def test_repeated_form_field_becomes_list(validation_client):
    response = validation_client.post(
        "/test/valid",
        data={"name": "Test", "amount": "1", "tags": ["a", "b"]},
    )
    assert response.get_json()["tags"] == ["a", "b"]


def test_multipart_body_with_file(validation_client):
    response = validation_client.post(
        "/test/valid",
        data={"name": "Test", "amount": "1", "file": (io.BytesIO(b"x"), "x.txt")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200


def test_missing_required_field(validation_client):
    response = validation_client.post("/test/valid", json={"name": "Test"})
    assert response.status_code == 400
    assert response.get_json() == {
        "success": False,
        "message": "Missing required fields: amount.",
    }


def test_empty_body_lists_every_missing_field(validation_client):
    response = validation_client.post("/test/valid", json={})
    assert response.get_json()["message"] == "Missing required fields: name, amount."


def test_wrong_type(validation_client):
    response = validation_client.post("/test/valid", json={"name": "Test", "amount": "lots"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid value for: amount."


def test_invalid_json(validation_client):
    response = validation_client.post(
        "/test/valid", data="{not json", content_type="application/json"
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Request body is not valid JSON."


def test_json_array_rejected(validation_client):
    response = validation_client.post("/test/valid", json=[1, 2])
    assert response.status_code == 400
    assert response.get_json()["message"] == "Request body must be a JSON object."


def test_path_parameters_pass_through(validation_client):
    uuid = "550e8400-e29b-41d4-a716-446655440000"
    response = validation_client.get(f"/test/path/{uuid}")
    assert response.status_code == 200
    assert response.get_json() == {"uuid": uuid}


def test_path_parameter_and_body(validation_client):
    response = validation_client.put("/test/combined/abc", json={"name": "New"})
    assert response.status_code == 200
    assert response.get_json() == {"uuid": "abc", "name": "New", "amount": None}


class TestParseModel:

    def test_returns_model(self):
        model = parse_model(MockCreateRequest, {"name": "a", "amount": 1})
        assert isinstance(model, MockCreateRequest)

    def test_error_details(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(MockCreateRequest, {"amount": "x"})
        details = exc_info.value.details
        assert details["model"] == "MockCreateRequest"
        fields = {error["field"] for error in details["errors"]}
        assert fields == {"name", "amount"}
        for error in details["errors"]:
            assert set(error) == {"field", "message", "expected_type"}
