"""
Common fixtures for API unit tests.

Provides shared test utilities:
- Multipart payload builders
- A submission created through the HTTP surface
"""

import pytest


@pytest.fixture
def image_file(jpeg_bytes):
    """Multipart file tuple for the "image" field."""
    return {"image": ("portrait.jpg", jpeg_bytes, "image/jpeg")}


@pytest.fixture
def form_fields():
    return {
        "name": "John Doe",
        "email": "JOHN@EXAMPLE.COM",
        "phone": "1234567890",
        "terms": "on",
    }


@pytest.fixture
def created_submission(test_client, form_fields, image_file):
    """Submit once and return the JSON body."""
    response = test_client.post("/submit", data=form_fields, files=image_file)
    assert response.status_code == 200
    return response.json()
