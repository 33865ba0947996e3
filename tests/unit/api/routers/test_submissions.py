"""
Tests for the submission endpoints.

Covers:
- POST /submit: success, validation, upload limits, rate limiting
- GET /submissions (JSON), GET /submissions/{id}, download, delete
- Lookup by email and statistics
"""

import pytest


# ============================================================================
# POST /submit
# ============================================================================


def test_submit_success(test_client, form_fields, image_file):
    response = test_client.post("/submit", data=form_fields, files=image_file)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Face swap completed successfully!"
    assert len(body["submissionId"]) == 24
    assert body["swappedImageUrl"].startswith("/uploads/swapped/swapped_")
    assert body["processingTime"] == 0


def test_submit_validation_error(test_client, repository, form_fields, image_file):
    response = test_client.post("/submit", data={**form_fields, "name": "Al"}, files=image_file)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]["errors"] == ["Name must be between 4 and 30 characters long"]
    assert body["details"]["formData"]["name"] == "Al"
    assert body["details"]["formData"]["email"] == "JOHN@EXAMPLE.COM"


def test_submit_without_image(test_client, form_fields):
    response = test_client.post("/submit", data=form_fields)

    assert response.status_code == 400
    assert response.json()["details"]["errors"] == ["Image is required"]


def test_submit_rejects_wrong_type(test_client, form_fields, jpeg_bytes):
    response = test_client.post(
        "/submit", data=form_fields, files={"image": ("anim.gif", jpeg_bytes, "image/gif")}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "UPLOAD_REJECTED"
    assert body["message"] == "Only JPG, JPEG, and PNG images are allowed"


def test_submit_rejects_oversized_image(test_client, form_fields):
    data = b"\xff\xd8\xff\xe0" + b"\x00" * (2 * 1024 * 1024)

    response = test_client.post(
        "/submit", data=form_fields, files={"image": ("big.jpg", data, "image/jpeg")}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "FILE_TOO_LARGE"


def test_submit_rejects_unexpected_field(test_client, form_fields, jpeg_bytes):
    response = test_client.post(
        "/submit", data=form_fields, files={"avatar": ("a.jpg", jpeg_bytes, "image/jpeg")}
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Unexpected file field. Please use the correct form."


def test_submit_rejects_second_file(test_client, form_fields, jpeg_bytes):
    files = [
        ("image", ("a.jpg", jpeg_bytes, "image/jpeg")),
        ("image", ("b.jpg", jpeg_bytes, "image/jpeg")),
    ]

    response = test_client.post("/submit", data=form_fields, files=files)

    assert response.status_code == 400
    assert response.json()["message"] == "Too many files. Only one image can be uploaded."


@pytest.mark.parametrize("phone", ["١٢٣٤٥٦٧٨٩٠", "１２３４５６７８９０"])
def test_submit_rejects_non_ascii_phone_digits(test_client, form_fields, image_file, phone):
    response = test_client.post("/submit", data={**form_fields, "phone": phone}, files=image_file)

    assert response.status_code == 400
    assert response.json()["details"]["errors"] == ["Phone number must be exactly 10 digits"]


def test_submit_rejects_fake_image(test_client, repository, form_fields):
    response = test_client.post(
        "/submit", data=form_fields, files={"image": ("fake.jpg", b"hello world", "image/jpeg")}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_IMAGE"


def test_eleventh_submit_is_rate_limited(test_client, form_fields):
    for _ in range(10):
        assert test_client.post("/submit", data={**form_fields, "name": "Al"}).status_code == 400

    response = test_client.post("/submit", data=form_fields)

    assert response.status_code == 429
    assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"
    assert response.json()["message"] == "Too many requests. Please try again later."
    assert int(response.headers["retry-after"]) > 0


@pytest.mark.parametrize("request_kwargs", [
    {"files": [("image", ("a.jpg", b"\xff\xd8\xff\xe0", "image/jpeg"))] * 3},
    {"content": b"--broken", "headers": {"Content-Type": "multipart/form-data; boundary=xyz"}},
])
def test_rate_limit_applies_before_body_is_parsed(test_client, form_fields, image_file, request_kwargs):
    for _ in range(10):
        assert test_client.post("/submit", data=form_fields, files=image_file).status_code == 200

    response = test_client.post("/submit", **request_kwargs)

    assert response.status_code == 429
    assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"


# ============================================================================
# READ
# ============================================================================


def test_list_submissions_json(test_client, created_submission):
    response = test_client.get(
        "/submissions", params={"page": "abc", "limit": "500"}, headers={"Accept": "application/json"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [item["id"] for item in body["submissions"]] == [created_submission["submissionId"]]
    assert body["pagination"] == {
        "totalCount": 1,
        "currentPage": 1,
        "totalPages": 1,
        "hasNext": False,
        "hasPrev": False,
        "nextPage": None,
        "prevPage": None,
    }


def test_list_with_huge_page_falls_back_to_first(test_client, created_submission):
    response = test_client.get(
        "/submissions", params={"page": str(10**19)}, headers={"Accept": "application/json"}
    )

    assert response.status_code == 200
    assert response.json()["pagination"]["currentPage"] == 1
    assert len(response.json()["submissions"]) == 1


def test_get_submission_detail(test_client, created_submission):
    submission_id = created_submission["submissionId"]

    response = test_client.get(f"/submissions/{submission_id}")

    assert response.status_code == 200
    submission = response.json()["submission"]
    assert submission["email"] == "john@example.com"
    assert submission["status"] == "completed"
    assert submission["swappedImageUrl"] == created_submission["swappedImageUrl"]
    assert submission["downloadUrl"] == f"/submissions/{submission_id}/download"
    assert "originalImagePath" not in submission


@pytest.mark.parametrize("submission_id, status_code, code", [
    ("not-an-id", 400, "INVALID_ID"),
    ("65a1f0c2e4b0a1b2c3d4e5f6", 404, "NOT_FOUND"),
])
def test_get_submission_errors(test_client, submission_id, status_code, code):
    response = test_client.get(f"/submissions/{submission_id}")

    assert response.status_code == status_code
    assert response.json()["code"] == code


def test_download_swapped_image(test_client, created_submission, jpeg_bytes):
    submission_id = created_submission["submissionId"]

    response = test_client.get(f"/submissions/{submission_id}/download")

    assert response.status_code == 200
    assert response.content == jpeg_bytes
    disposition = response.headers["content-disposition"]
    assert disposition.startswith("attachment")
    assert f"swapped_john_doe_{submission_id}.jpg" in disposition


def test_download_unknown_submission(test_client):
    response = test_client.get("/submissions/65a1f0c2e4b0a1b2c3d4e5f6/download")
    assert response.status_code == 404


# ============================================================================
# DELETE
# ============================================================================


def test_delete_submission(test_client, created_submission):
    submission_id = created_submission["submissionId"]

    response = test_client.delete(f"/submissions/{submission_id}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Submission deleted successfully"}
    assert test_client.get(f"/submissions/{submission_id}").status_code == 404
    assert test_client.get(created_submission["swappedImageUrl"]).status_code == 404


def test_delete_unknown_submission(test_client):
    assert test_client.delete("/submissions/65a1f0c2e4b0a1b2c3d4e5f6").status_code == 404


# ============================================================================
# LOOKUP & STATS
# ============================================================================


def test_lookup_by_email(test_client, created_submission):
    response = test_client.get("/api/submissions/lookup", params={"email": "John@Example.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["submissions"][0]["id"] == created_submission["submissionId"]


def test_lookup_finds_address_with_apostrophe(test_client, form_fields, image_file):
    created = test_client.post(
        "/submit", data={**form_fields, "email": "o'brien@example.com"}, files=image_file
    ).json()

    response = test_client.get("/api/submissions/lookup", params={"email": "o'brien@example.com"})

    assert response.json()["count"] == 1
    assert response.json()["submissions"][0]["id"] == created["submissionId"]


def test_lookup_requires_valid_email(test_client):
    response = test_client.get("/api/submissions/lookup", params={"email": "nope"})

    assert response.status_code == 400
    assert response.json()["details"]["errors"] == ["Please provide a valid email address"]


def test_stats(test_client, created_submission):
    response = test_client.get("/api/stats")

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["total"] == 1
    assert stats["today"] == 1
    assert stats["thisWeek"] == 1
    assert stats["completed"] == 1
    assert stats["averageProcessingTime"] == 0
