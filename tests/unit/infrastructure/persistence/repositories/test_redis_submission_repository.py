"""
Tests for RedisSubmissionRepository.

Redis is replaced by MagicMock; the tests check the commands issued and the
mapping of Redis failures to StorageError.
"""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from src.domain.shared.exceptions import StorageError
from src.domain.submission.entities import Submission
from src.infrastructure.persistence.repositories import RedisSubmissionRepository
from src.infrastructure.persistence.repositories.redis_submission_repository import INDEX_KEY

SUBMISSION_ID = "65a1f0c2e4b0a1b2c3d4e5f6"
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_submission(**overrides) -> Submission:
    data = dict(
        name="John Doe",
        email="john@example.com",
        phone="1234567890",
        terms=True,
        original_image_path="original/a.jpg",
        original_image_filename="a.jpg",
        created_at=NOW,
        updated_at=NOW,
    )
    data.update(overrides)
    return Submission(**data)


def stored_json(**overrides) -> str:
    return json.dumps(make_submission(id=SUBMISSION_ID, **overrides).to_dict())


@pytest.fixture
def redis_mock():
    client = MagicMock(spec=Redis)
    client.exists.return_value = 0
    return client


@pytest.fixture
def pipe():
    return MagicMock()


@pytest.fixture
def repo(redis_mock, pipe):
    redis_mock.pipeline.return_value = pipe
    return RedisSubmissionRepository(client=redis_mock, clock=lambda: NOW)


# ============================================================================
# CREATE / READ
# ============================================================================


@pytest.mark.asyncio
async def test_create_writes_document_and_indexes_in_one_transaction(repo, redis_mock, pipe):
    stored = await repo.create(make_submission(email="John@Example.com"))

    redis_mock.pipeline.assert_called_once_with(transaction=True)
    key, payload = pipe.set.call_args.args
    assert key == f"submission:{stored.id}"
    assert json.loads(payload)["email"] == "john@example.com"
    pipe.zadd.assert_any_call(INDEX_KEY, {stored.id: NOW.timestamp()})
    pipe.zadd.assert_any_call("submissions:email:john@example.com", {stored.id: NOW.timestamp()})
    pipe.execute.assert_called_once()


@pytest.mark.asyncio
async def test_create_retries_id_on_collision(repo, redis_mock):
    redis_mock.exists.side_effect = [1, 0]

    await repo.create(make_submission())

    assert redis_mock.exists.call_count == 2


@pytest.mark.asyncio
async def test_find_by_id(repo, redis_mock):
    redis_mock.get.return_value = stored_json()

    found = await repo.find_by_id(SUBMISSION_ID)

    redis_mock.get.assert_called_once_with(f"submission:{SUBMISSION_ID}")
    assert found.id == SUBMISSION_ID
    assert found.created_at == NOW


@pytest.mark.asyncio
async def test_find_by_id_malformed_id_skips_redis(repo, redis_mock):
    assert await repo.find_by_id("bad") is None
    redis_mock.get.assert_not_called()


@pytest.mark.asyncio
async def test_find_all_by_created_at_reads_one_page_of_index(repo, redis_mock):
    redis_mock.zrevrange.return_value = [SUBMISSION_ID]
    redis_mock.mget.return_value = [stored_json()]

    items = await repo.find_all(limit=10, skip=10)

    redis_mock.zrevrange.assert_called_once_with(INDEX_KEY, 10, 19)
    assert [item.id for item in items] == [SUBMISSION_ID]


@pytest.mark.asyncio
async def test_find_all_by_name_sorts_in_process(repo, redis_mock):
    docs = {
        "aaaaaaaaaaaaaaaaaaaaaaaa": make_submission(id="aaaaaaaaaaaaaaaaaaaaaaaa", name="Zed Zulu"),
        "bbbbbbbbbbbbbbbbbbbbbbbb": make_submission(id="bbbbbbbbbbbbbbbbbbbbbbbb", name="Amy Adams"),
    }
    redis_mock.zrange.return_value = list(docs)
    redis_mock.mget.return_value = [json.dumps(doc.to_dict()) for doc in docs.values()]

    items = await repo.find_all(sort_by="name", sort_order=1)

    redis_mock.zrange.assert_called_once_with(INDEX_KEY, 0, -1)
    assert [item.name for item in items] == ["Amy Adams", "Zed Zulu"]


@pytest.mark.asyncio
async def test_find_by_email_uses_email_index(repo, redis_mock):
    redis_mock.zrevrange.return_value = []

    assert await repo.find_by_email("JOHN@example.com") == []
    redis_mock.zrevrange.assert_called_once_with("submissions:email:john@example.com", 0, -1)


# ============================================================================
# UPDATE / DELETE
# ============================================================================


@pytest.mark.asyncio
async def test_update_moves_email_index(repo, redis_mock):
    watched = MagicMock()
    watched.get.return_value = stored_json()
    redis_mock.transaction.side_effect = lambda func, *keys, **kwargs: func(watched)

    updated = await repo.update_by_id(SUBMISSION_ID, {"email": "New@Example.com"})

    assert updated.email == "new@example.com"
    watched.multi.assert_called_once()
    watched.zrem.assert_called_once_with("submissions:email:john@example.com", SUBMISSION_ID)
    watched.zadd.assert_called_once_with(
        "submissions:email:new@example.com", {SUBMISSION_ID: NOW.timestamp()}
    )


@pytest.mark.asyncio
async def test_update_missing_record(repo, redis_mock):
    watched = MagicMock()
    watched.get.return_value = None
    redis_mock.transaction.side_effect = lambda func, *keys, **kwargs: func(watched)

    assert await repo.update_by_id(SUBMISSION_ID, {"name": "Jane Doe"}) is None
    watched.multi.assert_not_called()


@pytest.mark.asyncio
async def test_delete_removes_document_and_index_entries(repo, redis_mock, pipe):
    redis_mock.get.return_value = stored_json()
    pipe.execute.return_value = [1, 1, 1]

    assert await repo.delete_by_id(SUBMISSION_ID) is True
    pipe.delete.assert_called_once_with(f"submission:{SUBMISSION_ID}")
    pipe.zrem.assert_any_call(INDEX_KEY, SUBMISSION_ID)
    pipe.zrem.assert_any_call("submissions:email:john@example.com", SUBMISSION_ID)


@pytest.mark.asyncio
async def test_delete_missing_record(repo, redis_mock, pipe):
    redis_mock.get.return_value = None

    assert await repo.delete_by_id(SUBMISSION_ID) is False
    pipe.execute.assert_not_called()


# ============================================================================
# FAILURES
# ============================================================================


@pytest.mark.asyncio
async def test_redis_errors_become_storage_errors(repo, redis_mock):
    redis_mock.zcard.side_effect = RedisConnectionError("connection refused")

    with pytest.raises(StorageError, match="Failed to count submissions"):
        await repo.count()


@pytest.mark.asyncio
async def test_health_check_never_raises(repo, redis_mock):
    redis_mock.ping.return_value = True
    assert await repo.health_check() is True

    redis_mock.ping.side_effect = RedisError("down")
    assert await repo.health_check() is False
