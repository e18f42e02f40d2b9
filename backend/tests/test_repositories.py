"""Tests for the membership toggle under interleaved writers."""

import pytest
from bson import ObjectId

from resource_hub.core.exceptions import InternalError
from resource_hub.repositories.resource import ResourceRepository


@pytest.fixture
def liked_resource(resource_service, learner, make_resource):
    """A resource already liked by ``learner``."""
    created = make_resource(learner)
    resource_service.toggle_like(learner, created.id)
    return ObjectId(created.id)


class TestToggleMember:
    def test_rival_flip_between_guards_is_retried(self, db, learner, liked_resource):
        repo = ResourceRepository(db)
        rival = ResourceRepository(db)
        real_update = repo.find_one_and_update
        updates = []

        def racing_update(query, update, projection=None):
            updates.append(update)
            if len(updates) == 2:
                # Another request unlikes between our add and remove attempts
                rival.toggle_like(liked_resource, learner.id)
            return real_update(query, update, projection)

        repo.find_one_and_update = racing_update

        resource, liked = repo.toggle_like(liked_resource, learner.id)

        # add (missed), remove (missed after rival), add (landed)
        assert [next(iter(u)) for u in updates] == ["$addToSet", "$pull", "$addToSet"]
        assert liked is True
        assert resource.likes == [learner.id]
        assert resource.likes_count == len(resource.likes) == 1

    def test_gives_up_when_guards_keep_missing(self, db, learner, liked_resource, monkeypatch):
        repo = ResourceRepository(db)
        monkeypatch.setattr(repo, "find_one_and_update", lambda *args, **kwargs: None)

        with pytest.raises(InternalError) as exc_info:
            repo.toggle_like(liked_resource, learner.id)
        assert "too many concurrent modifications" in exc_info.value.message

        stored = db.resources.find_one({"_id": liked_resource})
        assert stored["likes"] == [learner.id]
        assert stored["likes_count"] == 1

    def test_missing_document_stops_without_retrying(self, db, learner):
        repo = ResourceRepository(db)

        assert repo.toggle_like(ObjectId(), learner.id) == (None, False)
