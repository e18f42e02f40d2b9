"""Tests for the MongoDB client helpers."""

from resource_hub.config import settings
from resource_hub.database import mongo


class RecordingClient(dict):
    def __init__(self, *args, **kwargs):
        super().__init__()
        self.args = args
        self.kwargs = kwargs

    def __missing__(self, name):
        return f"db:{name}"


def test_client_reads_datetimes_as_utc_aware(monkeypatch):
    monkeypatch.setattr(mongo, "MongoClient", RecordingClient)
    mongo.get_client.cache_clear()
    try:
        client = mongo.get_client()

        assert client.args == (settings.MONGODB_URI,)
        assert client.kwargs["tz_aware"] is True
        assert mongo.get_client() is client
        assert mongo.get_database() == f"db:{settings.MONGODB_DB_NAME}"
    finally:
        mongo.get_client.cache_clear()
