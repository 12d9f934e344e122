import pytest


class FakeBlob:
    def __init__(self, bucket, name):
        self.bucket = bucket
        self.name = name
        self.cache_control = None
        self.uploads = []

    def upload_from_string(self, data, content_type=None, predefined_acl=None):
        if self.name in self.bucket.client.fail:
            raise RuntimeError(f"403 Forbidden: {self.name}")
        self.uploads.append({"data": data, "content_type": content_type, "predefined_acl": predefined_acl})

    @property
    def public_url(self):
        return f"https://storage.googleapis.com/{self.bucket.name}/{self.name}"


class FakeBucket:
    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.blobs = {}

    def blob(self, name):
        return self.blobs.setdefault(name, FakeBlob(self, name))


class FakeStorageClient:
    """Stands in for google.cloud.storage.Client; names in `fail` raise on upload."""

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.buckets = {}

    def bucket(self, name):
        return self.buckets.setdefault(name, FakeBucket(self, name))


@pytest.fixture
def storage_client():
    return FakeStorageClient()
