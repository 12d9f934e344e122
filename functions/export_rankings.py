from google.cloud import storage

from functions.enrich_rankings import serialize_poll

# Fixed object names; every run overwrites the previous document in place.
POLL_OBJECTS = {
    "AP": "tcd-ap.json",
    "Coaches": "tcd-coaches.json",
}


def publish_poll(doc, object_name, bucket_name, client=None):
    """Upload a poll document to GCS as a public JSON object and return its URL."""
    client = client or storage.Client()
    bucket = client.bucket(bucket_name)
    blob = bucket.blob(object_name)
    blob.cache_control = "no-cache"
    blob.upload_from_string(
        serialize_poll(doc),
        content_type="application/json",
        predefined_acl="publicRead",
    )
    print(f"📤 Uploaded {doc['poll']} poll to gs://{bucket_name}/{object_name}")
    return blob.public_url
