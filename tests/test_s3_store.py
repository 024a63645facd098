"""Tests for S3ObjectStore — boto3 client stubbed with botocore's Stubber."""

from __future__ import annotations

import os
from unittest.mock import patch

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from bucketlog.config import Credentials, Region
from bucketlog.exceptions import ConfigurationError, UploadError
from bucketlog.logger import Logger
from bucketlog.store.s3 import S3ObjectStore

BUCKET = "my-bucket"
KEY = "my-logs.txt"
CONTENT_TYPE = "text/plain; charset=utf-8"


@pytest.fixture
def creds():
    return Credentials(access_key="AKIDEXAMPLE", secret_key="secret")


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-2",
        aws_access_key_id="AKIDEXAMPLE",
        aws_secret_access_key="secret",
    )


class TestConnect:
    def test_builds_client_for_region(self, creds):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("BUCKETLOG_S3_ENDPOINT", None)
            store = S3ObjectStore.connect(BUCKET, Region.US_EAST_2, creds)
        assert store.bucket == BUCKET
        assert store._client.meta.region_name == "us-east-2"

    def test_explicit_endpoint(self, creds):
        store = S3ObjectStore.connect(BUCKET, "us-east-1", creds, "http://localhost:9000")
        assert store._client.meta.endpoint_url == "http://localhost:9000"

    def test_endpoint_from_env(self, creds):
        with patch.dict(os.environ, {"BUCKETLOG_S3_ENDPOINT": "http://minio:9000"}):
            store = S3ObjectStore.connect(BUCKET, "us-east-1", creds)
        assert store._client.meta.endpoint_url == "http://minio:9000"

    def test_empty_bucket(self, creds):
        with pytest.raises(ConfigurationError, match="bucket"):
            S3ObjectStore.connect("", Region.US_EAST_1, creds)

    def test_bad_endpoint(self, creds):
        with pytest.raises(ConfigurationError, match="cannot create S3 client"):
            S3ObjectStore.connect(BUCKET, Region.US_EAST_1, creds, "not a url")


class TestHeadObject:
    def test_exists(self, s3_client):
        store = S3ObjectStore(BUCKET, s3_client)
        with Stubber(s3_client) as stub:
            stub.add_response("head_object", {}, {"Bucket": BUCKET, "Key": KEY})
            assert store.head_object(KEY) is True

    def test_missing(self, s3_client):
        store = S3ObjectStore(BUCKET, s3_client)
        with Stubber(s3_client) as stub:
            stub.add_client_error("head_object", service_error_code="404", http_status_code=404)
            assert store.head_object(KEY) is False

    def test_forbidden_propagates(self, s3_client):
        store = S3ObjectStore(BUCKET, s3_client)
        with Stubber(s3_client) as stub:
            stub.add_client_error("head_object", service_error_code="403", http_status_code=403)
            with pytest.raises(ClientError):
                store.head_object(KEY)


class TestPutObject:
    def test_sends_plain_text(self, s3_client):
        store = S3ObjectStore(BUCKET, s3_client)
        expected = {"Bucket": BUCKET, "Key": KEY, "Body": b"a\n", "ContentType": CONTENT_TYPE}
        with Stubber(s3_client) as stub:
            stub.add_response("put_object", {}, expected)
            store.put_object(KEY, b"a\n")
            stub.assert_no_pending_responses()


class TestLoggerOverS3:
    def test_full_cycle(self, s3_client):
        store = S3ObjectStore(BUCKET, s3_client)
        with Stubber(s3_client) as stub:
            stub.add_client_error("head_object", service_error_code="404", http_status_code=404)
            stub.add_response(
                "put_object",
                {},
                {"Bucket": BUCKET, "Key": KEY, "Body": b"", "ContentType": CONTENT_TYPE},
            )
            stub.add_response(
                "put_object",
                {},
                {
                    "Bucket": BUCKET,
                    "Key": KEY,
                    "Body": b"hello world!\nThis is some text\n",
                    "ContentType": CONTENT_TYPE,
                },
            )
            logger = Logger.from_store(store, KEY)
            logger.log("hello world!")
            logger.log("This is some text")
            logger.flush()
            stub.assert_no_pending_responses()

    def test_access_denied_becomes_upload_error(self, s3_client):
        store = S3ObjectStore(BUCKET, s3_client)
        with Stubber(s3_client) as stub:
            stub.add_response("head_object", {})
            stub.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
            logger = Logger.from_store(store, KEY)
            logger.log("x")
            with pytest.raises(UploadError) as exc_info:
                logger.flush()
        assert isinstance(exc_info.value.__cause__, ClientError)
        assert logger.contents == "x\n"
