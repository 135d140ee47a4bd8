from __future__ import annotations

import shutil
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from objstore.exceptions import (
    CredentialsError,
    FileCreateFailedError,
    ObjectNotFoundError,
    SourceFileNotFoundError,
    TransferFailedError,
)
from objstore.models import ClientConfig, TransferDirection, make_request

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class S3Storage:
    """Upload/download facade over a boto3 S3 client.

    The instance holds only its config and the boto3 client, so one instance
    may be shared between threads.
    """

    def __init__(self, config: ClientConfig | None = None) -> None:
        self.config = config or ClientConfig()
        try:
            session = boto3.session.Session(
                region_name=self.config.region,
                profile_name=self.config.profile,
            )
            credentials = session.get_credentials()
        except BotoCoreError as exc:
            raise CredentialsError(
                f"Could not resolve storage credentials: {exc}",
                {"profile": str(self.config.profile), "region": str(self.config.region)},
            ) from exc
        if credentials is None:
            raise CredentialsError(
                "No storage credentials found in the environment or shared config",
                {"profile": str(self.config.profile), "region": str(self.config.region)},
            )
        self.client = session.client("s3", endpoint_url=self.config.endpoint_url)

    def _put_args(self) -> dict[str, str]:
        args = {"ACL": "private", "ContentDisposition": "attachment"}
        if self.config.server_side_encryption:
            args["ServerSideEncryption"] = self.config.server_side_encryption
        return args

    def upload(self, local_path: str | Path, bucket: str, key: str) -> None:
        request = make_request(TransferDirection.UPLOAD, bucket, key, local_path)
        details = {
            "operation": "upload",
            "bucket": bucket,
            "key": key,
            "path": str(request.local_path),
        }
        logger.debug("Uploading {path} to {uri}", path=request.local_path, uri=request.target.uri)
        try:
            handle = request.local_path.open("rb")
        except OSError as exc:
            raise SourceFileNotFoundError(
                f"Failed to open file {str(request.local_path)!r}: {exc}", details
            ) from exc

        with handle:
            try:
                self.client.put_object(
                    Bucket=bucket,
                    Key=key,
                    Body=handle,
                    **self._put_args(),
                )
            except (BotoCoreError, ClientError, OSError) as exc:
                logger.error("Upload to {uri} failed: {exc}", uri=request.target.uri, exc=exc)
                raise TransferFailedError(
                    f"Failed to upload {str(request.local_path)!r} to {request.target.uri}: {exc}",
                    details,
                    cause=exc,
                ) from exc

        logger.info("Uploaded {path} to {uri}", path=request.local_path, uri=request.target.uri)

    def download(self, bucket: str, key: str, local_path: str | Path) -> None:
        request = make_request(TransferDirection.DOWNLOAD, bucket, key, local_path)
        details = {
            "operation": "download",
            "bucket": bucket,
            "key": key,
            "path": str(request.local_path),
        }
        logger.debug("Downloading {uri} to {path}", uri=request.target.uri, path=request.local_path)
        # The destination is opened first so an unwritable path never reaches the store
        try:
            handle = request.local_path.open("wb")
        except OSError as exc:
            raise FileCreateFailedError(
                f"Failed to create file {str(request.local_path)!r}: {exc}", details
            ) from exc

        with handle:
            try:
                response = self.client.get_object(Bucket=bucket, Key=key)
            except ClientError as exc:
                code = exc.response.get("Error", {}).get("Code", "")
                if code in _MISSING_KEY_CODES:
                    raise ObjectNotFoundError(
                        f"Object {request.target.uri} does not exist", details
                    ) from exc
                logger.error("Download of {uri} failed: {exc}", uri=request.target.uri, exc=exc)
                raise TransferFailedError(
                    f"Failed to download {request.target.uri}: {exc}", details, cause=exc
                ) from exc
            except BotoCoreError as exc:
                logger.error("Download of {uri} failed: {exc}", uri=request.target.uri, exc=exc)
                raise TransferFailedError(
                    f"Failed to download {request.target.uri}: {exc}", details, cause=exc
                ) from exc

            body = response["Body"]
            try:
                shutil.copyfileobj(body, handle)
            except (BotoCoreError, OSError) as exc:
                # Partial file is left in place
                logger.error("Copy of {uri} failed: {exc}", uri=request.target.uri, exc=exc)
                raise TransferFailedError(
                    f"Failed to download {request.target.uri} into {str(request.local_path)!r}: {exc}",
                    details,
                    cause=exc,
                ) from exc
            finally:
                body.close()

        logger.info("Downloaded {uri} to {path}", uri=request.target.uri, path=request.local_path)


__all__ = ["S3Storage"]
