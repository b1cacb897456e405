"""
Media storage on Cloudflare R2 (S3-compatible API via boto3).
Objects are served publicly from r2_public_url/{key}.
"""
import re
import time

import boto3
from botocore.exceptions import ClientError

from portfolio.app.core.config import settings
from portfolio.app.core.logging_config import get_logger

logger = get_logger("services.storage")


def _get_r2_client():
    """Get configured S3 client pointed at the R2 account endpoint."""
    if not settings.r2_account_id or not settings.r2_access_key_id or not settings.r2_secret_access_key:
        raise ValueError("R2 credentials not configured (R2_ACCOUNT_ID, R2_ACCESS_KEY_ID, R2_SECRET_ACCESS_KEY)")
    return boto3.client(
        "s3",
        endpoint_url=f"https://{settings.r2_account_id}.r2.cloudflarestorage.com",
        aws_access_key_id=settings.r2_access_key_id,
        aws_secret_access_key=settings.r2_secret_access_key,
        region_name=settings.r2_region,
    )


def public_url(key: str) -> str:
    return f"{settings.r2_public_url.rstrip('/')}/{key}"


def build_upload_key(folder: str, file_name: str, now_ms: int | None = None) -> str:
    """folder/{epoch_ms}-{sanitized name}"""
    ts = now_ms if now_ms is not None else int(time.time() * 1000)
    safe_name = re.sub(r"[^a-zA-Z0-9._-]", "_", file_name or "file")
    return f"{folder.strip('/') or 'uploads'}/{ts}-{safe_name}"


def _object_info(obj: dict) -> dict:
    modified = obj.get("LastModified")
    return {
        "key": obj.get("Key", ""),
        "size": obj.get("Size", 0),
        "lastModified": modified.isoformat() if modified else "",
        "url": public_url(obj.get("Key", "")),
    }


def _client_error(action: str, key: str, e: ClientError) -> RuntimeError:
    code = e.response.get("Error", {}).get("Code", "")
    msg = e.response.get("Error", {}).get("Message", str(e))
    logger.error(
        "R2 %s failed bucket=%s key=%s error_code=%s error_message=%s",
        action,
        settings.r2_bucket_name,
        key,
        code,
        msg,
    )
    return RuntimeError(f"R2 {action} failed - {code}: {msg}")


def list_objects(prefix: str = "", max_keys: int = 100) -> list[dict]:
    """Flat listing of every object under prefix."""
    try:
        r2 = _get_r2_client()
        response = r2.list_objects_v2(Bucket=settings.r2_bucket_name, Prefix=prefix, MaxKeys=max_keys)
    except ClientError as e:
        raise _client_error("list", prefix, e) from e
    return [_object_info(obj) for obj in response.get("Contents", [])]


def list_folder(prefix: str = "", max_keys: int = 500) -> dict:
    """Listing with "/" delimiter: immediate sub-folders plus files directly under prefix."""
    normalized = f"{prefix}/" if prefix and not prefix.endswith("/") else prefix
    try:
        r2 = _get_r2_client()
        response = r2.list_objects_v2(
            Bucket=settings.r2_bucket_name,
            Prefix=normalized,
            Delimiter="/",
            MaxKeys=max_keys,
        )
    except ClientError as e:
        raise _client_error("list", normalized, e) from e

    folders = []
    for cp in response.get("CommonPrefixes", []):
        full = cp.get("Prefix", "")
        folders.append({"name": full.rstrip("/").split("/")[-1], "prefix": full})
    files = [
        _object_info(obj)
        for obj in response.get("Contents", [])
        if obj.get("Key") != normalized
    ]
    return {"folders": folders, "files": files}


def upload_file(key: str, body: bytes, content_type: str = "application/octet-stream") -> str:
    """Upload bytes under key. Returns the public URL."""
    logger.info(
        "R2 upload started bucket=%s key=%s size_bytes=%d",
        settings.r2_bucket_name,
        key,
        len(body),
    )
    try:
        r2 = _get_r2_client()
        r2.put_object(
            Bucket=settings.r2_bucket_name,
            Key=key,
            Body=body,
            ContentType=content_type,
        )
    except ClientError as e:
        raise _client_error("upload", key, e) from e
    url = public_url(key)
    logger.info("R2 upload success bucket=%s key=%s url=%s", settings.r2_bucket_name, key, url)
    return url


def delete_file(key: str) -> None:
    try:
        r2 = _get_r2_client()
        r2.delete_object(Bucket=settings.r2_bucket_name, Key=key)
    except ClientError as e:
        raise _client_error("delete", key, e) from e
    logger.info("R2 delete success bucket=%s key=%s", settings.r2_bucket_name, key)
