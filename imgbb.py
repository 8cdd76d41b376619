"""Uploads product images and payment screenshots to ImgBB."""
import logging
import os
from typing import Optional

import httpx

logger = logging.getLogger("rfap.imgbb")

IMGBB_UPLOAD_URL = os.getenv("IMGBB_UPLOAD_URL", "https://api.imgbb.com/1/upload")
IMGBB_API_KEY = os.getenv("IMGBB_API_KEY", "d0ce2e8d3a4d923876e7f845e587dc82")

UPLOAD_FAILED_MESSAGE = "ছবি আপলোড করতে সমস্যা হয়েছে"


class ImageUploadError(Exception):
    def __init__(self, message: str = UPLOAD_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


def upload_to_imgbb(content: bytes, filename: str = "image", client: Optional[httpx.Client] = None) -> str:
    """POST the image as multipart ``image`` and return the hosted URL."""
    owns_client = client is None
    client = client or httpx.Client()
    try:
        response = client.post(
            IMGBB_UPLOAD_URL,
            params={"key": IMGBB_API_KEY},
            files={"image": (filename, content)},
        )
        response.raise_for_status()
        url = response.json()["data"]["url"]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.error("Error uploading to ImgBB: %s", e)
        raise ImageUploadError() from e
    finally:
        if owns_client:
            client.close()
    logger.info("Uploaded %s to %s", filename, url)
    return url
