import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sehaty.core.config import settings

logger = logging.getLogger(__name__)


class PrescriptionOCR:
    """Extracts printed text from prescription images with AWS Textract"""

    def __init__(self):
        self.textract_client = None
        if settings.OCR_PROVIDER != "textract":
            return

        aws_config = {}
        if settings.AWS_REGION:
            aws_config["region_name"] = settings.AWS_REGION
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            aws_config["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
            aws_config["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
        try:
            self.textract_client = boto3.client("textract", **aws_config)
            logger.info(f"AWS Textract client initialized with region: {aws_config.get('region_name')}")
        except (BotoCoreError, ValueError) as e:
            logger.warning(f"AWS Textract not properly configured: {e}")
            self.textract_client = None

    @property
    def is_ready(self) -> bool:
        return self.textract_client is not None

    def extract_text(self, image_bytes: bytes) -> str:
        """Text lines joined by newlines; empty string when OCR is off or fails"""
        if not self.is_ready:
            return ""
        if len(image_bytes) > settings.OCR_MAX_FILE_SIZE:
            logger.warning(f"[OCR] Image of {len(image_bytes)} bytes exceeds OCR_MAX_FILE_SIZE, skipping")
            return ""

        try:
            response = self.textract_client.detect_document_text(Document={"Bytes": image_bytes})
        except ClientError as e:
            error = e.response.get("Error", {})
            logger.error(f"[OCR] AWS Textract ClientError: {error.get('Code')} - {error.get('Message')}")
            return ""
        except BotoCoreError as e:
            logger.error(f"[OCR] AWS Textract error: {e}")
            return ""

        lines = [
            block["Text"]
            for block in response.get("Blocks", [])
            if block.get("BlockType") == "LINE" and block.get("Text")
        ]
        result = "\n".join(lines)
        logger.info(f"[OCR] AWS Textract extracted {len(result)} characters from image")
        return result


_ocr: Optional[PrescriptionOCR] = None


def get_prescription_ocr() -> PrescriptionOCR:
    global _ocr
    if _ocr is None:
        _ocr = PrescriptionOCR()
    return _ocr
