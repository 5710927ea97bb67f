import os
import uuid
from typing import Dict, Optional

from sehaty.core.config import settings


def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def _detect_ext(original_filename: Optional[str]) -> str:
    if not original_filename:
        return "bin"
    _, ext = os.path.splitext(original_filename)
    return ext.lstrip(".").lower() or "bin"


def store_prescription_image(content_bytes: bytes, original_filename: Optional[str], user_id: int) -> Dict[str, str]:
    """
    Write an uploaded prescription image under UPLOADS_LOCAL_DIR/prescriptions.

    Returns dict with keys: original_name, public_id, stored_url
    """
    ext = _detect_ext(original_filename)
    local_root = os.path.abspath(os.path.join(settings.UPLOADS_LOCAL_DIR, "prescriptions"))
    _ensure_dir(local_root)

    public_id = f"{uuid.uuid4().hex}_{user_id}"
    stored_path = os.path.abspath(os.path.join(local_root, f"{public_id}.{ext}"))
    with open(stored_path, "wb") as f_out:
        f_out.write(content_bytes)

    return {
        "original_name": original_filename or "",
        "public_id": public_id,
        "stored_url": stored_path,
    }


def remove_stored_file(stored_path: str) -> None:
    """Delete a previously stored upload; a file that is already gone is ignored"""
    try:
        os.remove(stored_path)
    except FileNotFoundError:
        pass
