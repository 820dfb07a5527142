import os
import time
from typing import BinaryIO

from restaurant.application.errors import BadRequestError
from restaurant.core_settings import get_settings

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}


def save_image(folder: str, filename: str, content: BinaryIO) -> str:
    """
    Store an uploaded image under ``UPLOAD_DIR/<folder>/`` and return the
    path relative to ``UPLOAD_DIR``, e.g. ``menu/1700000000000000000.png``.
    """
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise BadRequestError("Invalid file type, only .jpg, .jpeg and .png are allowed")

    target_dir = os.path.join(get_settings().UPLOAD_DIR, folder)
    os.makedirs(target_dir, exist_ok=True)
    stored_name = f"{time.time_ns()}{ext}"
    with open(os.path.join(target_dir, stored_name), "wb") as out:
        out.write(content.read())
    return f"{folder}/{stored_name}"


def delete_image(relative_path: str) -> None:
    path = os.path.join(get_settings().UPLOAD_DIR, relative_path)
    if os.path.exists(path):
        os.remove(path)
