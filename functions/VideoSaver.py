import os
import random
import time
import logging
from functions.errors import InvalidOperation

logger = logging.getLogger(__name__)

# ---------------- CONFIG ----------------
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
VIDEO_FOLDER = os.path.join(UPLOAD_DIR, "videos")
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", 100 * 1024 * 1024))  # 100MB

ALLOWED_VIDEO_TYPES = {
    "video/mp4": "mp4",
    "video/mpeg": "mpeg",
    "video/quicktime": "mov",
    "video/webm": "webm",
}

CHUNK_SIZE = 1024 * 1024


def ensure_upload_dirs():
    os.makedirs(VIDEO_FOLDER, exist_ok=True)


# ---------------- HELPERS ----------------
def get_video_extension(filename: str, content_type: str) -> str:
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if ext in ALLOWED_VIDEO_TYPES.values():
        return ext
    return ALLOWED_VIDEO_TYPES[content_type]


def generate_filename(extension: str) -> str:
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"video-{unique_suffix}.{extension}"


def save_video(fileobj, original_name: str, content_type: str):
    """
    Copy an uploaded stream into the video folder.
    Returns (stored filename, size in bytes). Nothing is left on disk when
    the file is rejected.
    """
    if content_type not in ALLOWED_VIDEO_TYPES:
        raise InvalidOperation("Invalid file type. Only MP4, MPEG, MOV, and WebM files are allowed.")

    ensure_upload_dirs()
    filename = generate_filename(get_video_extension(original_name, content_type))
    filepath = os.path.join(VIDEO_FOLDER, filename)

    size = 0
    with open(filepath, "wb") as out:
        while True:
            chunk = fileobj.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > MAX_FILE_SIZE:
                break
            out.write(chunk)

    if size > MAX_FILE_SIZE:
        os.remove(filepath)
        raise InvalidOperation(f"File too large. Maximum size is {MAX_FILE_SIZE // (1024 * 1024)}MB.")
    if size == 0:
        os.remove(filepath)
        raise InvalidOperation("No video file uploaded")

    return filename, size


def delete_video_file(filename: str) -> bool:
    """Remove a stored video; a missing file is logged, not raised."""
    filepath = os.path.join(VIDEO_FOLDER, os.path.basename(filename))
    try:
        os.remove(filepath)
    except OSError as e:
        logger.warning("Failed to delete video file %s: %s", filename, e)
        return False
    return True
