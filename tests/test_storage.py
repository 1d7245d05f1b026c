import uuid

import pytest

from saarthi.storage import LocalStorage, StorageError
from saarthi.utils.file_utils import (
    ImageValidationError,
    generate_storage_path,
    sanitize_filename,
    validate_image,
)

from conftest import PNG_BYTES


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(base_path=str(tmp_path))


async def test_save_then_delete(storage, tmp_path):
    stored = await storage.save(b"image-bytes", "problems/u1/a.png", content_type="image/png")

    assert stored.size == len(b"image-bytes")
    assert stored.content_type == "image/png"
    assert (tmp_path / "problems" / "u1" / "a.png").read_bytes() == b"image-bytes"

    assert await storage.delete("problems/u1/a.png") is True
    assert not (tmp_path / "problems" / "u1" / "a.png").exists()
    assert await storage.delete("problems/u1/a.png") is False


async def test_path_traversal_is_refused(storage):
    with pytest.raises(StorageError):
        await storage.save(b"x", "../../etc/evil.png")
    with pytest.raises(StorageError):
        await storage.delete("../../etc/passwd")


def test_local_copies_are_scratch(storage):
    assert storage.keeps_files is False


def test_sanitize_filename():
    assert sanitize_filename("../../secret/answer sheet (1).png") == "answer_sheet_1_.png"
    assert sanitize_filename(None) == "unnamed_file"
    assert sanitize_filename("...") == "unnamed_file"


def test_storage_path_layout():
    user_id = uuid.uuid4()
    path = generate_storage_path(user_id, "my photo.jpg")

    prefix, owner, name = path.split("/")
    assert prefix == "problems"
    assert owner == str(user_id)
    assert name.endswith("_my_photo.jpg")


def test_validate_image_detects_type_from_bytes():
    image = validate_image(PNG_BYTES, "homework.jpg", max_size_bytes=1024)

    assert image.mime_type == "image/png"
    assert image.filename == "homework.jpg"


def test_validate_image_limits():
    with pytest.raises(ImageValidationError) as exc_info:
        validate_image(PNG_BYTES, "big.png", max_size_bytes=10)
    assert exc_info.value.too_large is True

    with pytest.raises(ImageValidationError) as exc_info:
        validate_image(b"%PDF-1.7 not an image", "doc.png", max_size_bytes=1024)
    assert exc_info.value.too_large is False

    with pytest.raises(ImageValidationError):
        validate_image(b"", "empty.png", max_size_bytes=1024)
