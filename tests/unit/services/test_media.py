from io import BytesIO

import pytest
from PIL import Image

from tenantgram.app.services.media import (
    GENERIC_MIME_TYPE,
    MediaError,
    UnsupportedMediaType,
    file_extension,
    generate_stored_filename,
    process_upload,
    sha256_hex,
    sniff_mime_type,
    transcode_image,
)
from tenantgram.domain.entities import FileType


def make_image(fmt: str, size=(4, 4), mode="RGB") -> bytes:
    buffer = BytesIO()
    Image.new(mode, size, color=(200, 30, 30) if mode == "RGB" else 128).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.mark.parametrize(
    "fmt, mime_type",
    [("PNG", "image/png"), ("JPEG", "image/jpeg"), ("WEBP", "image/webp"), ("GIF", "image/gif")],
)
def test_sniff_mime_type_from_content(fmt, mime_type):
    assert sniff_mime_type(make_image(fmt)) == mime_type


def test_sniff_ignores_non_image_content():
    assert sniff_mime_type(b"%PDF-1.4 hello") == GENERIC_MIME_TYPE
    assert sniff_mime_type(b"") == GENERIC_MIME_TYPE


def test_file_extension():
    assert file_extension("photo.PNG") == "png"
    assert file_extension("archive.tar.gz") == "gz"
    assert file_extension("README") is None
    assert file_extension(None) is None
    assert file_extension("weird.p/ng") is None


def test_stored_filename_is_uuid_plus_extension():
    name = generate_stored_filename("png")

    assert name.endswith(".png")
    assert len(name) == 36 + 4
    assert generate_stored_filename(None) != generate_stored_filename(None)


def test_process_png_upload():
    data = make_image("PNG")

    processed = process_upload(data, "avatar.png", require_image=True)

    assert processed.mime_type == "image/png"
    assert processed.file_type == FileType.IMAGE
    assert processed.extension == "png"
    assert processed.file_hash == sha256_hex(data)
    with Image.open(BytesIO(processed.data)) as img:
        assert img.format == "PNG"
        assert img.size == (4, 4)


def test_jpeg_is_reencoded_as_jpeg():
    processed = process_upload(make_image("JPEG", size=(16, 16)), "x.jpg", require_image=True)

    assert processed.mime_type == "image/jpeg"
    with Image.open(BytesIO(processed.data)) as img:
        assert img.format == "JPEG"


def make_multi_picture_jpeg() -> bytes:
    first = Image.new("RGB", (16, 16), (200, 30, 30))
    second = Image.new("RGB", (16, 16), (30, 30, 200))
    buffer = BytesIO()
    first.save(buffer, format="MPO", save_all=True, append_images=[second])
    return buffer.getvalue()


def test_multi_picture_jpeg_is_accepted_as_jpeg():
    data = make_multi_picture_jpeg()
    assert data[:3] == b"\xff\xd8\xff"

    processed = process_upload(data, "photo.jpg", require_image=True)

    assert sniff_mime_type(data) == "image/jpeg"
    assert processed.mime_type == "image/jpeg"
    assert processed.file_type == FileType.IMAGE
    with Image.open(BytesIO(processed.data)) as img:
        assert img.format == "JPEG"
        assert img.size == (16, 16)
        assert getattr(img, "n_frames", 1) == 1


def test_webp_is_reencoded_as_webp():
    processed = process_upload(make_image("WEBP"), "x.webp", require_image=True)

    with Image.open(BytesIO(processed.data)) as img:
        assert img.format == "WEBP"


def test_mime_type_comes_from_content_not_filename():
    processed = process_upload(make_image("PNG"), "disguised.jpg", require_image=True)

    assert processed.mime_type == "image/png"
    assert processed.extension == "jpg"


def test_image_required_rejects_other_content():
    with pytest.raises(UnsupportedMediaType):
        process_upload(b"just some text", "notes.txt", require_image=True)


def test_image_required_rejects_gif():
    with pytest.raises(UnsupportedMediaType):
        process_upload(make_image("GIF"), "anim.gif", require_image=True)


def test_generic_upload_keeps_bytes():
    data = b"%PDF-1.4 hello"

    processed = process_upload(data, "doc.pdf", require_image=False)

    assert processed.data == data
    assert processed.file_type == FileType.GENERIC
    assert processed.mime_type == GENERIC_MIME_TYPE
    assert processed.file_hash == sha256_hex(data)


def test_generic_upload_still_transcodes_images():
    processed = process_upload(make_image("PNG"), "pic.png", require_image=False)

    assert processed.file_type == FileType.IMAGE


def test_grayscale_image_transcodes_to_jpeg():
    out = transcode_image(make_image("PNG", mode="L"), "image/jpeg")

    with Image.open(BytesIO(out)) as img:
        assert img.format == "JPEG"


def test_truncated_image_fails_processing():
    data = make_image("PNG", size=(64, 64))

    with pytest.raises(MediaError):
        transcode_image(data[:20], "image/png")
