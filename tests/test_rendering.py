import pytest
from bs4 import BeautifulSoup

from inlineimagestyles.errors import InvalidImage, StyleNotFound
from inlineimagestyles.rendering import ImageFormatterRenderer
from inlineimagestyles.services import FileReference
from inlineimagestyles.styles import StaticStyleCatalog

CAT = FileReference(
    uuid="abc",
    uri="public://cat.jpg",
    url="https://example.com/files/cat.jpg",
    mime_type="image/jpeg",
)


def _catalog() -> StaticStyleCatalog:
    return StaticStyleCatalog(
        {"thumbnail": "Thumbnail"}, files_base_url="https://example.com/files"
    )


def test_original_style_renders_file_url() -> None:
    renderer = ImageFormatterRenderer(_catalog())

    rendered = renderer.render(CAT, {"alt": "A cat", "class": "inline-image"}, "", None)

    image = BeautifulSoup(rendered.markup, "html.parser").img
    assert list(image.attrs) == ["src", "alt", "class"]
    assert image["src"] == CAT.url
    assert rendered.cache_tags == frozenset()


def test_styled_image_reports_cache_tags() -> None:
    renderer = ImageFormatterRenderer(_catalog())

    rendered = renderer.render(CAT, {}, "thumbnail", None)

    image = BeautifulSoup(rendered.markup, "html.parser").img
    assert image["src"] == "https://example.com/files/styles/thumbnail/public/cat.jpg"
    assert rendered.cache_tags == frozenset({"config:image.style.thumbnail"})


def test_link_url_wraps_image_in_anchor() -> None:
    renderer = ImageFormatterRenderer()

    rendered = renderer.render(CAT, {}, "", "https://example.com/full.jpg")

    soup = BeautifulSoup(rendered.markup, "html.parser")
    assert soup.contents[0].name == "a"
    assert soup.a["href"] == "https://example.com/full.jpg"
    assert soup.a.img["src"] == CAT.url


def test_attribute_values_are_escaped() -> None:
    renderer = ImageFormatterRenderer()
    alt = 'He said "hi" & <left>'

    rendered = renderer.render(CAT, {"alt": alt}, "", None)

    assert BeautifulSoup(rendered.markup, "html.parser").img["alt"] == alt


def test_pass_through_src_does_not_override_rendered_source() -> None:
    rendered = ImageFormatterRenderer().render(CAT, {"src": "/tmp.jpg"}, "", None)

    assert BeautifulSoup(rendered.markup, "html.parser").img["src"] == CAT.url


def test_non_image_file_is_rejected() -> None:
    document = FileReference(
        uuid="pdf", uri="public://doc.pdf", url="/doc.pdf", mime_type="application/pdf"
    )

    with pytest.raises(InvalidImage):
        ImageFormatterRenderer().render(document, {}, "", None)


def test_style_without_catalog_is_not_found() -> None:
    with pytest.raises(StyleNotFound):
        ImageFormatterRenderer().render(CAT, {}, "thumbnail", None)
