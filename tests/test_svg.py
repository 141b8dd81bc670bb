import pytest

from qrforge.encoder import encode
from qrforge.render.options import ModuleStyle
from qrforge.render.svg import SVGRenderer


@pytest.fixture(scope="module")
def qr():
    return encode(b"test-render", 1)


def _dark_count(qr):
    return sum(row.count(True) for row in qr.modules)


def test_render_document(qr):
    out = SVGRenderer().render(qr, width=256, height=256).decode("utf-8")
    assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<svg')
    assert out.endswith("</svg>\n")


def test_plain_render_has_rect_per_dark_module(qr):
    out = SVGRenderer().render(qr).decode("utf-8")
    assert out.count("<rect") == _dark_count(qr) + 1


def test_background_rect(qr):
    out = SVGRenderer().render(qr, background_color="#00FF00").decode("utf-8")
    assert 'fill="#00FF00"/>' in out.splitlines()[2]


def test_invalid_color(qr):
    with pytest.raises(ValueError, match="foreground"):
        SVGRenderer().render(qr, foreground_color="bad")


def test_invalid_module_style(qr):
    with pytest.raises(ValueError):
        SVGRenderer().render(qr, module_style=ModuleStyle(shape="star"))


@pytest.mark.parametrize(
    ("options", "tag"),
    [
        ({"rounded_modules": 0.5, "width": 128}, "<path"),
        ({"circle_modules": True, "width": 128}, "<circle"),
        ({"transparency": 0.6, "width": 128}, 'opacity="0.60"'),
    ],
)
def test_advanced_styles(qr, options, tag):
    out = SVGRenderer().render(qr, **options).decode("utf-8")
    assert out.count(tag) == _dark_count(qr)


def test_gradient(qr):
    out = SVGRenderer().render(qr, gradient=("#FF0000", "#0000FF", 45), width=128).decode()
    assert out.count("<defs><linearGradient") == 1
    assert out.count("url(#qrgradient)") == _dark_count(qr)