"""PDF output: a single-page document drawing each dark module as a filled rectangle."""

from __future__ import annotations

from qrforge.encoder import QRCode
from qrforge.render.colors import parse_hex_color
from qrforge.render.options import build_config

_MODULE_SIZE = 10.0


def _pdf_color(rgb: tuple[int, int, int]) -> str:
    r, g, b = rgb
    return f"{r / 255.0:.3f} {g / 255.0:.3f} {b / 255.0:.3f}"


def _rect(x: float, y: float, w: float, h: float, op: str = "f") -> str:
    return f"{x:.2f} {y:.2f} {w:.2f} {h:.2f} re {op}\n"


def _content_stream(qr: QRCode, qz: float, border: float, fg: str, bg: str) -> str:
    qr_pixels = (qr.size + 2 * qz) * _MODULE_SIZE
    offset = border + _MODULE_SIZE
    parts = [f"{bg} rg\n", _rect(offset, offset, qr_pixels, qr_pixels), f"{fg} rg\n"]
    for row_index, row in enumerate(qr.modules[: qr.size]):
        for col_index, dark in enumerate(row[: qr.size]):
            if dark:
                parts.append(
                    _rect(
                        offset + (col_index + qz) * _MODULE_SIZE,
                        offset + (row_index + qz) * _MODULE_SIZE,
                        _MODULE_SIZE,
                        _MODULE_SIZE,
                    )
                )
    return "".join(parts)


class _PdfDocument:
    """Incremental PDF writer tracking object offsets for the xref table."""

    def __init__(self) -> None:
        self._buf = bytearray(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
        self._offsets: dict[int, int] = {}

    def _write(self, text: str) -> None:
        self._buf += text.encode("latin-1")

    def _start_object(self, num: int) -> None:
        self._offsets[num] = len(self._buf)

    def dict_object(self, num: int, *pairs: tuple[str, str]) -> None:
        self._start_object(num)
        body = " ".join(f"{key} {value}" for key, value in pairs)
        self._write(f"{num} 0 obj\n<< {body} >>\nendobj\n")

    def stream_object(self, num: int, data: str) -> None:
        self._start_object(num)
        self._write(f"{num} 0 obj\n<< /Length {len(data)} >>\nstream\n")
        self._write(data)
        self._write("\nendstream\nendobj\n")

    def finish(self) -> bytes:
        last = max(self._offsets, default=0)
        xref_offset = len(self._buf)
        self._write(f"xref\n0 {last + 1}\n0000000000 65535 f \n")
        for num in range(1, last + 1):
            self._write(f"{self._offsets.get(num, 0):010d} 00000 n \n")
        self._write(f"trailer\n<< /Size {last + 1} /Root 1 0 R >>\n")
        self._write(f"startxref\n{xref_offset}\n%%EOF\n")
        return bytes(self._buf)


class PDFRenderer:
    """Renders QR codes as PDF documents."""

    def render(self, qr: QRCode, **kwargs) -> bytes:
        """A minimal one-page PDF of the symbol; accepts the options of ``build_config``."""
        kwargs.pop("cancel", None)
        cfg = build_config(**kwargs)
        try:
            fg = parse_hex_color(cfg.foreground_color)
        except ValueError as exc:
            raise ValueError(f"invalid foreground color: {exc}") from exc
        try:
            bg = parse_hex_color(cfg.background_color)
        except ValueError as exc:
            raise ValueError(f"invalid background color: {exc}") from exc

        qz = float(cfg.quiet_zone)
        border = float(cfg.border_width)
        content_width = (qr.size + 2 * qz) * _MODULE_SIZE
        page = content_width + 2 * (border + _MODULE_SIZE)
        content = _content_stream(qr, qz, border, _pdf_color(fg), _pdf_color(bg))

        doc = _PdfDocument()
        doc.dict_object(1, ("/Type", "/Catalog"), ("/Pages", "2 0 R"))
        doc.dict_object(2, ("/Type", "/Pages"), ("/Kids", "[3 0 R]"), ("/Count", "1"))
        doc.dict_object(
            3,
            ("/Type", "/Page"),
            ("/Parent", "2 0 R"),
            ("/MediaBox", f"[0 0 {page:.2f} {page:.2f}]"),
            ("/Contents", "4 0 R"),
            ("/Resources", "<< /ColorSpace << /DeviceRGB /DeviceRGB >> >>"),
        )
        doc.stream_object(4, content)
        return doc.finish()