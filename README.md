# qrforge

A pure-Python QR code toolkit with no third-party dependencies. It encodes
data into a QR module matrix (versions 1–40, error-correction levels L/M/Q/H,
automatic mode and mask selection) and renders it as PNG, SVG, PDF or
terminal block characters.

## Installation

```
pip install qrforge
```

## Encoding

```python
from qrforge.encoder import encode

qr = encode(b"Hello, world", 1)          # EC level M, auto version, auto mask
print(qr.version, qr.size, qr.mask_pattern)
print(qr.metadata["mode"])               # "Byte"
```

`encode(data, ec_level, version=0, mask_pattern=-1)` takes:

- `data` – bytes, or a `str` which is encoded as UTF-8
- `ec_level` – 0 to 3 (L, M, Q, H); see `qrforge.version.ECLevel`
- `version` – 1 to 40, or 0 to pick the smallest version that fits
- `mask_pattern` – 0 to 7, or -1 to choose the pattern with the lowest penalty

The result is a `QRCode` with `version`, `size`, `modules` (a list of rows of
booleans, `True` for dark), `ec_level`, `mask_pattern`, `data` and a
`metadata` dict (`mode`, `version`, `ecLevel`, `maskPattern`,
`dataCodewords`, `ecCodewords`). Invalid arguments, empty data and data that
does not fit raise `ValueError`.

The encoder picks the most compact mode (`Mode.NUMERIC`, `ALPHANUMERIC`,
`BYTE` or `KANJI`) with `best_encoding_mode`. `capacity(version, ec_level,
mode)`, `data_codewords`, `ec_codewords` and `block_count` report the layout
of a version; `qrforge.version.get_version_info` returns the full
`VersionInfo`. `print_matrix` in `qrforge.matrix` gives a quick text view
(`#` for dark modules, `.` for light ones).

## Rendering

```python
from qrforge.render.png import PNGRenderer
from qrforge.render.svg import SVGRenderer
from qrforge.render.pdf import PDFRenderer
from qrforge.render.terminal import TerminalRenderer

png_bytes = PNGRenderer().render(qr, width=512, foreground_color="#112233")
svg_bytes = SVGRenderer().render(qr, quiet_zone=2, circle_modules=True)
pdf_bytes = PDFRenderer().render(qr, border_width=5)
print(TerminalRenderer().render(qr).decode("utf-8"))
```

Every renderer's `render(qr, **options)` returns bytes. The options (see
`qrforge.render.options.build_config`) are:

- `width` – target size in pixels; the module size is `width` divided by the
  modules across, at least 1 (`height` is accepted and kept in the config)
- `foreground_color`, `background_color` – `"#RRGGBB"`, default black on white
- `quiet_zone` – margin in modules, default 4
- `border_width` – extra page margin in the PDF output
- `module_style` – a `ModuleStyle` with `shape` (`square`, `rounded`,
  `circle`, `diamond`), `roundness`, gradient fields and `transparency`
- `gradient=(start, end, angle)`, `rounded_modules=roundness`,
  `circle_modules=True`, `transparency=alpha` – shortcuts that adjust the
  module style

Module styles apply to PNG and SVG output. The terminal renderer adds 24-bit
ANSI colour codes only when the colours differ from the defaults. Invalid
colours or styles raise `ValueError`; unknown options raise `TypeError`.
`PNGRenderer.render` also takes `cancel`, an object with `is_set()` such as a
`threading.Event`; if it is set the render raises `RenderCancelledError`.

`qrforge.render.png.encode_png` encodes any `qrforge.render.drawing.Canvas`
as a PNG.

## Utilities

- `qrforge.workerpool.WorkerPool` – bounded-concurrency batch processing that
  keeps result order; failures are raised together as an `AggregateError`
  holding `errors`, `total`, `results` and `first()`
- `qrforge.singleflight.Group` – `do(key, fn)` runs one call per key when
  several callers ask at once and returns `(value, shared)`; `do_future` runs
  it in the background
- `qrforge.lifecycle.Guard` – close-once guard (`close`, `is_closed`, `wait`);
  a second close raises `AlreadyClosedError`
- `qrforge.bufpool.BufferPool` – reusable `io.BytesIO` buffers
- `qrforge.hashing` – 64-bit FNV-1a `hash_string`, `hash_bytes` and `combine`

## What it does not do

- Renderers return bytes only; the package does not save files — writing the
  output to disk is left to the caller.
- There is no Base64 or data-URL output and no lookup of renderers by format
  name; pick the renderer class directly.
- There is no command-line tool and no decoder for reading QR codes.

## Running the tests

```
pip install qrforge[test]
pytest
```