"""
Resume PDF (hand-rolled)

Writes a single-page, single-font PDF 1.4 whose content stream shows one text
line per entry. Object byte offsets are tracked while the file is assembled so
the xref table and startxref pointer are exact.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

FONT_SIZE = 14
LEADING = 18
START_X = 72
START_Y = 720
MEDIA_BOX = "[0 0 612 792]"  # US Letter


def pdf_escape(text: str) -> str:
    """Escape a literal string body: backslash first, then parentheses"""
    return str(text).replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def pdf_unescape(text: str) -> str:
    return re.sub(r"\\([\\()])", r"\1", text)


def build_content_stream(
    lines: Iterable[str],
    font_size: int = FONT_SIZE,
    leading: int = LEADING,
    start_x: int = START_X,
    start_y: int = START_Y,
) -> str:
    ops = ["BT", f"/F1 {font_size} Tf", f"{start_x} {start_y} Td"]
    for index, line in enumerate(lines):
        if index > 0:
            ops.append(f"0 -{leading} Td")
        ops.append(f"({pdf_escape(line)}) Tj")
    ops.append("ET")
    return "\n".join(ops) + "\n"


def build_simple_pdf(lines: Optional[Iterable[str]] = None, **layout) -> bytes:
    """
    Build a minimal valid PDF showing ``lines`` top to bottom.

    Args:
        lines: Text lines; None or an empty sequence yields a blank page
        **layout: Optional ``font_size``, ``leading``, ``start_x``, ``start_y``

    Returns:
        Complete PDF file contents
    """
    stream = build_content_stream(list(lines or []), **layout).encode("utf-8")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            f"<< /Type /Page /Parent 2 0 R /MediaBox {MEDIA_BOX} "
            "/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>"
        ).encode("ascii"),
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"endstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    buffer = bytearray(b"%PDF-1.4\n")
    offsets: List[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(buffer))
        buffer += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(buffer)
    buffer += b"xref\n"
    buffer += b"0 %d\n" % (len(offsets) + 1)
    buffer += b"0000000000 65535 f \n"
    for offset in offsets:
        buffer += b"%010d 00000 n \n" % offset
    buffer += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(offsets) + 1)
    buffer += b"startxref\n%d\n%%%%EOF\n" % xref_offset

    return bytes(buffer)


def inspect_pdf(data: bytes) -> Dict[str, object]:
    """
    Read back the structure written by build_simple_pdf.

    Returns a dict with ``size`` (trailer /Size), ``offsets`` (xref entries),
    ``startxref``, ``xref_position`` (actual offset of the xref keyword),
    ``objects_ok`` (every offset points at its ``N 0 obj`` token), ``page_count``
    and ``lines`` (unescaped text shown with Tj).
    """
    xref_match = re.search(rb"startxref\n(\d+)\n%%EOF", data)
    if not xref_match:
        raise ValueError("startxref trailer not found")
    startxref = int(xref_match.group(1))
    xref_position = data.rfind(b"\nxref\n") + 1

    table = re.search(rb"xref\n0 (\d+)\n0000000000 65535 f \n((?:\d{10} 00000 n \n)*)", data)
    if not table:
        raise ValueError("xref table not found")
    offsets = [int(entry[:10]) for entry in re.findall(rb"\d{10} 00000 n \n", table.group(2))]

    size_match = re.search(rb"/Size (\d+)", data)
    size = int(size_match.group(1)) if size_match else 0

    objects_ok = all(
        data.startswith(b"%d 0 obj" % number, offset) for number, offset in enumerate(offsets, start=1)
    )

    stream_match = re.search(rb"stream\n(.*?)endstream", data, re.DOTALL)
    stream_text = stream_match.group(1).decode("utf-8") if stream_match else ""
    lines = [pdf_unescape(m) for m in re.findall(r"\(((?:\\.|[^\\)])*)\) Tj", stream_text)]

    return {
        "size": size,
        "offsets": offsets,
        "startxref": startxref,
        "xref_position": xref_position,
        "objects_ok": objects_ok,
        "page_count": len(re.findall(rb"/Type /Page\b", data)),
        "lines": lines,
    }
