from pathlib import Path

import pdfplumber


def _read_docx(path: Path) -> str:
    from docx import Document
    doc = Document(str(path))
    # Empty paragraphs come through as blank lines, which keeps verse breaks.
    return "\n".join(p.text for p in doc.paragraphs)


def _read_pdf(path: Path) -> str:
    pages = []
    with pdfplumber.open(str(path)) as pdf:
        for page in pdf.pages:
            text = (page.extract_text() or "").strip()
            if text:
                pages.append(text)
    # Treat a page break as a verse break.
    return "\n\n".join(pages)


def read_lyrics_text(lyrics_path) -> str:
    """
    Returns the full text of a lyric sheet.

    Supports:
      - .txt
      - .docx
      - .pdf (text layer only, no OCR)
    """
    lyrics_path = Path(lyrics_path)
    suffix = lyrics_path.suffix.lower()

    if suffix == ".txt":
        return lyrics_path.read_text(encoding="utf-8", errors="ignore")

    if suffix == ".docx":
        return _read_docx(lyrics_path)

    if suffix == ".pdf":
        return _read_pdf(lyrics_path)

    raise ValueError("Unsupported lyrics file. Use .txt, .docx, or .pdf")
