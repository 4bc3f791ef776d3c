from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_AUTO_SIZE, PP_ALIGN
from pptx.util import Emu, Pt

from color_utils import rgb_to_hex

BLANK_LAYOUT_NAME = "Blank"
BLANK_LAYOUT_INDEX = 6  # position of "Blank" in the default python-pptx template

_ALIGNMENTS = {
    "CENTER": PP_ALIGN.CENTER,
    "START": PP_ALIGN.LEFT,
    "END": PP_ALIGN.RIGHT,
    "JUSTIFIED": PP_ALIGN.JUSTIFY,
}


def load_template(path=None):
    """Open a .pptx template, or python-pptx's default 10in x 7.5in deck."""
    return Presentation(str(path)) if path else Presentation()


def _get_layout_by_name(prs, name):
    for layout in prs.slide_layouts:
        if layout.name == name:
            return layout
    raise ValueError(f"Slide layout not found: {name}")


def blank_layout(prs):
    try:
        return _get_layout_by_name(prs, BLANK_LAYOUT_NAME)
    except ValueError:
        if len(prs.slide_layouts) > BLANK_LAYOUT_INDEX:
            return prs.slide_layouts[BLANK_LAYOUT_INDEX]
        return prs.slide_layouts[len(prs.slide_layouts) - 1]


def add_blank_slide(prs):
    slide = prs.slides.add_slide(blank_layout(prs))

    # layouts from custom templates may still carry placeholders
    for shape in list(slide.placeholders):
        el = shape._element
        el.getparent().remove(el)
    return slide


def _rgb(color) -> RGBColor:
    return RGBColor.from_string(rgb_to_hex(color)[1:])


def set_background(slide, color) -> None:
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = _rgb(color)


def add_text_box(slide, left: int, top: int, width: int, height: int):
    box = slide.shapes.add_textbox(Emu(left), Emu(top), Emu(width), Emu(height))
    tf = box.text_frame
    tf.word_wrap = True
    # font size is computed up front; keep PowerPoint from resizing anything
    tf.auto_size = MSO_AUTO_SIZE.NONE
    return box


def insert_text(shape, text: str) -> None:
    """Replace the box text, one paragraph per lyric line."""
    tf = shape.text_frame
    tf.clear()
    for i, line in enumerate(text.split("\n")):
        p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
        p.text = line.rstrip("\r")


def style_text(shape, font_size, font_family=None, color=None, bold=False, italic=False) -> None:
    """Apply one style to every run in the box (the equivalent of a range of ALL)."""
    for p in shape.text_frame.paragraphs:
        for r in p.runs:
            r.font.size = Pt(font_size)
            if font_family:
                r.font.name = font_family
            if color is not None:
                r.font.color.rgb = _rgb(color)
            if bold:
                r.font.bold = True
            if italic:
                r.font.italic = True


def align_paragraphs(shape, alignment: str) -> None:
    try:
        value = _ALIGNMENTS[alignment]
    except KeyError:
        raise ValueError(f"Unsupported paragraph alignment: {alignment}") from None
    for p in shape.text_frame.paragraphs:
        p.alignment = value


def remove_shape(shape) -> None:
    el = shape._element
    el.getparent().remove(el)


def remove_slide(prs, slide) -> None:
    """
    Delete a slide from a python-pptx Presentation.
    Removes the slide id entry, then drops the relationship to the slide part.
    """
    slide_id_list = prs.slides._sldIdLst  # pylint: disable=protected-access
    index = prs.slides.index(slide)
    sld_id = list(slide_id_list)[index]
    r_id = sld_id.rId

    slide_id_list.remove(sld_id)

    if r_id in prs.part.rels:
        prs.part.drop_rel(r_id)
