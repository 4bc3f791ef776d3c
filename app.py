#!/usr/bin/env python3
"""
Lyrics -> slide deck (no GUI).

Reads a lyric sheet (.txt/.docx/.pdf, or '-' for stdin), makes one slide per
verse (verses are separated by blank lines) and writes a .pptx.

Usage (examples):
  python app.py amazing_grace.txt --title "Amazing Grace" --center --bold
  python app.py song.docx --out-dir dev_out --plan-json dev_out/plan.json --qa
  cat song.txt | python app.py - --dry-run
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from config import load_default_style, load_output_dir, save_build_prefs, save_default_style
from debug_tools import DebugRecorder, DebugSettings
from deck_compiler import compile_deck
from errors import InvalidColor, InvalidInput, RendererFailure
from generate import DEFAULT_TITLE, error_payload, generate_presentation
from lyrics_reader import read_lyrics_text
from qa_tools import analyze_pptx
from renderers import PptxRenderer
from slide_style import resolve_style


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="lyric-slides")
    ap.add_argument("lyrics", help="Lyric sheet (.txt, .docx, .pdf) or '-' for stdin")
    ap.add_argument("--title", default=None, help="Presentation title (also names the output file)")
    ap.add_argument("--out-dir", default=None, help="Output folder (default: saved preference or ~/LyricSlides)")
    ap.add_argument("--template", default=None, help="Optional .pptx template to start from")

    style = ap.add_argument_group("style")
    style.add_argument("--font-family", dest="fontFamily")
    style.add_argument("--font-size", dest="fontSize", type=float)
    style.add_argument("--background-color", dest="backgroundColor", help="#rrggbb")
    style.add_argument("--font-color", dest="fontColor", help="#rrggbb")
    style.add_argument("--auto-fit", dest="isAutoFit", action=argparse.BooleanOptionalAction, default=None)
    style.add_argument("--bold", dest="isBold", action=argparse.BooleanOptionalAction, default=None)
    style.add_argument("--italic", dest="isItalic", action=argparse.BooleanOptionalAction, default=None)
    style.add_argument("--center", dest="isCentered", action=argparse.BooleanOptionalAction, default=None)
    style.add_argument("--save-style", action="store_true", help="Remember this style as the default profile")

    ap.add_argument("--plan-json", default=None, help="Also write the operation batch (wire form) here")
    ap.add_argument("--dry-run", action="store_true", help="Compile only; print the batch, write no deck")
    ap.add_argument("--qa", action="store_true", help="Run QA heuristics on the written deck")
    return ap


def _style_override(args) -> dict:
    keys = ("fontFamily", "fontSize", "backgroundColor", "fontColor",
            "isAutoFit", "isBold", "isItalic", "isCentered")
    return {k: getattr(args, k) for k in keys if getattr(args, k) is not None}


def _read_lyrics(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        return read_lyrics_text(Path(source).expanduser())
    except (ValueError, OSError) as e:
        raise InvalidInput(f"cannot read lyrics: {e}") from e


def main(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv[1:])

    title = args.title or (Path(args.lyrics).stem if args.lyrics != "-" else DEFAULT_TITLE)
    default_style = load_default_style()
    override = _style_override(args)

    out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else load_output_dir()

    dbg_settings = DebugSettings.from_env()
    dbg = DebugRecorder(dbg_settings)
    if dbg_settings.enabled:
        dbg.start_deck(title, str(out_dir / f"{title}.pptx"))

    renderer = None
    result = None
    try:
        lyrics = _read_lyrics(args.lyrics)
        if args.dry_run or args.plan_json:
            plan = compile_deck(lyrics, override, default_style, dbg=dbg)
            requests = plan.as_requests()
            if args.plan_json:
                Path(args.plan_json).parent.mkdir(parents=True, exist_ok=True)
                Path(args.plan_json).write_text(json.dumps(requests, indent=2), encoding="utf-8")
            if args.dry_run:
                print(json.dumps({"slideCount": plan.slide_count, "requests": requests}, indent=2))
                return 0

        renderer = PptxRenderer(out_dir, template_path=args.template)
        result = generate_presentation(
            lyrics,
            override,
            renderer,
            title=title,
            default_style=default_style,
            dbg=dbg,
        )
    except (InvalidInput, InvalidColor) as e:
        print(json.dumps(error_payload(e)), file=sys.stderr)
        return 2
    except RendererFailure as e:
        print(json.dumps(error_payload(e)), file=sys.stderr)
        return 1
    finally:
        if result is not None:
            dbg.move_deck(str(renderer.deck_path(result.deck_id)))
        dbg.flush()

    output = result.to_dict()
    if args.qa:
        output["qa"] = analyze_pptx(renderer.deck_path(result.deck_id))

    if args.save_style:
        save_default_style(resolve_style(default_style, override))
    save_build_prefs(title, result.presentation_url)

    print(json.dumps(output, indent=2))
    return 0


def _cli():
    raise SystemExit(main(sys.argv))


if __name__ == "__main__":
    _cli()
