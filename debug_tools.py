from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

_ENV_PREFIX = "LS_DEBUG"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class DebugSettings:
    """
    What to record while compiling decks.

    Environment:
      LS_DEBUG=1        turn recording on
      LS_DEBUG_PRINT=0  keep log lines off the console
      LS_DEBUG_LOG=0    skip <stem>_debug.log
      LS_DEBUG_JSON=0   skip <stem>_debug.json (per-slide sizing records)
    """
    enabled: bool = False
    print_console: bool = True
    write_text_log: bool = True
    write_json_report: bool = True

    @classmethod
    def from_env(cls) -> "DebugSettings":
        return cls(
            enabled=_env_flag(_ENV_PREFIX, False),
            print_console=_env_flag(f"{_ENV_PREFIX}_PRINT", True),
            write_text_log=_env_flag(f"{_ENV_PREFIX}_LOG", True),
            write_json_report=_env_flag(f"{_ENV_PREFIX}_JSON", True),
        )


@dataclass
class DebugRecorder:
    settings: DebugSettings
    output_path: Optional[Path] = None
    lines: List[str] = field(default_factory=list)
    decks: List[Dict[str, Any]] = field(default_factory=list)

    def log(self, msg: str) -> None:
        if not self.settings.enabled:
            return
        line = f"[{time.strftime('%H:%M:%S')}] {msg}"
        self.lines.append(line)
        if self.settings.print_console:
            print(line)

    def start_deck(self, title: str, output_path: str) -> None:
        """Open a new deck record; later slide records attach to it."""
        if not self.settings.enabled:
            return
        self.output_path = Path(output_path)
        self.decks.append({"title": title, "output_path": output_path, "slides": []})
        self.log(f"[DECK] {title!r} -> {output_path}")

    def move_deck(self, output_path: str) -> None:
        """The current deck was saved somewhere else (renamed or de-duplicated)."""
        if not self.settings.enabled or not self.decks:
            return
        self.output_path = Path(output_path)
        self.decks[-1]["output_path"] = output_path

    def record_slide(self, rec: Dict[str, Any]) -> None:
        if not self.settings.enabled or not self.decks:
            return
        self.decks[-1]["slides"].append(rec)

    def flush(self) -> None:
        """Write the log and JSON report next to the deck (stem_debug.*)."""
        if not self.settings.enabled or self.output_path is None:
            return
        base = self.output_path.with_suffix("")
        base.parent.mkdir(parents=True, exist_ok=True)

        if self.settings.write_text_log:
            Path(f"{base}_debug.log").write_text("\n".join(self.lines) + "\n", encoding="utf-8")
        if self.settings.write_json_report:
            report = {"version": 1, "decks": self.decks}
            Path(f"{base}_debug.json").write_text(json.dumps(report, indent=2), encoding="utf-8")
