from __future__ import annotations


class LyricSlidesError(Exception):
    code = "UNKNOWN_ERROR"
    http_status = 500

    def to_payload(self) -> dict:
        return {"error": str(self), "code": self.code}


class InvalidInput(LyricSlidesError, ValueError):
    """Lyrics missing, not text, or no usable sections after splitting."""
    code = "INVALID_INPUT"
    http_status = 400


class InvalidColor(LyricSlidesError, ValueError):
    """A style color is not a 6-digit hex string."""
    code = "INVALID_COLOR"
    http_status = 400


class RendererFailure(LyricSlidesError, RuntimeError):
    """
    Any failure reported by the renderer collaborator.

    `stage` names the renderer call that failed (create_deck, apply_batch,
    make_shareable) so the caller can decide on a retry policy.
    """
    code = "RENDERER_FAILURE"
    http_status = 502

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
