ERRORS = {
  "E_SIZE": "Buffer size does not match the format",
  "E_MAGIC": "Magic or version mismatch",
  "E_BLOCK_SIZE": "Block has the wrong fixed length",
  "E_EMPTY": "At least one record is required",
  "E_OVERRUN": "Sub-structure runs past the end of the buffer",
  "E_PREDICATE": "Field failed a shape check",
  "E_NO_CANDIDATE": "No viable candidate",
  "E_UNSUPPORTED": "Field group not supported by this payload",
  "E_NO_FORMAT": "No known save format matched",
}


class SaveFormatError(ValueError):
    """A codec or detector rejected its input. `code` is a key of ERRORS."""

    def __init__(self, code: str, detail: str):
        super().__init__(detail)
        self.code = code
        self.detail = detail

    def as_dict(self) -> dict:
        return {"code": self.code, "message": ERRORS[self.code], "detail": self.detail}


class FormatDetectionError(SaveFormatError):
    """Every parser in the cascade rejected the buffer."""

    def __init__(self, attempts: list[tuple[str, SaveFormatError]]):
        self.attempts = attempts
        reasons = "; ".join(f"{fmt}: {err.detail}" for fmt, err in attempts)
        super().__init__("E_NO_FORMAT", f"{ERRORS['E_NO_FORMAT']} ({reasons})")


class CatalogError(SaveFormatError):
    pass
