class GeminiError(Exception):
    """Base class for report-request failures raised by this package."""


class GeminiConfigError(GeminiError):
    """GEMINI_API_KEY is missing."""


class ReportParseError(GeminiError):
    """Gemini answered, but not with a usable report (empty, non-JSON, schema mismatch)."""
