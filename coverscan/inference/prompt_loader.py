from pathlib import Path

from coverscan.inference.exceptions import InferenceError

EXTRACTION_PROMPT_VERSION = "v1"

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_extraction_prompt(path: Path | None = None) -> str:
    """Load the cover extraction instruction from a file.

    Args:
        path: Path to the prompt file. Defaults to the bundled
              extraction_prompt_<EXTRACTION_PROMPT_VERSION>.txt.

    Returns:
        The instruction text, stripped of surrounding whitespace.

    Raises:
        InferenceError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / f"extraction_prompt_{EXTRACTION_PROMPT_VERSION}.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise InferenceError(f"Failed to load extraction prompt: {exc}") from exc
