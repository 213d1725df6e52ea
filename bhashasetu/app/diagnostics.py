from __future__ import annotations


def summarize_exception(detail: str, *, max_len: int = 220) -> str:
    text = str(detail or "").strip()
    if not text:
        return "Unknown runtime error."
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines:
        return "Unknown runtime error."
    for ln in reversed(lines):
        if ln.startswith("File "):
            continue
        if ln.startswith("^"):
            continue
        if ln.startswith("Traceback "):
            continue
        out = ln
        break
    else:
        out = lines[-1]
    if len(out) > max_len:
        return out[: max_len - 3].rstrip() + "..."
    return out


def hint_for_exception(summary: str) -> str:
    s = str(summary or "").lower()
    if "api key" in s or "api_key" in s or "permission_denied" in s or "401" in s:
        return "Gemini API key missing or rejected. Set GEMINI_API_KEY in the environment or a .env file."
    if "429" in s or "quota" in s or "resource_exhausted" in s or "rate limit" in s:
        return "Gemini quota or rate limit reached. Wait a minute, or raise --interval-ms."
    if "no module named" in s or "is not installed" in s:
        return "A required package is missing in this virtualenv. Reinstall dependencies and retry."
    if "config file not found" in s:
        return "Configured JSON file is missing. Update the config path or restore the file."
    if "camera" in s and " is off" in s:
        return "The camera is off. Start the camera, then try again."
    if "already in progress" in s:
        return "Wait for the current recognition to finish, then try again."
    if "camera" in s and ("failed" in s or "no frame" in s):
        return "Camera init failed. Check the camera index (--list-cameras) and app camera permissions."
    if "no media returned" in s:
        return "The speech model returned no audio. Try again, or pick another voice."
    return "Check logs for full traceback."
