import json
import os
import time
from typing import Any, Dict, List, Optional

import requests

API_BASE = os.getenv("API_BASE", "http://localhost:8000")
UI_BASE = os.getenv("UI_BASE", "http://localhost:8501")

LANGUAGES = {
    "JavaScript": "javascript",
    "Python": "python",
    "TypeScript": "typescript",
    "Java": "java",
}

ISSUE_ICONS = {
    "error": "🔴",
    "warning": "🟠",
    "suggestion": "🔵",
    "optimization": "🟢",
}


class ApiError(Exception):
    """Non-2xx answer from the review API, carrying its ``message``."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _message_from(response: requests.Response) -> str:
    try:
        return str(response.json().get("message") or response.text)
    except ValueError:
        return response.text or f"HTTP {response.status_code}"


def _check(response: requests.Response) -> Any:
    if response.status_code // 100 != 2:
        raise ApiError(_message_from(response), response.status_code)
    return response.json()


def analyze(code: str, language: str, api_base: str = API_BASE) -> Dict[str, Any]:
    response = requests.post(
        f"{api_base}/api/analyze",
        json={"code": code, "language": language},
        timeout=30,
    )
    return _check(response)


def fetch_analysis(analysis_id: int, api_base: str = API_BASE) -> Optional[Dict[str, Any]]:
    response = requests.get(f"{api_base}/api/analysis/{analysis_id}", timeout=10)
    if response.status_code == 404:
        return None
    return _check(response)


def fetch_recent(limit: int = 10, api_base: str = API_BASE) -> List[Dict[str, Any]]:
    response = requests.get(f"{api_base}/api/analyses/recent", params={"limit": limit}, timeout=10)
    return _check(response)


def api_healthy(api_base: str = API_BASE) -> bool:
    try:
        return requests.get(f"{api_base}/health", timeout=2).json().get("status") == "ok"
    except Exception:
        return False


def share_url(analysis_id: int, ui_base: str = UI_BASE) -> str:
    return f"{ui_base.rstrip('/')}/analysis/{analysis_id}"


def export_filename(now: Optional[float] = None) -> str:
    millis = int((time.time() if now is None else now) * 1000)
    return f"code-analysis-{millis}.json"


def export_json(result: Dict[str, Any]) -> str:
    return json.dumps(result, indent=2)


def issue_location(issue: Dict[str, Any]) -> str:
    line = int(issue.get("line", 0) or 0)
    return f"Line {line}" if line > 0 else "General"


def format_issue(issue: Dict[str, Any]) -> str:
    icon = ISSUE_ICONS.get(issue.get("type", ""), "⚪")
    return (
        f"{icon} **{issue.get('category', '')}** · {issue_location(issue)} · "
        f"_{issue.get('severity', '')}_: {issue.get('message', '')}"
    )


def code_stats(code: str) -> str:
    line_count = len(code.split("\n"))
    return f"{line_count} lines • {len(code)} characters"


def language_label(language: str) -> str:
    for label, value in LANGUAGES.items():
        if value == language:
            return label
    return "Python"


def apply_pending_action(state: Any, default_code: str) -> Optional[str]:
    """Runs a queued Clear/Restore before the widgets that own the keys are drawn."""
    action = state.pop("pending_action", None)
    if action == "clear":
        state["code"] = ""
        state["result"] = None
    elif action == "restore" and state.get("saved"):
        saved = state["saved"]
        state["code"] = saved["code"]
        state["language_label"] = language_label(saved["language"])
    if "code" not in state:
        state["code"] = default_code
    if "language_label" not in state:
        state["language_label"] = "Python"
    if "result" not in state:
        state["result"] = None
    return action
