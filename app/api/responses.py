from typing import Any, Dict, Optional


def success(message: str, data: Any = None, total: Optional[int] = None, **extra: Any) -> Dict[str, Any]:
    """Uniform success envelope: ``{success, message, data?, total?, ...}``."""
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    if total is not None:
        body["total"] = total
    body.update(extra)
    return body


def failure(message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body
