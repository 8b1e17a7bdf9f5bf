from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from llama_chat.transcript import Transcript


@dataclass(frozen=True)
class RunLogPaths:
    run_id: str
    jsonl_path: Path


def make_run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def init_run_log(log_dir: Path, run_id: str) -> RunLogPaths:
    log_dir.mkdir(parents=True, exist_ok=True)
    return RunLogPaths(run_id=run_id, jsonl_path=log_dir / f"run_{run_id}.jsonl")


def append_event(
    paths: RunLogPaths,
    event: str,
    transcript: Transcript,
    *,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Append one turn event to the run log.

    Only shape and counters are recorded, never message text, so the log
    cannot be used to restore a conversation.
    """
    roles: dict[str, int] = {}
    for m in transcript:
        roles[m.role] = roles.get(m.role, 0) + 1
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "run_id": paths.run_id,
        "event": event,
        "transcript_len": len(transcript),
        "roles": roles,
    }
    if extra:
        payload.update(extra)
    with paths.jsonl_path.open("a", encoding="utf-8", newline="\n") as f:
        f.write(json.dumps(payload, ensure_ascii=False) + "\n")
    return payload


def read_events(paths: RunLogPaths) -> list[dict[str, Any]]:
    if not paths.jsonl_path.exists():
        return []
    out: list[dict[str, Any]] = []
    for ln in paths.jsonl_path.read_text(encoding="utf-8").splitlines():
        ln = ln.strip()
        if ln:
            out.append(json.loads(ln))
    return out
